"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductDTO:
    """Output: a catalog entry as displayed to the user."""

    id: str
    barcode: str
    name: str
    price: str  # formatted, e.g. "9.90"
    stock: int
    category: str


@dataclass(frozen=True)
class CartLineDTO:
    """Output: a single cart line as displayed to the user."""

    product_name: str
    barcode: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class ReceiptDTO:
    """Output: the whole cart as displayed at the end of a checkout."""

    lines: list[CartLineDTO]
    item_count: int
    total: str
