"""Interchange codec and the Import/Export use case.

The interchange format is a JSON array of product records::

    [{"id": "...", "barcode": "6901234567890", "name": "Cola",
      "price": "3.50", "stock": 12, "category": "Drinks"}]

``stock`` and ``category`` may be missing.  ``price`` is written as a
decimal string and read from either a number or a numeric string.  The
same format is used for the persisted catalog file.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from scanpos.application.catalog_store import CatalogStore
from scanpos.domain.exceptions import InterchangeFormatError, ValidationError
from scanpos.domain.model.product import Product
from scanpos.domain.model.value_objects import Money

LOGGER = logging.getLogger(__name__)

REQUIRED_FIELDS = ("id", "barcode", "name", "price")


# --- Codec --------------------------------------------------------------------


def product_to_record(product: Product) -> dict:
    record = {
        "id": product.id,
        "barcode": product.barcode,
        "name": product.name,
        "price": str(product.price.amount),
        "stock": product.stock,
    }
    if product.category is not None:
        record["category"] = product.category
    return record


def product_from_record(raw: object, position: int = 0) -> Product:
    """Build a Product from one decoded record, validating its shape."""
    if not isinstance(raw, dict):
        raise InterchangeFormatError(f"Record #{position} is not an object")

    missing = [name for name in REQUIRED_FIELDS if name not in raw]
    if missing:
        raise InterchangeFormatError(
            f"Record #{position} is missing {', '.join(missing)}"
        )

    for name in ("id", "barcode", "name"):
        if not isinstance(raw[name], str):
            raise InterchangeFormatError(f"Record #{position}: '{name}' must be a string")
    if not raw["id"]:
        raise InterchangeFormatError(f"Record #{position}: 'id' must not be empty")
    for name in ("barcode", "name"):
        if not raw[name].strip():
            raise InterchangeFormatError(f"Record #{position}: '{name}' must not be blank")

    category = raw.get("category")
    if category is not None and not isinstance(category, str):
        raise InterchangeFormatError(f"Record #{position}: 'category' must be a string")

    return Product(
        id=raw["id"],
        barcode=raw["barcode"],
        name=raw["name"],
        price=_parse_price(raw["price"], position),
        stock=_parse_stock(raw.get("stock", 0), position),
        category=category,
    )


def dumps_products(products: Iterable[Product]) -> str:
    return json.dumps(
        [product_to_record(p) for p in products], indent=2, ensure_ascii=False
    )


def loads_products(payload: str | bytes) -> list[Product]:
    """Parse a whole interchange payload.

    Raises InterchangeFormatError on anything that is not a list of
    product-shaped records with distinct ids.
    """
    if isinstance(payload, bytes):
        try:
            payload = payload.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise InterchangeFormatError(f"Payload is not UTF-8 text: {exc}") from exc

    try:
        raw = json.loads(payload, parse_float=Decimal)
    except (ValueError, RecursionError) as exc:
        raise InterchangeFormatError(f"Payload is not valid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise InterchangeFormatError(
            f"Expected a list of products, got {type(raw).__name__}"
        )

    products = [product_from_record(item, i) for i, item in enumerate(raw)]

    seen: set[str] = set()
    for product in products:
        if product.id in seen:
            raise InterchangeFormatError(f"Duplicate product id '{product.id}'")
        seen.add(product.id)
    return products


def _parse_price(value: object, position: int) -> Money:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal, str)):
        raise InterchangeFormatError(f"Record #{position}: 'price' must be a number")
    try:
        return Money.of(value)
    except ValidationError as exc:
        raise InterchangeFormatError(f"Record #{position}: {exc}") from exc


def _parse_stock(value: object, position: int) -> int:
    if isinstance(value, bool):
        raise InterchangeFormatError(f"Record #{position}: 'stock' must be an integer")
    if isinstance(value, int):
        return value
    # JSON numbers like 5.0 are decoded as Decimal
    if isinstance(value, (float, Decimal)):
        try:
            if value == int(value):
                return int(value)
        except (ValueError, OverflowError):
            pass
    raise InterchangeFormatError(f"Record #{position}: 'stock' must be an integer")


# --- Use case -----------------------------------------------------------------


class ImportExportGateway:
    """Serializes the whole catalog and restores it.

    Imports are all-or-nothing: the payload is fully parsed and validated
    before the store is touched, and a rejected payload leaves both the
    catalog and its persisted copy exactly as they were.
    """

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self.last_error: str | None = None

    def export_data(self) -> str:
        return dumps_products(self._store.products)

    def import_data(self, payload: str | bytes) -> bool:
        """Replace the catalog with *payload*; return False if rejected."""
        try:
            products = loads_products(payload)
        except InterchangeFormatError as exc:
            self.last_error = str(exc)
            LOGGER.warning("Import rejected: %s", exc)
            return False

        self.last_error = None
        self._store.replace_all(products)
        LOGGER.info("Imported %d products", len(products))
        return True

    @staticmethod
    def backup_filename(today: date | None = None) -> str:
        today = today or date.today()
        return f"inventory_backup_{today.isoformat()}.json"
