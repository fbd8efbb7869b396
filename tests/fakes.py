"""In-memory fakes for testing.

These implement the same abstract interfaces as the real adapters
but keep everything in memory. No file I/O, no devices.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from scanpos.domain.exceptions import CorruptCatalogError, PersistenceError
from scanpos.domain.model.product import Product
from scanpos.domain.model.value_objects import Money
from scanpos.domain.repository.catalog_repository import CatalogRepository
from scanpos.domain.scanner import DecodedCallback, ScannerAdapter


def make_product(
    id: str = "p1",
    barcode: str = "6900000000001",
    name: str = "Cola",
    price: str = "3.50",
    stock: int = 10,
    category: str | None = None,
) -> Product:
    return Product(
        id=id,
        barcode=barcode,
        name=name,
        price=Money(Decimal(price)),
        stock=stock,
        category=category,
    )


class FakeCatalogRepository(CatalogRepository):
    """Records every write attempt; can be told to fail writes or reads."""

    def __init__(
        self,
        products: list[Product] | None = None,
        corrupt: bool = False,
        failing_writes: int = 0,
    ) -> None:
        self.stored: list[Product] | None = list(products) if products is not None else None
        self.corrupt = corrupt
        self.failing_writes = failing_writes
        self.write_attempts: list[list[Product]] = []

    def read_all(self) -> list[Product] | None:
        if self.corrupt:
            raise CorruptCatalogError("unexpected token")
        return list(self.stored) if self.stored is not None else None

    def write_all(self, products: Sequence[Product]) -> None:
        self.write_attempts.append(list(products))
        if self.failing_writes > 0:
            self.failing_writes -= 1
            raise PersistenceError("disk full")
        self.stored = list(products)


class FakeScanner(ScannerAdapter):
    """Scanner whose decoded barcodes are pushed by the test."""

    def __init__(self) -> None:
        self._callback: DecodedCallback | None = None
        self.start_calls = 0
        self.stop_calls = 0

    def start(self, on_decoded: DecodedCallback) -> None:
        self.start_calls += 1
        self._callback = on_decoded

    def stop(self) -> None:
        self.stop_calls += 1
        self._callback = None

    @property
    def active(self) -> bool:
        return self._callback is not None

    def emit(self, decoded: str) -> None:
        if self._callback is not None:
            self._callback(decoded)
