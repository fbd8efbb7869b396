"""JSON-file-backed implementation of CatalogRepository.

The file holds the interchange format verbatim, so a persisted catalog
can also be imported elsewhere as a backup.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from scanpos.application.interchange import dumps_products, loads_products
from scanpos.domain.exceptions import (
    CorruptCatalogError,
    InterchangeFormatError,
    PersistenceError,
)
from scanpos.domain.model.product import Product
from scanpos.domain.repository.catalog_repository import CatalogRepository

LOGGER = logging.getLogger(__name__)


class JsonCatalogRepository(CatalogRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        return self._file_path

    # --- CatalogRepository interface ------------------------------------------

    def read_all(self) -> list[Product] | None:
        if not self._file_path.exists():
            return None
        try:
            payload = self._file_path.read_bytes()
        except OSError as exc:
            raise CorruptCatalogError(f"Cannot read {self._file_path}: {exc}") from exc
        try:
            return loads_products(payload)
        except InterchangeFormatError as exc:
            raise CorruptCatalogError(f"{self._file_path}: {exc}") from exc

    def write_all(self, products: Sequence[Product]) -> None:
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text(
                dumps_products(products) + "\n", encoding="utf-8"
            )
        except OSError as exc:
            raise PersistenceError(f"Cannot write {self._file_path}: {exc}") from exc
        LOGGER.debug("Wrote %d products to %s", len(products), self._file_path)
