"""Catalog Store: the authoritative in-memory product list.

The store is read from its repository once, on ``load()``, and written
back in full after every mutation.  The in-memory list is authoritative
as soon as a mutation returns; a failed write never rolls it back, it
only marks durability as degraded so the caller can warn the operator.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from scanpos.domain.exceptions import (
    CorruptCatalogError,
    PersistenceError,
    ValidationError,
)
from scanpos.domain.model.product import Product
from scanpos.domain.repository.catalog_repository import CatalogRepository

LOGGER = logging.getLogger(__name__)

WRITE_ATTEMPTS = 2


class CatalogStore:

    def __init__(self, repository: CatalogRepository) -> None:
        self._repository = repository
        self._products: list[Product] = []
        self.load_error: str | None = None
        self.durability_degraded = False

    # --- Lifecycle ------------------------------------------------------------

    def load(self) -> None:
        """Read the persisted catalog, falling back to empty on bad data."""
        self.load_error = None
        try:
            stored = self._repository.read_all()
        except CorruptCatalogError as exc:
            LOGGER.warning("Failed to parse stored catalog, starting empty: %s", exc)
            self.load_error = str(exc)
            stored = None
        self._products = list(stored or [])
        LOGGER.info("Loaded %d products", len(self._products))

    def save(self) -> bool:
        """Write the full catalog through to the repository.

        Retries once.  Returns False, without raising, if both attempts
        fail.
        """
        snapshot = list(self._products)
        for attempt in range(1, WRITE_ATTEMPTS + 1):
            try:
                self._repository.write_all(snapshot)
            except PersistenceError as exc:
                LOGGER.warning("Catalog write attempt %d failed: %s", attempt, exc)
                continue
            self.durability_degraded = False
            return True

        LOGGER.error(
            "Catalog could not be persisted after %d attempts; "
            "changes are kept in memory only",
            WRITE_ATTEMPTS,
        )
        self.durability_degraded = True
        return False

    # --- Queries --------------------------------------------------------------

    @property
    def products(self) -> list[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Product | None:
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    def find_by_barcode(self, barcode: str) -> Product | None:
        """Return the first product with this barcode, in catalog order."""
        for product in self._products:
            if product.barcode == barcode:
                return product
        return None

    def search(self, text: str) -> list[Product]:
        """Case-insensitive substring match on name or barcode."""
        needle = text.strip().lower()
        if not needle:
            return self.products
        return [
            p
            for p in self._products
            if needle in p.name.lower() or needle in p.barcode.lower()
        ]

    def __len__(self) -> int:
        return len(self._products)

    def __iter__(self) -> Iterator[Product]:
        return iter(list(self._products))

    # --- Mutations ------------------------------------------------------------

    def add(self, product: Product) -> None:
        """Append *product*.  Its id must not already be in the catalog."""
        if self._index_of(product.id) is not None:
            raise ValidationError(f"Product with ID '{product.id}' already exists")
        self._products.append(product)
        LOGGER.debug("Added product %s (%s)", product.id, product.barcode)
        self.save()

    def update(self, product: Product) -> bool:
        """Replace the product with the same id; unknown ids are ignored."""
        index = self._index_of(product.id)
        if index is None:
            LOGGER.debug("Update ignored, no product with ID %s", product.id)
            return False
        self._products[index] = product
        self.save()
        return True

    def delete(self, product_id: str) -> bool:
        """Remove the product with *product_id*; unknown ids are ignored."""
        index = self._index_of(product_id)
        if index is None:
            LOGGER.debug("Delete ignored, no product with ID %s", product_id)
            return False
        del self._products[index]
        self.save()
        return True

    def replace_all(self, products: Iterable[Product]) -> None:
        """Swap in a whole new catalog (used by import)."""
        self._products = list(products)
        self.save()

    # --- Internal helpers -----------------------------------------------------

    def _index_of(self, product_id: str) -> int | None:
        for i, product in enumerate(self._products):
            if product.id == product_id:
                return i
        return None
