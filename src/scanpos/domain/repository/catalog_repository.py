"""Abstract repository for the product catalog.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON file, in-memory)
live in the infrastructure layer and in the test fakes.

Unlike a per-entity repository, this one moves the whole catalog at
once: it is read once at startup and rewritten in full after every
mutation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from scanpos.domain.model.product import Product


class CatalogRepository(ABC):

    @abstractmethod
    def read_all(self) -> list[Product] | None:
        """Return the stored catalog, or None if nothing was ever stored.

        Raises CorruptCatalogError if stored data exists but cannot be
        parsed.
        """

    @abstractmethod
    def write_all(self, products: Sequence[Product]) -> None:
        """Replace the stored catalog with *products*.

        Raises PersistenceError if the write fails.
        """
