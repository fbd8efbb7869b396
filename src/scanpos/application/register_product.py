"""Application service: Register Product use case.

Used both from the product form and when checkout meets a barcode the
catalog does not know yet.
"""

from __future__ import annotations

import logging

from scanpos.application.catalog_store import CatalogStore
from scanpos.domain.model.product import Product
from scanpos.domain.model.value_objects import Money

LOGGER = logging.getLogger(__name__)


class RegisterProductHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(
        self,
        barcode: str,
        name: str,
        price: str,
        stock: int = 0,
        category: str | None = None,
    ) -> Product:
        """Add a new product to the catalog.

        Barcode uniqueness is not checked; see
        ``CatalogStore.find_by_barcode`` for how duplicates resolve.
        """
        product = Product.create(
            barcode=barcode,
            name=name,
            price=Money.of(price),
            stock=stock,
            category=category,
        )
        if self._store.find_by_barcode(product.barcode) is not None:
            LOGGER.warning(
                "Barcode %s is already registered; lookups keep returning "
                "the earlier product",
                product.barcode,
            )
        self._store.add(product)
        return product
