"""Application services: Edit Product and Remove Product use cases."""

from __future__ import annotations

from scanpos.application.catalog_store import CatalogStore
from scanpos.domain.exceptions import EntityNotFoundError
from scanpos.domain.model.product import Product
from scanpos.domain.model.value_objects import Money


class EditProductHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(
        self,
        product_id: str,
        barcode: str | None = None,
        name: str | None = None,
        price: str | None = None,
        stock: int | None = None,
        category: str | None = None,
    ) -> Product:
        """Replace a product with an edited copy.

        Fields left as None keep their current value.  Pass an empty
        string as *category* to clear it.

        This does NOT affect carts in progress; cart lines hold the
        product as it was when scanned.
        """
        current = self._store.get(product_id)
        if current is None:
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")

        changes: dict = {}
        if barcode is not None:
            changes["barcode"] = barcode
        if name is not None:
            changes["name"] = name
        if price is not None:
            changes["price"] = Money.of(price)
        if stock is not None:
            changes["stock"] = stock
        if category is not None:
            changes["category"] = category

        edited = current.with_changes(**changes)
        self._store.update(edited)
        return edited


class RemoveProductHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(self, product_id: str) -> None:
        if not self._store.delete(product_id):
            raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
