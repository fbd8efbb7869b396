"""Application service: Show Catalog use case (query)."""

from __future__ import annotations

from scanpos.application.catalog_store import CatalogStore
from scanpos.application.dto import ProductDTO
from scanpos.domain.model.product import Product


class ShowCatalogHandler:

    def __init__(self, store: CatalogStore) -> None:
        self._store = store

    def handle(self, search: str = "") -> list[ProductDTO]:
        return [self.to_dto(p) for p in self._store.search(search)]

    @staticmethod
    def to_dto(product: Product) -> ProductDTO:
        return ProductDTO(
            id=product.id,
            barcode=product.barcode,
            name=product.name,
            price=str(product.price),
            stock=product.stock,
            category=product.category or "",
        )
