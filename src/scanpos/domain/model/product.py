"""Product entity.

Products live in the catalog independently of any checkout.  They are
immutable: an edit produces a new Product with the same ``id`` that
replaces the old one wholesale.  A cart line can therefore hold a
Product directly and still be a snapshot.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, replace

from scanpos.domain.exceptions import ValidationError
from scanpos.domain.model.value_objects import Money


@dataclass(frozen=True)
class Product:
    """A product in the catalog.

    Use ``Product.create()`` for new products. The plain constructor does
    no business validation so that the repository and the import codec
    can reconstitute stored records as they are.

    ``barcode`` is expected to be unique but this is not enforced.  When
    two products share one, lookups return the first in catalog order.
    """

    id: str
    barcode: str
    name: str
    price: Money
    stock: int = 0
    category: str | None = None

    # --- Factory (used for NEW products only) ---------------------------------

    @staticmethod
    def create(
        barcode: str,
        name: str,
        price: Money,
        stock: int = 0,
        category: str | None = None,
    ) -> Product:
        """Create a new product with a freshly generated id."""
        barcode = (barcode or "").strip()
        name = (name or "").strip()
        if not barcode:
            raise ValidationError("Product barcode is required")
        if not name:
            raise ValidationError("Product name is required")
        return Product(
            id=str(uuid.uuid4()),
            barcode=barcode,
            name=name,
            price=price,
            stock=stock,
            category=_clean_category(category),
        )

    # --- Edits ----------------------------------------------------------------

    def with_changes(self, **changes) -> Product:
        """Return a copy with the given fields replaced.

        The ``id`` is kept; ``name`` and ``barcode`` must stay non-empty.
        """
        if "id" in changes:
            raise ValidationError("Product id cannot be changed")
        for field_name in ("barcode", "name"):
            if field_name in changes:
                value = (changes[field_name] or "").strip()
                if not value:
                    raise ValidationError(f"Product {field_name} is required")
                changes[field_name] = value
        if "category" in changes:
            changes["category"] = _clean_category(changes["category"])
        return replace(self, **changes)


def _clean_category(category: str | None) -> str | None:
    if category is None:
        return None
    category = category.strip()
    return category or None
