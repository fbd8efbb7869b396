"""Cart aggregate: the lines scanned during one checkout session.

The cart is never persisted.  Each line holds the Product as it was
when the line was created, so later catalog edits do not leak into an
in-progress checkout.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from scanpos.domain.model.product import Product
from scanpos.domain.model.value_objects import Money, Quantity


@dataclass
class CartLine:
    """One (product snapshot, quantity) pair.

    Mutable only via ``increment()``.  The snapshot never changes, even
    when the same barcode is scanned again after a catalog edit.
    """

    product: Product
    quantity: Quantity = field(default_factory=lambda: Quantity(1))

    @property
    def line_total(self) -> Money:
        return self.product.price * self.quantity.value

    def increment(self) -> None:
        self.quantity = self.quantity.increment()


class Cart:
    """Session-scoped list of cart lines, at most one line per barcode."""

    def __init__(self) -> None:
        self._lines: list[CartLine] = []

    def add(self, product: Product) -> CartLine:
        """Add one unit of *product*.

        Merges into the existing line for the same barcode if there is
        one, otherwise appends a new line with quantity 1.
        """
        for line in self._lines:
            if line.product.barcode == product.barcode:
                line.increment()
                return line
        line = CartLine(product=product)
        self._lines.append(line)
        return line

    def remove_line(self, index: int) -> bool:
        """Remove the line at *index*; out-of-range indexes are ignored."""
        if not 0 <= index < len(self._lines):
            return False
        del self._lines[index]
        return True

    def clear(self) -> None:
        self._lines.clear()

    # --- Computed properties --------------------------------------------------

    @property
    def lines(self) -> list[CartLine]:
        return list(self._lines)

    @property
    def total(self) -> Money:
        result = Money.zero()
        for line in self._lines:
            result = result + line.line_total
        return result

    @property
    def item_count(self) -> int:
        return sum(line.quantity.value for line in self._lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def __len__(self) -> int:
        return len(self._lines)
