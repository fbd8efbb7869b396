"""Application service: Checkout session (the cart accumulator).

Ties a scanner to the catalog and the cart.  The session is either IDLE
or SCANNING.  ``start_scan()`` arms the scanner; the first decoded
barcode is processed and the session drops back to IDLE, releasing the
scanner, so the operator re-arms for every item.

A barcode the catalog does not know is reported as UNRESOLVED and
nothing is mutated; offering to register it is up to the caller.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from scanpos.application.catalog_store import CatalogStore
from scanpos.application.dto import CartLineDTO, ReceiptDTO
from scanpos.domain.model.cart import Cart, CartLine
from scanpos.domain.model.value_objects import Money
from scanpos.domain.scanner import ScannerAdapter

LOGGER = logging.getLogger(__name__)


class ScanState(Enum):
    IDLE = "IDLE"
    SCANNING = "SCANNING"


class ScanStatus(Enum):
    ADDED = "ADDED"
    UNRESOLVED = "UNRESOLVED"


@dataclass(frozen=True)
class ScanResult:
    status: ScanStatus
    barcode: str
    line: CartLine | None = None

    @property
    def resolved(self) -> bool:
        return self.status == ScanStatus.ADDED


class CheckoutSession:

    def __init__(
        self,
        store: CatalogStore,
        scanner: ScannerAdapter | None = None,
        on_result: Callable[[ScanResult], None] | None = None,
    ) -> None:
        self._store = store
        self._scanner = scanner
        self._on_result = on_result
        self._cart = Cart()
        self._state = ScanState.IDLE

    # --- Cart operations ------------------------------------------------------

    def add_scanned_product(self, barcode: str) -> ScanResult:
        """Resolve *barcode* against the catalog and add it to the cart."""
        barcode = barcode.strip()
        product = self._store.find_by_barcode(barcode) if barcode else None
        if product is None:
            LOGGER.info("Barcode %r not found in catalog", barcode)
            return ScanResult(status=ScanStatus.UNRESOLVED, barcode=barcode)

        line = self._cart.add(product)
        LOGGER.info("Added %s (quantity %s)", product.name, line.quantity)
        return ScanResult(status=ScanStatus.ADDED, barcode=barcode, line=line)

    def remove_line(self, index: int) -> bool:
        return self._cart.remove_line(index)

    def clear(self) -> None:
        self._cart.clear()

    @property
    def cart(self) -> Cart:
        return self._cart

    @property
    def total(self) -> Money:
        return self._cart.total

    def receipt(self) -> ReceiptDTO:
        return ReceiptDTO(
            lines=[
                CartLineDTO(
                    product_name=line.product.name,
                    barcode=line.product.barcode,
                    quantity=line.quantity.value,
                    unit_price=str(line.product.price),
                    line_total=str(line.line_total),
                )
                for line in self._cart.lines
            ],
            item_count=self._cart.item_count,
            total=str(self._cart.total),
        )

    # --- Scan state machine ---------------------------------------------------

    @property
    def state(self) -> ScanState:
        return self._state

    @property
    def scanning(self) -> bool:
        return self._state == ScanState.SCANNING

    def start_scan(self) -> None:
        """Transition IDLE -> SCANNING and acquire the scanner."""
        if self._state == ScanState.SCANNING:
            return
        if self._scanner is not None:
            self._scanner.start(self._handle_decoded)
        self._state = ScanState.SCANNING

    def stop_scan(self) -> None:
        """Transition to IDLE and release the scanner.

        The scanner is released even if scanning was never started.
        """
        self._state = ScanState.IDLE
        if self._scanner is not None:
            self._scanner.stop()

    def _handle_decoded(self, decoded: str) -> None:
        if self._state != ScanState.SCANNING:
            LOGGER.debug("Ignoring scan %r while idle", decoded)
            return
        try:
            result = self.add_scanned_product(decoded)
        finally:
            self.stop_scan()
        if self._on_result is not None:
            self._on_result(result)

    # --- Context manager ------------------------------------------------------

    def __enter__(self) -> CheckoutSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.stop_scan()
