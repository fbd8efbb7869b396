"""CLI command for a checkout session driven by a line scanner."""

from __future__ import annotations

import re
import sys
from collections.abc import Callable
from pathlib import Path

import click

from scanpos.application.catalog_store import CatalogStore
from scanpos.application.checkout import CheckoutSession, ScanResult
from scanpos.application.dto import ReceiptDTO
from scanpos.application.register_product import RegisterProductHandler
from scanpos.domain.exceptions import DomainException
from scanpos.domain.scanner import DecodedCallback, ScannerAdapter
from scanpos.infrastructure.bootstrap import line_scanner
from scanpos.infrastructure.cli.context import CliContext, pass_cli_context
from scanpos.infrastructure.scanner.line_scanner import LineScanner

REMOVE_LINE = re.compile(r"^-(\d+)$")
CLEAR_CART = "!clear"


def _display_receipt(receipt: ReceiptDTO) -> None:
    if not receipt.lines:
        click.echo("Cart is empty.")
        return

    click.echo(f"  {'#':>2} {'Product':<20} {'Qty':>5} {'Price':>10} {'Total':>10}")
    click.echo(f"  {'-'*50}")
    for number, line in enumerate(receipt.lines, 1):
        click.echo(
            f"  {number:>2} {line.product_name:<20} {line.quantity:>5} "
            f"{line.unit_price:>10} {line.line_total:>10}"
        )
    click.echo(f"  {'-'*50}")
    click.echo(f"  {'Total (' + str(receipt.item_count) + ' items)':<30} {receipt.total:>20}")


def _offer_registration(store: CatalogStore, barcode: str) -> None:
    """Ask the operator whether to add an unknown barcode to the catalog."""
    if not click.confirm(f"Register a new product with barcode {barcode}?", default=False):
        return

    name = click.prompt("Name")
    price = click.prompt("Price")
    stock = click.prompt("Stock", default=0, type=int)
    category = click.prompt("Category", default="", show_default=False)

    try:
        product = RegisterProductHandler(store).handle(
            barcode=barcode, name=name, price=price, stock=stock, category=category
        )
    except DomainException as exc:
        click.echo(f"Product not registered: {exc}", err=True)
        return
    click.echo(f"Registered '{product.name}'; scan it again to add it to the cart.")


def _run_cart_command(session: CheckoutSession, code: str) -> bool:
    """Apply a cart control line; return False if *code* is a barcode."""
    match = REMOVE_LINE.match(code)
    if match:
        number = int(match.group(1))
        if session.remove_line(number - 1):
            click.echo(f"- removed line {number}")
        else:
            click.echo(f"No cart line {number}", err=True)
        return True
    if code == CLEAR_CART:
        session.clear()
        click.echo("Cart cleared.")
        return True
    return False


class CartCommandScanner(ScannerAdapter):
    """Wraps a LineScanner so control lines act on the cart instead of scanning."""

    def __init__(self, inner: LineScanner, on_command: Callable[[str], bool]) -> None:
        self._inner = inner
        self._on_command = on_command

    def start(self, on_decoded: DecodedCallback) -> None:
        def dispatch(code: str) -> None:
            if not self._on_command(code):
                on_decoded(code)

        self._inner.start(dispatch)

    def stop(self) -> None:
        self._inner.stop()

    @property
    def active(self) -> bool:
        return self._inner.active

    def pump(self) -> bool:
        return self._inner.pump()


@click.command("checkout")
@click.option(
    "--device",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Read scans from this device instead of stdin.",
)
@click.option(
    "--register/--no-register",
    default=None,
    help=(
        "Offer to register barcodes that are not in the catalog.  Defaults to "
        "on when answers cannot be confused with scans (a terminal, or --device)."
    ),
)
@pass_cli_context
def checkout(ctx: CliContext, device: Path | None, register: bool | None) -> None:
    """Scan items into a cart and print the receipt.

    Each scanned line is looked up by barcode.  Scanning the same item
    again increases its quantity.  End the input (Ctrl-D) to finish.

    Control lines: '-N' removes cart line N, '!clear' empties the cart.

    Registration prompts read from stdin.  When scans also come from a
    piped stdin, a scan arriving during a prompt is taken as the answer,
    so registration is off by default in that case.
    """
    if register is None:
        register = device is not None or sys.stdin.isatty()

    store = ctx.store()

    def on_result(result: ScanResult) -> None:
        if result.resolved:
            line = result.line
            number = next(
                i for i, current in enumerate(session.cart.lines, 1) if current is line
            )
            click.echo(
                f"+ {line.product.name}  {line.product.price} x {line.quantity}  (line {number})"
            )
            return
        click.echo(f"Barcode not found: {result.barcode}", err=True)
        if register and result.barcode:
            _offer_registration(store, result.barcode)

    scanner = CartCommandScanner(
        line_scanner(stream=sys.stdin, device=device),
        on_command=lambda code: _run_cart_command(session, code),
    )

    with CheckoutSession(store, scanner=scanner, on_result=on_result) as session:
        try:
            while True:
                session.start_scan()
                if not scanner.pump():
                    break
        except DomainException as exc:
            raise click.ClickException(str(exc))

    _display_receipt(session.receipt())
    ctx.warn_if_not_persisted()
