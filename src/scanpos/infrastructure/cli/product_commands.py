"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from scanpos.application.edit_product import EditProductHandler, RemoveProductHandler
from scanpos.application.register_product import RegisterProductHandler
from scanpos.application.show_catalog import ShowCatalogHandler
from scanpos.domain.exceptions import DomainException
from scanpos.infrastructure.cli.context import CliContext, pass_cli_context


def _display_products(dtos) -> None:
    click.echo(f"{'ID':<36} {'Barcode':<15} {'Name':<20} {'Price':>10} {'Stock':>6}  Category")
    click.echo("-" * 100)
    for p in dtos:
        click.echo(
            f"{p.id:<36} {p.barcode:<15} {p.name:<20} {p.price:>10} {p.stock:>6}  {p.category}"
        )


@click.command("add")
@click.option("--barcode", required=True, help="Barcode printed on the product.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 9.90).")
@click.option("--stock", default=0, show_default=True, type=int, help="Units in stock.")
@click.option("--category", default=None, help="Optional category.")
@pass_cli_context
def product_add(
    ctx: CliContext,
    barcode: str,
    name: str,
    price: str,
    stock: int,
    category: str | None,
) -> None:
    """Add a new product to the catalog."""
    handler = RegisterProductHandler(ctx.store())

    try:
        product = handler.handle(
            barcode=barcode, name=name, price=price, stock=stock, category=category
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} '{product.name}' added at {product.price}")
    ctx.warn_if_not_persisted()


@click.command("list")
@click.option("--search", default="", help="Filter by name or barcode.")
@pass_cli_context
def product_list(ctx: CliContext, search: str) -> None:
    """List the products in the catalog."""
    dtos = ShowCatalogHandler(ctx.store()).handle(search)

    if not dtos:
        click.echo("No products found.")
        return

    _display_products(dtos)


@click.command("find")
@click.option("--barcode", required=True, help="Barcode to look up.")
@pass_cli_context
def product_find(ctx: CliContext, barcode: str) -> None:
    """Look up a product by barcode."""
    product = ctx.store().find_by_barcode(barcode.strip())
    if product is None:
        raise click.ClickException(f"No product with barcode '{barcode}'")

    _display_products([ShowCatalogHandler.to_dto(product)])


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--barcode", default=None, help="New barcode.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, help="New price (e.g. 29.99).")
@click.option("--stock", default=None, type=int, help="New stock level.")
@click.option("--category", default=None, help="New category ('' clears it).")
@pass_cli_context
def product_update(
    ctx: CliContext,
    product_id: str,
    barcode: str | None,
    name: str | None,
    price: str | None,
    stock: int | None,
    category: str | None,
) -> None:
    """Edit a product; options left out keep their current value."""
    handler = EditProductHandler(ctx.store())

    try:
        product = handler.handle(
            product_id=product_id,
            barcode=barcode,
            name=name,
            price=price,
            stock=stock,
            category=category,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.id} updated")
    ctx.warn_if_not_persisted()


@click.command("delete")
@click.option("--id", "product_id", required=True, help="Product ID.")
@pass_cli_context
def product_delete(ctx: CliContext, product_id: str) -> None:
    """Remove a product from the catalog."""
    handler = RemoveProductHandler(ctx.store())

    try:
        handler.handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product_id} deleted")
    ctx.warn_if_not_persisted()
