import logging
from pathlib import Path

import click

from scanpos.infrastructure.bootstrap import DATA_DIR_ENVVAR
from scanpos.infrastructure.cli.catalog_commands import catalog_export, catalog_import
from scanpos.infrastructure.cli.checkout_commands import checkout
from scanpos.infrastructure.cli.context import CliContext
from scanpos.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_find,
    product_list,
    product_update,
)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def configure_logging(verbosity: int) -> None:
    level = {0: logging.WARNING, 1: logging.INFO}.get(verbosity, logging.DEBUG)
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.group()
@click.option("-v", "--verbose", count=True, help="Log more (-v info, -vv debug).")
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar=DATA_DIR_ENVVAR,
    default=None,
    help="Directory holding the catalog file.",
)
@click.pass_context
def cli(ctx: click.Context, verbose: int, data_dir: Path | None) -> None:
    """scanpos: barcode checkout helper"""
    configure_logging(verbose)
    ctx.obj = CliContext(data_dir=data_dir)


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def catalog() -> None:
    """Export and import the whole catalog."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_find)
product.add_command(product_list)
product.add_command(product_update)
catalog.add_command(catalog_export)
catalog.add_command(catalog_import)
cli.add_command(checkout)
