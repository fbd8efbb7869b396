"""CLI commands for exporting and importing the whole catalog."""

from __future__ import annotations

from pathlib import Path

import click

from scanpos.application.interchange import ImportExportGateway
from scanpos.infrastructure.bootstrap import data_dir
from scanpos.infrastructure.cli.context import CliContext, pass_cli_context


@click.command("export")
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write to this file instead of stdout.",
)
@click.option(
    "--backup",
    is_flag=True,
    default=False,
    help="Write a dated inventory_backup_<date>.json into the data directory.",
)
@pass_cli_context
def catalog_export(ctx: CliContext, output: Path | None, backup: bool) -> None:
    """Export the catalog as JSON."""
    if output is not None and backup:
        raise click.UsageError("--output and --backup are mutually exclusive")

    gateway = ImportExportGateway(ctx.store())
    payload = gateway.export_data()

    if backup:
        output = data_dir(ctx.data_dir) / gateway.backup_filename()

    if output is None:
        click.echo(payload)
        return

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        raise click.ClickException(f"Cannot write {output}: {exc}")
    click.echo(f"Exported {len(ctx.store())} products to {output}")


@click.command("import")
@click.argument("source", type=click.File("rb"))
@pass_cli_context
def catalog_import(ctx: CliContext, source) -> None:
    """Replace the catalog with the products in SOURCE ('-' for stdin)."""
    gateway = ImportExportGateway(ctx.store())

    if not gateway.import_data(source.read()):
        raise click.ClickException(f"Import rejected, catalog unchanged: {gateway.last_error}")

    click.echo(f"Imported {len(ctx.store())} products")
    ctx.warn_if_not_persisted()
