"""Shared state handed from the top-level CLI group to its commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import click

from scanpos.application.catalog_store import CatalogStore
from scanpos.infrastructure.bootstrap import catalog_store


@dataclass
class CliContext:
    data_dir: Path | None = None
    _store: CatalogStore | None = field(default=None, repr=False)

    def store(self) -> CatalogStore:
        """Load the catalog once per invocation, warning on bad data."""
        if self._store is None:
            self._store = catalog_store(self.data_dir)
            if self._store.load_error:
                click.echo(
                    f"Warning: stored catalog could not be read, starting empty "
                    f"({self._store.load_error})",
                    err=True,
                )
        return self._store

    def warn_if_not_persisted(self) -> None:
        if self._store is not None and self._store.durability_degraded:
            click.echo(
                "Warning: changes could not be saved to disk and will be lost "
                "when this command exits.",
                err=True,
            )


pass_cli_context = click.make_pass_decorator(CliContext, ensure=True)
