"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TextIO

from scanpos.application.catalog_store import CatalogStore
from scanpos.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from scanpos.infrastructure.scanner.line_scanner import LineScanner

DATA_DIR_ENVVAR = "SCANPOS_DATA_DIR"
CATALOG_FILENAME = "inventory_data.json"

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


def data_dir(override: Path | None = None) -> Path:
    """Resolve the data directory: explicit override, env var, default."""
    if override is not None:
        return override
    from_env = os.environ.get(DATA_DIR_ENVVAR)
    if from_env:
        return Path(from_env)
    return _DEFAULT_DATA_DIR


def catalog_repository(directory: Path | None = None) -> JsonCatalogRepository:
    return JsonCatalogRepository(data_dir(directory) / CATALOG_FILENAME)


def catalog_store(directory: Path | None = None) -> CatalogStore:
    """Build the catalog store and load it from disk."""
    store = CatalogStore(catalog_repository(directory))
    store.load()
    return store


def line_scanner(stream: TextIO | None = None, device: Path | None = None) -> LineScanner:
    if device is not None:
        return LineScanner(device=device)
    return LineScanner(stream=stream)
