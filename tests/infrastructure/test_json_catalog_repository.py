"""Tests for the JSON-file catalog repository (uses tmp_path)."""

import json

import pytest

from scanpos.application.catalog_store import CatalogStore
from scanpos.domain.exceptions import CorruptCatalogError, PersistenceError
from scanpos.infrastructure.persistence.json_catalog_repository import (
    JsonCatalogRepository,
)
from tests.fakes import make_product


class TestJsonCatalogRepository:

    def test_missing_file_reads_as_absent(self, tmp_path):
        repo = JsonCatalogRepository(tmp_path / "inventory_data.json")
        assert repo.read_all() is None

    def test_write_then_read(self, tmp_path):
        repo = JsonCatalogRepository(tmp_path / "nested" / "inventory_data.json")
        products = [make_product(id="a", category="Drinks"), make_product(id="b", name="茶")]
        repo.write_all(products)
        assert repo.read_all() == products

    def test_file_holds_interchange_json(self, tmp_path):
        path = tmp_path / "inventory_data.json"
        JsonCatalogRepository(path).write_all([make_product(id="a")])
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data[0]["id"] == "a"
        assert data[0]["price"] == "3.50"

    def test_malformed_file_raises_corrupt(self, tmp_path):
        path = tmp_path / "inventory_data.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CorruptCatalogError):
            JsonCatalogRepository(path).read_all()

    def test_wrong_shape_raises_corrupt(self, tmp_path):
        path = tmp_path / "inventory_data.json"
        path.write_text('{"products": []}', encoding="utf-8")
        with pytest.raises(CorruptCatalogError, match="Expected a list"):
            JsonCatalogRepository(path).read_all()

    def test_unwritable_location_raises_persistence_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        repo = JsonCatalogRepository(blocker / "inventory_data.json")
        with pytest.raises(PersistenceError):
            repo.write_all([make_product()])


class TestStoreOverJsonFile:

    def test_mutations_survive_reload(self, tmp_path):
        path = tmp_path / "inventory_data.json"
        store = CatalogStore(JsonCatalogRepository(path))
        store.load()
        store.add(make_product(id="a"))
        store.add(make_product(id="b"))
        store.delete("a")

        reloaded = CatalogStore(JsonCatalogRepository(path))
        reloaded.load()
        assert [p.id for p in reloaded.products] == ["b"]

    def test_deeply_nested_file_loads_empty(self, tmp_path):
        path = tmp_path / "inventory_data.json"
        path.write_text("[" * 100000 + "]" * 100000, encoding="utf-8")
        store = CatalogStore(JsonCatalogRepository(path))
        store.load()
        assert store.products == []
        assert "not valid JSON" in store.load_error

    def test_corrupt_file_loads_empty(self, tmp_path):
        path = tmp_path / "inventory_data.json"
        path.write_text("garbage", encoding="utf-8")
        store = CatalogStore(JsonCatalogRepository(path))
        store.load()
        assert store.products == []
        assert store.load_error
