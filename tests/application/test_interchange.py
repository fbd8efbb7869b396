"""Tests for the interchange codec and the Import/Export gateway."""

import json
from datetime import date
from decimal import Decimal

import pytest

from scanpos.application.catalog_store import CatalogStore
from scanpos.application.interchange import (
    ImportExportGateway,
    loads_products,
    product_from_record,
    product_to_record,
)
from scanpos.domain.exceptions import InterchangeFormatError
from scanpos.domain.model.value_objects import Money
from tests.fakes import FakeCatalogRepository, make_product


def _setup(products=None):
    if products is None:
        products = [
            make_product(id="a", barcode="111", name="Cola", price="3.50", category="Drinks"),
            make_product(id="b", barcode="222", name="Gum", price="0.5", stock=-1),
        ]
    repo = FakeCatalogRepository(products)
    store = CatalogStore(repo)
    store.load()
    return ImportExportGateway(store), store, repo


class TestCodec:

    def test_record_has_all_fields(self):
        record = product_to_record(make_product(category="Drinks"))
        assert record == {
            "id": "p1",
            "barcode": "6900000000001",
            "name": "Cola",
            "price": "3.50",
            "stock": 10,
            "category": "Drinks",
        }

    def test_missing_category_is_omitted(self):
        assert "category" not in product_to_record(make_product())

    def test_optional_fields_may_be_missing(self):
        p = product_from_record({"id": "x", "barcode": "1", "name": "Tea", "price": 2})
        assert p.stock == 0
        assert p.category is None

    def test_numeric_price_is_exact(self):
        products = loads_products('[{"id": "x", "barcode": "1", "name": "Tea", "price": 9.9}]')
        assert products[0].price.amount == Decimal("9.9")

    def test_integral_float_stock_accepted(self):
        products = loads_products(
            '[{"id": "x", "barcode": "1", "name": "Tea", "price": 1, "stock": 5.0}]'
        )
        assert products[0].stock == 5

    def test_extra_keys_ignored(self):
        p = product_from_record(
            {"id": "x", "barcode": "1", "name": "Tea", "price": "1", "colour": "red"}
        )
        assert p.name == "Tea"

    def test_bytes_payload_accepted(self):
        payload = '[{"id": "x", "barcode": "1", "name": "茶", "price": "1"}]'.encode("utf-8")
        assert loads_products(payload)[0].name == "茶"

    @pytest.mark.parametrize(
        "payload, message",
        [
            ("not json", "not valid JSON"),
            ('{"id": "x"}', "Expected a list"),
            ("[1]", "not an object"),
            ('[{"id": "x", "barcode": "1", "name": "Tea"}]', "missing price"),
            ('[{"id": 5, "barcode": "1", "name": "Tea", "price": 1}]', "'id' must be a string"),
            ('[{"id": "", "barcode": "1", "name": "Tea", "price": 1}]', "must not be empty"),
            ('[{"id": "x", "barcode": "1", "name": "Tea", "price": -1}]', "cannot be negative"),
            ('[{"id": "x", "barcode": "1", "name": "Tea", "price": true}]', "must be a number"),
            ('[{"id": "x", "barcode": "1", "name": "Tea", "price": 1, "stock": 1.5}]', "'stock'"),
            ('[{"id": "x", "barcode": "1", "name": "Tea", "price": 1, "category": 3}]', "'category'"),
            ('[{"id": "x", "barcode": "1", "name": "", "price": 1}]', "'name' must not be blank"),
            ('[{"id": "x", "barcode": "1", "name": "   ", "price": 1}]', "'name' must not be blank"),
            ('[{"id": "x", "barcode": "", "name": "Tea", "price": 1}]', "'barcode' must not be blank"),
            ('[{"id": "x", "barcode": " ", "name": "Tea", "price": 1}]', "'barcode' must not be blank"),
        ],
    )
    def test_malformed_payload_rejected(self, payload, message):
        with pytest.raises(InterchangeFormatError, match=message):
            loads_products(payload)

    def test_duplicate_ids_rejected(self):
        record = {"id": "x", "barcode": "1", "name": "Tea", "price": "1"}
        with pytest.raises(InterchangeFormatError, match="Duplicate product id"):
            loads_products(json.dumps([record, record]))


class TestExport:

    def test_export_is_json_list_in_store_order(self):
        gateway, _, _ = _setup()
        data = json.loads(gateway.export_data())
        assert [r["id"] for r in data] == ["a", "b"]

    def test_export_empty_catalog(self):
        gateway, _, _ = _setup([])
        assert json.loads(gateway.export_data()) == []

    def test_export_then_import_round_trips(self):
        gateway, store, _ = _setup()
        before = store.products
        assert gateway.import_data(gateway.export_data()) is True
        assert store.products == before

    def test_backup_filename(self):
        name = ImportExportGateway.backup_filename(date(2024, 3, 9))
        assert name == "inventory_backup_2024-03-09.json"


class TestImport:

    def test_import_replaces_catalog_wholesale(self):
        gateway, store, repo = _setup()
        payload = json.dumps([{"id": "z", "barcode": "9", "name": "Water", "price": "1.20"}])
        assert gateway.import_data(payload) is True
        assert [p.id for p in store.products] == ["z"]
        assert store.products[0].price == Money.of("1.20")
        assert [p.id for p in repo.stored] == ["z"]
        assert gateway.last_error is None

    def test_import_empty_list_clears_catalog(self):
        gateway, store, _ = _setup()
        assert gateway.import_data("[]") is True
        assert len(store) == 0

    @pytest.mark.parametrize(
        "payload",
        ["{{{", '{"products": []}', "42", '[{"id": "x"}]', '[{"id": "a"}, 7]'],
    )
    def test_rejected_import_leaves_catalog_untouched(self, payload):
        gateway, store, repo = _setup()
        exported_before = gateway.export_data()

        assert gateway.import_data(payload) is False

        assert gateway.export_data() == exported_before
        assert repo.write_attempts == []
        assert gateway.last_error

    def test_deeply_nested_payload_is_rejected_not_raised(self):
        gateway, store, repo = _setup()
        before = store.products

        assert gateway.import_data("[" * 100000 + "]" * 100000) is False

        assert store.products == before
        assert repo.write_attempts == []
        assert "not valid JSON" in gateway.last_error

    def test_blank_name_rejected(self):
        gateway, store, _ = _setup()
        assert gateway.import_data('[{"id": "x", "barcode": "", "name": "", "price": 1}]') is False
        assert [p.id for p in store.products] == ["a", "b"]

    def test_rejection_is_logged(self, caplog):
        gateway, _, _ = _setup()
        gateway.import_data("nope")
        assert "Import rejected" in caplog.text
