"""Tests for equipment catalog loading."""

import json

import pytest

from db.catalog import BUNDLED_CATALOG, catalog_categories, load_catalog, parse_catalog
from utils.exceptions import CatalogUnavailableError


def record(**overrides) -> dict:
    data = {
        "name": "Leopard 2",
        "origin": "Germany",
        "type": "Tank",
        "coords": [48.14, 11.58],
        "specs": {"speed": "68 km/h", "armament": "120mm", "range": "450 km"},
        "image": "assets/images/leopard2.jpg",
        "inService": 1979,
        "status": "Active",
        "users": ["Germany", "Poland"],
    }
    data.update(overrides)
    return data


class TestParseCatalog:
    def test_parses_record(self):
        (item,) = parse_catalog(json.dumps([record()]))

        assert item.name == "Leopard 2"
        assert item.category == "Tank"
        assert item.coords.lat == 48.14
        assert item.coords.lng == 11.58
        assert item.specs.armament == "120mm"
        assert item.in_service == "1979"
        assert item.users == ["Germany", "Poland"]

    def test_optional_fields(self):
        minimal = {"name": "X", "origin": "France", "type": "Ship", "coords": [0, 0]}
        (item,) = parse_catalog(json.dumps([minimal]))

        assert item.in_service is None
        assert item.users == []
        assert item.specs.speed == ""

    def test_rejects_out_of_range_coordinates(self):
        with pytest.raises(CatalogUnavailableError):
            parse_catalog(json.dumps([record(coords=[91, 0])]))
        with pytest.raises(CatalogUnavailableError):
            parse_catalog(json.dumps([record(coords=[0, -181])]))

    def test_rejects_malformed_coordinates(self):
        with pytest.raises(CatalogUnavailableError):
            parse_catalog(json.dumps([record(coords=[1, 2, 3])]))

    def test_rejects_missing_origin(self):
        data = record()
        del data["origin"]
        with pytest.raises(CatalogUnavailableError):
            parse_catalog(json.dumps([data]))

    def test_rejects_invalid_json(self):
        with pytest.raises(CatalogUnavailableError):
            parse_catalog("[{")

    def test_rejects_empty_catalog(self):
        with pytest.raises(CatalogUnavailableError):
            parse_catalog("[]")


class TestLoadCatalog:
    def test_bundled_catalog(self):
        catalog = load_catalog(BUNDLED_CATALOG)

        assert len(catalog) >= 10
        assert len({item.name for item in catalog}) == len(catalog)
        assert {"Fighter", "Tank", "Helicopter", "Ship"} <= set(catalog_categories(catalog))

    def test_default_is_bundled_catalog(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        catalog = load_catalog()

        assert catalog == load_catalog(BUNDLED_CATALOG)

    def test_empty_path_uses_bundled_catalog(self):
        assert load_catalog("") == load_catalog(BUNDLED_CATALOG)

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogUnavailableError) as exc_info:
            load_catalog(tmp_path / "missing.json")
        assert "unavailable" in exc_info.value.user_message

    def test_loads_from_file(self, tmp_path):
        path = tmp_path / "equipment.json"
        path.write_text(json.dumps([record(), record(name="T-90", origin="Russia")]))

        catalog = load_catalog(path)

        assert [item.name for item in catalog] == ["Leopard 2", "T-90"]


class TestCatalogCategories:
    def test_distinct_in_order(self, catalog):
        assert catalog_categories(catalog) == ["Fighter", "Tank", "Helicopter"]
