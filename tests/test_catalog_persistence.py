"""Tests for catalog persistence - JSON-backed catalog source and writer."""

import json

import pytest

from src.sport_manager.catalog_persistence import JsonCatalogStore
from src.sport_manager.catalog_source import (
    CatalogMutationError,
    CatalogWriter,
    SportCatalogSource,
    SyncFetchError,
)
from src.sport_manager.catalog_state import MeasureType, Sport
from src.sport_manager.config import DEFAULT_SPORT_TEMPLATE
from src.sport_manager.sport_sync import SportSync


@pytest.fixture
def store(catalog_file):
    return JsonCatalogStore(catalog_file)


def _read(path):
    with open(path, encoding="utf-8") as f:
        return json.load(f)


# ── Read side ────────────────────────────────────────────────────────


class TestReadSide:
    def test_implements_protocols(self, store):
        assert isinstance(store, SportCatalogSource)
        assert isinstance(store, CatalogWriter)

    def test_list_sports_keeps_file_order(self, store):
        sports = store.list_sports()
        assert [s.name for s in sports] == ["basketball", "chess", "sumo"]
        assert sports[2].disabled is True
        assert sports[0].variables == {"minHeight": 170}

    def test_list_measures(self, store):
        measures = store.list_measures()
        assert [m.key for m in measures] == ["height", "weight", "dominantHand"]
        assert measures[0].type == MeasureType.NUMBER
        assert measures[2].options == ("right", "left")

    def test_sport_template(self, store):
        template = store.get_sport_template()
        assert template.name == ""
        assert template.variables == {"minHeight": 0, "maxHeight": 0}

    def test_template_variables(self, store):
        assert store.get_template_variables("sumo") == {"minWeight": 130}

    def test_unknown_template_raises(self, store):
        with pytest.raises(SyncFetchError):
            store.get_template_variables("curling")

    def test_corrupt_file_template_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SyncFetchError):
            JsonCatalogStore(path).get_template_variables("chess")

    @pytest.mark.parametrize(
        "templates",
        [{"basketball": None}, {"basketball": [170]}, {"basketball": "minHeight"}, ["basketball"]],
    )
    def test_malformed_template_raises(self, tmp_path, templates):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"templates": templates}), encoding="utf-8")
        with pytest.raises(SyncFetchError):
            JsonCatalogStore(path).get_template_variables("basketball")

    def test_malformed_template_is_out_of_sync(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"templates": {"basketball": None}}), encoding="utf-8")
        sync = SportSync(JsonCatalogStore(path))
        assert sync.check_out_of_sync(Sport("basketball", {"minHeight": 170})) is True

    def test_missing_file_is_empty_catalog(self, tmp_path):
        store = JsonCatalogStore(tmp_path / "missing.json")
        assert store.list_sports() == []
        assert store.list_measures() == []
        assert store.get_sport_template().variables == DEFAULT_SPORT_TEMPLATE


# ── Write side ───────────────────────────────────────────────────────


class TestWriteSide:
    def test_create_sport(self, store, catalog_file):
        created = store.create_sport(Sport("judo", {"minAge": 6}), disabled=True)
        assert created == Sport("judo", {"minAge": 6}, disabled=True)
        names = [s["name"] for s in _read(catalog_file)["sports"]]
        assert names == ["basketball", "chess", "sumo", "judo"]

    def test_create_duplicate_raises(self, store, catalog_file):
        before = _read(catalog_file)
        with pytest.raises(CatalogMutationError):
            store.create_sport(Sport("chess"), disabled=False)
        assert _read(catalog_file) == before

    def test_update_variables_replaces_whole_set(self, store):
        store.update_sport_variables("basketball", {"minHeight": 180, "minAge": 12})
        sport = store.list_sports()[0]
        assert sport.variables == {"minHeight": 180, "minAge": 12}

    def test_set_disabled(self, store):
        store.set_sport_disabled("sumo", False)
        assert store.list_sports()[2].disabled is False

    def test_delete(self, store):
        store.delete_sport("chess")
        assert [s.name for s in store.list_sports()] == ["basketball", "sumo"]

    @pytest.mark.parametrize(
        "op",
        [
            lambda s: s.update_sport_variables("curling", {}),
            lambda s: s.set_sport_disabled("curling", True),
            lambda s: s.delete_sport("curling"),
        ],
    )
    def test_unknown_sport_raises(self, store, op):
        with pytest.raises(CatalogMutationError):
            op(store)

    def test_no_temp_file_left(self, store, catalog_file):
        store.set_sport_disabled("chess", True)
        assert not catalog_file.with_suffix(".json.tmp").exists()

    def test_corrupt_file_write_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(CatalogMutationError):
            JsonCatalogStore(path).delete_sport("chess")

    def test_create_in_new_file(self, tmp_path):
        path = tmp_path / "nested" / "catalog.json"
        store = JsonCatalogStore(path)
        store.create_sport(Sport("judo"), disabled=False)
        assert [s.name for s in store.list_sports()] == ["judo"]
