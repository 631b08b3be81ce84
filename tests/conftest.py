"""Shared fixtures for the sport matcher test suite."""

import json

import pytest

from src.sport_manager.catalog_source import CatalogMutationError, SyncFetchError
from src.sport_manager.catalog_state import CatalogContext, Measure, Sport


# ------------------------------------------------------------------
# Test doubles
# ------------------------------------------------------------------

class RecordingNotifier:
    """Keeps every notification for assertions."""

    def __init__(self):
        self.messages = []

    def notify(self, message, severity):
        self.messages.append((message, severity))

    @property
    def severities(self):
        return [severity for _, severity in self.messages]


class InMemoryCatalog:
    """Catalog source and writer holding everything in dicts.

    Set ``fail_writes`` or ``fail_templates`` to simulate a failing backend.
    """

    def __init__(self, sports=None, measures=None, templates=None):
        self.sports = {s.name: s for s in (sports or [])}
        self.measures = list(measures or [])
        self.templates = dict(templates or {})
        self.blank_template = {"minHeight": 0, "minAge": 0}
        self.fail_writes = False
        self.fail_templates = False
        self.template_calls = 0
        self.writes = []

    def list_sports(self):
        return list(self.sports.values())

    def list_measures(self):
        return list(self.measures)

    def get_sport_template(self):
        return Sport(name="", variables=dict(self.blank_template))

    def get_template_variables(self, sport_name):
        self.template_calls += 1
        if self.fail_templates:
            raise SyncFetchError("template service unavailable")
        if sport_name not in self.templates:
            raise SyncFetchError(f"no template for {sport_name}")
        return dict(self.templates[sport_name])

    def _check_write(self, op):
        if self.fail_writes:
            raise CatalogMutationError(f"{op} failed")
        self.writes.append(op)

    def create_sport(self, sport, disabled):
        self._check_write("create")
        created = Sport(name=sport.name, variables=dict(sport.variables), disabled=disabled)
        self.sports[created.name] = created
        return created

    def update_sport_variables(self, sport_name, variables):
        self._check_write("update")
        self.sports[sport_name] = self.sports[sport_name].with_variables(variables)

    def set_sport_disabled(self, sport_name, disabled):
        self._check_write("disable")
        self.sports[sport_name] = self.sports[sport_name].with_disabled(disabled)

    def delete_sport(self, sport_name):
        self._check_write("delete")
        del self.sports[sport_name]


# ------------------------------------------------------------------
# Lightweight factories - cheap to construct, no I/O
# ------------------------------------------------------------------

@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def measures():
    return [
        Measure.create("height", "number"),
        Measure.create("weight", "number"),
        Measure.create("dominantHand", "string", ["right", "left"]),
        Measure.create("swimmer", "boolean"),
    ]


@pytest.fixture
def catalog(measures):
    """In-memory catalog with three sports, one of them out of sync."""
    return InMemoryCatalog(
        sports=[
            Sport("basketball", {"minHeight": 170}),
            Sport("chess", {"minHeight": 0}),
            Sport("rowing", {"minHeight": 175}),
        ],
        measures=measures,
        templates={
            "basketball": {"minHeight": 170},
            "chess": {"minHeight": 0},
            "rowing": {"minHeight": 175, "minAge": 16},
        },
    )


@pytest.fixture
def context(catalog):
    return CatalogContext(catalog).refresh()


# ------------------------------------------------------------------
# File-backed fixtures
# ------------------------------------------------------------------

@pytest.fixture
def catalog_file(tmp_path):
    """A catalog.json with measures, sports and templates."""
    path = tmp_path / "catalog" / "catalog.json"
    path.parent.mkdir(parents=True)
    data = {
        "metadata": {"version": "1.0"},
        "sport_template": {"variables": {"minHeight": 0, "maxHeight": 0}},
        "measures": [
            {"key": "height", "type": "number", "options": []},
            {"key": "weight", "type": "number", "options": []},
            {"key": "dominantHand", "type": "string", "options": ["right", "left"]},
        ],
        "sports": [
            {"name": "basketball", "disabled": False, "variables": {"minHeight": 170}},
            {"name": "chess", "disabled": False, "variables": {"minHeight": 0}},
            {"name": "sumo", "disabled": True, "variables": {"minWeight": 120}},
        ],
        "templates": {
            "basketball": {"minHeight": 170},
            "chess": {"minHeight": 0},
            "sumo": {"minWeight": 130},
        },
    }
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path
