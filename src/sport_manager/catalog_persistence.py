"""Catalog persistence - read and write the sport catalog as a JSON file."""

import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional

from src.sport_manager.catalog_source import CatalogMutationError, SyncFetchError
from src.sport_manager.catalog_state import Measure, Sport, VariableValue
from src.sport_manager.config import CATALOG_FILE, DEFAULT_SPORT_TEMPLATE

logger = logging.getLogger(__name__)


class JsonCatalogStore:
    """Sport catalog source and writer backed by a single JSON file.

    File layout::

        {
          "metadata": {...},
          "sport_template": {"variables": {...}},
          "measures": [{"key": ..., "type": ..., "options": [...]}],
          "sports": [{"name": ..., "disabled": ..., "variables": {...}}],
          "templates": {"<sport name>": {...}}
        }
    """

    def __init__(self, catalog_file: Optional[Path] = None):
        self.catalog_file = catalog_file or CATALOG_FILE

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    def list_sports(self) -> List[Sport]:
        data = self._load()
        return [self._dict_to_sport(sd) for sd in data.get("sports", [])]

    def list_measures(self) -> List[Measure]:
        data = self._load()
        return [
            Measure.create(
                key=md["key"],
                type=md["type"],
                options=md.get("options", []),
            )
            for md in data.get("measures", [])
        ]

    def get_sport_template(self) -> Sport:
        """Blank sport used as the starting point for a new sport."""
        data = self._load()
        template = data.get("sport_template") or {}
        variables = template.get("variables", DEFAULT_SPORT_TEMPLATE)
        return Sport(name="", variables=dict(variables))

    def get_template_variables(self, sport_name: str) -> Dict[str, VariableValue]:
        """Authoritative variable set for *sport_name*.

        Raises:
            SyncFetchError: If the file is unreadable or has no template
                for this sport.
        """
        try:
            data = self._load()
        except (OSError, json.JSONDecodeError) as e:
            raise SyncFetchError(f"Cannot read templates from {self.catalog_file}: {e}") from e

        templates = data.get("templates") or {}
        if not isinstance(templates, dict) or sport_name not in templates:
            raise SyncFetchError(f"No template found for sport {sport_name!r}")

        variables = templates[sport_name]
        if not isinstance(variables, dict):
            raise SyncFetchError(f"Malformed template for sport {sport_name!r}: {variables!r}")
        return dict(variables)

    # ------------------------------------------------------------------
    # Write side
    # ------------------------------------------------------------------

    def create_sport(self, sport: Sport, disabled: bool) -> Sport:
        data = self._load_for_write()
        if any(sd["name"] == sport.name for sd in data.get("sports", [])):
            raise CatalogMutationError(f"Sport {sport.name!r} already exists")

        created = Sport(name=sport.name, variables=dict(sport.variables), disabled=disabled)
        data.setdefault("sports", []).append(self._sport_to_dict(created))
        self._save(data)

        logger.info("Created sport %s (disabled=%s)", created.name, disabled)
        return created

    def update_sport_variables(
        self, sport_name: str, variables: Dict[str, VariableValue]
    ) -> None:
        data = self._load_for_write()
        entry = self._find_entry(data, sport_name)
        entry["variables"] = dict(variables)
        self._save(data)
        logger.info("Updated %d variables for sport %s", len(variables), sport_name)

    def set_sport_disabled(self, sport_name: str, disabled: bool) -> None:
        data = self._load_for_write()
        entry = self._find_entry(data, sport_name)
        entry["disabled"] = disabled
        self._save(data)
        logger.info("Sport %s disabled=%s", sport_name, disabled)

    def delete_sport(self, sport_name: str) -> None:
        data = self._load_for_write()
        self._find_entry(data, sport_name)
        data["sports"] = [sd for sd in data["sports"] if sd["name"] != sport_name]
        self._save(data)
        logger.info("Deleted sport %s", sport_name)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _load(self) -> Dict:
        if not self.catalog_file.exists():
            logger.warning("Catalog file not found: %s", self.catalog_file)
            return {}

        with open(self.catalog_file, "r", encoding="utf-8") as f:
            return json.load(f)

    def _load_for_write(self) -> Dict:
        try:
            return self._load()
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogMutationError(f"Corrupt catalog file {self.catalog_file}: {e}") from e

    def _save(self, data: Dict):
        """Write to a temp file and swap it in so readers never see a partial file."""
        tmp_file = self.catalog_file.with_suffix(".json.tmp")
        try:
            self.catalog_file.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_file, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.replace(tmp_file, self.catalog_file)
        except OSError as e:
            raise CatalogMutationError(f"Failed to write catalog {self.catalog_file}: {e}") from e

    @staticmethod
    def _find_entry(data: Dict, sport_name: str) -> Dict:
        for entry in data.get("sports", []):
            if entry["name"] == sport_name:
                return entry
        raise CatalogMutationError(f"Sport {sport_name!r} not found")

    @staticmethod
    def _sport_to_dict(sport: Sport) -> Dict:
        return {
            "name": sport.name,
            "disabled": sport.disabled,
            "variables": dict(sport.variables),
        }

    @staticmethod
    def _dict_to_sport(data: Dict) -> Sport:
        return Sport(
            name=data["name"],
            variables=dict(data.get("variables", {})),
            disabled=data.get("disabled", False),
        )
