"""Data cleaning for catalog CSV data.

Handles standardization across the three CSV files:
- Normalize sport names to sport keys ("Beach Volley" -> "beach_volley")
- Map measure type spellings onto the canonical types
- Split option lists ("left|right" -> ["left", "right"])
- Drop blank variable cells and read the Disabled flag
"""

import logging
import re
from typing import Dict, List, Optional

import pandas as pd

from src.catalog_pipeline.config import (
    MEASURE_TYPE_ALIASES,
    OPTIONS_SEPARATOR,
    SPORT_DISABLED_COLUMN,
    SPORT_NAME_COLUMN,
)

logger = logging.getLogger(__name__)

_NON_KEY_CHARS = re.compile(r"[^a-z0-9]+")
_TRUE_FLAGS = {"true", "yes", "y", "1", "1.0", "x"}


def to_sport_key(name: str, trim: bool = True) -> str:
    """Normalize a display name into a sport key.

    Lower-cases and turns every run of non-alphanumeric characters into a
    single underscore. With ``trim=False`` leading/trailing underscores are
    kept, which lets a name be typed incrementally ("beach " -> "beach_").

    Examples:
        "Beach Volley"   -> "beach_volley"
        "  Judo! "       -> "judo"
        "Tae-Kwon-Do"    -> "tae_kwon_do"
    """
    key = _NON_KEY_CHARS.sub("_", str(name).lower())
    return key.strip("_") if trim else key


class CatalogCleaner:
    """Cleans and standardizes catalog exports."""

    # ------------------------------------------------------------------
    # Scalar helpers
    # ------------------------------------------------------------------
    @staticmethod
    def normalize_measure_type(type_str: str) -> Optional[str]:
        """Map a type spelling onto number/string/boolean, None if unknown."""
        if pd.isna(type_str):
            return None
        return MEASURE_TYPE_ALIASES.get(str(type_str).strip().lower())

    @staticmethod
    def split_options(options_str: str) -> List[str]:
        """Split an options cell, dropping blanks but keeping order."""
        if pd.isna(options_str):
            return []
        return [
            opt.strip()
            for opt in str(options_str).split(OPTIONS_SEPARATOR)
            if opt.strip()
        ]

    @staticmethod
    def parse_flag(value) -> bool:
        if pd.isna(value):
            return False
        return str(value).strip().lower() in _TRUE_FLAGS

    @staticmethod
    def clean_variable(value):
        """Whole floats become ints; NaN means the variable is absent."""
        if isinstance(value, float):
            if pd.isna(value):
                return None
            return int(value) if value.is_integer() else value
        return value

    # ------------------------------------------------------------------
    # Table cleaning
    # ------------------------------------------------------------------
    def clean_variable_table(self, df: pd.DataFrame) -> Dict[str, Dict]:
        """Turn a sports/templates table into ``{sport_key: row_dict}``.

        Each row dict holds ``variables`` and ``disabled``. Later rows with
        the same key replace earlier ones.
        """
        variable_cols = [
            c for c in df.columns if c not in (SPORT_NAME_COLUMN, SPORT_DISABLED_COLUMN)
        ]
        has_disabled = SPORT_DISABLED_COLUMN in df.columns

        result: Dict[str, Dict] = {}
        for _, row in df.iterrows():
            key = to_sport_key(row[SPORT_NAME_COLUMN])
            if not key:
                logger.warning("Skipping row with unusable sport name %r", row[SPORT_NAME_COLUMN])
                continue
            if key in result:
                logger.warning("Duplicate sport %s, keeping the last row", key)

            variables = {}
            for col in variable_cols:
                value = self.clean_variable(row[col])
                if value is not None:
                    variables[col] = value

            result[key] = {
                "variables": variables,
                "disabled": self.parse_flag(row[SPORT_DISABLED_COLUMN]) if has_disabled else False,
            }
        return result

    def clean_measures(self, df: pd.DataFrame) -> List[Dict]:
        """Turn the measures table into a list of measure dicts.

        Measures with an unknown type are dropped with a warning.
        """
        measures = []
        seen = set()
        for _, row in df.iterrows():
            key = str(row["Key"]).strip()
            measure_type = self.normalize_measure_type(row["Type"])
            if measure_type is None:
                logger.warning("Dropping measure %s with unknown type %r", key, row["Type"])
                continue
            if key in seen:
                logger.warning("Dropping duplicate measure %s", key)
                continue
            seen.add(key)
            measures.append(
                {
                    "key": key,
                    "type": measure_type,
                    "options": self.split_options(row["Options"]),
                }
            )
        return measures

    def clean_all(self, raw: Dict[str, pd.DataFrame]) -> Dict:
        """Clean the dict produced by ``CatalogCsvIngester.read_all``."""
        sports = self.clean_variable_table(raw["sports"])
        templates = {
            key: row["variables"]
            for key, row in self.clean_variable_table(raw["templates"]).items()
        }
        measures = self.clean_measures(raw["measures"])

        logger.info(
            "Cleaned catalog: %d sports, %d templates, %d measures",
            len(sports), len(templates), len(measures),
        )
        return {"sports": sports, "templates": templates, "measures": measures}
