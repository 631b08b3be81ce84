"""CSV ingestion for catalog exports.

Handles the quirks of spreadsheet exports:
- Blank cells meaning "variable not set"
- Comma-formatted numbers (e.g., "1,250.5")
- Stray quotes and whitespace around values
- Trailing empty rows
"""

import logging
from pathlib import Path

import pandas as pd

from src.catalog_pipeline.config import (
    FILE_NAMES,
    MEASURE_COLUMNS,
    SPORT_NAME_COLUMN,
)

logger = logging.getLogger(__name__)


class IngestionError(Exception):
    """Raised when CSV ingestion fails."""


def _parse_numeric(value):
    """Parse a numeric string that may contain commas (e.g., '1,250.5' -> 1250.5).

    Non-numeric text is returned stripped so string variables survive.
    """
    if pd.isna(value):
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return float(value)
    s = str(value).strip().strip('"').strip()
    if s == "":
        return float("nan")
    try:
        return float(s.replace(",", ""))
    except ValueError:
        return s


class CatalogCsvIngester:
    """Reads the sports, measures and templates CSV exports.

    Each read method returns a pandas DataFrame with:
    - String columns stripped of quotes and whitespace
    - Variable columns parsed as floats where numeric
    - Rows without a key removed
    """

    def __init__(self, data_dir: Path):
        self.data_dir = Path(data_dir)

    def _resolve_path(self, file_key: str) -> Path:
        """Build the full file path for a given file key, raising if missing."""
        filepath = self.data_dir / FILE_NAMES[file_key]
        if not filepath.exists():
            raise FileNotFoundError(f"Expected file not found: {filepath}")
        return filepath

    # ------------------------------------------------------------------
    # Sports
    # ------------------------------------------------------------------
    def read_sports(self) -> pd.DataFrame:
        """Read the sports file.

        Returns DataFrame with columns:
            Sport, Disabled (optional), <one column per variable>
        """
        filepath = self._resolve_path("sports")
        logger.info("Reading sports: %s", filepath.name)
        df = self._read_variable_table(filepath)
        logger.info("Loaded %d sports with %d variable columns", len(df), len(df.columns) - 1)
        return df

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------
    def read_templates(self) -> pd.DataFrame:
        """Read the templates file (same shape as sports, no Disabled)."""
        filepath = self._resolve_path("templates")
        logger.info("Reading templates: %s", filepath.name)
        df = self._read_variable_table(filepath)
        logger.info("Loaded %d sport templates", len(df))
        return df

    # ------------------------------------------------------------------
    # Measures
    # ------------------------------------------------------------------
    def read_measures(self) -> pd.DataFrame:
        """Read the measures file.

        Returns DataFrame with columns:
            Key, Type, Options
        """
        filepath = self._resolve_path("measures")
        logger.info("Reading measures: %s", filepath.name)

        df = pd.read_csv(filepath, quotechar='"', dtype=str, keep_default_na=False)
        missing = set(MEASURE_COLUMNS[:2]) - set(df.columns)
        if missing:
            raise IngestionError(f"{filepath.name} is missing columns: {sorted(missing)}")
        if "Options" not in df.columns:
            df["Options"] = ""

        for col in MEASURE_COLUMNS:
            df[col] = df[col].str.strip().str.strip('"').str.strip()

        df = df[df["Key"] != ""].reset_index(drop=True)
        logger.info("Loaded %d measures", len(df))
        return df[MEASURE_COLUMNS]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _read_variable_table(self, filepath: Path) -> pd.DataFrame:
        df = pd.read_csv(filepath, quotechar='"', dtype=str)
        df.columns = [str(c).strip() for c in df.columns]

        if SPORT_NAME_COLUMN not in df.columns:
            raise IngestionError(f"{filepath.name} has no {SPORT_NAME_COLUMN!r} column")

        df[SPORT_NAME_COLUMN] = df[SPORT_NAME_COLUMN].str.strip().str.strip('"')
        df = df[df[SPORT_NAME_COLUMN].notna() & (df[SPORT_NAME_COLUMN] != "")]
        df = df.reset_index(drop=True)

        for col in df.columns:
            if col != SPORT_NAME_COLUMN:
                df[col] = df[col].apply(_parse_numeric)

        return df

    def read_all(self) -> dict[str, pd.DataFrame]:
        """Read all three CSV files and return them as a dict.

        Returns:
            dict with keys: 'sports', 'measures', 'templates'

        Raises:
            IngestionError: if any file cannot be read.
        """
        try:
            return {
                "sports": self.read_sports(),
                "measures": self.read_measures(),
                "templates": self.read_templates(),
            }
        except Exception as e:
            raise IngestionError(f"Failed to read CSV files: {e}") from e
