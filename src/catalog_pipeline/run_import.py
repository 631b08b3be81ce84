"""Import catalog CSV exports into the JSON catalog.

Usage:
    python -m src.catalog_pipeline.run_import [data_dir] [output_file]

Examples:
    python -m src.catalog_pipeline.run_import
    python -m src.catalog_pipeline.run_import /path/to/csvs data/catalog/catalog.json
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from pathlib import Path

from src.catalog_pipeline.cleaning import CatalogCleaner
from src.catalog_pipeline.config import BLANK_TEMPLATE_KEY, CATALOG_DIR, RAW_DATA_DIR
from src.catalog_pipeline.ingestion import CatalogCsvIngester
from src.logging_config import setup_logging
from src.sport_manager.config import DEFAULT_SPORT_TEMPLATE

logger = logging.getLogger(__name__)


def run_import(
    data_dir: Path | None = None,
    output_file: Path | None = None,
) -> Path:
    """Run the complete catalog import.

    Args:
        data_dir: Directory containing the CSV exports.
            Defaults to ``data/raw/``.
        output_file: Where to write the catalog.
            Defaults to ``data/catalog/catalog.json``.

    Returns:
        Path to the generated JSON file.

    Raises:
        FileNotFoundError: If the data directory doesn't exist.
    """
    if data_dir is None:
        data_dir = RAW_DATA_DIR
    if output_file is None:
        output_file = CATALOG_DIR / "catalog.json"

    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found: {data_dir}")

    logger.info("Starting catalog import (data: %s)", data_dir)

    # 1. Ingest
    logger.info("Step 1/3: Ingesting CSV files...")
    raw = CatalogCsvIngester(data_dir).read_all()

    # 2. Clean
    logger.info("Step 2/3: Cleaning data...")
    cleaned = CatalogCleaner().clean_all(raw)

    templates = dict(cleaned["templates"])
    blank_template = templates.pop(BLANK_TEMPLATE_KEY, None) or dict(DEFAULT_SPORT_TEMPLATE)

    missing_templates = sorted(set(cleaned["sports"]) - set(templates))
    if missing_templates:
        logger.warning("Sports without a template (sync will fail): %s", missing_templates)

    # 3. Output JSON
    logger.info("Step 3/3: Generating JSON output...")
    output_data = {
        "metadata": {
            "version": "1.0",
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "source": str(data_dir),
            "total_sports": len(cleaned["sports"]),
            "total_measures": len(cleaned["measures"]),
        },
        "sport_template": {"variables": blank_template},
        "measures": cleaned["measures"],
        "sports": [
            {"name": name, "disabled": row["disabled"], "variables": row["variables"]}
            for name, row in cleaned["sports"].items()
        ],
        "templates": templates,
    }

    output_file.parent.mkdir(parents=True, exist_ok=True)
    tmp_file = output_file.with_suffix(".json.tmp")
    with open(tmp_file, "w", encoding="utf-8") as f:
        json.dump(output_data, f, indent=2)
    os.replace(tmp_file, output_file)

    disabled = sum(1 for s in output_data["sports"] if s["disabled"])
    logger.info("Import complete! Output: %s", output_file)
    logger.info("  Sports: %d (%d disabled)", len(output_data["sports"]), disabled)
    logger.info("  Measures: %d", len(output_data["measures"]))

    return output_file


if __name__ == "__main__":
    setup_logging()

    data_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    output_file = Path(sys.argv[2]) if len(sys.argv) > 2 else None

    try:
        output = run_import(data_dir, output_file)
        print(f"Import complete: {output}")
    except Exception:
        logger.exception("Import failed")
        sys.exit(1)
