"""Rank sports for a set of measures from the command line.

Usage:
    python -m src.evaluation.run_ranking <catalog.json> [key=value ...]

Examples:
    python -m src.evaluation.run_ranking data/catalog/catalog.json height=180 weight=75
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from src.evaluation.evaluation_controller import EvaluationController
from src.logging_config import setup_logging
from src.ranking_engine.config import DEFAULT_TOP_N
from src.ranking_engine.models import RankedSport
from src.sport_manager.catalog_persistence import JsonCatalogStore
from src.sport_manager.catalog_state import CatalogContext
from src.sport_manager.notifications import LoggingNotifier

logger = logging.getLogger(__name__)


def parse_measure_args(args: Sequence[str]) -> List[tuple]:
    """Split ``key=value`` arguments; raises ValueError on anything else."""
    pairs = []
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {arg!r}")
        pairs.append((key, value))
    return pairs


def run_ranking(
    catalog_file: Path,
    measures: Sequence[tuple],
    top_n: Optional[int] = DEFAULT_TOP_N,
) -> List[RankedSport]:
    """Load the catalog, enter each measure and return the ranking.

    Unknown measure keys and rejected values are logged and skipped.
    """
    if not catalog_file.exists():
        raise FileNotFoundError(f"Catalog file not found: {catalog_file}")

    context = CatalogContext(JsonCatalogStore(catalog_file)).refresh()
    controller = EvaluationController(context, notifier=LoggingNotifier())
    controller.ensure_ranked()

    for key, value in measures:
        measure = context.get_measure(key)
        if measure is None:
            logger.warning("Skipping unknown measure %s", key)
            continue
        controller.enter_measure(measure, value)

    if top_n is None:
        return controller.all_sports()
    return controller.top_sports(top_n)


def format_ranking(ranking: Sequence[RankedSport]) -> str:
    lines = [f"{entry.rank:>3}. {entry.name:<24} {entry.score:>10.2f}" for entry in ranking]
    return "\n".join(lines) if lines else "No sports ranked."


if __name__ == "__main__":
    setup_logging()

    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(2)

    try:
        ranking = run_ranking(Path(sys.argv[1]), parse_measure_args(sys.argv[2:]))
        print(format_ranking(ranking))
    except Exception:
        logger.exception("Ranking failed")
        sys.exit(1)
