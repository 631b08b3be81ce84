"""Evaluation controller - turns entered measures into an up-to-date ranking."""

import logging
from typing import List, Optional

from src.evaluation.measure_store import MeasureValueStore
from src.ranking_engine.config import DEFAULT_TOP_N
from src.ranking_engine.models import RankedSport
from src.ranking_engine.ranking_engine import SportRankingEngine
from src.sport_manager.catalog_state import CatalogContext, Measure, MeasureType
from src.sport_manager.notifications import Notifier, Severity

logger = logging.getLogger(__name__)

INVALID_MEASURE_MESSAGE = "Please provide a valid value for the measure"


class EvaluationController:
    """Coordinates the measure store and the ranking engine.

    Every accepted measure is followed by a re-rank over a fresh snapshot
    of the store, so the ranking always reflects the latest answers.
    """

    def __init__(
        self,
        context: CatalogContext,
        store: Optional[MeasureValueStore] = None,
        engine: Optional[SportRankingEngine] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.context = context
        self.store = store or MeasureValueStore()
        self.engine = engine or SportRankingEngine(context.sports, notifier=notifier)
        self.notifier = notifier

    def enter_measure(self, measure: Measure, value: Optional[str] = None) -> bool:
        """Record an answer for *measure* and re-rank if it was accepted.

        Without a *value*, option measures fall back to their first option
        and boolean measures to ``"false"``.

        Returns:
            Whether the answer was accepted.
        """
        candidate = value
        if measure.type == MeasureType.BOOLEAN:
            if candidate is None:
                candidate = "false"
        elif not candidate and measure.options:
            candidate = measure.options[0]

        accepted = candidate is not None and self.store.set_value(measure, candidate)

        if accepted:
            self.engine.rank_sports(self.store.get_values())
        else:
            logger.info("Measure %s rejected value %r", measure.key, value)
            if self.notifier is not None:
                self.notifier.notify(INVALID_MEASURE_MESSAGE, Severity.ERROR)

        return accepted

    def enter_measure_by_key(self, measure_key: str, value: Optional[str] = None) -> bool:
        """Like :meth:`enter_measure`, looking the measure up in the catalog."""
        measure = self.context.get_measure(measure_key)
        if measure is None:
            raise KeyError(f"Unknown measure: {measure_key}")
        return self.enter_measure(measure, value)

    def ensure_ranked(self) -> List[RankedSport]:
        """Rank once on first use; later calls return the current ranking."""
        if not self.engine.initialized:
            return self.engine.rank_sports(self.store.get_values())
        return self.engine.get_full_ranking()

    def reload_catalog(self):
        """Refresh the catalog and re-rank against the current answers."""
        self.context.refresh()
        self.engine.set_catalog(self.context.sports)
        self.engine.rank_sports(self.store.get_values())

    def top_sports(self, n: int = DEFAULT_TOP_N) -> List[RankedSport]:
        return self.engine.get_top_n(n)

    def all_sports(self) -> List[RankedSport]:
        return self.engine.get_full_ranking()
