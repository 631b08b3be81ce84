"""Sport ranking engine - scores every enabled sport and orders them.

Ranking is caller-driven: the engine never watches the measure store, so
callers run :meth:`SportRankingEngine.rank_sports` again after each
accepted measure.
"""

import logging
import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from src.ranking_engine.evaluators import FormulaEvaluator, default_evaluator
from src.ranking_engine.models import RankedSport, RankingWarning
from src.sport_manager.catalog_state import Sport
from src.sport_manager.notifications import Notifier, Severity

logger = logging.getLogger(__name__)


def _snapshot_marker(measure_values: Mapping[str, str]) -> Tuple[Tuple[str, str], ...]:
    return tuple(sorted(measure_values.items()))


class SportRankingEngine:
    """Rank sports by evaluator score.

    Order is score descending, then sport name ascending, so the result
    never depends on catalog order and every sport gets its own position.
    """

    def __init__(
        self,
        sports: Sequence[Sport] = (),
        evaluator: Optional[FormulaEvaluator] = None,
        notifier: Optional[Notifier] = None,
    ):
        self.sports: List[Sport] = list(sports)
        self.evaluator = evaluator or default_evaluator()
        self.notifier = notifier
        self.initialized = False
        self.last_ranked_snapshot: Optional[Tuple[Tuple[str, str], ...]] = None
        self._ranking: List[RankedSport] = []
        self._warnings: List[RankingWarning] = []

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def rank_sports(self, measure_values: Mapping[str, str]) -> List[RankedSport]:
        """Score and order every enabled sport.

        Args:
            measure_values: Measure key to raw value. Copied on entry, so
                later changes by the caller do not affect this pass.

        Returns:
            The new ranking, positions 1..N.
        """
        snapshot: Dict[str, str] = dict(measure_values)
        warnings: List[RankingWarning] = []
        scored: List[Tuple[Sport, float]] = []

        for sport in self.sports:
            if sport.disabled:
                continue
            score = self._score(sport, snapshot, warnings)
            if score is not None:
                scored.append((sport, score))

        scored.sort(key=lambda item: (-item[1], item[0].name))
        ranking = [
            RankedSport(sport=sport, score=score, rank=position)
            for position, (sport, score) in enumerate(scored, start=1)
        ]

        self._ranking = ranking
        self._warnings = warnings
        self.last_ranked_snapshot = _snapshot_marker(snapshot)
        self.initialized = True

        logger.info(
            "Ranked %d sports from %d measures (%d skipped)",
            len(ranking),
            len(snapshot),
            len(warnings),
        )
        return list(ranking)

    def get_top_n(self, n: int) -> List[RankedSport]:
        """First *n* entries of the latest ranking; empty for ``n <= 0``."""
        if n <= 0:
            return []
        return self._ranking[:n]

    def get_full_ranking(self) -> List[RankedSport]:
        return list(self._ranking)

    def needs_ranking(self, measure_values: Mapping[str, str]) -> bool:
        """Whether *measure_values* differ from what the current ranking used."""
        if not self.initialized:
            return True
        return _snapshot_marker(measure_values) != self.last_ranked_snapshot

    def set_catalog(self, sports: Sequence[Sport]):
        """Swap in a new catalog. The current ranking is kept until re-ranked."""
        self.sports = list(sports)
        self.last_ranked_snapshot = None
        logger.debug("Catalog replaced with %d sports", len(self.sports))

    @property
    def warnings(self) -> List[RankingWarning]:
        return list(self._warnings)

    def to_dataframe(self) -> pd.DataFrame:
        """Latest ranking as a table with ``rank``, ``sport`` and ``score``."""
        return pd.DataFrame(
            [
                {"rank": entry.rank, "sport": entry.name, "score": entry.score}
                for entry in self._ranking
            ],
            columns=["rank", "sport", "score"],
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _score(
        self,
        sport: Sport,
        measure_values: Dict[str, str],
        warnings: List[RankingWarning],
    ) -> Optional[float]:
        """Evaluate one sport; record a warning and return None on failure."""
        try:
            score = float(self.evaluator.evaluate(dict(sport.variables), measure_values))
        except Exception as e:
            message = f"Sport {sport.name} could not be scored: {e}"
        else:
            if math.isfinite(score):
                return score
            message = f"Sport {sport.name} produced a non-finite score ({score})"

        logger.warning(message)
        warnings.append(RankingWarning(sport_name=sport.name, message=message))
        if self.notifier is not None:
            self.notifier.notify(message, Severity.WARNING)
        return None
