"""Formula evaluators - score one sport's variables against measure values.

Every evaluator is a pure function of its two mappings. Missing measures,
missing variables and values that cannot be read as numbers contribute
zero instead of raising, because the user may not have answered every
measure yet.
"""

import math
from typing import Mapping, Optional, Protocol, Sequence, runtime_checkable

from src.ranking_engine.config import (
    LOOKUP_SEPARATOR,
    MAX_THRESHOLD_PREFIX,
    MIN_THRESHOLD_PREFIX,
    TRUE_VALUES,
    WEIGHT_SUFFIX,
)


class EvaluationError(Exception):
    """Raised when a sport cannot be scored at all."""


@runtime_checkable
class FormulaEvaluator(Protocol):
    """Scores a sport; higher means a better match."""

    def evaluate(
        self,
        sport_variables: Mapping[str, object],
        measure_values: Mapping[str, str],
    ) -> float: ...


def _as_number(value) -> Optional[float]:
    """Read a variable or raw measure value as a finite float, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def _measure_key(variable_key: str, prefix: str) -> Optional[str]:
    """``minHeight`` -> ``height``; None when *variable_key* lacks the prefix."""
    rest = variable_key[len(prefix):]
    if not variable_key.startswith(prefix) or not rest:
        return None
    return rest[0].lower() + rest[1:]


class ThresholdMarginEvaluator:
    """Scores by how far each measure clears the sport's thresholds.

    ``min<Measure>`` adds ``measure - threshold``; ``max<Measure>`` adds
    ``threshold - measure``. A threshold of zero or below means the sport
    has no requirement for that measure.
    """

    def evaluate(self, sport_variables, measure_values) -> float:
        score = 0.0
        for key, value in sport_variables.items():
            threshold = _as_number(value)
            if threshold is None or threshold <= 0:
                continue

            measure_key = _measure_key(key, MIN_THRESHOLD_PREFIX)
            sign = 1.0
            if measure_key is None:
                measure_key = _measure_key(key, MAX_THRESHOLD_PREFIX)
                sign = -1.0
            if measure_key is None:
                continue

            measured = _as_number(measure_values.get(measure_key))
            if measured is None:
                continue
            score += sign * (measured - threshold)
        return score


class WeightedSumEvaluator:
    """Sums ``<measure>Weight * measure`` over every weight variable.

    Boolean answers count as 1 for ``true`` and 0 for ``false``.
    """

    def evaluate(self, sport_variables, measure_values) -> float:
        score = 0.0
        for key, value in sport_variables.items():
            if not key.endswith(WEIGHT_SUFFIX) or key == WEIGHT_SUFFIX:
                continue
            weight = _as_number(value)
            if weight is None:
                continue

            raw = measure_values.get(key[: -len(WEIGHT_SUFFIX)])
            if raw is None:
                continue
            lowered = raw.strip().lower()
            if lowered in TRUE_VALUES:
                measured = 1.0
            elif lowered == "false":
                measured = 0.0
            else:
                measured = _as_number(raw)
            if measured is not None:
                score += weight * measured
        return score


class LookupTableEvaluator:
    """Awards points for specific option answers.

    A variable ``dominantHand:left`` worth 3 adds 3 when the ``dominantHand``
    measure is ``left``.
    """

    def evaluate(self, sport_variables, measure_values) -> float:
        score = 0.0
        for key, value in sport_variables.items():
            measure_key, sep, option = key.partition(LOOKUP_SEPARATOR)
            if not sep or not measure_key:
                continue
            points = _as_number(value)
            if points is not None and measure_values.get(measure_key) == option:
                score += points
        return score


class CompositeEvaluator:
    """Adds up the scores of several evaluators."""

    def __init__(self, evaluators: Sequence[FormulaEvaluator]):
        if not evaluators:
            raise ValueError("CompositeEvaluator needs at least one evaluator")
        self.evaluators = list(evaluators)

    def evaluate(self, sport_variables, measure_values) -> float:
        return sum(
            evaluator.evaluate(sport_variables, measure_values)
            for evaluator in self.evaluators
        )


def default_evaluator() -> CompositeEvaluator:
    """Threshold, weighted-sum and lookup scoring combined."""
    return CompositeEvaluator(
        [ThresholdMarginEvaluator(), WeightedSumEvaluator(), LookupTableEvaluator()]
    )
