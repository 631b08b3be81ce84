from src.ranking_engine.evaluators import (
    CompositeEvaluator,
    EvaluationError,
    FormulaEvaluator,
    LookupTableEvaluator,
    ThresholdMarginEvaluator,
    WeightedSumEvaluator,
    default_evaluator,
)
from src.ranking_engine.models import RankedSport, RankingWarning
from src.ranking_engine.ranking_engine import SportRankingEngine

__all__ = [
    "CompositeEvaluator",
    "EvaluationError",
    "FormulaEvaluator",
    "LookupTableEvaluator",
    "RankedSport",
    "RankingWarning",
    "SportRankingEngine",
    "ThresholdMarginEvaluator",
    "WeightedSumEvaluator",
    "default_evaluator",
]
