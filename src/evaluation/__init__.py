from src.evaluation.evaluation_controller import EvaluationController
from src.evaluation.measure_store import MeasureValueStore, normalize_value

__all__ = [
    "EvaluationController",
    "MeasureValueStore",
    "normalize_value",
]
