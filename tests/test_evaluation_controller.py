"""Tests for the evaluation controller - entering measures and re-ranking."""

import pytest

from src.evaluation.evaluation_controller import (
    INVALID_MEASURE_MESSAGE,
    EvaluationController,
)
from src.evaluation.measure_store import MeasureValueStore
from src.ranking_engine.evaluators import ThresholdMarginEvaluator
from src.ranking_engine.ranking_engine import SportRankingEngine
from src.sport_manager.catalog_state import CatalogContext, Measure, Sport
from src.sport_manager.notifications import Severity


@pytest.fixture
def controller(context, notifier):
    return EvaluationController(context, notifier=notifier)


def _names(ranking):
    return [entry.name for entry in ranking]


class TestEnterMeasure:
    def test_accepted_measure_reranks(self, controller, context):
        height = context.get_measure("height")
        assert controller.enter_measure(height, "180") is True
        assert _names(controller.all_sports()) == ["basketball", "rowing", "chess"]
        assert controller.engine.last_ranked_snapshot == (("height", "180"),)

    def test_ranking_uses_latest_values(self, controller, context):
        height = context.get_measure("height")
        controller.enter_measure(height, "180")
        controller.enter_measure(height, "150")
        scores = {e.name: e.score for e in controller.all_sports()}
        assert scores == {"basketball": -20.0, "rowing": -25.0, "chess": 0.0}

    def test_rejected_measure_notifies(self, controller, context, notifier):
        height = context.get_measure("height")
        assert controller.enter_measure(height, "tall") is False
        assert notifier.messages == [(INVALID_MEASURE_MESSAGE, Severity.ERROR)]
        assert controller.engine.initialized is False

    def test_rejected_measure_keeps_last_ranking(self, controller, context):
        height = context.get_measure("height")
        controller.enter_measure(height, "180")
        before = controller.all_sports()
        controller.enter_measure(height, "")
        assert controller.all_sports() == before

    def test_option_measure_defaults_to_first_option(self, controller, context):
        hand = context.get_measure("dominantHand")
        assert controller.enter_measure(hand) is True
        assert controller.store.get_value("dominantHand") == "right"

    def test_boolean_defaults_to_false(self, controller, context):
        swimmer = context.get_measure("swimmer")
        assert controller.enter_measure(swimmer) is True
        assert controller.store.get_value("swimmer") == "false"

    def test_free_number_without_value_rejected(self, controller, context):
        assert controller.enter_measure(context.get_measure("weight")) is False

    def test_enter_by_key(self, controller):
        assert controller.enter_measure_by_key("height", "181") is True
        with pytest.raises(KeyError):
            controller.enter_measure_by_key("wingspan", "190")


class TestRankingViews:
    def test_ensure_ranked_once(self, context):
        calls = []

        class CountingEngine(SportRankingEngine):
            def rank_sports(self, measure_values):
                calls.append(dict(measure_values))
                return super().rank_sports(measure_values)

        controller = EvaluationController(
            context, engine=CountingEngine(context.sports)
        )
        first = controller.ensure_ranked()
        second = controller.ensure_ranked()
        assert _names(first) == ["basketball", "chess", "rowing"]
        assert first == second
        assert calls == [{}]

    def test_top_sports_default_eight(self, catalog):
        catalog.sports = {f"s{i:02d}": Sport(f"s{i:02d}") for i in range(12)}
        controller = EvaluationController(CatalogContext(catalog).refresh())
        controller.ensure_ranked()
        assert len(controller.top_sports()) == 8
        assert len(controller.all_sports()) == 12

    def test_reload_catalog_reranks(self, controller, context, catalog):
        controller.enter_measure(context.get_measure("height"), "180")
        catalog.sports["judo"] = Sport("judo", {"minHeight": 100})
        controller.reload_catalog()
        assert _names(controller.all_sports())[0] == "judo"

    def test_custom_store_and_engine(self, context):
        store = MeasureValueStore()
        engine = SportRankingEngine(
            [Sport("Chess", {"minHeight": 0}), Sport("Basketball", {"minHeight": 170})],
            evaluator=ThresholdMarginEvaluator(),
        )
        controller = EvaluationController(context, store=store, engine=engine)
        controller.enter_measure(Measure.create("height", "number"), "180")
        controller.enter_measure(Measure.create("weight", "number"), "75")
        assert [(e.name, e.score) for e in controller.top_sports()] == [
            ("Basketball", 10.0),
            ("Chess", 0.0),
        ]
