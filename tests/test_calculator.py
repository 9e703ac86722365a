from __future__ import annotations

import logging

import pytest

from typology.assessments.mbti.types import Response
from typology.core.errors import InsufficientResponsesError, ValidationError
from typology.engine.calculator import TypeCalculator
from typology.engine.presets import create_calculator
from typology.engine.strategies.scoring import BasicScoringStrategy, EnhancedScoringStrategy
from typology.engine.strategies.stack_building import TheoryBasedStackBuilder, TypeFirstStackBuilder, validate_stack
from typology.engine.strategies.type_matching import ExactMatchStrategy, WeightedMatchStrategy
from typology.services.diagnostics import ResponsePatternGenerator


@pytest.fixture()
def calculator():
    return TypeCalculator(EnhancedScoringStrategy(), TheoryBasedStackBuilder(), ExactMatchStrategy())


@pytest.mark.parametrize(
    "sheet",
    [
        [],
        [Response(0, None), Response(1, None)],
        [None, None],
        [Response(99, True), Response(-1, False)],
    ],
)
def test_no_usable_responses_raises(calculator, sheet):
    with pytest.raises(InsufficientResponsesError) as excinfo:
        calculator.calculate(sheet)
    assert isinstance(excinfo.value, ValidationError)
    assert excinfo.value.error_code == "insufficient_responses"


def test_one_answer_is_enough(calculator):
    result = calculator.calculate([Response(0, None), Response(3, True)])
    assert result.response_count == 1
    assert validate_stack(result.stack)


def test_rejection_is_logged(calculator, caplog):
    caplog.set_level(logging.WARNING, logger="typology.engine.calculator")
    with pytest.raises(InsufficientResponsesError):
        calculator.calculate([])
    assert any(record.getMessage() == "calculation_rejected" for record in caplog.records)


def test_calculation_is_deterministic(calculator, params):
    sheet = [Response(idx, (idx * 7) % 3 != 0) for idx in range(params.question_count)]
    assert calculator.calculate(sheet) == calculator.calculate(list(sheet))


def test_result_shape(calculator, all_true):
    result = calculator.calculate(all_true)
    assert result.type == result.alternative_types[0].type
    assert result.confidence == result.alternative_types[0].confidence
    assert len(result.alternative_types) >= 5
    scores = [alt.score for alt in result.alternative_types]
    assert scores == sorted(scores, reverse=True)
    assert result.strategies == {
        "calculation": "custom",
        "scoring": "Enhanced",
        "stack_building": "TheoryBased",
        "type_matching": "ExactMatch",
    }
    payload = result.as_dict()
    assert payload["response_count"] == 40
    assert len(payload["stack"]) == 4


def test_alternatives_limit_never_drops_below_five():
    calculator = TypeCalculator(
        EnhancedScoringStrategy(), TheoryBasedStackBuilder(), ExactMatchStrategy(), alternatives_limit=2
    )
    assert len(calculator.calculate([Response(0, True)]).alternative_types) == 5


def test_full_alternatives_list(all_true):
    calculator = TypeCalculator(
        EnhancedScoringStrategy(), TheoryBasedStackBuilder(), ExactMatchStrategy(), alternatives_limit=16
    )
    assert len(calculator.calculate(all_true).alternative_types) == 16


def test_setters_take_effect_on_next_call(calculator, all_true):
    calculator.calculate(all_true)
    calculator.set_scoring_strategy(BasicScoringStrategy())
    calculator.set_stack_building_strategy(TypeFirstStackBuilder())
    calculator.set_type_matching_strategy(WeightedMatchStrategy())
    result = calculator.calculate(all_true)
    assert result.strategies["scoring"] == "Basic"
    assert result.strategies["stack_building"] == "TypeFirst"
    assert result.strategies["type_matching"] == "WeightedMatch"
    assert result.scores == BasicScoringStrategy().score_responses(all_true)


def test_swapping_a_strategy_leaves_the_preset():
    calculator = create_calculator("accurate")
    assert calculator.preset == "accurate"
    calculator.set_type_matching_strategy(WeightedMatchStrategy())
    assert calculator.strategy_names()["calculation"] == "custom"


def test_crafted_pattern_is_recognised_with_confidence():
    sheet = ResponsePatternGenerator().ideal_pattern("INTJ")
    result = create_calculator("accurate").calculate(sheet)
    assert result.type == "INTJ"
    assert result.confidence > 50


def test_type_first_returns_winner_canonical_stack(params):
    sheet = [Response(idx, idx % 4 != 1) for idx in range(params.question_count)]
    result = create_calculator("type-first").calculate(sheet)
    assert result.stack == params.archetypes[result.type].slots()
