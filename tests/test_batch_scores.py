from __future__ import annotations

import numpy as np
import pytest

from typology.assessments.constants import FUNCTION_NAMES
from typology.assessments.mbti.types import Response
from typology.engine.strategies.scoring import BasicScoringStrategy, EnhancedScoringStrategy, StackAwareScoringStrategy
from typology.services.batch_scores import (
    compute_batch_function_scores,
    responses_to_matrix,
    vectorized_function_scores,
)
from typology.services.diagnostics import ResponsePatternGenerator


def _sample_sheets(params) -> list[list[Response]]:
    generator = ResponsePatternGenerator()
    sheets = [generator.ideal_pattern(code) for code in ("INTJ", "ESFP", "ENTP")]
    sheets.append(generator.with_blanks(generator.ideal_pattern("ISFJ"), 0.5, seed=9))
    sheets.append([Response(idx, True) for idx in range(params.question_count)])
    sheets.append([Response(3, False)])
    return sheets


@pytest.mark.parametrize("strategy_cls", [BasicScoringStrategy, EnhancedScoringStrategy, StackAwareScoringStrategy])
def test_vectorized_scores_match_scalar(strategy_cls, params):
    strategy = strategy_cls()
    sheets = _sample_sheets(params)
    arrays = vectorized_function_scores(responses_to_matrix(sheets), weights=strategy.weights())

    for row, sheet in enumerate(sheets):
        scalar = strategy.score_responses(sheet)
        for column, fn in enumerate(FUNCTION_NAMES):
            assert arrays[row, column] == pytest.approx(scalar[fn])


def test_matrix_marks_unanswered_as_nan(params):
    matrix = responses_to_matrix([[Response(0, True), Response(1, False), Response(2, None), Response(77, True)]])
    assert matrix.shape == (1, params.question_count)
    assert matrix[0, 0] == 1.0
    assert matrix[0, 1] == 0.0
    assert np.isnan(matrix[0, 2:]).all()


def test_vectorized_scores_validate_shape():
    with pytest.raises(ValueError):
        vectorized_function_scores(np.zeros((2, 3)))


def test_compute_batch_function_scores_returns_dataclasses(params):
    sheets = _sample_sheets(params)
    results = compute_batch_function_scores(sheets)
    assert len(results) == len(sheets)
    assert results[-1].Ni == pytest.approx(EnhancedScoringStrategy().score_responses(sheets[-1]).Ni)


def test_compute_batch_function_scores_empty():
    assert compute_batch_function_scores([]) == []
