from __future__ import annotations

from typing import Any, Optional, Sequence, TypeAlias, TYPE_CHECKING

from typology.assessments.constants import FUNCTION_NAMES
from typology.assessments.enums import DichotomyAxis
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import (
    DichotomyBonuses,
    FunctionScores,
    InstrumentParameters,
    Response,
    ScoringWeights,
)
from typology.assessments.validators import usable_responses
from typology.engine.strategies.scoring import reinforcement_multipliers

if TYPE_CHECKING:  # pragma: no cover
    import numpy as _np
    from numpy.typing import NDArray as _NDArray

    FloatArray = _NDArray[_np.float64]
    AnswerMatrix: TypeAlias = _NDArray[_np.float64]
else:  # Runtime fallback keeps import lazy until needed
    FloatArray = Any  # type: ignore[assignment]
    AnswerMatrix = Any  # type: ignore[assignment]

_NUMPY_MODULE = None


def _require_numpy():
    """Import numpy lazily to avoid module load in single-sheet workloads."""

    global _NUMPY_MODULE
    if _NUMPY_MODULE is None:
        import numpy as np  # type: ignore[import-not-found]

        _NUMPY_MODULE = np
    return _NUMPY_MODULE


def vectorized_function_scores(
    answer_matrix: AnswerMatrix,
    *,
    weights: Optional[ScoringWeights] = None,
    bonuses: Optional[DichotomyBonuses] = None,
    parameters: Optional[InstrumentParameters] = None,
) -> FloatArray:
    """Score many answer sheets at once using NumPy.

    Args:
        answer_matrix: ``(n, q)`` matrix, one row per respondent and one
            column per question; ``1`` picks the extraverted option, ``0`` the
            introverted one and ``NaN`` marks an unanswered question.
        weights: Weight table; defaults to the ``enhanced`` table.
        bonuses: Dichotomy bonuses; defaults to the configured ones.
        parameters: Instrument whose question bank defines the columns.

    Returns:
        ``(n, 8)`` array of function scores ordered Ne, Ni, Se, Si, Te, Ti,
        Fe, Fi. Each row equals what ``BaseScoringStrategy.score_responses``
        returns for the same answers and weights.
    """

    np_mod = _require_numpy()
    params = parameters or get_parameters()
    table = weights or params.scoring_weights("enhanced")
    reinforcement = bonuses or params.dichotomy_bonuses
    questions = params.questions

    matrix = np_mod.asarray(answer_matrix, dtype=np_mod.float64)
    if matrix.ndim != 2 or matrix.shape[1] != len(questions):
        raise ValueError(f"answer_matrix must be shape (n, {len(questions)})")
    if matrix.shape[0] == 0:
        return np_mod.empty((0, len(FUNCTION_NAMES)), dtype=np_mod.float64)

    answered = ~np_mod.isnan(matrix)
    yes = (answered & (matrix == 1)).astype(np_mod.float64)
    no = (answered & (matrix == 0)).astype(np_mod.float64)
    question_weights = np_mod.array([table.weight_for(q.question_class) for q in questions], dtype=np_mod.float64)

    def _column_mask(predicate) -> FloatArray:
        return np_mod.array([1.0 if predicate(q) else 0.0 for q in questions], dtype=np_mod.float64)

    ei = question_weights * _column_mask(lambda q: q.axis is DichotomyAxis.EXTRAVERSION_INTROVERSION)
    jp = question_weights * _column_mask(lambda q: q.axis is DichotomyAxis.JUDGING_PERCEIVING)
    extraversion, introversion = yes @ ei, no @ ei
    judging, perceiving = yes @ jp, no @ jp

    multipliers = reinforcement_multipliers(
        reinforcement,
        extraverted=extraversion > introversion,
        introverted=introversion > extraversion,
        judging=judging > perceiving,
        perceiving=perceiving > judging,
    )

    scores = np_mod.empty((matrix.shape[0], len(FUNCTION_NAMES)), dtype=np_mod.float64)
    for column, function in enumerate(FUNCTION_NAMES):
        ext = question_weights * _column_mask(lambda q, fn=function: q.extraverted_function == fn)
        intr = question_weights * _column_mask(lambda q, fn=function: q.introverted_function == fn)
        scores[:, column] = (yes @ ext + no @ intr) * multipliers[function]
    return scores


def responses_to_matrix(
    sheets: Sequence[Sequence[Response | None]],
    *,
    question_count: Optional[int] = None,
) -> AnswerMatrix:
    """Pack answer sheets into the 1/0/NaN matrix ``vectorized_function_scores`` expects."""

    np_mod = _require_numpy()
    count = question_count if question_count is not None else get_parameters().question_count
    matrix = np_mod.full((len(sheets), count), np_mod.nan, dtype=np_mod.float64)
    for row, sheet in enumerate(sheets):
        for response in usable_responses(sheet, count):
            matrix[row, response.question_index] = 1.0 if response.value else 0.0
    return matrix


def compute_batch_function_scores(
    sheets: Sequence[Sequence[Response | None]],
    *,
    weights: Optional[ScoringWeights] = None,
    bonuses: Optional[DichotomyBonuses] = None,
    parameters: Optional[InstrumentParameters] = None,
) -> list[FunctionScores]:
    """Score answer sheets in bulk and return one ``FunctionScores`` per sheet."""

    if not sheets:
        return []

    params = parameters or get_parameters()
    matrix = responses_to_matrix(sheets, question_count=params.question_count)
    arrays = vectorized_function_scores(matrix, weights=weights, bonuses=bonuses, parameters=params)
    return [
        FunctionScores.from_mapping({fn: float(arrays[row, column]) for column, fn in enumerate(FUNCTION_NAMES)})
        for row in range(arrays.shape[0])
    ]


__all__ = [
    "vectorized_function_scores",
    "responses_to_matrix",
    "compute_batch_function_scores",
]
