"""Input normalisation for answer sheets.

Interactive quizzes produce partial and occasionally malformed answer lists.
None of that is fatal here: unanswered questions, ``None`` placeholders and
indices outside the question bank are dropped, and a question answered twice
keeps its last answer. Deciding whether what remains is *enough* belongs to the
calculator, which raises ``InsufficientResponsesError`` on an empty result.
"""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from typology.assessments.mbti.types import Response

__all__ = [
    "is_in_bank",
    "usable_responses",
    "coerce_response",
]


def is_in_bank(question_index: int, question_count: int) -> bool:
    """True when ``question_index`` addresses an existing question.

    Example:
        >>> is_in_bank(0, 40), is_in_bank(40, 40), is_in_bank(-1, 40)
        (True, False, False)
    """
    return 0 <= question_index < question_count


def coerce_response(raw: Response | Mapping[str, Any]) -> Response:
    """Accept a ``Response`` or a ``{"question_index", "value"}`` mapping."""

    if isinstance(raw, Response):
        return raw
    index = raw.get("question_index", raw.get("questionIndex"))
    if index is None:
        raise KeyError("question_index")
    value = raw.get("value")
    return Response(question_index=int(index), value=None if value is None else bool(value))


def usable_responses(
    responses: Iterable[Optional[Response | Mapping[str, Any]]],
    question_count: int,
) -> List[Response]:
    """Return the answers that can be scored.

    Args:
        responses: Answers in submission order. Entries may be ``None``.
        question_count: Size of the question bank the indices refer to.

    Returns:
        One ``Response`` per answered, in-range question, ordered by first
        appearance. A repeated index keeps the latest answer; a later ``None``
        answer clears an earlier one.
    """
    latest: dict[int, Optional[bool]] = {}
    for raw in responses:
        if raw is None:
            continue
        response = coerce_response(raw)
        if not is_in_bank(response.question_index, question_count):
            continue
        latest[response.question_index] = response.value
    return [Response(question_index=idx, value=value) for idx, value in latest.items() if value is not None]
