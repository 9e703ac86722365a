"""Translate HTTP payloads into engine calls and back."""

from __future__ import annotations

from typing import Optional

from typology.assessments.mbti.catalog import function_descriptions, get_archetypes, get_parameters
from typology.assessments.mbti.types import Response
from typology.core.config import get_settings
from typology.engine.presets import create_calculator, list_presets
from typology.schemas.typology import (
    ArchetypeListResponse,
    CalculateRequest,
    CalculateResponse,
    PresetListResponse,
    QuestionListResponse,
)

__all__ = [
    "calculate_type",
    "question_bank",
    "archetype_catalog",
    "preset_catalog",
]


def calculate_type(payload: CalculateRequest, preset: Optional[str] = None) -> CalculateResponse:
    calculator = create_calculator(preset)
    responses = [
        None if item is None else Response(question_index=item.question_index, value=item.value)
        for item in payload.responses
    ]
    result = calculator.calculate(responses)
    return CalculateResponse.model_validate(result.as_dict())


def question_bank() -> QuestionListResponse:
    params = get_parameters()
    return QuestionListResponse(
        instrument=params.instrument_id,
        version=params.version,
        questions=[question.as_dict() for question in params.questions],
    )


def archetype_catalog() -> ArchetypeListResponse:
    return ArchetypeListResponse(
        archetypes=[archetype.as_dict() for archetype in get_archetypes().values()],
        function_descriptions={fn.value: text for fn, text in function_descriptions().items()},
    )


def preset_catalog() -> PresetListResponse:
    return PresetListResponse(
        default=get_settings().default_preset,
        presets=[preset.as_dict() for preset in list_presets()],
    )
