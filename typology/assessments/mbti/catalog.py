"""Process-wide, read-only access to the question bank and archetype table.

Parameters are parsed once on first use. ``PARAMETERS_PATH`` swaps in a
different YAML file; ``reset_catalog()`` drops the cached copy (tests only).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Mapping, Tuple

from typology.assessments.enums import CognitiveFunction
from typology.assessments.mbti import load_config
from typology.assessments.mbti.types import Archetype, InstrumentParameters, Question
from typology.core.config import get_settings
from typology.core.errors import ArchetypeNotFoundError
from typology.i18n.messages import CalculationMessages

__all__ = [
    "get_parameters",
    "get_questions",
    "get_archetypes",
    "get_archetype",
    "function_descriptions",
    "reset_catalog",
]


@lru_cache(maxsize=1)
def get_parameters() -> InstrumentParameters:
    return load_config(get_settings().parameters_path)


def get_questions() -> Tuple[Question, ...]:
    return get_parameters().questions


def get_archetypes() -> Mapping[str, Archetype]:
    return get_parameters().archetypes


def get_archetype(code: str) -> Archetype:
    normalized = code.strip().upper()
    archetypes = get_archetypes()
    if normalized not in archetypes:
        raise ArchetypeNotFoundError(
            CalculationMessages.UNKNOWN_ARCHETYPE.format(code=code),
            detail={"code": code},
        )
    return archetypes[normalized]


def function_descriptions() -> Mapping[CognitiveFunction, str]:
    return get_parameters().function_descriptions


def reset_catalog() -> None:
    get_parameters.cache_clear()
