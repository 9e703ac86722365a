"""Centralized constants for the cognitive-function instrument.

Structural facts of the theory live here. Tuned numbers (question weights,
bonus multipliers, positional tables) are instrument parameters and live in
``typology/assessments/mbti/config.yaml`` instead.
"""

from __future__ import annotations

from typing import Final, Tuple

from typology.assessments.enums import CognitiveFunction, FunctionAxis

__all__ = [
    "FUNCTION_NAMES",
    "EXTRAVERTED_FUNCTIONS",
    "INTROVERTED_FUNCTIONS",
    "PERCEIVING_FUNCTIONS",
    "JUDGING_FUNCTIONS",
    "FUNCTION_AXES",
    "STACK_SIZE",
    "STACK_POSITIONS",
    "ARCHETYPE_COUNT",
    "CONFIDENCE_MIN",
    "CONFIDENCE_MAX",
    "MIN_ALTERNATIVES",
]

FUNCTION_NAMES: Final[Tuple[CognitiveFunction, ...]] = tuple(CognitiveFunction)
"""All eight functions in the fixed order used to break score ties."""

EXTRAVERTED_FUNCTIONS: Final[Tuple[CognitiveFunction, ...]] = tuple(f for f in FUNCTION_NAMES if f.is_extraverted)
INTROVERTED_FUNCTIONS: Final[Tuple[CognitiveFunction, ...]] = tuple(f for f in FUNCTION_NAMES if not f.is_extraverted)

PERCEIVING_FUNCTIONS: Final[Tuple[CognitiveFunction, ...]] = (
    CognitiveFunction.NE,
    CognitiveFunction.NI,
    CognitiveFunction.SE,
    CognitiveFunction.SI,
)
JUDGING_FUNCTIONS: Final[Tuple[CognitiveFunction, ...]] = (
    CognitiveFunction.TE,
    CognitiveFunction.TI,
    CognitiveFunction.FE,
    CognitiveFunction.FI,
)

FUNCTION_AXES: Final[Tuple[FunctionAxis, ...]] = tuple(FunctionAxis)

STACK_SIZE: Final[int] = 4
"""Dominant, auxiliary, tertiary, inferior."""

STACK_POSITIONS: Final[Tuple[str, str, str, str]] = ("dominant", "auxiliary", "tertiary", "inferior")

ARCHETYPE_COUNT: Final[int] = 16

CONFIDENCE_MIN: Final[int] = 0
CONFIDENCE_MAX: Final[int] = 100

MIN_ALTERNATIVES: Final[int] = 5
"""Results always carry at least this many ranked alternatives."""
