"""Enumerations for the cognitive-function instrument.

Values double as the wire/YAML spelling, so ``CognitiveFunction("Ni")`` and
``QuestionClass("function-order")`` parse configuration and request payloads
directly.
"""

from __future__ import annotations

from enum import StrEnum

__all__ = [
    "Attitude",
    "FunctionCategory",
    "FunctionAxis",
    "DichotomyAxis",
    "QuestionClass",
    "CognitiveFunction",
    "StrategyFamily",
]


class Attitude(StrEnum):
    EXTRAVERTED = "extraverted"
    INTROVERTED = "introverted"


class FunctionCategory(StrEnum):
    """Perceiving functions gather information; judging functions decide."""

    PERCEIVING = "perceiving"
    JUDGING = "judging"


class FunctionAxis(StrEnum):
    """The four function pairs a question can probe."""

    INTUITION = "intuition"
    SENSING = "sensing"
    THINKING = "thinking"
    FEELING = "feeling"

    @property
    def category(self) -> FunctionCategory:
        if self in (FunctionAxis.INTUITION, FunctionAxis.SENSING):
            return FunctionCategory.PERCEIVING
        return FunctionCategory.JUDGING

    @property
    def letter(self) -> str:
        return _LETTER_BY_AXIS[self]

    @property
    def extraverted(self) -> "CognitiveFunction":
        return CognitiveFunction(self.letter + "e")

    @property
    def introverted(self) -> "CognitiveFunction":
        return CognitiveFunction(self.letter + "i")


class DichotomyAxis(StrEnum):
    """Traditional four-letter axes scored outside the function pairs."""

    EXTRAVERSION_INTROVERSION = "extraversion-introversion"
    JUDGING_PERCEIVING = "judging-perceiving"


class QuestionClass(StrEnum):
    FUNCTION_PREFERENCE = "function-preference"
    FUNCTION_ORDER = "function-order"
    TRADITIONAL_DICHOTOMY = "traditional-dichotomy"


class CognitiveFunction(StrEnum):
    """The eight cognitive functions, in the fixed tie-break order."""

    NE = "Ne"
    NI = "Ni"
    SE = "Se"
    SI = "Si"
    TE = "Te"
    TI = "Ti"
    FE = "Fe"
    FI = "Fi"

    @property
    def axis(self) -> FunctionAxis:
        return _AXIS_BY_LETTER[self.value[0]]

    @property
    def attitude(self) -> Attitude:
        return Attitude.EXTRAVERTED if self.value[1] == "e" else Attitude.INTROVERTED

    @property
    def is_extraverted(self) -> bool:
        return self.attitude is Attitude.EXTRAVERTED

    @property
    def category(self) -> FunctionCategory:
        return self.axis.category

    @property
    def rank(self) -> int:
        """Position in the fixed tie-break order."""
        return _FUNCTION_ORDER.index(self)


class StrategyFamily(StrEnum):
    SCORING = "scoring"
    STACK_BUILDING = "stack_building"
    TYPE_MATCHING = "type_matching"


_AXIS_BY_LETTER = {
    "N": FunctionAxis.INTUITION,
    "S": FunctionAxis.SENSING,
    "T": FunctionAxis.THINKING,
    "F": FunctionAxis.FEELING,
}
_LETTER_BY_AXIS = {axis: letter for letter, axis in _AXIS_BY_LETTER.items()}
_FUNCTION_ORDER = tuple(CognitiveFunction)
