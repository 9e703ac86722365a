"""Protocol definitions for the three strategy families.

A calculation is composed of one strategy per family. Implementations only
need to match these shapes structurally; inheritance is optional.
"""

from __future__ import annotations

from typing import ClassVar, Protocol, Sequence, runtime_checkable

from typology.assessments.enums import StrategyFamily
from typology.assessments.mbti.types import FunctionScores, Response, Stack, TypeMatchResult

__all__ = [
    "ScoringStrategy",
    "StackBuildingStrategy",
    "TypeMatchingStrategy",
]


@runtime_checkable
class ScoringStrategy(Protocol):
    """Turns an answer sheet into eight function strengths.

    Implementations must be deterministic and must tolerate ``None`` entries,
    null answers and out-of-range indices (all ignored). An empty sheet yields
    all-zero scores.
    """

    name: ClassVar[str]
    family: ClassVar[StrategyFamily]

    def score_responses(self, responses: Sequence[Response | None]) -> FunctionScores: ...


@runtime_checkable
class StackBuildingStrategy(Protocol):
    """Orders the function strengths into a four-slot stack.

    The returned stack always passes ``validate_stack``.
    """

    name: ClassVar[str]
    family: ClassVar[StrategyFamily]

    def build_stack(self, scores: FunctionScores) -> Stack: ...


@runtime_checkable
class TypeMatchingStrategy(Protocol):
    """Ranks all sixteen archetypes against a built stack.

    Results cover every archetype exactly once and are sorted by descending
    score; every confidence lies in ``[0, 100]``.
    """

    name: ClassVar[str]
    family: ClassVar[StrategyFamily]

    def find_best_matches(
        self,
        stack: Stack,
        responses: Sequence[Response | None] = (),
    ) -> list[TypeMatchResult]: ...
