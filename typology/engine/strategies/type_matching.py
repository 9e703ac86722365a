from __future__ import annotations

from typing import ClassVar, Optional, Sequence

from typology.assessments.constants import CONFIDENCE_MAX, CONFIDENCE_MIN
from typology.assessments.enums import CognitiveFunction, StrategyFamily
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import (
    Archetype,
    InstrumentParameters,
    MatchingParameters,
    Response,
    Stack,
    TypeMatchResult,
    stack_names,
)
from typology.core.numeric import clamp, safe_div, safe_round

__all__ = [
    "BaseTypeMatcher",
    "ExactMatchStrategy",
    "FlexibleMatchStrategy",
    "WeightedMatchStrategy",
    "DominantAuxiliaryStrategy",
]


class BaseTypeMatcher:
    """Scores every archetype against a built stack and ranks them.

    Subclasses implement ``match_score``; confidence is shared:
    ``min(score / divisor, 1) * 100``, discounted when the built stack is not
    exactly the archetype's canonical stack, rounded half-up and clamped.
    """

    name: ClassVar[str] = "Base"
    family: ClassVar[StrategyFamily] = StrategyFamily.TYPE_MATCHING

    def __init__(
        self,
        *,
        matching: Optional[MatchingParameters] = None,
        parameters: Optional[InstrumentParameters] = None,
    ) -> None:
        params = parameters or get_parameters()
        self._archetypes = tuple(params.archetypes.values())
        self._matching = matching or params.matching

    @property
    def matching(self) -> MatchingParameters:
        return self._matching

    def match_score(self, user_stack: Sequence[CognitiveFunction], archetype: Archetype) -> float:
        raise NotImplementedError

    def confidence(self, score: float, user_stack: Sequence[CognitiveFunction], archetype: Archetype) -> int:
        base = min(safe_div(score, self._matching.confidence_divisor), 1.0) * 100
        if tuple(user_stack) != archetype.stack:
            base *= self._matching.inexact_confidence_factor
        return int(clamp(safe_round(base, 0), CONFIDENCE_MIN, CONFIDENCE_MAX))

    def find_best_matches(
        self,
        stack: Stack,
        responses: Sequence[Response | None] = (),
    ) -> list[TypeMatchResult]:
        user_stack = stack_names(stack)
        results = []
        for archetype in self._archetypes:
            score = self.match_score(user_stack, archetype)
            results.append(
                TypeMatchResult(
                    type=archetype.code,
                    score=score,
                    confidence=self.confidence(score, user_stack, archetype),
                    stack=archetype.slots(),
                )
            )
        # stable: equal scores keep archetype table order
        return sorted(results, key=lambda result: -result.score)


class ExactMatchStrategy(BaseTypeMatcher):
    """Positional points for every slot that holds the same function."""

    name = "ExactMatch"

    def match_score(self, user_stack: Sequence[CognitiveFunction], archetype: Archetype) -> float:
        points = self._matching.exact_points
        return float(
            sum(points[idx] for idx, (fn, expected) in enumerate(zip(user_stack, archetype.stack)) if fn == expected)
        )


class FlexibleMatchStrategy(BaseTypeMatcher):
    """Rewards shared functions by how close their positions are."""

    name = "FlexibleMatch"

    def match_score(self, user_stack: Sequence[CognitiveFunction], archetype: Archetype) -> float:
        score = 0.0
        for user_pos, fn in enumerate(user_stack):
            type_pos = archetype.position_of(fn)
            if type_pos is not None:
                score += len(archetype.stack) - abs(user_pos - type_pos)
        return score


class WeightedMatchStrategy(BaseTypeMatcher):
    name = "WeightedMatch"

    def match_score(self, user_stack: Sequence[CognitiveFunction], archetype: Archetype) -> float:
        weights = self._matching.weighted_position_weights
        score = 0.0
        for user_pos, fn in enumerate(user_stack):
            type_pos = archetype.position_of(fn)
            if type_pos is not None:
                score += (weights[user_pos] + weights[type_pos]) / 2
        return score * self._matching.weighted_scale


class DominantAuxiliaryStrategy(BaseTypeMatcher):
    """Exact positional matching that leans heavily on the first two slots."""

    name = "DominantAuxiliary"

    def match_score(self, user_stack: Sequence[CognitiveFunction], archetype: Archetype) -> float:
        points = self._matching.dominant_auxiliary_points
        return float(
            sum(points[idx] for idx, (fn, expected) in enumerate(zip(user_stack, archetype.stack)) if fn == expected)
        )
