"""Calculation orchestrator.

``TypeCalculator`` holds one strategy per family and runs
responses -> scores -> stack -> ranked archetypes. Strategies can be swapped
between calls; nothing is cached, so the next ``calculate`` always uses the
current combination. A calculation keeps no state on the calculator, which
makes concurrent calls safe.
"""

from __future__ import annotations

from typing import Optional, Sequence

from typology.assessments.constants import MIN_ALTERNATIVES
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import CalculationResult, Response
from typology.assessments.validators import usable_responses
from typology.core.config import get_settings
from typology.core.errors import InsufficientResponsesError
from typology.core.logging import get_logger
from typology.engine.strategies.base import ScoringStrategy, StackBuildingStrategy, TypeMatchingStrategy
from typology.engine.strategies.stack_building import validate_stack
from typology.i18n.messages import CalculationMessages

__all__ = ["TypeCalculator", "CUSTOM_PRESET"]

logger = get_logger("typology.engine.calculator", component="engine")

CUSTOM_PRESET = "custom"


class TypeCalculator:
    def __init__(
        self,
        scoring: ScoringStrategy,
        stack_building: StackBuildingStrategy,
        type_matching: TypeMatchingStrategy,
        *,
        preset: str = CUSTOM_PRESET,
        alternatives_limit: Optional[int] = None,
    ) -> None:
        self._scoring = scoring
        self._stack_building = stack_building
        self._type_matching = type_matching
        self._preset = preset
        limit = alternatives_limit if alternatives_limit is not None else get_settings().alternatives_limit
        self._alternatives_limit = max(limit, MIN_ALTERNATIVES)

    @property
    def scoring(self) -> ScoringStrategy:
        return self._scoring

    @property
    def stack_building(self) -> StackBuildingStrategy:
        return self._stack_building

    @property
    def type_matching(self) -> TypeMatchingStrategy:
        return self._type_matching

    @property
    def preset(self) -> str:
        return self._preset

    # Swapping any strategy detaches the calculator from its named preset.
    def set_scoring_strategy(self, strategy: ScoringStrategy) -> None:
        self._scoring = strategy
        self._preset = CUSTOM_PRESET

    def set_stack_building_strategy(self, strategy: StackBuildingStrategy) -> None:
        self._stack_building = strategy
        self._preset = CUSTOM_PRESET

    def set_type_matching_strategy(self, strategy: TypeMatchingStrategy) -> None:
        self._type_matching = strategy
        self._preset = CUSTOM_PRESET

    def strategy_names(self) -> dict[str, str]:
        return {
            "calculation": self._preset,
            "scoring": self._scoring.name,
            "stack_building": self._stack_building.name,
            "type_matching": self._type_matching.name,
        }

    def calculate(self, responses: Sequence[Response | None]) -> CalculationResult:
        """Classify one answer sheet.

        Raises:
            InsufficientResponsesError: no answer survives filtering (empty
                sheet, all answers null, or every index out of range).
        """
        answered = usable_responses(responses, get_parameters().question_count)
        if not answered:
            logger.warning(
                "calculation_rejected",
                extra={
                    "structured_data": {
                        "preset": self._preset,
                        "submitted": len(responses),
                    }
                },
            )
            raise InsufficientResponsesError(
                CalculationMessages.NO_USABLE_RESPONSES.format(total=len(responses)),
                detail={"submitted": len(responses), "usable": 0},
            )

        scores = self._scoring.score_responses(answered)
        stack = self._stack_building.build_stack(scores)
        if not validate_stack(stack):
            raise RuntimeError(f"{self._stack_building.name} produced an invalid stack")
        matches = self._type_matching.find_best_matches(stack, answered)
        best = matches[0]
        strategies = self.strategy_names()

        logger.debug(
            "calculation_complete",
            extra={
                "structured_data": {
                    "preset": self._preset,
                    "strategies": strategies,
                    "type": best.type,
                    "confidence": best.confidence,
                    "usable_responses": len(answered),
                }
            },
        )
        return CalculationResult(
            type=best.type,
            stack=stack,
            confidence=best.confidence,
            scores=scores,
            alternative_types=tuple(matches[: self._alternatives_limit]),
            strategies=strategies,
            response_count=len(answered),
        )

    def __repr__(self) -> str:
        names = self.strategy_names()
        return (
            f"TypeCalculator(preset={names['calculation']!r}, scoring={names['scoring']!r}, "
            f"stack_building={names['stack_building']!r}, type_matching={names['type_matching']!r})"
        )
