"""Stack building strategies.

``TheoryBasedStackBuilder`` assembles the stack slot by slot from the ranked
function strengths:

- dominant: strongest function overall;
- auxiliary: strongest function of the opposite attitude and the other
  category (perceiving vs judging);
- tertiary: strongest remaining function with the dominant's attitude and the
  auxiliary's category;
- inferior: strongest remaining function with the auxiliary's attitude.

Ranking always breaks score ties by the fixed function order
(Ne, Ni, Se, Si, Te, Ti, Fe, Fi), never by mapping iteration order. When a
slot has no candidate satisfying its rule, the remaining slots are filled by
rank while keeping the functions distinct and the attitudes alternating.
Subclasses narrow the rules through ``slot_rules``.
"""

from __future__ import annotations

from typing import Callable, ClassVar, List, Optional, Sequence, Tuple

from typology.assessments.constants import STACK_SIZE
from typology.assessments.enums import CognitiveFunction, StrategyFamily
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import (
    Archetype,
    FunctionScores,
    InstrumentParameters,
    Stack,
    names_form_valid_stack,
    stack_from_names,
    stack_names,
)
from typology.core.logging import get_logger

__all__ = [
    "validate_stack",
    "complete_stack",
    "SLOT_RULES",
    "TheoryBasedStackBuilder",
    "TopFourStackBuilder",
    "TypeFirstStackBuilder",
]

logger = get_logger("typology.engine.stack_building", component="engine")

_Rule = Callable[[Sequence[CognitiveFunction], CognitiveFunction], bool]


def validate_stack(stack: Sequence) -> bool:
    """True when ``stack`` holds four distinct functions alternating attitude from slot 0."""

    if len(stack) != STACK_SIZE:
        return False
    for slot in stack:
        if slot.extraverted_name.axis is not slot.introverted_name.axis:
            return False
        if not slot.extraverted_name.is_extraverted or slot.introverted_name.is_extraverted:
            return False
    return names_form_valid_stack(stack_names(stack))


def _ranked_functions(scores: FunctionScores) -> List[CognitiveFunction]:
    return [fn for fn, _ in scores.ranked()]


def _auxiliary_rule(chosen: Sequence[CognitiveFunction], fn: CognitiveFunction) -> bool:
    dominant = chosen[0]
    return fn.is_extraverted != dominant.is_extraverted and fn.category != dominant.category


def _tertiary_rule(chosen: Sequence[CognitiveFunction], fn: CognitiveFunction) -> bool:
    dominant, auxiliary = chosen[0], chosen[1]
    return fn.is_extraverted == dominant.is_extraverted and fn.category == auxiliary.category


def _inferior_rule(chosen: Sequence[CognitiveFunction], fn: CognitiveFunction) -> bool:
    return fn.is_extraverted != chosen[0].is_extraverted


SLOT_RULES: Tuple[_Rule, ...] = (_auxiliary_rule, _tertiary_rule, _inferior_rule)


def complete_stack(
    prefix: Sequence[CognitiveFunction],
    ranked: Sequence[CognitiveFunction],
) -> Tuple[CognitiveFunction, ...]:
    """Fill the slots after ``prefix`` by rank, keeping distinctness and alternation.

    Only attitude is constrained here, so the result is valid but not
    necessarily theory-correct. ``ranked`` must contain at least one unused
    function of each attitude, which holds for the full set of eight.
    """

    chosen = list(prefix)
    while len(chosen) < STACK_SIZE:
        want_extraverted = not chosen[-1].is_extraverted if chosen else ranked[0].is_extraverted
        chosen.append(next(fn for fn in ranked if fn not in chosen and fn.is_extraverted == want_extraverted))
    return tuple(chosen)


def _theory_stack(
    ranked: Sequence[CognitiveFunction],
    builder: str,
    rules: Sequence[_Rule] = SLOT_RULES,
) -> Tuple[CognitiveFunction, ...]:
    chosen: List[CognitiveFunction] = [ranked[0]]
    for position, rule in enumerate(rules, start=1):
        candidate = next((fn for fn in ranked if fn not in chosen and rule(chosen, fn)), None)
        if candidate is None:
            logger.debug(
                "stack_fallback_ordering",
                extra={
                    "structured_data": {
                        "builder": builder,
                        "position": position,
                        "prefix": [fn.value for fn in chosen],
                    }
                },
            )
            return complete_stack(chosen, ranked)
        chosen.append(candidate)
    return tuple(chosen)


class TheoryBasedStackBuilder:
    """Bottom-up stack assembled by the dominant/auxiliary/tertiary/inferior rules."""

    name: ClassVar[str] = "TheoryBased"
    family: ClassVar[StrategyFamily] = StrategyFamily.STACK_BUILDING
    # auxiliary, tertiary, inferior
    slot_rules: ClassVar[Tuple[_Rule, ...]] = SLOT_RULES

    def build_stack(self, scores: FunctionScores) -> Stack:
        return stack_from_names(_theory_stack(_ranked_functions(scores), self.name, self.slot_rules))

    def validate_stack(self, stack: Stack) -> bool:
        return validate_stack(stack)


class TopFourStackBuilder(TheoryBasedStackBuilder):
    """The four strongest functions in order, when they already form a valid stack.

    Otherwise the theory-based rules repair the ordering.
    """

    name = "TopFour"

    def build_stack(self, scores: FunctionScores) -> Stack:
        ranked = _ranked_functions(scores)
        top_four = tuple(ranked[:STACK_SIZE])
        if names_form_valid_stack(top_four):
            return stack_from_names(top_four)
        return stack_from_names(_theory_stack(ranked, self.name, self.slot_rules))


class TypeFirstStackBuilder:
    """Pick the archetype whose canonical stack best explains the scores.

    Each archetype gets ``sum(score[f] * weight[position])`` over its stack,
    with the dominant position weighted most. The winner's canonical stack is
    returned verbatim; ties go to the archetype listed first.
    """

    name: ClassVar[str] = "TypeFirst"
    family: ClassVar[StrategyFamily] = StrategyFamily.STACK_BUILDING

    def __init__(
        self,
        *,
        position_weights: Optional[Sequence[float]] = None,
        parameters: Optional[InstrumentParameters] = None,
    ) -> None:
        params = parameters or get_parameters()
        self._archetypes = tuple(params.archetypes.values())
        weights = tuple(position_weights) if position_weights is not None else params.type_first_position_weights
        if len(weights) != STACK_SIZE:
            raise ValueError("position_weights must contain exactly 4 numbers")
        self._position_weights = weights

    def archetype_score(self, scores: FunctionScores, archetype: Archetype) -> float:
        return sum(scores[fn] * weight for fn, weight in zip(archetype.stack, self._position_weights))

    def rank_archetypes(self, scores: FunctionScores) -> List[Tuple[Archetype, float]]:
        scored = [(archetype, self.archetype_score(scores, archetype)) for archetype in self._archetypes]
        return sorted(scored, key=lambda item: -item[1])

    def build_stack(self, scores: FunctionScores) -> Stack:
        best, _ = self.rank_archetypes(scores)[0]
        return best.slots()

    def validate_stack(self, stack: Stack) -> bool:
        return validate_stack(stack)
