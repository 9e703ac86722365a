from __future__ import annotations

from typing import Any, ClassVar, Dict, Optional, Sequence

from typology.assessments.enums import CognitiveFunction, DichotomyAxis, StrategyFamily
from typology.assessments.mbti.catalog import get_parameters
from typology.assessments.mbti.types import (
    DichotomyBonuses,
    FunctionScores,
    InstrumentParameters,
    Response,
    ScoringWeights,
)
from typology.assessments.validators import usable_responses

__all__ = [
    "BaseScoringStrategy",
    "BasicScoringStrategy",
    "EnhancedScoringStrategy",
    "StackAwareScoringStrategy",
    "reinforcement_multipliers",
]


def reinforcement_multipliers(
    bonuses: DichotomyBonuses,
    *,
    extraverted: Any,
    introverted: Any,
    judging: Any,
    perceiving: Any,
) -> Dict[CognitiveFunction, Any]:
    """Per-function multipliers derived from the dichotomy leanings.

    The leaning arguments are 0/1 flags. Plain arithmetic is used so that the
    same expression evaluates booleans for one respondent or NumPy arrays for
    a whole batch.

    Extraverted perceiving functions follow E and P, extraverted judging
    functions follow E and J. Ni takes a reduced share of the J bonus; the
    other introverted functions follow I and P.
    """

    e_bonus = bonuses.extraversion * extraverted
    i_bonus = bonuses.introversion * introverted
    j_bonus = bonuses.judging * judging
    p_bonus = bonuses.perceiving * perceiving
    return {
        CognitiveFunction.NE: 1 + e_bonus + p_bonus,
        CognitiveFunction.SE: 1 + e_bonus + p_bonus,
        CognitiveFunction.TE: 1 + e_bonus + j_bonus,
        CognitiveFunction.FE: 1 + e_bonus + j_bonus,
        CognitiveFunction.NI: 1 + i_bonus + j_bonus * bonuses.introverted_intuition_judging_factor,
        CognitiveFunction.SI: 1 + i_bonus + p_bonus,
        CognitiveFunction.TI: 1 + i_bonus + p_bonus,
        CognitiveFunction.FI: 1 + i_bonus + p_bonus,
    }


class BaseScoringStrategy:
    """Weighted tally of answers into function strengths.

    Subclasses only choose which weight table of the instrument parameters
    they read. Explicit ``weights`` or ``bonuses`` override the configured
    values, which keeps the tuned constants replaceable without editing YAML.
    """

    name: ClassVar[str] = "Base"
    family: ClassVar[StrategyFamily] = StrategyFamily.SCORING
    weights_key: ClassVar[str] = "basic"

    def __init__(
        self,
        *,
        weights: Optional[ScoringWeights] = None,
        bonuses: Optional[DichotomyBonuses] = None,
        parameters: Optional[InstrumentParameters] = None,
    ) -> None:
        params = parameters or get_parameters()
        self._questions = params.questions
        self._weights = weights or params.scoring_weights(self.weights_key)
        self._bonuses = bonuses or params.dichotomy_bonuses

    def weights(self) -> ScoringWeights:
        return self._weights

    @property
    def bonuses(self) -> DichotomyBonuses:
        return self._bonuses

    def score_responses(self, responses: Sequence[Response | None]) -> FunctionScores:
        totals: Dict[CognitiveFunction, float] = {fn: 0.0 for fn in CognitiveFunction}
        extraversion = introversion = judging = perceiving = 0.0

        for response in usable_responses(responses, len(self._questions)):
            question = self._questions[response.question_index]
            weight = self._weights.weight_for(question.question_class)
            if question.axis is DichotomyAxis.EXTRAVERSION_INTROVERSION:
                if response.value:
                    extraversion += weight
                else:
                    introversion += weight
                continue
            if question.axis is DichotomyAxis.JUDGING_PERCEIVING:
                if response.value:
                    judging += weight
                else:
                    perceiving += weight
                continue
            target = question.extraverted_function if response.value else question.introverted_function
            totals[target] += weight

        multipliers = reinforcement_multipliers(
            self._bonuses,
            extraverted=extraversion > introversion,
            introverted=introversion > extraversion,
            judging=judging > perceiving,
            perceiving=perceiving > judging,
        )
        return FunctionScores.from_mapping({fn: totals[fn] * multipliers[fn] for fn in CognitiveFunction})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(weights={self._weights.as_dict()!r})"


class BasicScoringStrategy(BaseScoringStrategy):
    """Uniform weights for both kinds of function questions."""

    name = "Basic"
    weights_key = "basic"


class EnhancedScoringStrategy(BaseScoringStrategy):
    """Order questions count double."""

    name = "Enhanced"
    weights_key = "enhanced"


class StackAwareScoringStrategy(BaseScoringStrategy):
    """Strongest emphasis on order questions.

    The configured table sets a heavier function-order weight plus an
    ``order_amplifier`` that ``ScoringWeights.weight_for`` multiplies in.
    Dichotomy answers feed the same reinforcement as the other variants.
    """

    name = "StackAware"
    weights_key = "stack_aware"
