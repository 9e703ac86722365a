from __future__ import annotations

from typology.engine.strategy_registry import register_strategy

from .scoring import BasicScoringStrategy, EnhancedScoringStrategy, StackAwareScoringStrategy
from .stack_building import TheoryBasedStackBuilder, TopFourStackBuilder, TypeFirstStackBuilder
from .type_matching import (
    DominantAuxiliaryStrategy,
    ExactMatchStrategy,
    FlexibleMatchStrategy,
    WeightedMatchStrategy,
)

register_strategy(BasicScoringStrategy)
register_strategy(EnhancedScoringStrategy, is_default=True)
register_strategy(StackAwareScoringStrategy)

register_strategy(TheoryBasedStackBuilder, is_default=True)
register_strategy(TopFourStackBuilder)
register_strategy(TypeFirstStackBuilder)

register_strategy(ExactMatchStrategy)
register_strategy(FlexibleMatchStrategy, is_default=True)
register_strategy(WeightedMatchStrategy)
register_strategy(DominantAuxiliaryStrategy)

__all__ = [
    "BasicScoringStrategy",
    "EnhancedScoringStrategy",
    "StackAwareScoringStrategy",
    "TheoryBasedStackBuilder",
    "TopFourStackBuilder",
    "TypeFirstStackBuilder",
    "ExactMatchStrategy",
    "FlexibleMatchStrategy",
    "WeightedMatchStrategy",
    "DominantAuxiliaryStrategy",
]
