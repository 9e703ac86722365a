"""Named, tested strategy combinations.

Each preset names one registered strategy per family; ``create_calculator``
resolves the names through the strategy registry, so a replacement strategy is
swapped in by re-registering a name.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from typology.assessments.enums import StrategyFamily
from typology.core.config import get_settings
from typology.core.errors import PresetNotFoundError
from typology.engine.calculator import TypeCalculator
from typology.engine.strategy_registry import get_strategy
from typology.i18n.messages import CalculationMessages

__all__ = [
    "CalculatorPreset",
    "PRESETS",
    "get_preset",
    "list_presets",
    "create_calculator",
]


@dataclass(frozen=True, slots=True)
class CalculatorPreset:
    name: str
    scoring: str
    stack_building: str
    type_matching: str
    description: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "scoring": self.scoring,
            "stack_building": self.stack_building,
            "type_matching": self.type_matching,
            "description": self.description,
        }


PRESETS: Mapping[str, CalculatorPreset] = MappingProxyType(
    {
        "default": CalculatorPreset(
            name="default",
            scoring="Enhanced",
            stack_building="TheoryBased",
            type_matching="FlexibleMatch",
            description="Balanced weights with position-tolerant matching.",
        ),
        "accurate": CalculatorPreset(
            name="accurate",
            scoring="StackAware",
            stack_building="TheoryBased",
            type_matching="ExactMatch",
            description="Order-weighted scoring and strict positional matching.",
        ),
        "type-first": CalculatorPreset(
            name="type-first",
            scoring="StackAware",
            stack_building="TypeFirst",
            type_matching="ExactMatch",
            description="Always returns a canonical archetype stack.",
        ),
    }
)


def get_preset(name: str) -> CalculatorPreset:
    normalized = name.strip().lower()
    if normalized not in PRESETS:
        raise PresetNotFoundError(
            CalculationMessages.UNKNOWN_PRESET.format(name=name, available=", ".join(PRESETS)),
            detail={"preset": name, "available": list(PRESETS)},
        )
    return PRESETS[normalized]


def list_presets() -> list[CalculatorPreset]:
    return list(PRESETS.values())


def create_calculator(name: Optional[str] = None, *, alternatives_limit: Optional[int] = None) -> TypeCalculator:
    """Build a calculator for a named preset (``DEFAULT_PRESET`` when omitted)."""

    preset = get_preset(name or get_settings().default_preset)
    return TypeCalculator(
        get_strategy(StrategyFamily.SCORING, preset.scoring, use_default=False),
        get_strategy(StrategyFamily.STACK_BUILDING, preset.stack_building, use_default=False),
        get_strategy(StrategyFamily.TYPE_MATCHING, preset.type_matching, use_default=False),
        preset=preset.name,
        alternatives_limit=alternatives_limit,
    )
