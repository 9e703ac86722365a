from __future__ import annotations

from typing import ClassVar

import pytest

import typology.engine.strategy_registry as registry_module
from typology.assessments.enums import StrategyFamily
from typology.core.errors import StrategyNotFoundError
from typology.engine.strategies.scoring import EnhancedScoringStrategy
from typology.engine.strategy_registry import (
    PLUGIN_GROUP,
    StrategyRegistry,
    get_default_strategy,
    get_strategy,
    list_strategies,
    snapshot_strategies,
)


class MockScoring:
    name: ClassVar[str] = "Mock"
    family: ClassVar[StrategyFamily] = StrategyFamily.SCORING

    def score_responses(self, responses):  # pragma: no cover - never scored
        raise NotImplementedError


class DummyEntryPoint:
    def __init__(self, target):
        self.name = "dummy"
        self._target = target

    def load(self):
        return self._target


def test_builtin_strategies_are_registered_per_family():
    assert list_strategies(StrategyFamily.SCORING) == ["Basic", "Enhanced", "StackAware"]
    assert list_strategies("stack_building") == ["TheoryBased", "TopFour", "TypeFirst"]
    assert list_strategies(StrategyFamily.TYPE_MATCHING) == [
        "DominantAuxiliary",
        "ExactMatch",
        "FlexibleMatch",
        "WeightedMatch",
    ]
    assert set(snapshot_strategies()) == {"scoring", "stack_building", "type_matching"}


def test_get_strategy_returns_fresh_instances():
    first = get_strategy(StrategyFamily.SCORING, "Enhanced")
    second = get_strategy(StrategyFamily.SCORING, "Enhanced")
    assert isinstance(first, EnhancedScoringStrategy)
    assert first is not second


def test_defaults_per_family():
    assert get_default_strategy(StrategyFamily.SCORING).name == "Enhanced"
    assert get_default_strategy(StrategyFamily.STACK_BUILDING).name == "TheoryBased"
    assert get_default_strategy(StrategyFamily.TYPE_MATCHING).name == "FlexibleMatch"


def test_unknown_name_falls_back_to_default(caplog):
    strategy = get_strategy(StrategyFamily.TYPE_MATCHING, "Nope")
    assert strategy.name == "FlexibleMatch"
    assert any(record.getMessage() == "strategy_fallback_to_default" for record in caplog.records)


def test_unknown_name_without_fallback_raises():
    with pytest.raises(StrategyNotFoundError) as excinfo:
        get_strategy(StrategyFamily.SCORING, "Nope", use_default=False)
    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.detail["available"] == ["Basic", "Enhanced", "StackAware"]


def test_unknown_family_raises():
    with pytest.raises(StrategyNotFoundError):
        get_strategy("ranking", "Basic")


def test_duplicate_registration_requires_allow_replace():
    registry = StrategyRegistry()
    registry.register(MockScoring)
    with pytest.raises(ValueError):
        registry.register(MockScoring)
    registry.register(MockScoring, allow_replace=True)
    assert registry.list(StrategyFamily.SCORING) == ["Mock"]


def test_registered_instance_is_returned_as_is():
    registry = StrategyRegistry()
    instance = MockScoring()
    registry.register(instance, is_default=True)
    assert registry.get(StrategyFamily.SCORING, "Mock") is instance
    assert registry.get_default(StrategyFamily.SCORING) is instance


def test_load_strategies_from_plugins(monkeypatch):
    registry = StrategyRegistry()

    def fake_iter(group: str):
        assert group == PLUGIN_GROUP
        return [DummyEntryPoint(MockScoring), DummyEntryPoint(lambda: MockScoring())]

    monkeypatch.setattr(registry_module, "_iter_strategy_entrypoints", fake_iter)
    with pytest.raises(ValueError):
        # both entry points expose the same name
        registry.load_from_plugins()

    registry = StrategyRegistry()
    monkeypatch.setattr(registry_module, "_iter_strategy_entrypoints", lambda group: [DummyEntryPoint(MockScoring)])
    assert registry.load_from_plugins() == 1
    assert registry.load_from_plugins() == 0
    assert isinstance(registry.get(StrategyFamily.SCORING, "Mock"), MockScoring)
