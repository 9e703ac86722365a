"""Strategy registry with optional plugin discovery.

Strategies are registered per family (scoring, stack building, type matching)
as factories, usually the strategy class itself. ``get_strategy`` builds a
fresh instance on every call so callers never share strategy state.
"""

from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass, field
from importlib import metadata
from threading import RLock
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Protocol

from typology.assessments.enums import StrategyFamily
from typology.core.errors import StrategyNotFoundError
from typology.i18n.messages import StrategyMessages

__all__ = [
    "PLUGIN_GROUP",
    "StrategyRegistry",
    "register_strategy",
    "get_strategy",
    "get_default_strategy",
    "list_strategies",
    "snapshot_strategies",
    "load_strategies_from_plugins",
    "ensure_default_strategies_loaded",
]

logger = logging.getLogger(__name__)

PLUGIN_GROUP = "typology.strategies"

StrategyFactory = Callable[[], Any]


class EntryPointLike(Protocol):
    """Minimal interface for importlib.metadata.EntryPoint used in tests."""

    name: str

    def load(self) -> Any: ...


def _iter_strategy_entrypoints(group: str) -> Iterable[EntryPointLike]:
    return metadata.entry_points().select(group=group)


def _coerce_family(family: StrategyFamily | str) -> StrategyFamily:
    try:
        return StrategyFamily(family)
    except ValueError as exc:
        raise StrategyNotFoundError(
            StrategyMessages.UNKNOWN_FAMILY.format(
                family=family, families=", ".join(f.value for f in StrategyFamily)
            ),
            detail={"family": str(family)},
        ) from exc


def _as_factory(candidate: Any) -> StrategyFactory:
    """Accept a strategy class, a zero-argument factory or a ready instance."""

    if isinstance(candidate, type) or (callable(candidate) and not hasattr(candidate, "family")):
        return candidate
    return lambda: candidate


@dataclass(slots=True)
class StrategyRegistry:
    """Thread-safe registry of strategy factories keyed by family and name."""

    _factories: Dict[StrategyFamily, Dict[str, StrategyFactory]] = field(
        default_factory=lambda: {family: {} for family in StrategyFamily}
    )
    _defaults: Dict[StrategyFamily, str] = field(default_factory=dict)
    _lock: RLock = field(default_factory=RLock)
    _plugins_loaded: bool = False

    def register(
        self,
        strategy: Any,
        *,
        family: StrategyFamily | str | None = None,
        name: str | None = None,
        is_default: bool = False,
        allow_replace: bool = False,
    ) -> None:
        # plain factories only reveal their family and name once called
        probe = strategy if hasattr(strategy, "family") else strategy()
        resolved_family = _coerce_family(family or probe.family)
        resolved_name = name or probe.name
        with self._lock:
            bucket = self._factories[resolved_family]
            if not allow_replace and resolved_name in bucket:
                raise ValueError(
                    StrategyMessages.STRATEGY_ALREADY_REGISTERED.format(
                        name=resolved_name, family=resolved_family.value
                    )
                )
            bucket[resolved_name] = _as_factory(strategy)
            if is_default:
                self._defaults[resolved_family] = resolved_name
                logger.info(
                    "strategy_default_set",
                    extra={"structured_data": {"family": resolved_family.value, "strategy": resolved_name}},
                )

    def get(self, family: StrategyFamily | str, name: str, *, use_default: bool = True) -> Any:
        resolved_family = _coerce_family(family)
        with self._lock:
            bucket = self._factories[resolved_family]
            factory = bucket.get(name)
            default_name = self._defaults.get(resolved_family)
            if factory is None and use_default and default_name in bucket:
                logger.warning(
                    "strategy_fallback_to_default",
                    extra={
                        "structured_data": {
                            "family": resolved_family.value,
                            "requested": name,
                            "default": default_name,
                        }
                    },
                )
                factory = bucket[default_name]
            available = sorted(bucket)
        if factory is None:
            raise StrategyNotFoundError(
                StrategyMessages.STRATEGY_NOT_REGISTERED.format(name=name, family=resolved_family.value),
                detail={"family": resolved_family.value, "name": name, "available": available},
            )
        return factory()

    def get_default(self, family: StrategyFamily | str) -> Any | None:
        resolved_family = _coerce_family(family)
        with self._lock:
            default_name = self._defaults.get(resolved_family)
            factory = self._factories[resolved_family].get(default_name) if default_name else None
        return factory() if factory is not None else None

    def list(self, family: StrategyFamily | str) -> list[str]:
        resolved_family = _coerce_family(family)
        with self._lock:
            return sorted(self._factories[resolved_family])

    def snapshot(self) -> Mapping[str, tuple[str, ...]]:
        with self._lock:
            return MappingProxyType(
                {family.value: tuple(sorted(bucket)) for family, bucket in self._factories.items()}
            )

    def load_from_plugins(self, *, group: str = PLUGIN_GROUP, force: bool = False) -> int:
        with self._lock:
            if self._plugins_loaded and not force:
                return 0

        loaded = 0
        for entry_point in _iter_strategy_entrypoints(group):
            self.register(entry_point.load())
            loaded += 1

        with self._lock:
            self._plugins_loaded = True
        logger.info("strategy_plugins_loaded", extra={"structured_data": {"group": group, "count": loaded}})
        return loaded


_REGISTRY = StrategyRegistry()
_DEFAULTS_LOADED = False


def ensure_default_strategies_loaded() -> None:
    """Import the built-in strategy package, which registers itself."""

    global _DEFAULTS_LOADED
    if _DEFAULTS_LOADED:
        return
    importlib.import_module("typology.engine.strategies")
    _DEFAULTS_LOADED = True


def register_strategy(
    strategy: Any,
    *,
    family: StrategyFamily | str | None = None,
    name: str | None = None,
    is_default: bool = False,
    allow_replace: bool = False,
) -> None:
    _REGISTRY.register(strategy, family=family, name=name, is_default=is_default, allow_replace=allow_replace)


def get_strategy(family: StrategyFamily | str, name: str, *, use_default: bool = True) -> Any:
    ensure_default_strategies_loaded()
    return _REGISTRY.get(family, name, use_default=use_default)


def get_default_strategy(family: StrategyFamily | str) -> Any | None:
    ensure_default_strategies_loaded()
    return _REGISTRY.get_default(family)


def list_strategies(family: StrategyFamily | str) -> list[str]:
    ensure_default_strategies_loaded()
    return _REGISTRY.list(family)


def snapshot_strategies() -> Mapping[str, tuple[str, ...]]:
    ensure_default_strategies_loaded()
    return _REGISTRY.snapshot()


def load_strategies_from_plugins(*, group: str = PLUGIN_GROUP, force: bool = False) -> int:
    """Discover and register strategies exposed via entry points."""

    return _REGISTRY.load_from_plugins(group=group, force=force)
