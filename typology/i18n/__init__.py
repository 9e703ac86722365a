"""Message catalogues."""

from typology.i18n.messages import (
    CalculationMessages,
    ConfigurationMessages,
    DomainErrorMessages,
    StrategyMessages,
)

__all__ = [
    "CalculationMessages",
    "ConfigurationMessages",
    "DomainErrorMessages",
    "StrategyMessages",
]
