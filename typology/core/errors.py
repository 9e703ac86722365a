from __future__ import annotations

"""Domain-specific exception hierarchy for the typology engine."""

from typing import Any

from typology.i18n.messages import DomainErrorMessages

__all__ = [
    "DomainError",
    "ValidationError",
    "InsufficientResponsesError",
    "NotFoundError",
    "ArchetypeNotFoundError",
    "PresetNotFoundError",
    "StrategyNotFoundError",
    "ConfigurationError",
]


class DomainError(Exception):
    """Base class for recoverable domain-level errors."""

    status_code: int = 400
    error_code: str = "domain_error"
    default_message: str = DomainErrorMessages.DOMAIN_ERROR

    def __init__(
        self,
        message: str | None = None,
        *,
        detail: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        final_message = message or self.default_message
        super().__init__(final_message)
        self.message = final_message
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ValidationError(DomainError, ValueError):
    """Raised when caller-supplied answers cannot be used."""

    error_code = "validation_error"
    default_message = DomainErrorMessages.VALIDATION_ERROR


class InsufficientResponsesError(ValidationError):
    """Raised when no usable answer remains after filtering."""

    error_code = "insufficient_responses"
    status_code = 422
    default_message = DomainErrorMessages.INSUFFICIENT_RESPONSES


class NotFoundError(DomainError):
    """Base class for missing domain resources."""

    error_code = "not_found"
    status_code = 404
    default_message = DomainErrorMessages.NOT_FOUND


class ArchetypeNotFoundError(NotFoundError):
    error_code = "archetype_not_found"
    default_message = DomainErrorMessages.ARCHETYPE_NOT_FOUND


class PresetNotFoundError(NotFoundError):
    error_code = "preset_not_found"
    default_message = DomainErrorMessages.PRESET_NOT_FOUND


class StrategyNotFoundError(NotFoundError, KeyError):
    """Raised when a strategy name is not registered for its family."""

    error_code = "strategy_not_found"
    default_message = DomainErrorMessages.STRATEGY_NOT_FOUND


class ConfigurationError(DomainError):
    """Raised when instrument parameters are invalid or incomplete."""

    error_code = "configuration_error"
    status_code = 500
    default_message = DomainErrorMessages.CONFIGURATION_ERROR
