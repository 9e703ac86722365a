"""User-facing message constants used across the engine and routers.

Keeping the texts in one module lets the HTTP layer and the engine raise the
same wording, and keeps translations in a single place.
"""


class DomainErrorMessages:
    """Default messages for the domain error hierarchy."""

    DOMAIN_ERROR: str = "A domain error occurred"
    VALIDATION_ERROR: str = "Invalid input"
    INSUFFICIENT_RESPONSES: str = "No valid responses provided"
    NOT_FOUND: str = "Resource not found"
    ARCHETYPE_NOT_FOUND: str = "Unknown personality type"
    PRESET_NOT_FOUND: str = "Unknown calculator preset"
    STRATEGY_NOT_FOUND: str = "Unknown strategy"
    CONFIGURATION_ERROR: str = "Instrument configuration is invalid"


class CalculationMessages:
    """Messages raised while running a calculation."""

    NO_USABLE_RESPONSES: str = "No valid responses provided: {total} submitted, 0 answered within the question bank"
    UNKNOWN_PRESET: str = "Preset '{name}' is not defined. Available presets: {available}"
    UNKNOWN_ARCHETYPE: str = "Type '{code}' is not one of the 16 archetypes"


class StrategyMessages:
    """Strategy registry messages."""

    STRATEGY_NOT_REGISTERED: str = "Strategy '{name}' is not registered for family '{family}'"
    STRATEGY_ALREADY_REGISTERED: str = "Strategy '{name}' already registered for family '{family}'; set allow_replace=True to override"
    UNKNOWN_FAMILY: str = "Unknown strategy family '{family}'. Expected one of: {families}"


class ConfigurationMessages:
    """Instrument parameter loading messages."""

    FILE_MISSING: str = "Instrument parameters file not found: {path}"
    MISSING_KEY: str = "Instrument parameters are missing required key '{key}'"
    BAD_STACK: str = "Archetype '{code}' must list 4 distinct functions with alternating attitudes, got {stack}"
    BAD_QUESTION: str = "Question {index} is invalid: {reason}"
    ARCHETYPE_COUNT: str = "Expected 16 archetypes, found {count}"
    POSITION_TABLE: str = "Position table '{key}' must contain exactly 4 numbers"
