from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

KNOWN_PRESETS = ("default", "accurate", "type-first")


class Settings(BaseSettings):
    """Strongly typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = Field(default="Typology API")
    environment: Literal["dev", "test", "staging", "prod"] = Field(default="dev")
    debug: bool = Field(default=False)

    default_preset: str = Field(default="accurate", description="Preset used when a caller does not name one")
    alternatives_limit: int = Field(default=5, ge=5, le=16, description="Ranked alternatives carried by each result")
    parameters_path: Optional[Path] = Field(
        default=None,
        description="YAML file replacing the packaged instrument parameters",
    )

    @field_validator("default_preset")
    @classmethod
    def _known_preset(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in KNOWN_PRESETS:
            raise ValueError(f"DEFAULT_PRESET must be one of {', '.join(KNOWN_PRESETS)}")
        return normalized

    @field_validator("parameters_path", mode="before")
    @classmethod
    def _normalize_blank_path(cls, value: object) -> Optional[str | Path]:
        if value in (None, "", b""):
            return None
        if isinstance(value, bytes):
            value = value.decode("utf-8")
        if isinstance(value, str):
            stripped = value.strip()
            return stripped or None
        if isinstance(value, Path):
            return value
        raise TypeError("PARAMETERS_PATH must be a filesystem path")

    @computed_field(return_type=bool)
    def is_production(self) -> bool:
        return self.environment == "prod"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
