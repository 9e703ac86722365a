from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from typology.assessments.mbti.types import InstrumentParameters
from typology.core.errors import ConfigurationError
from typology.i18n.messages import ConfigurationMessages

CONFIG_PATH = Path(__file__).with_name("config.yaml")


def load_config(path: Path | None = None) -> InstrumentParameters:
    source = Path(path) if path is not None else CONFIG_PATH
    if not source.is_file():
        raise ConfigurationError(ConfigurationMessages.FILE_MISSING.format(path=source))
    with source.open("r", encoding="utf-8") as fh:
        try:
            raw: Dict[str, Any] = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigurationError(detail=str(exc)) from exc
    if not isinstance(raw, dict):
        raise ConfigurationError(detail=f"{source} does not contain a mapping")
    return InstrumentParameters.from_raw(raw)
