"""Loading export settings from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from qbiif_schemas import ExportSettings

from .logging_setup import get_logger

SETTINGS_ENV_VAR = "QBIIF_SETTINGS"

_logger = get_logger("qbiif.settings")


def parse_settings(text: str) -> ExportSettings:
    raw = yaml.safe_load(text)
    if not raw:
        return ExportSettings()
    return ExportSettings.model_validate(raw)


def load_settings(path: Optional[Union[Path, str]] = None) -> ExportSettings:
    """Read settings from ``path``, or from ``$QBIIF_SETTINGS`` when omitted.

    A missing file yields the defaults.
    """
    if path is None:
        env_path = os.getenv(SETTINGS_ENV_VAR)
        if not env_path:
            return ExportSettings()
        path = env_path
    settings_path = Path(path)
    if not settings_path.exists():
        _logger.debug("No settings file at %s; using defaults", settings_path)
        return ExportSettings()
    return parse_settings(settings_path.read_text(encoding="utf-8"))


def save_settings(path: Union[Path, str], settings: ExportSettings) -> None:
    payload = settings.model_dump()
    Path(path).write_text(yaml.safe_dump(payload, sort_keys=False), encoding="utf-8")


__all__ = ["SETTINGS_ENV_VAR", "load_settings", "parse_settings", "save_settings"]
