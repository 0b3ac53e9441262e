"""Configuration file loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError, ConfigErrorCodes
from .settings import SimpleLockSettings


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(
            code=ConfigErrorCodes.READ_FILE,
            message=f"Failed to read config file: {path}",
            cause=e,
        ) from e
    try:
        data: dict[str, Any] = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ConfigError(
            code=ConfigErrorCodes.PARSE_YAML,
            message=f"Failed to parse YAML: {path}",
            cause=e,
        ) from e
    return data


def _merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    # Nested sections merge key by key; scalars and lists are replaced.
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def load(base_path: Path, env_path: Path | None = None) -> SimpleLockSettings:
    """Load lock and Redis settings from YAML.

    env_path, when given and present on disk, is merged over base_path.
    """
    data = _read_yaml(base_path)
    if env_path is not None and env_path.exists():
        data = _merge(data, _read_yaml(env_path))
    try:
        return SimpleLockSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(
            code=ConfigErrorCodes.VALIDATION,
            message=f"Config validation failed: {e}",
            cause=e,
        ) from e
