from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from property_counter.usecases.config_models import AppConfig


# ConfigError is raised for invalid configuration (fail fast).
class ConfigError(ValueError):
    pass


_ALLOWED_TOP_LEVEL = {"version", "datasets", "queries", "counter", "logging", "output"}
_REQUIRED_TOP_LEVEL = ("version", "datasets", "queries")


def load_config(path: Path) -> AppConfig:
    # YAML loader; structural checks run before model validation for clearer messages.
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError("Config root must be a mapping")

    _validate_top_level(raw)
    try:
        return AppConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc


def _validate_top_level(raw: dict[str, Any]) -> None:
    # Fail fast on unknown keys to prevent silent misconfiguration.
    unknown = set(raw.keys()) - _ALLOWED_TOP_LEVEL
    if unknown:
        raise ConfigError(f"Unknown top-level keys: {sorted(unknown)}")

    missing = [key for key in _REQUIRED_TOP_LEVEL if key not in raw]
    if missing:
        raise ConfigError(f"Missing required top-level keys: {', '.join(missing)}")

    if not isinstance(raw.get("datasets"), dict):
        raise ConfigError("datasets must be a mapping")
    if not isinstance(raw.get("queries"), list):
        raise ConfigError("queries must be a list")
