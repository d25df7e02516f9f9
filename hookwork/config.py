"""Configuration models and loading for hookwork."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from hookwork.models import HookPlan

CONFIG_FILENAME = ".hookwork.yaml"


class LoggingConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class DeprecationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    warn_context: bool = True


class HookworkConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    deprecations: DeprecationConfig = Field(default_factory=DeprecationConfig)


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text())
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML at {path} must decode to a mapping")
    return data


def load_effective_config(
    config_dir: str | Path = ".",
    runtime_override: dict[str, Any] | None = None,
) -> HookworkConfig:
    """Load config with precedence runtime > .hookwork.yaml > built-in defaults."""
    merged = _load_yaml(Path(config_dir) / CONFIG_FILENAME)
    if runtime_override:
        merged = _deep_merge(merged, runtime_override)
    return HookworkConfig.model_validate(merged)


def load_hook_plan(path: str | Path) -> HookPlan:
    plan_path = Path(path)
    if not plan_path.exists():
        raise ValueError(f"Hook plan does not exist: {plan_path}")
    return HookPlan.model_validate(_load_yaml(plan_path))
