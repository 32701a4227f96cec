"""Configuration management with pydantic and YAML support."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import numpy as np
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .constants import DEFAULT_SEED
from .hypercube import ParameterSpace
from .logging import normalize_level, set_log_level


class LoggingConfig(BaseModel):
    """Structured logging settings."""

    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        return normalize_level(v)


class SamplingConfig(BaseModel):
    """Random sampling settings."""

    seed: int = Field(default=DEFAULT_SEED, ge=0)


class VariableConfig(BaseModel):
    """One variable of a parameter space."""

    name: str = Field(min_length=1)
    min: float
    max: float
    value: float | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> VariableConfig:
        if not self.min <= self.max:
            raise ValueError(f"min {self.min} > max {self.max} for variable '{self.name}'")
        return self

    def initial_value(self) -> float:
        """Configured value, or the middle of the bounds when omitted."""
        return self.value if self.value is not None else (self.min + self.max) / 2


class ParameterSpaceConfig(BaseModel):
    """Ordered variable definitions."""

    variables: list[VariableConfig] = Field(default_factory=list)

    @field_validator("variables")
    @classmethod
    def _unique_names(cls, v: list[VariableConfig]) -> list[VariableConfig]:
        seen: set[str] = set()
        for var in v:
            if var.name in seen:
                raise ValueError(f"duplicate variable name '{var.name}'")
            seen.add(var.name)
        return v

    def build(self) -> ParameterSpace[float]:
        """Create a ParameterSpace in declaration order."""
        space: ParameterSpace[float] = ParameterSpace()
        for var in self.variables:
            space.define(var.name, var.min, var.max, var.initial_value())
        return space


class HypercalConfig(BaseModel):
    """Root configuration object."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    sampling: SamplingConfig = Field(default_factory=SamplingConfig)
    space: ParameterSpaceConfig = Field(default_factory=ParameterSpaceConfig)

    def make_rng(self) -> np.random.Generator:
        """Seeded generator usable as a ``UniformSource``."""
        return np.random.default_rng(self.sampling.seed)

    def configure_logging(self) -> None:
        set_log_level(self.logging.level)


def load_config(path: str | Path) -> HypercalConfig:
    """Load configuration from YAML file.

    Args:
        path: Path to YAML config file.

    Returns:
        Parsed HypercalConfig object.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return HypercalConfig.model_validate(data or {})


def save_config(config: HypercalConfig, path: str | Path) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration to save.
        path: Output path.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def default_config() -> HypercalConfig:
    """Return default configuration."""
    return HypercalConfig()


def merge_config(base: HypercalConfig, overrides: dict[str, Any]) -> HypercalConfig:
    """Merge overrides into base configuration.

    Nested dicts merge key by key; lists (e.g. ``space.variables``) are
    replaced wholesale.
    """
    base_dict = base.model_dump()

    def deep_merge(d1: dict, d2: dict) -> dict:
        result = d1.copy()
        for k, v in d2.items():
            if k in result and isinstance(result[k], dict) and isinstance(v, dict):
                result[k] = deep_merge(result[k], v)
            else:
                result[k] = v
        return result

    merged = deep_merge(base_dict, overrides)
    return HypercalConfig.model_validate(merged)
