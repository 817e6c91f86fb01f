# -*- coding: utf-8 -*-

"""
Run configuration loaded from YAML.

Lookup order: an explicit config file, then the user config file in the
platform config directory, then built-in defaults. CLI flags are applied on
top by the caller.
"""

import logging
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, List, Optional

import platformdirs

from .misc import mask_path, read_yaml, write_yaml
from ..exceptions import ConfigurationError


APP_NAME = "product-describer"
CONFIG_FILENAME = "config.yaml"


@dataclass(frozen=True)
class RunConfig:
    """Settings for a generation run."""

    model: str = "gpt-4o-mini"
    max_tokens: int = 250
    concurrency: int = 2
    api: str = "OpenAI"
    retry_errors: bool = False
    brand_phrases: List[str] = field(default_factory=list)
    # Model -> {'input': rate, 'output': rate}, USD per 1M tokens
    pricing: Dict[str, Dict[str, float]] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.model, str) or not self.model:
            raise ConfigurationError("'model' must be a non-empty string")
        for name in ('max_tokens', 'concurrency'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"'{name}' must be a positive integer, got {value!r}")
        if self.api not in ('OpenAI', 'AzureOpenAI'):
            raise ConfigurationError(f"'api' must be 'OpenAI' or 'AzureOpenAI', got {self.api!r}")
        if not isinstance(self.brand_phrases, list) or not all(isinstance(p, str) for p in self.brand_phrases):
            raise ConfigurationError("'brand_phrases' must be a list of strings")
        if not isinstance(self.pricing, dict):
            raise ConfigurationError("'pricing' must be a mapping of model names to rates")
        for model, rates in self.pricing.items():
            if not isinstance(rates, dict) or set(rates) != {'input', 'output'}:
                raise ConfigurationError(f"Pricing for '{model}' must define exactly 'input' and 'output'")

    def updated(self, **overrides) -> 'RunConfig':
        """Return a copy with every override that is not None applied."""
        return replace(self, **{key: value for key, value in overrides.items() if value is not None})

    def to_dict(self) -> dict:
        return asdict(self)


def get_user_config_path() -> Path:
    """Get the platform-specific user config path."""
    return Path(platformdirs.user_config_dir(APP_NAME)) / CONFIG_FILENAME


def load_run_config(config_path: Optional[str | Path] = None) -> RunConfig:
    """
    Load the run configuration.

    Args:
        config_path: YAML file to read. If None, the user config file is used
            when it exists, otherwise defaults.

    Raises:
        ConfigurationError: If the file is missing (when given explicitly),
            unreadable, or holds invalid values.
    """
    if config_path is None:
        config_path = get_user_config_path()
        if not config_path.exists():
            logging.debug("No user config file found, using defaults")
            return RunConfig()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")

    try:
        data = read_yaml(config_path) or {}
    except Exception as e:
        raise ConfigurationError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    known = {f.name for f in fields(RunConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ConfigurationError(f"Unknown config keys in {config_path}: {', '.join(unknown)}")

    logging.debug(f"Loaded configuration from {mask_path(config_path)}")
    return RunConfig(**data)


def write_default_config(config_path: Optional[str | Path] = None, force: bool = False) -> Path:
    """
    Write a config file holding the default settings.

    Raises:
        FileExistsError: If the file exists and `force` is False.
    """
    config_path = Path(config_path) if config_path is not None else get_user_config_path()
    if config_path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {config_path}")
    config_path.parent.mkdir(parents=True, exist_ok=True)
    write_yaml(RunConfig().to_dict(), config_path)
    logging.info(f"Wrote default configuration to {mask_path(config_path)}")
    return config_path
