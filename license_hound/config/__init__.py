"""Configuration handling for license-hound."""
from __future__ import annotations

from license_hound.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_hound.config.loader import (
    apply_environment,
    find_config_file,
    load_config,
    load_config_file,
)
from license_hound.models.config import HoundConfig

__all__ = [
    "DEFAULT_CONFIG_NAMES",
    "HoundConfig",
    "apply_environment",
    "find_config_file",
    "get_default_config",
    "load_config",
    "load_config_file",
]
