"""Configuration file discovery and loading for license-hound."""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Mapping

import yaml
from pydantic import ValidationError

from license_hound.config.defaults import DEFAULT_CONFIG_NAMES, get_default_config
from license_hound.constants import (
    GITHUB_PASSWORD_ENV,
    GITHUB_TOKEN_ENV,
    GITHUB_USERNAME_ENV,
)
from license_hound.exceptions import ConfigurationError
from license_hound.models.config import HoundConfig

logger = logging.getLogger(__name__)

# Environment variables that override configuration fields
ENV_OVERRIDES = {
    GITHUB_USERNAME_ENV: "github_username",
    GITHUB_PASSWORD_ENV: "github_password",
    GITHUB_TOKEN_ENV: "github_token",
}


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in the specified directory.

    Searches for `.license-hound.yaml` first, then `.license-hound.yml`.

    Args:
        start_dir: Directory to search. Defaults to current working directory.

    Returns:
        Path to the configuration file if found, None otherwise.
    """
    search_dir = start_dir or Path.cwd()
    for name in DEFAULT_CONFIG_NAMES:
        config_path = search_dir / name
        if config_path.exists():
            return config_path
    return None


def load_config_file(path: Path) -> HoundConfig:
    """Load and validate configuration from a YAML file.

    Args:
        path: Path to the configuration file.

    Returns:
        Validated HoundConfig instance.

    Raises:
        ConfigurationError: If file cannot be read, has invalid YAML,
            or fails Pydantic validation.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(
            f"Cannot read configuration file '{path}': {e}"
        ) from e

    # Handle empty files - return default config
    if not content.strip():
        return get_default_config()

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML syntax in '{path}': {e}") from e

    # Handle YAML that parses to None (empty or just comments)
    if data is None:
        return get_default_config()

    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Invalid configuration in '{path}': "
            f"expected a mapping at root level, got {type(data).__name__}"
        )

    try:
        return HoundConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration in '{path}': {format_validation_errors(e)}"
        ) from e


def format_validation_errors(error: ValidationError) -> str:
    """Format Pydantic validation errors into a readable string.

    Args:
        error: The Pydantic ValidationError.

    Returns:
        Formatted error message string.
    """
    messages: list[str] = []
    for err in error.errors():
        loc = ".".join(str(x) for x in err["loc"]) if err["loc"] else "root"
        messages.append(f"{loc}: {err['msg']}")
    return "; ".join(messages)


def apply_environment(
    config: HoundConfig, environ: Mapping[str, str] | None = None
) -> HoundConfig:
    """Override credentials with values from the environment.

    Args:
        config: Configuration loaded from file or defaults.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        New HoundConfig with environment values applied.
    """
    env = os.environ if environ is None else environ
    updates = {
        field: env[variable]
        for variable, field in ENV_OVERRIDES.items()
        if env.get(variable)
    }
    if not updates:
        return config
    logger.debug("Credentials taken from environment: %s", ", ".join(sorted(updates)))
    return config.model_copy(update=updates)


def load_config(
    config_path: str | None = None, environ: Mapping[str, str] | None = None
) -> HoundConfig:
    """Load configuration from file or use defaults.

    If a config_path is provided, loads from that file.
    Otherwise, searches for a configuration file in the current directory.
    If no file is found, returns default configuration. Credentials from
    the environment override file values.

    Args:
        config_path: Optional path to configuration file.
        environ: Environment mapping. Defaults to os.environ.

    Returns:
        HoundConfig with loaded or default values.

    Raises:
        ConfigurationError: If the configuration file is invalid.
    """
    if config_path is not None:
        config = load_config_file(Path(config_path))
    else:
        discovered = find_config_file()
        config = load_config_file(discovered) if discovered else get_default_config()
    return apply_environment(config, environ)
