"""Default configuration values for license-hound."""

from __future__ import annotations

from license_hound.models.config import HoundConfig

# Default configuration file names to search for
DEFAULT_CONFIG_NAMES = [".license-hound.yaml", ".license-hound.yml"]


def get_default_config() -> HoundConfig:
    """Get the default configuration.

    Returns:
        HoundConfig with all defaults.
    """
    return HoundConfig()
