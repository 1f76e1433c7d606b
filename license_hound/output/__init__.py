"""Output formatters for license-hound."""

from license_hound.output.conclusion_json import ConclusionJsonFormatter
from license_hound.output.terminal import TerminalFormatter

__all__ = [
    "ConclusionJsonFormatter",
    "TerminalFormatter",
]
