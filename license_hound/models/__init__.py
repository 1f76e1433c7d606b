"""Pydantic data models for license-hound."""

from license_hound.models.conclusion import (
    Conclusion,
    Evidence,
    EvidenceOutcome,
    EvidenceSource,
    ResolutionState,
)
from license_hound.models.config import HoundConfig
from license_hound.models.dependency import Dependency, RepositoryId
from license_hound.models.license import LicenseFamily
from license_hound.models.scan import ScanOptions, ScanResult, Verbosity

__all__ = [
    "Conclusion",
    "Dependency",
    "Evidence",
    "EvidenceOutcome",
    "EvidenceSource",
    "HoundConfig",
    "LicenseFamily",
    "RepositoryId",
    "ResolutionState",
    "ScanOptions",
    "ScanResult",
    "Verbosity",
]
