"""Scan-related Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from license_hound.models.conclusion import Conclusion
from license_hound.models.license import LicenseFamily


class Verbosity(Enum):
    """Output verbosity levels."""

    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"


class ScanOptions(BaseModel):
    """Options for a license resolution run."""

    model_config = {"extra": "forbid"}

    format: Literal["terminal", "json"] = Field(
        default="terminal",
        description="Output format for scan results",
    )
    verbosity: Verbosity = Field(
        default=Verbosity.NORMAL,
        description="Output verbosity level (quiet, normal, verbose)",
    )


class ScanResult(BaseModel):
    """Conclusions of a license resolution run."""

    model_config = {"extra": "forbid"}

    conclusions: list[Conclusion] = Field(
        default_factory=list,
        description="One conclusion per dependency, in input order",
    )
    total_dependencies: int = Field(default=0, description="Dependencies scanned")
    unresolved: int = Field(default=0, description="Dependencies left unresolved")

    @property
    def has_issues(self) -> bool:
        """True if any dependency is unresolved."""
        return self.unresolved > 0

    def license_counts(self) -> dict[str, int]:
        """Number of dependencies per resolved license family.

        Returns:
            Counts keyed by SPDX id, in family preference order; families
            with no dependency are omitted.
        """
        counts: dict[str, int] = {}
        for family in LicenseFamily:
            count = sum(1 for c in self.conclusions if c.license == family)
            if count:
                counts[family.value] = count
        return counts

    @classmethod
    def from_conclusions(cls, conclusions: list[Conclusion]) -> ScanResult:
        """Create ScanResult from conclusions.

        Args:
            conclusions: Conclusions in input order.

        Returns:
            ScanResult with calculated totals.
        """
        return cls(
            conclusions=conclusions,
            total_dependencies=len(conclusions),
            unresolved=sum(1 for c in conclusions if not c.is_resolved),
        )
