"""Evidence and conclusion models produced by license resolution."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from license_hound.models.license import LicenseFamily


class ResolutionState(str, Enum):
    """States of the per-dependency resolution state machine."""

    START = "Start"
    LOCAL_SEARCH = "LocalSearch"
    ORACLE_QUERY = "OracleQuery"
    REMOTE_SEARCH = "RemoteSearch"
    RESOLVED = "Resolved"
    UNRESOLVED = "Unresolved"

    @property
    def is_terminal(self) -> bool:
        """True for Resolved and Unresolved."""
        return self in (ResolutionState.RESOLVED, ResolutionState.UNRESOLVED)


class EvidenceSource(str, Enum):
    """Stage that produced a piece of evidence."""

    LOCAL = "Local"
    ORACLE_API = "OracleAPI"
    REMOTE_FETCH = "RemoteFetch"


class EvidenceOutcome(str, Enum):
    """Outcome of a single resolution attempt."""

    MATCHED = "matched"
    UNRECOGNIZED = "unrecognized"
    NOT_FOUND = "not_found"
    NETWORK_ERROR = "network_error"
    RATE_LIMITED = "rate_limited"
    NO_METADATA = "no_metadata"
    UNACCEPTED_LICENSE = "unaccepted_license"
    LOCAL_PATH_ERROR = "local_path_error"
    READ_ERROR = "read_error"


class Evidence(BaseModel):
    """Record of one resolution attempt, kept whether or not it succeeded."""

    model_config = {"extra": "forbid", "frozen": True}

    source: EvidenceSource = Field(description="Stage that made the attempt")
    locator: str = Field(description="File path, URL, or API field examined")
    byte_length: int = Field(default=0, ge=0, description="Raw bytes examined")
    outcome: EvidenceOutcome = Field(description="What the attempt yielded")
    classification: Optional[LicenseFamily] = Field(
        default=None, description="License family the content was classified as"
    )
    detail: Optional[str] = Field(
        default=None, description="Human-readable explanation of the outcome"
    )

    def to_record(self) -> dict[str, Any]:
        """Serialize to a plain dictionary."""
        return {
            "stage": self.source.value,
            "locator": self.locator,
            "byte_length": self.byte_length,
            "outcome": self.outcome.value,
            "classification": (
                self.classification.value if self.classification else None
            ),
            "detail": self.detail,
        }


class Conclusion(BaseModel):
    """Final license determination for one dependency."""

    model_config = {"extra": "forbid", "frozen": True}

    name: str = Field(description="Dependency name")
    version: str = Field(description="Dependency version")
    repository: Optional[str] = Field(
        default=None, description="Declared source repository URL"
    )
    license: Optional[LicenseFamily] = Field(
        default=None, description="Resolved license family"
    )
    evidence: tuple[Evidence, ...] = Field(
        default=(), description="Every attempt made, in order"
    )
    terminal_stage: ResolutionState = Field(
        description="Last search state visited before concluding"
    )
    source_locator: Optional[str] = Field(
        default=None, description="Where the authoritative license text was found"
    )
    copyright_notice: Optional[str] = Field(
        default=None, description="Copyright line recovered from the license text"
    )

    @model_validator(mode="after")
    def _license_has_supporting_evidence(self) -> Conclusion:
        """A resolved license must be backed by a matched evidence entry."""
        if self.license is not None and not self.supporting_evidence():
            raise ValueError(
                f"License {self.license.value} has no matched evidence supporting it"
            )
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status(self) -> ResolutionState:
        """Resolved or Unresolved."""
        if self.license is None:
            return ResolutionState.UNRESOLVED
        return ResolutionState.RESOLVED

    @property
    def is_resolved(self) -> bool:
        """True if a license family was determined."""
        return self.license is not None

    def supporting_evidence(self) -> list[Evidence]:
        """Evidence entries that classified as the resolved family."""
        if self.license is None:
            return []
        return [
            item
            for item in self.evidence
            if item.outcome == EvidenceOutcome.MATCHED
            and item.classification == self.license
        ]

    def to_record(self) -> dict[str, Any]:
        """Serialize to the report record handed to formatters.

        Returns:
            Dictionary with name, version, license, evidence, terminal
            stage and status.
        """
        return {
            "name": self.name,
            "version": self.version,
            "repository": self.repository,
            "license": self.license.value if self.license else None,
            "status": self.status.value,
            "terminal_stage": self.terminal_stage.value,
            "source_locator": self.source_locator,
            "copyright_notice": self.copyright_notice,
            "evidence": [item.to_record() for item in self.evidence],
        }
