"""Tests for evidence and conclusion models."""
import pytest
from pydantic import ValidationError

from license_hound.models.conclusion import (
    Conclusion,
    Evidence,
    EvidenceOutcome,
    EvidenceSource,
    ResolutionState,
)
from license_hound.models.license import LicenseFamily


def _matched(locator: str, family: LicenseFamily) -> Evidence:
    return Evidence(
        source=EvidenceSource.LOCAL,
        locator=locator,
        byte_length=1077,
        outcome=EvidenceOutcome.MATCHED,
        classification=family,
    )


class TestResolutionState:
    """Tests for ResolutionState."""

    def test_terminal_states(self) -> None:
        """Test only Resolved and Unresolved are terminal."""
        terminal = {state for state in ResolutionState if state.is_terminal}
        assert terminal == {ResolutionState.RESOLVED, ResolutionState.UNRESOLVED}


class TestEvidence:
    """Tests for Evidence."""

    def test_negative_byte_length_rejected(self) -> None:
        """Test byte_length cannot be negative."""
        with pytest.raises(ValidationError):
            Evidence(
                source=EvidenceSource.LOCAL,
                locator="LICENSE",
                byte_length=-1,
                outcome=EvidenceOutcome.NOT_FOUND,
            )

    def test_to_record(self) -> None:
        """Test Evidence serializes with stage names and outcome values."""
        evidence = _matched("/src/LICENSE", LicenseFamily.MIT)

        assert evidence.to_record() == {
            "stage": "Local",
            "locator": "/src/LICENSE",
            "byte_length": 1077,
            "outcome": "matched",
            "classification": "MIT",
            "detail": None,
        }


class TestConclusion:
    """Tests for Conclusion."""

    def test_resolved_status(self) -> None:
        """Test a conclusion with a license is Resolved."""
        conclusion = Conclusion(
            name="serde",
            version="1.0.0",
            license=LicenseFamily.MIT,
            evidence=(_matched("/src/LICENSE", LicenseFamily.MIT),),
            terminal_stage=ResolutionState.LOCAL_SEARCH,
            source_locator="/src/LICENSE",
        )

        assert conclusion.status == ResolutionState.RESOLVED
        assert conclusion.is_resolved

    def test_resolved_without_evidence_rejected(self) -> None:
        """Test a license cannot be concluded without matched evidence."""
        with pytest.raises(ValidationError, match="no matched evidence"):
            Conclusion(
                name="x",
                version="1",
                license=LicenseFamily.MIT,
                terminal_stage=ResolutionState.LOCAL_SEARCH,
            )

    def test_resolved_with_other_family_evidence_rejected(self) -> None:
        """Test matched evidence must be of the concluded family."""
        with pytest.raises(ValidationError, match="no matched evidence"):
            Conclusion(
                name="x",
                version="1",
                license=LicenseFamily.MIT,
                evidence=(_matched("/src/COPYING", LicenseFamily.MPL_2_0),),
                terminal_stage=ResolutionState.LOCAL_SEARCH,
            )

    def test_unresolved_status(self) -> None:
        """Test a conclusion without a license is Unresolved."""
        conclusion = Conclusion(
            name="x", version="1", terminal_stage=ResolutionState.REMOTE_SEARCH
        )

        assert conclusion.status == ResolutionState.UNRESOLVED
        assert not conclusion.is_resolved
        assert conclusion.supporting_evidence() == []

    def test_supporting_evidence_filters_by_family(self) -> None:
        """Test supporting_evidence keeps only matches of the resolved family."""
        mit = _matched("/src/LICENSE-MIT", LicenseFamily.MIT)
        bsd = _matched("/src/LICENSE-BSD", LicenseFamily.BSD_3_CLAUSE)
        conclusion = Conclusion(
            name="x",
            version="1",
            license=LicenseFamily.MIT,
            evidence=(bsd, mit),
            terminal_stage=ResolutionState.LOCAL_SEARCH,
        )

        assert conclusion.supporting_evidence() == [mit]

    def test_status_in_dump(self) -> None:
        """Test the computed status is part of the serialized model."""
        conclusion = Conclusion(
            name="x", version="1", terminal_stage=ResolutionState.LOCAL_SEARCH
        )

        assert conclusion.model_dump()["status"] == ResolutionState.UNRESOLVED

    def test_to_record(self) -> None:
        """Test the report record lists evidence in order."""
        conclusion = Conclusion(
            name="serde",
            version="1.0.0",
            repository="https://github.com/serde-rs/serde",
            license=LicenseFamily.MIT,
            evidence=(_matched("/src/LICENSE", LicenseFamily.MIT),),
            terminal_stage=ResolutionState.LOCAL_SEARCH,
            source_locator="/src/LICENSE",
            copyright_notice="Copyright (c) 2014 The Serde Developers",
        )

        record = conclusion.to_record()

        assert record["license"] == "MIT"
        assert record["status"] == "Resolved"
        assert record["terminal_stage"] == "LocalSearch"
        assert record["copyright_notice"] == "Copyright (c) 2014 The Serde Developers"
        assert [item["locator"] for item in record["evidence"]] == ["/src/LICENSE"]

    def test_is_immutable(self) -> None:
        """Test conclusions cannot be modified after creation."""
        conclusion = Conclusion(
            name="x", version="1", terminal_stage=ResolutionState.LOCAL_SEARCH
        )

        with pytest.raises(ValidationError):
            conclusion.license = LicenseFamily.MIT  # type: ignore[misc]
