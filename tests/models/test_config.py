"""Tests for the HoundConfig model."""
import pytest
from pydantic import ValidationError

from license_hound.models.config import HoundConfig


class TestHoundConfig:
    """Tests for HoundConfig validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = HoundConfig()

        assert config.concurrency == 10
        assert config.timeout == 10.0
        assert config.api_url == "https://api.github.com"
        assert config.raw_url == "https://raw.githubusercontent.com"
        assert config.branch == "HEAD"
        assert config.github_token is None

    @pytest.mark.parametrize("concurrency", [0, -3])
    def test_concurrency_must_be_positive(self, concurrency: int) -> None:
        """Test concurrency below 1 is rejected."""
        with pytest.raises(ValidationError):
            HoundConfig(concurrency=concurrency)

    def test_timeout_must_be_positive(self) -> None:
        """Test a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            HoundConfig(timeout=0)

    def test_unknown_keys_rejected(self) -> None:
        """Test unknown keys are rejected to catch typos."""
        with pytest.raises(ValidationError):
            HoundConfig.model_validate({"concurency": 4})
