"""Configuration Pydantic models for license-hound."""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class HoundConfig(BaseModel):
    """Configuration for license-hound.

    Every field has a default so a partial configuration file is valid.
    """

    model_config = {"extra": "forbid"}

    concurrency: int = Field(
        default=10,
        ge=1,
        description="Maximum number of dependencies resolved at the same time.",
    )
    timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds applied to every HTTP request.",
    )
    api_url: str = Field(
        default="https://api.github.com",
        description="Base URL of the GitHub REST API.",
    )
    raw_url: str = Field(
        default="https://raw.githubusercontent.com",
        description="Base URL for raw repository file content.",
    )
    branch: str = Field(
        default="HEAD",
        description="Branch to fetch license files from (HEAD is the default branch).",
    )
    github_username: Optional[str] = Field(
        default=None, description="GitHub user for basic authentication."
    )
    github_password: Optional[str] = Field(
        default=None, description="GitHub password or personal access token."
    )
    github_token: Optional[str] = Field(
        default=None, description="GitHub token sent as a bearer token."
    )
