"""Dependency input models for license-hound."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

# owner/name of a GitHub repository in https, git+https, http, www. and ssh forms
_GITHUB_URL = re.compile(
    r"^(?:git\+)?"
    r"(?:https?://(?:www\.)?github\.com/|git@github\.com:|ssh://git@github\.com/)"
    r"(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+?)(?:\.git)?/?$"
)


class RepositoryId(BaseModel):
    """A repository on a hosting provider (GitHub only)."""

    model_config = {"extra": "forbid", "frozen": True}

    host: str = Field(default="github.com", description="Hosting provider")
    owner: str = Field(description="Repository owner or organization")
    name: str = Field(description="Repository name")

    @classmethod
    def from_url(cls, url: Optional[str]) -> Optional[RepositoryId]:
        """Parse a repository URL.

        Args:
            url: Repository URL as declared by the dependency.

        Returns:
            RepositoryId, or None if the URL is missing or not GitHub-shaped.
        """
        if not url:
            return None
        match = _GITHUB_URL.match(url.strip())
        if match is None:
            return None
        return cls(owner=match.group("owner"), name=match.group("name"))

    @property
    def slug(self) -> str:
        """Return "owner/name"."""
        return f"{self.owner}/{self.name}"


class Dependency(BaseModel):
    """A resolved dependency whose license should be determined."""

    model_config = {"extra": "forbid", "frozen": True}

    name: str = Field(description="Dependency name")
    version: str = Field(description="Dependency version")
    source_path: Optional[Path] = Field(
        default=None, description="Local directory holding the downloaded sources"
    )
    repository: Optional[str] = Field(
        default=None, description="Declared source repository URL"
    )

    @property
    def repository_id(self) -> Optional[RepositoryId]:
        """Parsed repository, or None when there is no usable remote source."""
        return RepositoryId.from_url(self.repository)
