"""Remote license file fetcher for GitHub repositories."""
import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from license_hound.exceptions import NetworkError
from license_hound.models.dependency import RepositoryId
from license_hound.resolvers.http import HttpGet
from license_hound.resolvers.oracle import AUTH_FAILURE_STATUSES

logger = logging.getLogger(__name__)

GITHUB_RAW_URL = "https://raw.githubusercontent.com"

# raw.githubusercontent.com resolves HEAD to the default branch
DEFAULT_BRANCH = "HEAD"

NOT_FOUND_STATUSES = frozenset({404, 410})


class FetchStatus(str, Enum):
    """Outcome of a single file retrieval."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"


class FetchResult(BaseModel):
    """Result of retrieving one file from a repository."""

    model_config = {"extra": "forbid", "frozen": True}

    status: FetchStatus = Field(description="Retrieval outcome")
    url: str = Field(description="Requested URL")
    content: Optional[bytes] = Field(default=None, description="File bytes")
    detail: Optional[str] = Field(default=None, description="Failure explanation")


class GitHubFileFetcher:
    """Retrieves files from the default branch of GitHub repositories."""

    def __init__(
        self,
        http_get: HttpGet,
        timeout: float = 10.0,
        raw_url: str = GITHUB_RAW_URL,
        branch: str = DEFAULT_BRANCH,
    ) -> None:
        """Initialize the fetcher.

        Args:
            http_get: HTTP capability used for retrievals.
            timeout: Request timeout in seconds.
            raw_url: Base URL serving raw repository content.
            branch: Branch to read from.
        """
        self._http_get = http_get
        self._timeout = timeout
        self._raw_url = raw_url.rstrip("/")
        self._branch = branch

    def file_url(self, repository: RepositoryId, filename: str) -> str:
        """Return the raw content URL of a file in a repository."""
        return (
            f"{self._raw_url}/{repository.owner}/{repository.name}/"
            f"{self._branch}/{filename}"
        )

    async def fetch(self, repository: RepositoryId, filename: str) -> FetchResult:
        """Retrieve one file.

        Args:
            repository: Repository to read from.
            filename: Path of the file inside the repository.

        Returns:
            FetchResult with the file bytes on HTTP 200, otherwise the
            reason the file could not be retrieved.
        """
        url = self.file_url(repository, filename)
        try:
            response = await self._http_get(url, timeout=self._timeout)
        except NetworkError as e:
            logger.debug("Fetching %s failed: %s", url, e)
            return FetchResult(
                status=FetchStatus.NETWORK_ERROR, url=url, detail=str(e)
            )

        if response.status_code == 200:
            return FetchResult(
                status=FetchStatus.FOUND, url=url, content=response.content
            )
        if response.status_code in NOT_FOUND_STATUSES:
            return FetchResult(
                status=FetchStatus.NOT_FOUND,
                url=url,
                detail=f"HTTP {response.status_code}",
            )
        if response.status_code in AUTH_FAILURE_STATUSES:
            logger.warning("Request to %s forbidden by GitHub", url)
            return FetchResult(
                status=FetchStatus.RATE_LIMITED,
                url=url,
                detail=f"HTTP {response.status_code}",
            )

        logger.warning("Unexpected status %d from %s", response.status_code, url)
        return FetchResult(
            status=FetchStatus.NETWORK_ERROR,
            url=url,
            detail=f"HTTP {response.status_code}",
        )
