"""GitHub license metadata oracle."""
import base64
import binascii
import json
import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from license_hound.constants import GITHUB_TOKEN_ENV, GITHUB_USERNAME_ENV
from license_hound.exceptions import NetworkError
from license_hound.models.dependency import RepositoryId
from license_hound.resolvers.http import HttpGet, HttpResponse

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# Statuses GitHub uses for missing credentials and exhausted rate limits
AUTH_FAILURE_STATUSES = frozenset({401, 403, 429})


class OracleStatus(str, Enum):
    """Outcome of a license metadata query."""

    REPORTED = "reported"
    NO_METADATA = "no_metadata"
    RATE_LIMITED = "rate_limited"
    NETWORK_ERROR = "network_error"


class OracleResult(BaseModel):
    """What the license metadata endpoint said about a repository."""

    model_config = {"extra": "forbid", "frozen": True}

    status: OracleStatus = Field(description="Query outcome")
    url: str = Field(description="Queried endpoint")
    spdx_id: Optional[str] = Field(
        default=None, description="SPDX identifier reported by the provider"
    )
    download_url: Optional[str] = Field(
        default=None, description="Raw URL of the license file in the repository"
    )
    content: Optional[bytes] = Field(
        default=None, description="Decoded license file content"
    )
    detail: Optional[str] = Field(default=None, description="Failure explanation")


def describe_github_error(response: HttpResponse) -> str:
    """Extract GitHub's error message from a failed response.

    Args:
        response: Non-successful API response.

    Returns:
        The "message" of GitHub's error document with its documentation URL,
        or the bare status code when the body is not such a document.
    """
    try:
        document = json.loads(response.content)
    except ValueError:
        return f"HTTP {response.status_code}"
    if not isinstance(document, dict) or "message" not in document:
        return f"HTTP {response.status_code}"
    message = f"HTTP {response.status_code}: {document['message']}"
    if document.get("documentation_url"):
        message += f" ({document['documentation_url']})"
    return message


def decode_license_content(content: str, encoding: Optional[str]) -> Optional[bytes]:
    """Decode the "content" field of a license document.

    Args:
        content: Encoded file content (GitHub wraps base64 at 60 columns).
        encoding: Declared encoding; only "base64" is supported.

    Returns:
        Decoded bytes, or None if the content cannot be decoded.
    """
    if encoding != "base64":
        return None
    try:
        return base64.b64decode("".join(content.split()), validate=True)
    except (binascii.Error, ValueError):
        return None


class GitHubLicenseOracle:
    """Queries GitHub's repository license endpoint.

    GitHub detects the license of a repository itself and reports it
    together with the license file, so one request yields both an SPDX
    identifier and the authoritative text.
    """

    def __init__(
        self,
        http_get: HttpGet,
        timeout: float = 10.0,
        api_url: str = GITHUB_API_URL,
    ) -> None:
        """Initialize the oracle.

        Args:
            http_get: HTTP capability used for the query.
            timeout: Request timeout in seconds.
            api_url: Base URL of the GitHub REST API.
        """
        self._http_get = http_get
        self._timeout = timeout
        self._api_url = api_url.rstrip("/")

    def license_url(self, repository: RepositoryId) -> str:
        """Return the license metadata endpoint for a repository."""
        return f"{self._api_url}/repos/{repository.owner}/{repository.name}/license"

    async def query(self, repository: RepositoryId) -> OracleResult:
        """Ask GitHub which license a repository carries.

        Issues exactly one request; failures are reported in the result,
        never raised.

        Args:
            repository: Repository to query.

        Returns:
            OracleResult describing the reported license or why none was
            obtained.
        """
        url = self.license_url(repository)
        try:
            response = await self._http_get(url, timeout=self._timeout)
        except NetworkError as e:
            logger.debug("License query for %s failed: %s", repository.slug, e)
            return OracleResult(
                status=OracleStatus.NETWORK_ERROR, url=url, detail=str(e)
            )

        if response.status_code == 404:
            return OracleResult(
                status=OracleStatus.NO_METADATA,
                url=url,
                detail="Repository has no license metadata",
            )

        if response.status_code in AUTH_FAILURE_STATUSES:
            detail = describe_github_error(response)
            logger.warning("Request to %s refused by GitHub: %s", url, detail)
            logger.warning(
                "Set %s or %s to authenticate with GitHub",
                GITHUB_TOKEN_ENV,
                GITHUB_USERNAME_ENV,
            )
            return OracleResult(
                status=OracleStatus.RATE_LIMITED, url=url, detail=detail
            )

        if response.status_code != 200:
            detail = describe_github_error(response)
            logger.warning("Unexpected status from %s: %s", url, detail)
            return OracleResult(
                status=OracleStatus.NETWORK_ERROR, url=url, detail=detail
            )

        return self._parse_document(url, response)

    def _parse_document(self, url: str, response: HttpResponse) -> OracleResult:
        """Parse a successful license document response."""
        try:
            document: Any = json.loads(response.content)
        except ValueError as e:
            return OracleResult(
                status=OracleStatus.NETWORK_ERROR,
                url=url,
                detail=f"Malformed license document: {e}",
            )

        if not isinstance(document, dict):
            return OracleResult(
                status=OracleStatus.NETWORK_ERROR,
                url=url,
                detail="Malformed license document: expected an object",
            )

        license_info = document.get("license")
        spdx_id = None
        if isinstance(license_info, dict):
            spdx_id = license_info.get("spdx_id")
        if not spdx_id:
            return OracleResult(
                status=OracleStatus.NO_METADATA,
                url=url,
                detail="License document does not name a license",
            )

        content: Optional[bytes] = None
        if isinstance(document.get("content"), str):
            content = decode_license_content(
                document["content"], document.get("encoding")
            )

        return OracleResult(
            status=OracleStatus.REPORTED,
            url=url,
            spdx_id=spdx_id,
            download_url=document.get("download_url"),
            content=content,
        )
