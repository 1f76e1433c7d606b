"""HTTP capability used by the remote resolvers.

All network access goes through an ``HttpGet`` callable so resolvers can
be exercised with fixtures and so timeouts and credentials are handled
in one place.
"""
import logging
from typing import Any, Optional, Protocol

import httpx
from pydantic import BaseModel, Field

from license_hound.constants import USER_AGENT
from license_hound.exceptions import NetworkError, RequestTimeoutError
from license_hound.models.config import HoundConfig

logger = logging.getLogger(__name__)


class HttpResponse(BaseModel):
    """Status and body of a completed HTTP request."""

    model_config = {"extra": "forbid", "frozen": True}

    status_code: int = Field(description="HTTP status code")
    content: bytes = Field(default=b"", description="Raw response body")
    url: str = Field(default="", description="Requested URL")


class HttpGet(Protocol):
    """Issue a GET request.

    Implementations return the response for any HTTP status and raise
    NetworkError (RequestTimeoutError on timeouts) when no response was
    received at all.
    """

    async def __call__(self, url: str, *, timeout: float) -> HttpResponse:
        ...


class HttpxGet:
    """HttpGet implementation backed by a shared httpx.AsyncClient."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        username: Optional[str] = None,
        password: Optional[str] = None,
        token: Optional[str] = None,
    ) -> None:
        """Initialize with a client and optional GitHub credentials.

        Args:
            client: Client used for every request.
            username: User for HTTP basic authentication.
            password: Password (or personal access token) for basic auth.
            token: Token sent as a bearer token; takes precedence over
                username/password.
        """
        self._client = client
        self._headers = {"User-Agent": USER_AGENT}
        self._auth: Optional[httpx.BasicAuth] = None
        if token:
            self._headers["Authorization"] = f"Bearer {token}"
        elif username:
            self._auth = httpx.BasicAuth(username, password or "")

    @classmethod
    def from_config(cls, client: httpx.AsyncClient, config: HoundConfig) -> "HttpxGet":
        """Build an HttpxGet carrying the credentials from configuration."""
        return cls(
            client,
            username=config.github_username,
            password=config.github_password,
            token=config.github_token,
        )

    @property
    def authenticated(self) -> bool:
        """True if requests carry credentials."""
        return self._auth is not None or "Authorization" in self._headers

    async def __call__(self, url: str, *, timeout: float) -> HttpResponse:
        """Issue a GET request.

        Args:
            url: Absolute URL to request.
            timeout: Timeout in seconds for the whole request.

        Returns:
            HttpResponse for any status code, after following redirects
            (GitHub answers 301 for renamed and transferred repositories).

        Raises:
            RequestTimeoutError: If the request timed out.
            NetworkError: If the request failed without a response.
        """
        kwargs: dict[str, Any] = {
            "headers": self._headers,
            "timeout": httpx.Timeout(timeout),
            "follow_redirects": True,
        }
        if self._auth is not None:
            kwargs["auth"] = self._auth
        try:
            response = await self._client.get(url, **kwargs)
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(f"Request to {url} timed out: {e}") from e
        except httpx.RequestError as e:
            raise NetworkError(f"Request to {url} failed: {e}") from e

        logger.debug("GET %s -> %d", url, response.status_code)
        return HttpResponse(
            status_code=response.status_code, content=response.content, url=url
        )
