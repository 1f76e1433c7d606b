"""License resolvers package."""

from license_hound.resolvers.fetcher import (
    FetchResult,
    FetchStatus,
    GitHubFileFetcher,
)
from license_hound.resolvers.http import HttpGet, HttpResponse, HttpxGet
from license_hound.resolvers.local import list_directory, read_file
from license_hound.resolvers.oracle import (
    GitHubLicenseOracle,
    OracleResult,
    OracleStatus,
)

__all__ = [
    "FetchResult",
    "FetchStatus",
    "GitHubFileFetcher",
    "GitHubLicenseOracle",
    "HttpGet",
    "HttpResponse",
    "HttpxGet",
    "OracleResult",
    "OracleStatus",
    "list_directory",
    "read_file",
]
