"""Custom exceptions for license-hound."""


class LicenseHoundError(Exception):
    """Base exception for all license-hound errors."""

    pass


class NetworkError(LicenseHoundError):
    """Exception raised when a network request fails."""

    pass


class RequestTimeoutError(NetworkError):
    """Exception raised when a network request exceeds its timeout."""

    pass


class ConfigurationError(LicenseHoundError):
    """Exception raised when configuration is invalid."""

    pass


class ManifestError(LicenseHoundError):
    """Exception raised when a dependency manifest cannot be loaded."""

    pass


class ScanError(LicenseHoundError):
    """Exception raised when a scan operation fails."""

    pass
