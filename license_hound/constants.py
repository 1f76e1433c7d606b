"""Constants for license-hound."""

from license_hound import __version__

# Exit codes
EXIT_SUCCESS = 0  # Every dependency resolved
EXIT_UNRESOLVED = 1  # At least one dependency unresolved
EXIT_ERROR = 2  # Run failed due to error

USER_AGENT = f"license-hound/{__version__}"

# Credential environment variables for the GitHub API
GITHUB_USERNAME_ENV = "LICENSE_HOUND_GITHUB_USERNAME"
GITHUB_PASSWORD_ENV = "LICENSE_HOUND_GITHUB_PASSWORD"
GITHUB_TOKEN_ENV = "LICENSE_HOUND_GITHUB_TOKEN"

# Legal disclaimer
LEGAL_DISCLAIMER = (
    "This tool provides license information for informational purposes only. "
    "It does not constitute legal advice. Consult a qualified attorney for "
    "legal guidance on license compliance."
)

# Short disclaimer for terminal display
LEGAL_DISCLAIMER_SHORT = (
    "This tool provides license information for informational purposes only. "
    "It does not constitute legal advice."
)
