"""Shared constants for the onboarding-check application."""

# Endpoints
DEFAULT_LOGIN_URL = "https://login.microsoftonline.com"
DEFAULT_API_URL = "https://api.securitycenter.microsoft.com"
MACHINES_PATH = "/api/machines/"
DEFAULT_TIMEOUT_SECONDS = 30

# Environment variable prefix for inline credentials
DEFAULT_ENV_PREFIX = "MDE_"

# Status reported for hostnames the API returned nothing for
UNKNOWN_DEVICE_STATUS = "Unknown device. No results from API."

# Onboarding status values reported by the API
STATUS_ONBOARDED = "Onboarded"
STATUS_CAN_BE_ONBOARDED = "CanBeOnboarded"
STATUS_UNSUPPORTED = "Unsupported"
STATUS_INSUFFICIENT_INFO = "InsufficientInfo"


# Rich styles (used by CLI output strategies)
class Style:  # pylint: disable=too-few-public-methods
    """Rich markup style constants."""
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    DIM = "dim"
    CYAN = "cyan"
    BOLD = "bold"


STATUS_STYLES = {
    STATUS_ONBOARDED: Style.GREEN,
    STATUS_CAN_BE_ONBOARDED: Style.YELLOW,
    STATUS_UNSUPPORTED: Style.RED,
    STATUS_INSUFFICIENT_INFO: Style.YELLOW,
    UNKNOWN_DEVICE_STATUS: Style.DIM,
}
