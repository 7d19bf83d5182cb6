"""Custom exceptions for mde_onboarding_check.

These exceptions provide semantic error handling for the failure scenarios
of the authenticate-then-query workflow.
"""


class OnboardingCheckError(Exception):
    """Base exception for all mde_onboarding_check errors.

    All custom exceptions in the project should inherit from this base class.
    """
    pass


class ConfigurationError(OnboardingCheckError):
    """Configuration file or settings error.

    Raised when:
    - Configuration file is invalid
    - Credentials file is missing or unreadable
    - Required credential fields are missing
    - YAML or JSON parsing fails
    """
    pass


class ApiConnectionError(OnboardingCheckError):
    """Error connecting to the Defender API."""
    pass


class AuthError(ApiConnectionError):
    """Error obtaining a bearer token.

    Raised when:
    - Token endpoint is unreachable
    - Token endpoint returns a non-2xx status (invalid credentials)
    - Response body is not JSON
    - access_token field is missing or empty
    """
    pass


class ApiError(OnboardingCheckError):
    """Error from a Defender API response."""
    pass


class QueryError(ApiError):
    """Error querying the machine inventory.

    Raised when:
    - Inventory endpoint is unreachable
    - Inventory endpoint returns a non-2xx status
    - Response body is not JSON or has no value list
    """
    pass


class ValidationError(OnboardingCheckError):
    """Input validation error.

    Raised when a hostname cannot be placed safely in an OData filter.
    """
    pass


__all__ = [
    'OnboardingCheckError',
    'ConfigurationError',
    'ApiConnectionError',
    'AuthError',
    'ApiError',
    'QueryError',
    'ValidationError',
]
