"""OAuth2 client-credentials authentication against Azure AD."""
import logging

import requests

from mde_onboarding_check.utils.config import Credentials
from mde_onboarding_check.utils.constants import (
    DEFAULT_API_URL,
    DEFAULT_LOGIN_URL,
    DEFAULT_TIMEOUT_SECONDS,
)
from mde_onboarding_check.utils.exceptions import AuthError


logger = logging.getLogger(__name__)


def token_url(tenant_id: str, login_url: str = DEFAULT_LOGIN_URL) -> str:
    """Build the token endpoint URL for a tenant."""
    return f"{login_url.rstrip('/')}/{tenant_id}/oauth2/token"


def _error_detail(response) -> str:
    """Extract a readable error description from an Azure AD error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()[:200] if response.text else ''
    if isinstance(body, dict):
        return body.get('error_description') or body.get('error') or ''
    return ''


def get_auth_token(credentials: Credentials, login_url: str = DEFAULT_LOGIN_URL,
                   resource: str = DEFAULT_API_URL, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> str:
    """Exchange tenant/app credentials for a bearer token.

    Sends a single form-encoded POST using the client-credentials grant.
    No retries are attempted.

    Args:
        credentials: Tenant and application credentials
        login_url: Azure AD authority base URL
        resource: Resource (API base URL) the token is requested for
        timeout: Request timeout in seconds

    Returns:
        The access token string

    Raises:
        AuthError: If the endpoint is unreachable, returns a non-2xx status,
            returns a non-JSON body, or omits access_token
    """
    url = token_url(credentials.tenant_id, login_url)
    body = {
        'resource': resource,
        'client_id': credentials.app_id,
        'client_secret': credentials.app_secret,
        'grant_type': 'client_credentials',
    }

    logger.info("Requesting access token for app %s in tenant %s", credentials.app_id, credentials.tenant_id)
    try:
        r = requests.post(url, data=body, timeout=timeout)
    except requests.RequestException as e:
        logger.error("Token request to %s failed: %s", url, e)
        raise AuthError(f"Token endpoint unreachable: {e}") from e

    if not r.ok:
        detail = _error_detail(r)
        logger.error("Token request failed. Status: %s, Detail: %s", r.status_code, detail)
        message = f"Authentication failed with HTTP {r.status_code}"
        raise AuthError(f"{message}: {detail}" if detail else message)

    try:
        payload = r.json()
    except ValueError as e:
        logger.error("Token response is not valid JSON")
        raise AuthError("Token response is not valid JSON") from e

    token = payload.get('access_token') if isinstance(payload, dict) else None
    if not token or not isinstance(token, str):
        logger.error("Token response did not contain an access_token")
        raise AuthError("Token response did not contain an access_token")

    logger.info("Access token acquired")
    return token
