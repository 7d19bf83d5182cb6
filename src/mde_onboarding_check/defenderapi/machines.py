import logging
from typing import Dict, Iterable, List, Sequence, Tuple

import requests

from mde_onboarding_check.utils.constants import (
    DEFAULT_API_URL,
    DEFAULT_TIMEOUT_SECONDS,
    MACHINES_PATH,
    UNKNOWN_DEVICE_STATUS,
)
from mde_onboarding_check.utils.exceptions import QueryError, ValidationError


logger = logging.getLogger(__name__)

# Characters that cannot appear inside a double-quoted OData string literal
_FORBIDDEN_CHARS = ('"', '\\')


def validate_hostname(hostname: str) -> str:
    """
    Check that a hostname can be quoted safely inside the OData filter.

    Args:
        hostname: Hostname as given on the command line

    Returns:
        The hostname, unchanged

    Raises:
        ValidationError: If the hostname is empty or contains quote,
            backslash or control characters
    """
    if not isinstance(hostname, str) or not hostname.strip():
        raise ValidationError(f"Invalid hostname {hostname!r}: hostname must be a non-empty string")

    if any(c in hostname for c in _FORBIDDEN_CHARS) or any(ord(c) < 32 or ord(c) == 127 for c in hostname):
        raise ValidationError(f"Invalid hostname {hostname!r}: quotes, backslashes and control characters are not allowed")

    return hostname


def build_hostname_filter(hostnames: Sequence[str]) -> str:
    """
    Build the OData filter selecting machines by DNS name.

    Hostnames are double-quoted and comma-joined in input order, e.g.
    computerDnsName in ("host-a","host-b")

    Raises:
        ValidationError: If any hostname is rejected by validate_hostname
    """
    quoted = ','.join(f'"{validate_hostname(h)}"' for h in hostnames)
    return f"computerDnsName in ({quoted})"


def merge_onboarding_results(machines: Iterable[dict], hostnames: Sequence[str]) -> Dict[str, str]:
    """
    Reconcile API machine records with the requested hostnames.

    Builds a status mapping from the records, then assigns each requested
    hostname the status of the record with the same DNS name (compared
    case-insensitively), or UNKNOWN_DEVICE_STATUS when there is none.
    Records matching no requested hostname are kept under their own name.
    The result is sorted by hostname.

    Args:
        machines: Machine records from the API's value array
        hostnames: Hostnames originally requested

    Returns:
        Dictionary of hostname to onboarding status, in sorted key order
    """
    returned: Dict[str, Tuple[str, str]] = {}

    for machine in machines:
        name = machine.get('computerDnsName') if isinstance(machine, dict) else None
        if not name:
            logger.debug("Skipping machine record without computerDnsName: %s", machine)
            continue
        # Several records for one name: the last one returned wins
        returned[name.lower()] = (name, machine.get('onboardingStatus') or UNKNOWN_DEVICE_STATUS)

    results: Dict[str, str] = {}
    requested = set()
    for hostname in hostnames:
        requested.add(hostname.lower())
        match = returned.get(hostname.lower())
        results[hostname] = match[1] if match else UNKNOWN_DEVICE_STATUS

    for key, (name, status) in returned.items():
        if key not in requested:
            results[name] = status

    return dict(sorted(results.items()))


def _request_headers(token: str) -> Dict[str, str]:
    return {
        'Authorization': f"Bearer {token}",
        'Accept': 'application/json',
        'Content-Type': 'application/json',
    }


def query_machines(hostnames: Sequence[str], token: str, api_url: str = DEFAULT_API_URL,
                   timeout: float = DEFAULT_TIMEOUT_SECONDS) -> List[dict]:
    """
    Fetch the machine records matching the given hostnames.

    Issues a single GET against the machines endpoint. No pagination or
    retries.

    Returns:
        List of machine records from the response's value array

    Raises:
        ValidationError: If a hostname cannot be placed in the filter
        QueryError: If the endpoint is unreachable, returns a non-2xx status,
            or returns a body without a value list
    """
    odata_filter = build_hostname_filter(hostnames)
    url = f"{api_url.rstrip('/')}{MACHINES_PATH}"

    logger.info("Querying %s hostnames from %s", len(hostnames), url)
    logger.debug("Filter used: %s", odata_filter)

    try:
        r = requests.get(url, params={'$filter': odata_filter}, headers=_request_headers(token), timeout=timeout)
    except requests.RequestException as e:
        logger.error("Machine query to %s failed: %s", url, e)
        raise QueryError(f"Machines endpoint unreachable: {e}") from e

    if not r.ok:
        logger.error("Failed to query machines. Status: %s, Body: %s", r.status_code, r.text)
        raise QueryError(f"Machine query failed with HTTP {r.status_code}")

    try:
        body = r.json()
    except ValueError as e:
        logger.error("Machine query response is not valid JSON")
        raise QueryError("Machine query response is not valid JSON") from e

    machines = body.get('value') if isinstance(body, dict) else None
    if not isinstance(machines, list):
        logger.error("Machine query response has no value list")
        raise QueryError("Machine query response has no value list")

    logger.info("API returned %s machine records", len(machines))
    return machines


def get_onboarding_state(hostnames: Sequence[str], token: str, api_url: str = DEFAULT_API_URL,
                         timeout: float = DEFAULT_TIMEOUT_SECONDS) -> Dict[str, str]:
    """
    Report the onboarding status of each requested hostname.

    Hostnames the API has no record for are reported as
    UNKNOWN_DEVICE_STATUS. Duplicated hostnames collapse to one entry. An
    empty hostname list returns an empty mapping without calling the API.

    Args:
        hostnames: Hostnames to look up
        token: Bearer token from get_auth_token
        api_url: Defender API base URL
        timeout: Request timeout in seconds

    Returns:
        Dictionary of hostname to onboarding status, in sorted key order

    Raises:
        ValidationError: If a hostname cannot be placed in the filter
        QueryError: If the query fails; no partial results are returned
    """
    if not hostnames:
        logger.info("No hostnames requested, skipping machine query")
        return {}

    machines = query_machines(hostnames, token, api_url=api_url, timeout=timeout)
    return merge_onboarding_results(machines, hostnames)
