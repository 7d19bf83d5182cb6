"""Defender API module for Microsoft Defender for Endpoint interactions."""

from mde_onboarding_check.defenderapi.auth import get_auth_token, token_url
from mde_onboarding_check.defenderapi.machines import (
    build_hostname_filter,
    get_onboarding_state,
    merge_onboarding_results,
    query_machines,
    validate_hostname
)

__all__ = [
    # Authentication
    'get_auth_token',
    'token_url',
    # Machine inventory
    'build_hostname_filter',
    'get_onboarding_state',
    'merge_onboarding_results',
    'query_machines',
    'validate_hostname'
]
