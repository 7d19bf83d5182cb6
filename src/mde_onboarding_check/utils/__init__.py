"""Shared utility modules for mde_onboarding_check."""

__all__ = [
    'config',
    'constants',
    'exceptions',
    'logger',
]
