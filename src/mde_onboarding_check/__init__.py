"""
MDE Onboarding Check - Microsoft Defender for Endpoint onboarding status tool.

This package authenticates against Azure AD with the client-credentials
grant and reports whether hostnames are onboarded in Defender for Endpoint.
"""

import importlib.metadata

try:
    __version__ = importlib.metadata.version("mde-onboarding-check")
except importlib.metadata.PackageNotFoundError:
    # Running from a source checkout without an install
    __version__ = "unknown"

__license__ = "MIT"

__all__ = ['__version__', '__license__']
