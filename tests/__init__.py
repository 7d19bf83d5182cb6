"""
Test suite for the MDE onboarding check tool.

This package contains tests covering:
- Defender API authentication and machine queries with mocked HTTP
- Configuration and credential resolution
- CLI orchestration and exit behavior
- Output strategies
"""
