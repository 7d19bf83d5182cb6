"""
Shared pytest fixtures and configuration for all tests.

This module provides fixtures for:
- Temporary directories and configuration files
- Credentials and credentials files
- Loaded configuration dictionaries
"""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator
import pytest
import yaml

from mde_onboarding_check.utils.config import Credentials, _load_config_defaults


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory that is cleaned up after the test."""
    temp_path = Path(tempfile.mkdtemp(prefix="mde_test_"))
    try:
        yield temp_path
    finally:
        shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def credentials() -> Credentials:
    """Credentials used across API tests."""
    return Credentials(tenant_id='tenant-123', app_id='app-456', app_secret='s3cr3t')


@pytest.fixture
def credentials_data() -> Dict[str, str]:
    """Credentials in file/config field naming."""
    return {
        'tenantId': 'file-tenant',
        'appId': 'file-app',
        'appSecret': 'file-secret'
    }


@pytest.fixture
def json_credentials_file(temp_dir: Path, credentials_data: Dict[str, str]) -> Path:
    """Write credentials to a JSON file."""
    path = temp_dir / "credentials.json"
    path.write_text(json.dumps(credentials_data), encoding='utf-8')
    return path


@pytest.fixture
def yaml_credentials_file(temp_dir: Path, credentials_data: Dict[str, str]) -> Path:
    """Write credentials to a YAML file."""
    path = temp_dir / "credentials.yaml"
    path.write_text(yaml.safe_dump(credentials_data), encoding='utf-8')
    return path


@pytest.fixture
def config_data(temp_dir: Path) -> Dict[str, Any]:
    """Configuration with inline credentials and logging into temp_dir."""
    return {
        'defender_credentials': {
            'prefix': 'MDE_TEST_',
            'tenantId': 'config-tenant',
            'appId': 'config-app',
            'appSecret': 'config-secret'
        },
        'api': {
            'timeout': 5
        },
        'logging': {
            'file': str(temp_dir / 'logs' / 'test.log'),
            'level': 'DEBUG'
        }
    }


@pytest.fixture
def loaded_config(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """Configuration with defaults applied."""
    return _load_config_defaults(config_data)


@pytest.fixture
def config_file(temp_dir: Path, config_data: Dict[str, Any]) -> Path:
    """Write config_data to a YAML file."""
    path = temp_dir / "config.yaml"
    path.write_text(yaml.safe_dump(config_data), encoding='utf-8')
    return path


@pytest.fixture
def clean_env(monkeypatch):
    """Remove credential environment variables used by the tests."""
    for name in list(os.environ):
        if name.startswith('MDE_'):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch
