"""Configuration loading for onboarding-check.

The application configuration lives in a YAML file. Credentials are held in
an immutable :class:`Credentials` value that is built once at startup and
passed explicitly to the API functions.
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

import yaml

from mde_onboarding_check.utils.constants import (
    DEFAULT_API_URL,
    DEFAULT_ENV_PREFIX,
    DEFAULT_LOGIN_URL,
    DEFAULT_TIMEOUT_SECONDS,
)
from mde_onboarding_check.utils.exceptions import ConfigurationError


logger = logging.getLogger(__name__)

# Field names used by credentials files and the YAML credentials section
CREDENTIAL_FIELDS = ('tenantId', 'appId', 'appSecret')


@dataclass(frozen=True)
class Credentials:
    """Tenant and application credentials for the client-credentials grant.

    Attributes:
        tenant_id: Azure AD tenant identifier
        app_id: Application (client) identifier
        app_secret: Application secret
    """
    tenant_id: str
    app_id: str
    app_secret: str = field(repr=False)


def _load_config_defaults(config):
    # Ensure we have a dict to work with
    if not isinstance(config, dict):
        config = {}

    # Credential defaults (keeps keys present)
    config.setdefault('defender_credentials', {})
    dc = config['defender_credentials']
    dc['prefix'] = dc.get('prefix', DEFAULT_ENV_PREFIX)
    for name in CREDENTIAL_FIELDS:
        dc[name] = dc.get(name) or ''
    dc['credentials_file'] = dc.get('credentials_file') or ''

    # API endpoint defaults
    config.setdefault('api', {})
    api = config['api']
    api['login_url'] = api.get('login_url') or DEFAULT_LOGIN_URL
    api['base_url'] = api.get('base_url') or DEFAULT_API_URL
    api['timeout'] = api.get('timeout', DEFAULT_TIMEOUT_SECONDS)

    # Logging defaults
    config.setdefault('logging', {})
    log = config['logging']
    log['file'] = log.get('file', 'logs/app.log')
    log['level'] = log.get('level', 'INFO')

    return config


def read_config_from_yaml(config_file="config/config.yaml"):
    """Read the YAML configuration and fill in defaults.

    A missing file yields the default configuration. A file that cannot be
    parsed raises ConfigurationError.
    """
    try:
        with open(config_file, 'r', encoding='utf-8') as file:
            config = yaml.safe_load(file) or {}
    except FileNotFoundError:
        config = {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Error reading configuration from {config_file}: {e}") from e
    return _load_config_defaults(config)


def credentials_from_mapping(data: Mapping[str, Any], source: str) -> Credentials:
    """Build Credentials from a mapping keyed by tenantId/appId/appSecret.

    Args:
        data: Mapping holding the three credential fields
        source: Description of where the mapping came from, used in errors

    Returns:
        Credentials instance

    Raises:
        ConfigurationError: If any field is missing or empty
    """
    missing = [name for name in CREDENTIAL_FIELDS if not data.get(name)]
    if missing:
        raise ConfigurationError(f"Missing credential field(s) in {source}: {', '.join(missing)}")

    return Credentials(
        tenant_id=str(data['tenantId']),
        app_id=str(data['appId']),
        app_secret=str(data['appSecret']),
    )


def read_credentials_file(path) -> Credentials:
    """Read credentials from a JSON or YAML file.

    Files ending in .json are parsed as JSON, everything else as YAML.

    Args:
        path: Path to the credentials file

    Returns:
        Credentials instance

    Raises:
        ConfigurationError: If the file is missing, unparseable or incomplete
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() == '.json':
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Credentials file not found: {path}") from e
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Failed to read credentials file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Credentials file {path} must contain a mapping of {', '.join(CREDENTIAL_FIELDS)}")

    logger.info("Loaded credentials from file %s", path)
    return credentials_from_mapping(data, str(path))
