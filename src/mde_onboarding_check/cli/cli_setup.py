"""CLI setup and initialization functions."""
import argparse
import os
from typing import List, Optional
from dotenv import load_dotenv
from mde_onboarding_check.utils.config import (
    Credentials,
    credentials_from_mapping,
    read_config_from_yaml,
    read_credentials_file
)
from mde_onboarding_check.utils.logger import setup_logging
from mde_onboarding_check.utils.exceptions import ConfigurationError
from mde_onboarding_check.cli.context import CliContext
from rich.console import Console


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments.

    Args:
        argv: Argument list to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="onboarding-check",
        description="Microsoft Defender for Endpoint onboarding check - report the onboarding status of hostnames",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "hostnames",
        nargs="+",
        metavar="HOSTNAME",
        help="Hostname(s) to check"
    )

    # Connection configuration
    parser.add_argument(
        "-c", "--config",
        default="config/config.yaml",
        help="Path to configuration YAML file (default: config/config.yaml)"
    )
    parser.add_argument(
        "--credentials-file",
        help="JSON or YAML file containing tenantId, appId and appSecret (replaces inline credentials)"
    )
    parser.add_argument(
        "--tenant-id",
        help="Azure AD tenant ID (overrides environment and config file)"
    )
    parser.add_argument(
        "--app-id",
        help="Application (client) ID (overrides environment and config file)"
    )
    parser.add_argument(
        "--app-secret",
        help="Application secret (overrides environment and config file)"
    )

    # Output options
    parser.add_argument(
        "--output-format",
        choices=['json', 'text', 'csv'],
        default='json',
        help="Output format (default: json)"
    )
    parser.add_argument(
        "--output-file",
        help="Write output to file instead of stdout"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def load_configuration(args, ctx) -> dict:
    """Load configuration and set up logging.

    Args:
        args: Parsed command line arguments
        ctx: CLI context

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If configuration is invalid
    """
    ctx.log_verbose(f"Loading configuration from {args.config}")
    config = read_config_from_yaml(args.config)
    setup_logging(config, worker_name="onboarding-check")
    return config


def build_credentials(args, config) -> Credentials:
    """Resolve credentials from exactly one source.

    When a credentials file is named (--credentials-file or
    defender_credentials.credentials_file) all three fields come from that
    file. Otherwise each field is resolved inline with priority
    CLI arg > ENV var > config file.

    Args:
        args: Parsed command line arguments
        config: Configuration dictionary

    Returns:
        Credentials instance

    Raises:
        ConfigurationError: If credentials are missing or sources are mixed
    """
    section = config.get('defender_credentials', {})
    inline_args = {
        'tenantId': args.tenant_id,
        'appId': args.app_id,
        'appSecret': args.app_secret,
    }

    credentials_file = args.credentials_file or section.get('credentials_file')
    if credentials_file:
        if any(inline_args.values()):
            raise ConfigurationError(
                "Use either a credentials file or --tenant-id/--app-id/--app-secret, not both"
            )
        return read_credentials_file(credentials_file)

    # Load environment variables from .env file if present
    load_dotenv()

    prefix = section.get('prefix', '')
    env_names = {
        'tenantId': prefix + 'TENANT_ID',
        'appId': prefix + 'APP_ID',
        'appSecret': prefix + 'APP_SECRET',
    }

    values = {}
    for name, arg_value in inline_args.items():
        # Priority: CLI arg > ENV var > config file
        values[name] = arg_value or os.environ.get(env_names[name]) or section.get(name)

    missing = [name for name, value in values.items() if not value]
    if missing:
        hints = ', '.join(f"{name} (env {env_names[name]})" for name in missing)
        raise ConfigurationError(f"No credentials provided for: {hints}. Use CLI flags, environment variables, "
                                 "a credentials file, or configure in YAML")

    return credentials_from_mapping(values, "inline configuration")


def setup_environment(args) -> CliContext:
    """Setup complete environment (config, logging, credentials).

    Args:
        args: Parsed command line arguments

    Returns:
        CliContext with config and credentials populated
    """
    ctx = CliContext(
        console=Console(stderr=True),
        verbose=args.verbose,
        json_output_mode=(args.output_format == 'json')
    )

    ctx.config = load_configuration(args, ctx)
    ctx.credentials = build_credentials(args, ctx.config)
    ctx.log_verbose(f"Using tenant {ctx.credentials.tenant_id}, app {ctx.credentials.app_id}")
    return ctx
