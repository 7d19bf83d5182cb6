#!/usr/bin/env python3
"""
Microsoft Defender for Endpoint Onboarding Check CLI Tool

Authenticates against Azure AD, looks up the requested hostnames in the
Defender machine inventory and reports their onboarding status.
"""

from mde_onboarding_check.utils.exceptions import (
    AuthError,
    ConfigurationError,
    OnboardingCheckError,
    QueryError,
    ValidationError
)
from mde_onboarding_check.defenderapi.auth import get_auth_token
from mde_onboarding_check.defenderapi.machines import get_onboarding_state, validate_hostname
from mde_onboarding_check.cli.output_strategies import get_output_strategy
from mde_onboarding_check.cli.cli_setup import parse_arguments, setup_environment
from mde_onboarding_check.cli.context import CliContext
from rich.console import Console
import json
import logging
import sys


logger = logging.getLogger(__name__)


def _handle_error(error, error_type, ctx, exit_code=1):
    """Handle error reporting for both JSON and console output modes."""
    # Without a configured handler the record would reach stderr a second time
    if logger.hasHandlers():
        logger.error("%s: %s", error_type, error)
    if ctx.json_output_mode:
        print(json.dumps({"error": error_type, "message": str(error)}))
    else:
        ctx.console.print(f"[bold red]{error_type}:[/bold red] {error}")
        if ctx.verbose and hasattr(error, '__traceback__'):
            import traceback
            ctx.console.print(traceback.format_exc())
    sys.exit(exit_code)


def _handle_keyboard_interrupt(ctx):
    """Handle KeyboardInterrupt (Ctrl+C) gracefully."""
    if not ctx.json_output_mode:
        ctx.console.print("\n[yellow]Operation cancelled by user[/yellow]")
    sys.exit(130)


def run_check(args, ctx):
    """Authenticate, query the machine inventory and render the results.

    Args:
        args: Parsed command line arguments
        ctx: CLI context with config and credentials populated

    Returns:
        Dictionary of hostname to onboarding status

    Raises:
        AuthError: If no token could be obtained; no query is attempted
        QueryError: If the machine query fails
    """
    api = ctx.config['api']

    # Reject unusable hostnames before the client secret leaves the process
    for hostname in args.hostnames:
        validate_hostname(hostname)

    ctx.log_verbose("Requesting access token...")
    token = get_auth_token(
        ctx.credentials,
        login_url=api['login_url'],
        resource=api['base_url'],
        timeout=api['timeout']
    )
    if not token:
        raise AuthError("Authentication returned an empty token")

    ctx.log_verbose(f"Querying onboarding state for {len(args.hostnames)} hostname(s)...")
    results = get_onboarding_state(args.hostnames, token, api_url=api['base_url'], timeout=api['timeout'])

    output_strategy = get_output_strategy(args.output_format)
    output_strategy.output({'results': results, 'args': args}, ctx)
    return results


def main(argv=None):
    """Main CLI entry point - orchestrates the onboarding check workflow."""
    args = parse_arguments(argv)

    # Minimal context for errors raised before setup completes
    ctx = CliContext(
        console=Console(stderr=True),
        verbose=args.verbose,
        json_output_mode=(args.output_format == 'json')
    )

    try:
        ctx = setup_environment(args)
        run_check(args, ctx)

    except ConfigurationError as e:
        _handle_error(e, "Configuration Error", ctx)

    except ValidationError as e:
        _handle_error(e, "Invalid Hostname", ctx)

    except AuthError as e:
        _handle_error(e, "Authentication Error", ctx)

    except QueryError as e:
        _handle_error(e, "Query Error", ctx)

    except OnboardingCheckError as e:
        _handle_error(e, "Error", ctx)

    except KeyboardInterrupt:
        _handle_keyboard_interrupt(ctx)

    except Exception as e:  # pylint: disable=broad-exception-caught
        _handle_error(e, "Unexpected Error", ctx)


if __name__ == "__main__":
    main()
