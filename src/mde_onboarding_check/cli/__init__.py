"""CLI module for the onboarding-check tool."""

from mde_onboarding_check.cli.cli_setup import parse_arguments, setup_environment
from mde_onboarding_check.cli.context import CliContext
from mde_onboarding_check.cli.output_strategies import get_output_strategy

__all__ = [
    'parse_arguments',
    'setup_environment',
    'CliContext',
    'get_output_strategy'
]
