"""CLI context and configuration."""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional
from rich.console import Console

from mde_onboarding_check.utils.config import Credentials


@dataclass
class CliContext:
    """Context object for CLI operations.

    Carries the console, output mode and the configuration values resolved
    at startup so they can be passed explicitly instead of held globally.

    Attributes:
        console: Rich Console instance for output
        verbose: Whether verbose output is enabled
        json_output_mode: Whether JSON output mode is active
        config: Loaded configuration dictionary
        credentials: Credentials resolved from the active source
    """
    console: Console
    verbose: bool = False
    json_output_mode: bool = False
    config: Dict[str, Any] = field(default_factory=dict)
    credentials: Optional[Credentials] = None

    def log_verbose(self, message: str):
        """Print verbose messages if verbose mode is enabled.

        Args:
            message: The message to print
        """
        if self.verbose and not self.json_output_mode:
            self.console.print(f"[dim]{message}[/dim]")
