"""Output strategies for different display formats."""
from abc import ABC, abstractmethod
from typing import Dict, Any
import csv
import io
import json

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from mde_onboarding_check.utils.constants import STATUS_STYLES, UNKNOWN_DEVICE_STATUS, Style


class OutputStrategy(ABC):
    """Abstract base class for output strategies."""

    @abstractmethod
    def output(self, data: Dict[str, Any], context) -> None:
        """Output data in specific format.

        Args:
            data: Data dictionary to output
            context: CLI context
        """


def _write_output(text: str, output_file, context) -> None:
    """Write rendered text to a file, or print it to stdout."""
    if output_file:
        with open(output_file, 'w', encoding='utf-8') as f:
            f.write(text)
        context.log_verbose(f"Output written to: {output_file}")
    else:
        print(text)


class TextOutputStrategy(OutputStrategy):
    """Strategy for text/table output."""

    def output(self, data: Dict[str, Any], context) -> None:
        """Display onboarding results as a Rich table.

        Args:
            data: Data dictionary containing results and args
            context: CLI context
        """
        results = data['results']
        args = data['args']

        table = Table(title="Defender Onboarding Status")
        table.add_column("Hostname", style=Style.CYAN)
        table.add_column("Onboarding Status")

        for hostname, status in results.items():
            style = STATUS_STYLES.get(status, Style.BOLD)
            table.add_row(escape(hostname), f"[{style}]{escape(status)}[/{style}]")

        unknown = sum(1 for status in results.values() if status == UNKNOWN_DEVICE_STATUS)
        summary = f"{len(results)} host(s), {unknown} without API results"

        if args.output_file:
            with open(args.output_file, 'w', encoding='utf-8') as f:
                file_console = Console(file=f, width=120)
                file_console.print(table)
                file_console.print(summary)
            context.log_verbose(f"Output written to: {args.output_file}")
        else:
            console = Console()
            console.print(table)
            console.print(f"[{Style.DIM}]{summary}[/{Style.DIM}]")


class JsonOutputStrategy(OutputStrategy):
    """Strategy for JSON output."""

    def output(self, data: Dict[str, Any], context) -> None:
        """Display onboarding results as a JSON object.

        Args:
            data: Data dictionary containing results and args
            context: CLI context
        """
        json_str = json.dumps(data['results'], indent=2)
        _write_output(json_str, data['args'].output_file, context)


class CsvOutputStrategy(OutputStrategy):
    """Strategy for CSV output."""

    def output(self, data: Dict[str, Any], context) -> None:
        """Display onboarding results as CSV rows.

        Args:
            data: Data dictionary containing results and args
            context: CLI context
        """
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator='\n')
        writer.writerow(['hostname', 'onboarding_status'])
        for hostname, status in data['results'].items():
            writer.writerow([hostname, status])

        _write_output(buffer.getvalue().rstrip('\n'), data['args'].output_file, context)


def get_output_strategy(format_type: str) -> OutputStrategy:
    """Factory function to get output strategy.

    Args:
        format_type: Output format type ('json', 'text', or 'csv')

    Returns:
        OutputStrategy instance
    """
    strategies = {
        'text': TextOutputStrategy(),
        'json': JsonOutputStrategy(),
        'csv': CsvOutputStrategy()
    }
    return strategies.get(format_type, JsonOutputStrategy())
