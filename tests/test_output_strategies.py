"""Tests for output strategies."""
import pytest
import csv
import json
from argparse import Namespace
from io import StringIO
from unittest.mock import Mock

from mde_onboarding_check.cli.output_strategies import (
    OutputStrategy,
    TextOutputStrategy,
    JsonOutputStrategy,
    CsvOutputStrategy,
    get_output_strategy
)
from mde_onboarding_check.utils.constants import UNKNOWN_DEVICE_STATUS


@pytest.fixture
def mock_context():
    """Create a mock CLI context."""
    context = Mock()
    context.console = Mock()
    context.verbose = True
    context.json_output_mode = False
    return context


@pytest.fixture
def sample_results():
    """Onboarding results as returned by get_onboarding_state."""
    return {
        'host-a': 'Onboarded',
        'host-b': UNKNOWN_DEVICE_STATUS,
        'host-c': 'CanBeOnboarded'
    }


def make_data(results, output_file=None):
    return {'results': results, 'args': Namespace(output_file=output_file)}


class TestGetOutputStrategy:
    """Test the strategy factory."""

    @pytest.mark.parametrize('format_type, expected', [
        ('json', JsonOutputStrategy),
        ('text', TextOutputStrategy),
        ('csv', CsvOutputStrategy),
        ('unknown', JsonOutputStrategy),
    ])
    def test_factory(self, format_type, expected):
        """Test format names map to strategies."""
        strategy = get_output_strategy(format_type)

        assert isinstance(strategy, expected)
        assert isinstance(strategy, OutputStrategy)


class TestJsonOutputStrategy:
    """Test JSON rendering."""

    def test_prints_formatted_json(self, sample_results, mock_context, capsys):
        """Test indented JSON on stdout with keys in order."""
        JsonOutputStrategy().output(make_data(sample_results), mock_context)

        out = capsys.readouterr().out
        assert json.loads(out) == sample_results
        assert '\n  "host-a": "Onboarded"' in out
        assert out.index('host-a') < out.index('host-b') < out.index('host-c')

    def test_empty_results(self, mock_context, capsys):
        """Test empty mapping renders as an empty object."""
        JsonOutputStrategy().output(make_data({}), mock_context)

        assert json.loads(capsys.readouterr().out) == {}

    def test_writes_output_file(self, sample_results, mock_context, temp_dir, capsys):
        """Test --output-file writes instead of printing."""
        path = temp_dir / 'out.json'

        JsonOutputStrategy().output(make_data(sample_results, str(path)), mock_context)

        assert json.loads(path.read_text(encoding='utf-8')) == sample_results
        assert capsys.readouterr().out == ''
        mock_context.log_verbose.assert_called_once()


class TestCsvOutputStrategy:
    """Test CSV rendering."""

    def test_prints_rows(self, sample_results, mock_context, capsys):
        """Test header plus one row per host."""
        CsvOutputStrategy().output(make_data(sample_results), mock_context)

        rows = list(csv.reader(StringIO(capsys.readouterr().out)))
        assert rows == [
            ['hostname', 'onboarding_status'],
            ['host-a', 'Onboarded'],
            ['host-b', UNKNOWN_DEVICE_STATUS],
            ['host-c', 'CanBeOnboarded'],
        ]

    def test_writes_output_file(self, sample_results, mock_context, temp_dir):
        """Test CSV file output."""
        path = temp_dir / 'out.csv'

        CsvOutputStrategy().output(make_data(sample_results, str(path)), mock_context)

        rows = list(csv.reader(StringIO(path.read_text(encoding='utf-8'))))
        assert rows[0] == ['hostname', 'onboarding_status']
        assert len(rows) == 4


class TestTextOutputStrategy:
    """Test Rich table rendering."""

    def test_table_lists_hosts(self, sample_results, mock_context, capsys):
        """Test hostnames, statuses and summary appear on stdout."""
        TextOutputStrategy().output(make_data(sample_results), mock_context)

        out = capsys.readouterr().out
        for hostname in sample_results:
            assert hostname in out
        assert 'Onboarded' in out
        assert '3 host(s), 1 without API results' in out

    def test_writes_output_file(self, sample_results, mock_context, temp_dir):
        """Test the table written to a file."""
        path = temp_dir / 'out.txt'

        TextOutputStrategy().output(make_data(sample_results, str(path)), mock_context)

        content = path.read_text(encoding='utf-8')
        assert 'host-c' in content
        assert 'CanBeOnboarded' in content
