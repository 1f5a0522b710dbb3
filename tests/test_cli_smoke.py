"""Smoke tests for CLI commands.

Uses Click's CliRunner to run commands in-process.
"""

import pytest
from click.testing import CliRunner

from statewire import __version__
from statewire.cli.main import cli


@pytest.fixture
def runner():
    """Create a Click CLI test runner."""
    return CliRunner()


@pytest.mark.integration
class TestCLIHelp:
    """Test that all commands have working help text."""

    def test_main_help(self, runner):
        result = runner.invoke(cli, ['--help'])
        assert result.exit_code == 0
        assert 'Statewire' in result.output
        assert 'trace' in result.output

    def test_version_flag(self, runner):
        result = runner.invoke(cli, ['--version'])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_trace_help(self, runner):
        result = runner.invoke(cli, ['trace', '--help'])
        assert result.exit_code == 0
        assert '--rounds' in result.output
        assert '--snapshot' in result.output


@pytest.mark.integration
class TestTraceCommand:
    """Test the event trace output."""

    def test_trace_prints_events(self, runner):
        result = runner.invoke(cli, ['trace', '--rounds', '2'])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            'value player1.score=0',
            'value player2.score=0',
            'commit #1',
            'value player1.score=1',
            'value player2.score=1',
            'commit #2',
        ]

    def test_trace_with_snapshot(self, runner):
        result = runner.invoke(cli, ['trace', '--rounds', '0', '--snapshot'])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            'snapshot_value player1.score=0',
            'snapshot_value player2.score=0',
            "snapshot_value name='Round 1'",
            'snapshot_commit #1',
        ]

    def test_trace_rejects_negative_rounds(self, runner):
        result = runner.invoke(cli, ['trace', '--rounds', '-1'])
        assert result.exit_code != 0
