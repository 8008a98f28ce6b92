"""
Test main CLI functionality
"""

from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ragdocs.cli import main as main_module
from ragdocs.cli.main import cli


def test_cli_help():
    """Test main CLI help display"""
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])

    assert result.exit_code == 0
    assert 'Documentation Queue Ingestion' in result.output


def test_cli_version():
    """Test CLI version display"""
    runner = CliRunner()
    result = runner.invoke(cli, ['--version'])

    assert result.exit_code == 0
    assert '1.0.0' in result.output


def test_cli_verbose_flag():
    """Test verbose flag parsing"""
    runner = CliRunner()
    result = runner.invoke(cli, ['--verbose', '--help'])

    assert result.exit_code == 0


def test_cli_subcommands_available():
    """Test that all expected subcommands are available"""
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])

    assert result.exit_code == 0
    assert 'queue' in result.output
    assert 'collection' in result.output


def test_queue_command_help():
    """Test queue command help"""
    runner = CliRunner()
    result = runner.invoke(cli, ['queue', '--help'])

    assert result.exit_code == 0
    assert 'Documentation queue commands' in result.output
    for name in ('run', 'add', 'list', 'clear'):
        assert name in result.output


@pytest.mark.parametrize("verbose", [True, False])
def test_main_prints_traceback_only_when_verbose(verbose):
    """Test unexpected errors honour the parsed verbose flag"""
    def failing_cli(obj):
        obj["verbose"] = verbose
        raise RuntimeError("boom")

    with patch("ragdocs.cli.main.cli", side_effect=failing_cli), \
            patch.object(main_module.console, "print_exception") as print_exception:
        with pytest.raises(SystemExit) as exc_info:
            main_module.main()

    assert exc_info.value.code == 1
    assert print_exception.called is verbose
