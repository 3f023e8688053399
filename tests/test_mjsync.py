# Released under MIT License.
# Copyright (c) 2025 The mjsync developers

from click.testing import CliRunner

from mjsync_lib import __version__, cli


def test_version():
    result = CliRunner().invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_help_lists_commands():
    result = CliRunner().invoke(cli, ["-h"])

    assert result.exit_code == 0
    for command in ("login", "sync", "watch", "status"):
        assert command in result.output


def test_no_command_prints_help():
    result = CliRunner().invoke(cli, [])

    assert result.exit_code == 0
    assert "Usage" in result.output


def test_subcommand_help():
    result = CliRunner().invoke(cli, ["sync", "--help"])

    assert result.exit_code == 0
    assert "--order" in result.output
