"""Tests for cli_extensions/platform_commands.py - Platform CLI commands."""

import argparse
from unittest.mock import Mock, patch

import pytest

from blue_gardener.cli_extensions.agent_commands import AgentCommands
from blue_gardener.cli_extensions.context import CommandContext
from blue_gardener.cli_extensions.platform_commands import PlatformCommands
from blue_gardener.core.errors import ConfigurationError
from blue_gardener.core.manifest import read_manifest


@pytest.fixture
def context(project, catalog_dir):
    return CommandContext(project, {"catalog_directory": str(catalog_dir)}, tty=False)


class TestPlatformCommandsAddCliArguments:

    def test_subcommands(self):
        parser = argparse.ArgumentParser()
        subparsers = parser.add_subparsers(dest="command")
        PlatformCommands.add_cli_arguments(subparsers)

        assert parser.parse_args(["platform"]).platform_command is None
        assert parser.parse_args(["platform", "show"]).platform_command == "show"
        args = parser.parse_args(["platform", "set", "codex"])
        assert args.platform_command == "set"
        assert args.platform == "codex"


class TestPlatformCommandsProcessCliCommand:

    @patch("blue_gardener.cli_extensions.platform_commands.PlatformCommands.show")
    def test_default_is_show(self, mock_show, context):
        PlatformCommands.process_cli_command(Mock(platform_command=None), context)
        mock_show.assert_called_once_with(context)

    @patch("blue_gardener.cli_extensions.platform_commands.PlatformCommands.set_platform", return_value=False)
    def test_set_failure_exits(self, mock_set, context):
        with pytest.raises(SystemExit):
            PlatformCommands.process_cli_command(Mock(platform_command="set", platform="codex"), context)
        mock_set.assert_called_once_with(context, "codex")


class TestShow:

    def test_no_platform(self, context, capsys):
        PlatformCommands.show(context)
        out = capsys.readouterr().out
        assert "No platform set for this project." in out
        assert "cursor" in out and "opencode" in out

    def test_detected(self, context, project, capsys):
        (project / ".windsurf").mkdir()
        PlatformCommands.show(context)
        assert "Detected platform: windsurf (no manifest yet)" in capsys.readouterr().out

    def test_from_manifest(self, context, capsys):
        with patch("blue_gardener.cli_extensions.agent_commands.message"):
            AgentCommands.add(context, ["blue-code-reviewer"], platform="claude")
        PlatformCommands.show(context)
        out = capsys.readouterr().out
        assert "Current platform: claude (from manifest)" in out
        assert " * claude" in out


class TestSetPlatform:

    def test_switch(self, context, project, capsys):
        with patch("blue_gardener.cli_extensions.agent_commands.message"):
            AgentCommands.add(context, ["blue-code-reviewer"], platform="cursor")

        assert PlatformCommands.set_platform(context, "codex") is True
        assert "Switched from cursor to codex (1 agent(s) moved)" in capsys.readouterr().out
        assert read_manifest(project)["platform"] == "codex"
        assert (project / "AGENTS.md").exists()

    def test_set_on_new_project(self, context, project, capsys):
        assert PlatformCommands.set_platform(context, "opencode") is True
        assert "Platform set to opencode" in capsys.readouterr().out
        assert read_manifest(project)["platform"] == "opencode"

    def test_same_platform(self, context, capsys):
        PlatformCommands.set_platform(context, "cursor")
        PlatformCommands.set_platform(context, "cursor")
        assert "Project already uses cursor" in capsys.readouterr().out

    def test_unknown_platform(self, context):
        with pytest.raises(ConfigurationError):
            PlatformCommands.set_platform(context, "atom")
