#!/usr/bin/env python

"""Install curated AI agent prompts into a project."""

import argparse
import sys
from pathlib import Path

from blue_gardener import __version__
from blue_gardener.cli_extensions import (
    AgentCommands,
    CommandContext,
    ConfigCommands,
    InteractiveMenu,
    PlatformCommands,
    ProfileCommands,
)
from blue_gardener.config import Config
from blue_gardener.core import BlueGardenerError
from blue_gardener.output import MessageType, VerbosityLevel, get_output, message

# Grouped command help text
COMMAND_GROUPS = """
agent commands:
  add                 Install agents (by id, --profile, or interactively)
  remove              Remove installed agents
  list                List available and installed agents
  sync                Update installed agents to the bundled versions
  repair              Rebuild the manifest from files on disk
  search              Search agents

project commands:
  profiles            List install profiles
  platform            Show or change the target platform

configuration file commands:
  config              Manage the configuration file

Run without a command for an interactive menu.
"""


class GroupedHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Custom formatter that hides the subparser choices from positional arguments."""

    def _metavar_formatter(self, action, default_metavar):
        if action.choices is not None:
            result = action.metavar if action.metavar is not None else ""

            def format_fn(tuple_size):
                if isinstance(result, tuple):
                    return result
                return (result,) * tuple_size

            return format_fn
        return super()._metavar_formatter(action, default_metavar)

    def _format_action(self, action):
        # Subcommands are listed in the epilog
        if isinstance(action, argparse._SubParsersAction):
            return ""
        return super()._format_action(action)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with every command registered."""
    parser = argparse.ArgumentParser(
        prog="blue-gardener",
        description="Install curated AI agent prompts into your project",
        formatter_class=GroupedHelpFormatter,
        epilog=COMMAND_GROUPS,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Increase verbosity (-v, -vv, -vvv)",
    )
    parser.add_argument(
        "--no-color", action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "-C", "--project-dir", type=Path, default=None, metavar="DIR",
        help="Project directory (default: current directory)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # Register all command parsers
    AgentCommands.add_cli_arguments(subparsers)     # add, remove, list, sync, repair, search
    ProfileCommands.add_cli_arguments(subparsers)   # profiles
    PlatformCommands.add_cli_arguments(subparsers)  # platform
    ConfigCommands.add_cli_arguments(subparsers)    # config
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the blue-gardener CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # Configure output system
    output_mgr = get_output()
    output_mgr.verbosity = args.verbose
    output_mgr.use_color = not args.no_color and sys.stdout.isatty()

    message(f"Verbosity level: {args.verbose}", MessageType.DEBUG, VerbosityLevel.DEBUG)
    message(f"Command: {args.command}", MessageType.DEBUG, VerbosityLevel.DEBUG)

    project_dir = (args.project_dir or Path.cwd()).resolve()
    if not project_dir.is_dir():
        message(f"Project directory does not exist: {project_dir}", MessageType.ERROR, VerbosityLevel.ALWAYS)
        sys.exit(1)

    # Initialize configuration manager
    config = Config()
    context = CommandContext(project_dir, config.read())

    try:
        if args.command in AgentCommands.COMMANDS:
            AgentCommands.process_cli_command(args, context)
        elif args.command == "profiles":
            ProfileCommands.process_cli_command(args, context)
        elif args.command == "platform":
            PlatformCommands.process_cli_command(args, context)
        elif args.command == "config":
            ConfigCommands.process_cli_command(args, config, context.catalog.names())
        elif args.command is None:
            if not context.interactive:
                parser.print_help()
                return
            if not InteractiveMenu(context).run():
                sys.exit(1)
        else:
            parser.print_help()
            sys.exit(1)
    except BlueGardenerError as e:
        message(str(e), MessageType.ERROR, VerbosityLevel.ALWAYS)
        sys.exit(1)
    except KeyboardInterrupt:
        message("\nAborted.", MessageType.WARNING, VerbosityLevel.ALWAYS)
        sys.exit(130)


if __name__ == "__main__":
    main()
