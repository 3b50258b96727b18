"""CLI commands for the project's target platform."""

import argparse
import sys

from blue_gardener.cli_extensions.context import CommandContext
from blue_gardener.core import PLATFORMS, Installer, detect_platform, parse_platform
from blue_gardener.output import MessageType, VerbosityLevel, message


class PlatformCommands:
    """Manages the ``platform`` command."""

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add platform subcommands to the argument parser.

        Args:
            subparsers: The subparsers object to add commands to
        """
        platform_parser = subparsers.add_parser("platform", help="Show or change the target platform")
        platform_subparsers = platform_parser.add_subparsers(dest="platform_command", help="Platform commands")

        # platform show
        platform_subparsers.add_parser(
            "show",
            help="Show the project's platform and the supported platforms",
        )

        # platform set
        set_parser = platform_subparsers.add_parser(
            "set",
            help="Switch the project to another platform",
            description="Move every installed agent to the new platform's file layout and remove the old files.",
        )
        set_parser.add_argument("platform", metavar="PLATFORM", help="Platform identifier (e.g. claude)")

    @classmethod
    def process_cli_command(cls, args: argparse.Namespace, context: CommandContext) -> None:
        """Process platform CLI commands.

        Args:
            args: Parsed command-line arguments
            context: Project and configuration for this run
        """
        if args.platform_command in (None, "show"):
            cls.show(context)
        elif args.platform_command == "set":
            if not cls.set_platform(context, args.platform):
                sys.exit(1)
        else:
            message("Unknown platform command", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)

    @staticmethod
    def show(context: CommandContext) -> None:
        """Show the active platform and list every supported platform."""
        installer = Installer(context.project_dir, context.catalog)
        manifest = installer.read_manifest()
        detected = detect_platform(context.project_dir)

        if manifest is not None:
            current = parse_platform(manifest["platform"])
            message(f"Current platform: {current} (from manifest)", MessageType.INFO, VerbosityLevel.ALWAYS)
        elif detected is not None:
            current = detected
            message(f"Detected platform: {current} (no manifest yet)", MessageType.INFO, VerbosityLevel.ALWAYS)
        else:
            current = None
            message("No platform set for this project.", MessageType.INFO, VerbosityLevel.ALWAYS)

        message("\n=== Supported Platforms ===\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        for platform, spec in PLATFORMS.items():
            mark = "*" if platform == current else " "
            message(f" {mark} {platform:<9} {spec.name}: {spec.description}", MessageType.NORMAL,
                    VerbosityLevel.ALWAYS)
            message(f"      output: {spec.output_path}", MessageType.NORMAL, VerbosityLevel.VERBOSE)
        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    @staticmethod
    def set_platform(context: CommandContext, platform: str) -> bool:
        """Switch the project to *platform*.

        Returns:
            ``True`` if every installed agent was moved

        Raises:
            ConfigurationError: If the platform is unknown
        """
        target = parse_platform(platform)
        installer = Installer(context.project_dir, context.catalog)
        manifest = installer.read_manifest()
        result = installer.switch_platform(target)

        if result.failed:
            for name, error in result.failed.items():
                message(f"  {name}: {error}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            message("Platform not changed.", MessageType.ERROR, VerbosityLevel.ALWAYS)
            return False

        if manifest is None:
            message(f"Platform set to {target}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        elif manifest["platform"] == target.value:
            message(f"Project already uses {target}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        else:
            message(f"Switched from {manifest['platform']} to {target} ({len(result.succeeded)} agent(s) moved)",
                    MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        return True
