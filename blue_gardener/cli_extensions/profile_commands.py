"""CLI commands for install profiles."""

import argparse

from blue_gardener.cli_extensions.context import CommandContext
from blue_gardener.core import get_profile, get_profiles
from blue_gardener.output import MessageType, VerbosityLevel, message


class ProfileCommands:
    """Manages the ``profiles`` command."""

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add the profiles command to the argument parser.

        Args:
            subparsers: The subparsers object to add commands to
        """
        profiles_parser = subparsers.add_parser(
            "profiles",
            help="List install profiles",
            description="List bundled and user-defined profiles, or show the agents of one profile. "
            "Install a profile with 'blue-gardener add --profile <id>'.",
        )
        profiles_parser.add_argument("profile", nargs="?", metavar="ID", help="Show the agents of this profile")

    @classmethod
    def process_cli_command(cls, args: argparse.Namespace, context: CommandContext) -> None:
        """Process the profiles command.

        Args:
            args: Parsed command-line arguments
            context: Project and configuration for this run
        """
        if args.profile:
            cls.show_profile(context, args.profile)
        else:
            cls.list_profiles(context)

    @staticmethod
    def list_profiles(context: CommandContext) -> None:
        """List every profile with its agent count."""
        message("\n=== Profiles ===\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        for profile in get_profiles(context.user_profiles):
            custom = " (custom)" if profile.id in context.user_profiles else ""
            message(f"  {profile.id}{custom}: {profile.name} ({len(profile.agent_names)} agents)",
                    MessageType.INFO, VerbosityLevel.ALWAYS)
            if profile.description:
                message(f"      {profile.description}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("\nInstall one with: blue-gardener add --profile <id>\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    @staticmethod
    def show_profile(context: CommandContext, profile_id: str) -> None:
        """Show the agents of one profile.

        Raises:
            ConfigurationError: If the profile does not exist
        """
        profile = get_profile(profile_id, context.user_profiles)
        message(f"\n{profile.name}", MessageType.INFO, VerbosityLevel.ALWAYS)
        if profile.description:
            message(profile.description, MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        for name in profile.agent_names:
            if name in context.catalog:
                message(f"  - {name}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            else:
                message(f"  - {name} (not in catalog)", MessageType.WARNING, VerbosityLevel.ALWAYS)
        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
