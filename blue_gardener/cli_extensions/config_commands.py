"""CLI commands for managing the configuration file."""

import argparse
import sys

from blue_gardener.config import Config
from blue_gardener.output import MessageType, VerbosityLevel, message


class ConfigCommands:
    """Manages configuration-related CLI commands."""

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add config subcommands to the argument parser.

        Args:
            subparsers: The subparsers object to add commands to
        """
        config_parser = subparsers.add_parser("config", help="Manage configuration")
        config_subparsers = config_parser.add_subparsers(dest="config_command", help="Configuration commands")

        # config show
        config_subparsers.add_parser(
            "show",
            help="Display current configuration",
            description="Display the default platform, catalog directory, prompt setting and user profiles.",
        )

        # config validate
        config_subparsers.add_parser(
            "validate",
            help="Validate configuration",
            description="Validate the configuration file and check that profiles only name catalog agents.",
        )

        # config template
        config_subparsers.add_parser(
            "template",
            help="Dump a starter configuration template to stdout",
            description="Print a commented YAML template to stdout that can be redirected to a config file.",
        )

        # config where
        config_subparsers.add_parser(
            "where",
            help="Show configuration file location",
        )

        # config init
        config_subparsers.add_parser(
            "init",
            help="Create the configuration file from the template",
        )

    @staticmethod
    def process_cli_command(args: argparse.Namespace, config: Config, catalog_names=None) -> None:
        """Process config CLI commands.

        Args:
            args: Parsed command-line arguments
            config: Config instance to operate on
            catalog_names: Agent identifiers profiles are checked against
        """
        if args.config_command is None:
            message("Usage: blue-gardener config <command>", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("Available commands:", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("  show       Display current configuration", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("  validate   Validate configuration", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("  template   Dump starter template to stdout", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("  where      Show configuration file location", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            message("  init       Create configuration from the template", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            return
        elif args.config_command == "show":
            ConfigCommands.display(config)
        elif args.config_command == "validate":
            ConfigCommands.validate_all(config, catalog_names or [])
        elif args.config_command == "template":
            ConfigCommands.template()
        elif args.config_command == "where":
            ConfigCommands.show_location(config)
        elif args.config_command == "init":
            config.initialize()
        else:
            message("Unknown config command", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)

    @staticmethod
    def display(config: Config) -> None:
        """Display the current configuration.

        Args:
            config: Config instance
        """
        if not config.exists():
            message("No configuration file found. Run 'blue-gardener config init' to create one.",
                    MessageType.WARNING, VerbosityLevel.ALWAYS)
            return

        config_data = config.read()

        message("\n=== Settings ===\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message(f"  default_platform:  {config_data.get('default_platform', '(not set)')}",
                MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message(f"  catalog_directory: {config_data.get('catalog_directory', '(bundled)')}",
                MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message(f"  interactive:       {str(config_data.get('interactive', True)).lower()}",
                MessageType.NORMAL, VerbosityLevel.ALWAYS)

        profiles = config_data.get("profiles") or {}
        message("\n=== Profiles ===\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        if profiles:
            for profile_id, entry in profiles.items():
                message(f"  {profile_id}: {entry.get('name', profile_id)}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
                for name in entry.get("agents") or []:
                    message(f"    - {name}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        else:
            message("  (none)", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)

    @staticmethod
    def validate_all(config: Config, catalog_names: list[str]) -> None:
        """Validate the configuration and the agents its profiles name.

        Args:
            config: Config instance
            catalog_names: Known agent identifiers
        """
        if not config.exists():
            message("No configuration file found. Run 'blue-gardener config init' to create one.",
                    MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)

        # Structure is validated by read
        config_data = config.read()

        all_valid = True
        known = set(catalog_names)
        for profile_id, entry in (config_data.get("profiles") or {}).items():
            missing = [name for name in entry.get("agents") or [] if name not in known]
            if missing:
                message(f"Profile '{profile_id}' names unknown agents: {', '.join(missing)}",
                        MessageType.ERROR, VerbosityLevel.ALWAYS)
                all_valid = False

        if all_valid:
            message("Configuration is valid!", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        else:
            sys.exit(1)

    @staticmethod
    def template() -> None:
        """Dump a starter configuration template to stdout."""
        print(Config.generate_template())

    @staticmethod
    def show_location(config: Config) -> None:
        """Show the location of the configuration file and directory.

        Args:
            config: Config instance
        """
        message("\nConfiguration Locations:\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        message(f"  Config directory: {config.config_directory}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message(f"  Config file:      {config.config_file}", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        message("\nStatus:", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        if config.config_file.exists():
            message("  Config file exists", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        else:
            message("  Config file does not exist", MessageType.WARNING, VerbosityLevel.ALWAYS)

        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
