"""Configuration management class for blue-gardener.

Schema (every key optional): default_platform + catalog_directory +
profiles + interactive
"""

import sys
from pathlib import Path
from typing import Any, TypedDict

import yaml

from blue_gardener.core.errors import ConfigurationError
from blue_gardener.core.platforms import parse_platform
from blue_gardener.output import MessageType, VerbosityLevel, message

KNOWN_KEYS = ("default_platform", "catalog_directory", "profiles", "interactive")


class ProfileEntry(TypedDict, total=False):
    """Type definition for a user-defined profile."""

    name: str
    description: str
    agents: list[str]


class ConfigData(TypedDict, total=False):
    """Type definition for the configuration structure."""

    default_platform: str
    catalog_directory: str
    profiles: dict[str, ProfileEntry]
    interactive: bool


class Config:
    """Manages configuration for blue-gardener."""

    def __init__(self, config_dir: Path | None = None):
        """Initialize the Config manager.

        Args:
            config_dir: Optional custom config directory.
                       Defaults to ~/.blue-gardener
        """
        if config_dir is None:
            config_dir = Path.home() / ".blue-gardener"

        self.config_directory = config_dir
        self.config_file = self.config_directory / "config.yaml"

    def ensure_directories(self) -> None:
        """Create the config directory if it doesn't exist.

        Raises:
            SystemExit: If the directory cannot be created
        """
        try:
            self.config_directory.mkdir(parents=True, exist_ok=True)
            message(f"Ensured config directory exists: {self.config_directory}",
                    MessageType.DEBUG, VerbosityLevel.DEBUG)
        except PermissionError:
            message(
                f"Permission denied creating config directory: {self.config_directory}",
                MessageType.ERROR,
                VerbosityLevel.ALWAYS,
            )
            sys.exit(1)
        except OSError as e:
            message(f"Failed to create config directory: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)

    @staticmethod
    def validate(config: Any) -> list[str]:
        """Validate the configuration structure.

        Collects all validation errors before raising an exception.

        Args:
            config: The configuration dictionary to validate

        Returns:
            List of warnings (non-fatal issues)

        Raises:
            ConfigurationError: If the configuration is invalid, with all errors
        """
        errors: list[str] = []
        warnings: list[str] = []

        if not isinstance(config, dict):
            raise ConfigurationError("Configuration must be a mapping")

        # --- default_platform ---
        if "default_platform" in config:
            value = config["default_platform"]
            if not isinstance(value, str):
                errors.append(f"'default_platform' must be a string, got {type(value).__name__}")
            else:
                try:
                    parse_platform(value)
                except ConfigurationError as e:
                    errors.append(str(e))

        # --- catalog_directory ---
        if "catalog_directory" in config:
            value = config["catalog_directory"]
            if not isinstance(value, str) or not value:
                errors.append("'catalog_directory' must be a non-empty string")
            elif not Path(value).expanduser().is_dir():
                warnings.append(f"catalog_directory '{value}' does not exist; the bundled catalog will be used")

        # --- interactive ---
        if "interactive" in config and not isinstance(config["interactive"], bool):
            errors.append("'interactive' must be true or false")

        # --- profiles ---
        if "profiles" in config:
            profiles = config["profiles"]
            if not isinstance(profiles, dict):
                errors.append("'profiles' must be a dictionary")
            else:
                for profile_id, entry in profiles.items():
                    if not isinstance(profile_id, str) or not profile_id:
                        errors.append(f"Profile id must be a non-empty string, got {profile_id!r}")
                        continue
                    if not isinstance(entry, dict):
                        errors.append(f"Profile '{profile_id}' must be a dictionary")
                        continue

                    for key in ("name", "description"):
                        if key in entry and not isinstance(entry[key], str):
                            errors.append(f"Profile '{profile_id}' '{key}' must be a string")

                    agents = entry.get("agents")
                    if agents is None:
                        errors.append(f"Profile '{profile_id}' is missing required key 'agents'")
                    elif not isinstance(agents, list):
                        errors.append(f"Profile '{profile_id}' 'agents' must be a list")
                    else:
                        for idx, name in enumerate(agents):
                            if not isinstance(name, str) or not name:
                                errors.append(f"Profile '{profile_id}' agents entry {idx} must be a non-empty string")
                        if not agents:
                            warnings.append(f"Profile '{profile_id}' has no agents")

        for key in config:
            if key not in KNOWN_KEYS:
                warnings.append(f"Unknown configuration key '{key}' is ignored")

        if errors:
            raise ConfigurationError(errors)

        return warnings

    def read(self) -> ConfigData:
        """Load the configuration file with error handling.

        A missing or empty file is an empty configuration.

        Returns:
            The loaded and validated configuration dictionary

        Raises:
            SystemExit: If the file cannot be read or the config is invalid
        """
        if not self.exists():
            message(f"No configuration file at {self.config_file}, using defaults",
                    MessageType.DEBUG, VerbosityLevel.DEBUG)
            return {}

        try:
            with open(self.config_file) as f:
                config = yaml.safe_load(f)
            if config is None:
                return {}

            warnings = self.validate(config)
            for warning in warnings:
                message(f"Warning: {warning}", MessageType.WARNING, VerbosityLevel.ALWAYS)

            message(f"Configuration loaded from {self.config_file}", MessageType.DEBUG, VerbosityLevel.DEBUG)
            return config
        except ConfigurationError as e:
            message(f"Invalid configuration - {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)
        except yaml.YAMLError as e:
            message(f"Failed to parse configuration file: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)
        except OSError as e:
            message(f"Failed to read configuration file: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)

    def exists(self) -> bool:
        """Check if the configuration file exists.

        Returns:
            True if config file exists, False otherwise
        """
        return self.config_file.exists()

    def initialize(self) -> bool:
        """Write the starter template if no configuration file exists.

        Returns:
            True if a new file was created
        """
        if self.exists():
            message(f"Configuration already exists: {self.config_file}", MessageType.WARNING, VerbosityLevel.ALWAYS)
            return False

        self.ensure_directories()
        try:
            self.config_file.write_text(self.generate_template())
        except OSError as e:
            message(f"Failed to write configuration file: {e}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            sys.exit(1)
        message(f"Created {self.config_file}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        return True

    @staticmethod
    def generate_template() -> str:
        """Generate a commented YAML template for a new configuration.

        Returns:
            Template string suitable for writing to stdout or a file
        """
        return """# blue-gardener configuration

# Platform used for a new project when none can be detected:
# cursor, claude, codex, copilot, windsurf or opencode
# default_platform: cursor

# Use agents from another directory instead of the bundled catalog
# catalog_directory: ~/my-agents

# Set to false to never prompt (pickers, platform selection)
interactive: true

# Your own install profiles, used with 'blue-gardener add --profile <id>'
profiles:
  review:
    name: Review only
    description: Code review and security checks
    agents:
      - blue-frontend-code-reviewer
      - blue-security-specialist
"""
