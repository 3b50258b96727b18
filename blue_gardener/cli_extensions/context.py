"""State shared by the CLI command classes for one invocation."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path

from blue_gardener.config import ConfigData
from blue_gardener.core import Catalog, Installer, Platform, parse_platform
from blue_gardener.interactive import prompt_for_platform


@dataclass
class CommandContext:
    """Project directory plus the loaded configuration."""

    project_dir: Path
    config_data: ConfigData = field(default_factory=dict)
    tty: bool | None = None

    @cached_property
    def catalog(self) -> Catalog:
        directory = self.config_data.get("catalog_directory")
        if directory:
            path = Path(directory).expanduser()
            if path.is_dir():
                return Catalog(path)
        return Catalog()

    @property
    def user_profiles(self) -> dict:
        return self.config_data.get("profiles") or {}

    @property
    def interactive(self) -> bool:
        """Whether prompts may be shown."""
        if not self.config_data.get("interactive", True):
            return False
        if self.tty is not None:
            return self.tty
        return sys.stdin.isatty() and sys.stdout.isatty()

    def installer(self, platform: str | None = None, prompt: bool = False) -> Installer:
        """Build an installer for the project.

        When the project has no manifest and neither *platform* nor
        detection gives a platform, the configured ``default_platform``
        is used, then (with *prompt*) the user is asked.

        Raises:
            ConfigurationError: If *platform* or ``default_platform`` is unknown
        """
        installer = Installer(self.project_dir, self.catalog, platform)
        if installer.current_platform() is None:
            fallback: Platform | None = None
            if self.config_data.get("default_platform"):
                fallback = parse_platform(self.config_data["default_platform"])
            elif prompt and self.interactive:
                fallback = prompt_for_platform()
            installer.requested_platform = fallback
        return installer
