"""CLI command extensions for blue-gardener."""

from .agent_commands import AgentCommands
from .config_commands import ConfigCommands
from .context import CommandContext
from .menu import InteractiveMenu
from .platform_commands import PlatformCommands
from .profile_commands import ProfileCommands

__all__ = [
    "AgentCommands",
    "CommandContext",
    "ConfigCommands",
    "InteractiveMenu",
    "PlatformCommands",
    "ProfileCommands",
]
