"""Supported target platforms and their file layout conventions.

The platform set is closed, so dispatch goes through the ``PLATFORMS``
lookup table rather than subclasses.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from blue_gardener.core.catalog import AgentDefinition
from blue_gardener.core.errors import ConfigurationError
from blue_gardener.core.formatters import combined_section, copy_source, opencode_agent, windsurf_rule


class Platform(str, Enum):
    """Target AI tool ecosystems."""

    CURSOR = "cursor"
    CLAUDE = "claude"
    CODEX = "codex"
    COPILOT = "copilot"
    WINDSURF = "windsurf"
    OPENCODE = "opencode"

    def __str__(self) -> str:
        return self.value


# Older names accepted on the command line
PLATFORM_ALIASES = {
    "claude-desktop": Platform.CLAUDE,
    "github-copilot": Platform.COPILOT,
}

COMBINED_PREAMBLE = "# Blue Gardener AI Agents"


@dataclass(frozen=True)
class PlatformSpec:
    """File layout facts for one platform.

    Attributes:
        platform: Platform identifier
        name: Display name
        description: One-line description
        output_path: Agent directory (multi-file) or combined file
            (single-file), relative to the project directory
        manifest_dir: Directory holding the manifest, relative to the
            project directory
        marker: Path whose presence identifies the platform
        single_file: Whether all agents share one output file
        formatter: Renders one agent (a whole file or one section)
        preamble: Heading text written at the top of a new combined file
    """

    platform: Platform
    name: str
    description: str
    output_path: str
    manifest_dir: str
    marker: str
    single_file: bool
    formatter: Callable[[AgentDefinition], str]
    preamble: str = ""


# Table order is also the detection order
PLATFORMS: dict[Platform, PlatformSpec] = {
    spec.platform: spec
    for spec in (
        PlatformSpec(
            platform=Platform.CURSOR,
            name="Cursor",
            description="Cursor IDE with native agent support",
            output_path=".cursor/agents",
            manifest_dir=".cursor/agents",
            marker=".cursor/agents",
            single_file=False,
            formatter=copy_source,
        ),
        PlatformSpec(
            platform=Platform.CLAUDE,
            name="Claude",
            description="Claude subagents in .claude/agents",
            output_path=".claude/agents",
            manifest_dir=".claude/agents",
            marker=".claude/agents",
            single_file=False,
            formatter=copy_source,
        ),
        PlatformSpec(
            platform=Platform.WINDSURF,
            name="Windsurf",
            description="Windsurf IDE with Cascade rules",
            output_path=".windsurf/rules",
            manifest_dir=".windsurf/rules",
            marker=".windsurf",
            single_file=False,
            formatter=windsurf_rule,
        ),
        PlatformSpec(
            platform=Platform.OPENCODE,
            name="OpenCode",
            description="OpenCode with custom agents",
            output_path=".opencode/agents",
            manifest_dir=".opencode/agents",
            marker=".opencode/agents",
            single_file=False,
            formatter=opencode_agent,
        ),
        PlatformSpec(
            platform=Platform.COPILOT,
            name="GitHub Copilot",
            description="GitHub Copilot with custom instructions",
            output_path=".github/copilot-instructions.md",
            manifest_dir=".github",
            marker=".github/copilot-instructions.md",
            single_file=True,
            formatter=combined_section,
            preamble=(
                f"{COMBINED_PREAMBLE}\n\n"
                "This project uses specialized AI agents from Blue Gardener."
            ),
        ),
        PlatformSpec(
            platform=Platform.CODEX,
            name="Codex",
            description="OpenAI Codex with AGENTS.md file",
            output_path="AGENTS.md",
            manifest_dir=".",
            marker="AGENTS.md",
            single_file=True,
            formatter=combined_section,
            preamble=COMBINED_PREAMBLE,
        ),
    )
}


def platform_ids() -> list[str]:
    return [platform.value for platform in PLATFORMS]


def parse_platform(value: str | Platform) -> Platform:
    """Parse a platform identifier or alias.

    Raises:
        ConfigurationError: If *value* names no known platform
    """
    if isinstance(value, Platform):
        return value

    key = str(value).strip().lower()
    if key in PLATFORM_ALIASES:
        return PLATFORM_ALIASES[key]
    try:
        return Platform(key)
    except ValueError:
        raise ConfigurationError(
            f"Unknown platform '{value}'. Available platforms: {', '.join(platform_ids())}"
        ) from None


def get_platform_spec(platform: str | Platform) -> PlatformSpec:
    """Return the layout facts for *platform*.

    Raises:
        ConfigurationError: If the platform is unknown
    """
    return PLATFORMS[parse_platform(platform)]


def detect_platform(project_dir: Path) -> Platform | None:
    """Guess the platform from files already present in *project_dir*."""
    for spec in PLATFORMS.values():
        if (project_dir / spec.marker).exists():
            return spec.platform
    return None
