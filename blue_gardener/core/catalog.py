"""Agent catalog: the bundled markdown agent definitions.

The catalog is a directory of ``<category>/<agent-id>.md`` files with
YAML front-matter ``{name, description, category, tags}``.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from blue_gardener.core.errors import NotFoundError
from blue_gardener.core.markdown import split_frontmatter
from blue_gardener.output import MessageType, VerbosityLevel, message

# Every bundled agent identifier starts with this prefix
AGENT_PREFIX = "blue-"

CATEGORIES = (
    "orchestrator",
    "development",
    "quality",
    "infrastructure",
    "configuration",
    "blockchain",
)


def default_catalog_directory() -> Path:
    """Return the directory of agents bundled with the package."""
    return Path(__file__).resolve().parent.parent / "agents"


def display_name(name: str) -> str:
    """Human-readable heading for an agent identifier.

    ``blue-react-developer`` becomes ``Blue React Developer``.
    """
    return " ".join(part.capitalize() for part in name.split("-") if part)


def name_from_display(heading: str) -> str:
    """Inverse of :func:`display_name`."""
    return "-".join(heading.lower().split())


def is_agent_name(name: str) -> bool:
    """Return ``True`` if *name* follows the agent naming convention."""
    return name.startswith(AGENT_PREFIX) and len(name) > len(AGENT_PREFIX)


@dataclass(frozen=True)
class AgentDefinition:
    """A single agent prompt from the catalog."""

    name: str
    description: str
    category: str
    tags: tuple[str, ...]
    body: str
    content: str
    source_path: Path | None = field(default=None, compare=False)

    @property
    def display_name(self) -> str:
        return display_name(self.name)

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match on name, description, category and tags."""
        needle = query.lower()
        return (
            needle in self.name.lower()
            or needle in self.description.lower()
            or needle in self.category.lower()
            or any(needle in tag.lower() for tag in self.tags)
        )


def _as_tags(value) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return tuple(t.strip() for t in value.split(",") if t.strip())
    return tuple(str(t).strip() for t in value if str(t).strip())


def parse_agent(text: str, path: Path | None = None, category: str = "") -> AgentDefinition:
    """Build an AgentDefinition from the text of an agent file.

    Args:
        text: Full markdown source
        path: Source file, used for the name fallback
        category: Category to use when the front-matter has none

    Returns:
        The parsed agent

    Raises:
        yaml.YAMLError: If the front-matter is not valid YAML
        ValueError: If the front-matter is not a mapping
    """
    meta, body = split_frontmatter(text)
    name = str(meta.get("name") or (path.stem if path is not None else "")).strip()
    if not name:
        raise ValueError("agent has no name")

    return AgentDefinition(
        name=name,
        description=str(meta.get("description") or "").strip(),
        category=str(meta.get("category") or category).strip(),
        tags=_as_tags(meta.get("tags")),
        body=body.strip(),
        content=text,
        source_path=path,
    )


class Catalog:
    """Read-only view over a directory of agent definitions."""

    def __init__(self, directory: Path | None = None):
        """Initialize the catalog.

        Args:
            directory: Catalog root. Defaults to the bundled agents.
        """
        if directory is None:
            directory = default_catalog_directory()
        self.directory = directory
        self._agents: dict[str, AgentDefinition] | None = None

    def _load(self) -> dict[str, AgentDefinition]:
        agents: dict[str, AgentDefinition] = {}

        if not self.directory.is_dir():
            message(f"Agent catalog not found: {self.directory}", MessageType.WARNING, VerbosityLevel.ALWAYS)
            return agents

        for path in sorted(self.directory.rglob("*.md")):
            category = path.parent.name if path.parent != self.directory else ""
            try:
                agent = parse_agent(path.read_text(encoding="utf-8"), path, category)
            except (OSError, ValueError, yaml.YAMLError) as exc:
                message(f"Skipping unreadable agent {path}: {exc}", MessageType.WARNING, VerbosityLevel.ALWAYS)
                continue

            if agent.name in agents:
                message(
                    f"Duplicate agent '{agent.name}' in {path}, keeping {agents[agent.name].source_path}",
                    MessageType.WARNING,
                    VerbosityLevel.ALWAYS,
                )
                continue
            agents[agent.name] = agent

        message(f"Loaded {len(agents)} agent(s) from {self.directory}", MessageType.DEBUG, VerbosityLevel.DEBUG)
        return dict(sorted(agents.items()))

    @property
    def agents(self) -> dict[str, AgentDefinition]:
        if self._agents is None:
            self._agents = self._load()
        return self._agents

    def __contains__(self, name: object) -> bool:
        return name in self.agents

    def __iter__(self) -> Iterator[AgentDefinition]:
        return iter(self.agents.values())

    def __len__(self) -> int:
        return len(self.agents)

    def names(self) -> list[str]:
        return list(self.agents)

    def get(self, name: str) -> AgentDefinition:
        """Look up an agent by identifier.

        Raises:
            NotFoundError: If the identifier is not in the catalog
        """
        try:
            return self.agents[name]
        except KeyError:
            raise NotFoundError(name, "Run 'blue-gardener list' to see available agents") from None

    def by_category(self) -> dict[str, list[AgentDefinition]]:
        """Group agents by category, known categories first."""
        groups: dict[str, list[AgentDefinition]] = {}
        for agent in self:
            groups.setdefault(agent.category or "uncategorized", []).append(agent)

        order = {name: idx for idx, name in enumerate(CATEGORIES)}
        return dict(sorted(groups.items(), key=lambda item: (order.get(item[0], len(order)), item[0])))

    def search(self, query: str) -> list[AgentDefinition]:
        """Return agents matching *query* (see :meth:`AgentDefinition.matches`)."""
        query = query.strip()
        if not query:
            return []
        return [agent for agent in self if agent.matches(query)]
