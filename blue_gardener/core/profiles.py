"""Install profiles: named presets of agents.

Profiles are opinionated defaults so a team does not have to pick every
agent by hand.  User profiles from the configuration file are merged over
the bundled ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from blue_gardener.core.errors import ConfigurationError

ORCHESTRATORS = (
    "blue-feature-specification-analyst",
    "blue-architecture-designer",
    "blue-refactoring-strategy-planner",
    "blue-app-quality-gate-keeper",
    "blue-implementation-review-coordinator",
)


@dataclass(frozen=True)
class AgentProfile:
    """A named list of agent identifiers."""

    id: str
    name: str
    description: str
    agent_names: tuple[str, ...]


AGENT_PROFILES: tuple[AgentProfile, ...] = (
    AgentProfile(
        id="core",
        name="Core (full-stack default)",
        description="Broad default for most repos: orchestrators, common frontend and "
        "backend specialists, reviews and tests.",
        agent_names=ORCHESTRATORS + (
            "blue-react-developer",
            "blue-state-management-expert",
            "blue-ui-styling-specialist",
            "blue-api-integration-expert",
            "blue-node-backend-implementation-specialist",
            "blue-database-architecture-specialist",
            "blue-relational-database-specialist",
            "blue-frontend-code-reviewer",
            "blue-node-backend-code-reviewer",
            "blue-accessibility-specialist",
            "blue-security-specialist",
            "blue-performance-specialist",
            "blue-unit-testing-specialist",
            "blue-e2e-testing-specialist",
        ),
    ),
    AgentProfile(
        id="orchestration",
        name="Orchestration (planning + quality)",
        description="Lightweight baseline: orchestrators plus essential quality specialists. "
        "Add implementation profiles for your stack.",
        agent_names=ORCHESTRATORS + (
            "blue-security-specialist",
            "blue-performance-specialist",
            "blue-unit-testing-specialist",
        ),
    ),
    AgentProfile(
        id="frontend-react",
        name="Frontend (React)",
        description="React implementation with state, UI, data and quality coverage.",
        agent_names=ORCHESTRATORS + (
            "blue-react-developer",
            "blue-state-management-expert",
            "blue-ui-styling-specialist",
            "blue-api-integration-expert",
            "blue-frontend-code-reviewer",
            "blue-accessibility-specialist",
            "blue-performance-specialist",
            "blue-security-specialist",
            "blue-unit-testing-specialist",
            "blue-e2e-testing-specialist",
        ),
    ),
    AgentProfile(
        id="backend-node",
        name="Backend (Node.js)",
        description="Node backend implementation and database architecture with quality coverage.",
        agent_names=ORCHESTRATORS[1:] + (
            "blue-node-backend-implementation-specialist",
            "blue-database-architecture-specialist",
            "blue-relational-database-specialist",
            "blue-node-backend-code-reviewer",
            "blue-security-specialist",
            "blue-unit-testing-specialist",
        ),
    ),
    AgentProfile(
        id="infrastructure",
        name="Infrastructure / DevOps",
        description="CI/CD, containers, monorepo tooling and ops fundamentals.",
        agent_names=(
            "blue-github-actions-specialist",
            "blue-docker-specialist",
            "blue-monorepo-specialist",
            "blue-cron-job-implementation-specialist",
            "blue-database-architecture-specialist",
        ),
    ),
    AgentProfile(
        id="blockchain",
        name="Blockchain / Web3",
        description="Smart contract and dApp specialists (add chain-specific agents as needed).",
        agent_names=ORCHESTRATORS[1:] + (
            "blue-blockchain-product-strategist",
            "blue-blockchain-architecture-designer",
            "blue-blockchain-code-reviewer",
            "blue-blockchain-security-auditor",
            "blue-blockchain-frontend-integrator",
            "blue-blockchain-backend-integrator",
            "blue-security-specialist",
        ),
    ),
)


def profile_from_config(profile_id: str, entry: dict[str, Any]) -> AgentProfile:
    """Build a profile from a configuration ``profiles`` entry."""
    return AgentProfile(
        id=profile_id,
        name=str(entry.get("name") or profile_id),
        description=str(entry.get("description") or ""),
        agent_names=tuple(entry.get("agents") or ()),
    )


def get_profiles(user_profiles: dict[str, dict[str, Any]] | None = None) -> list[AgentProfile]:
    """Return bundled profiles with *user_profiles* merged over them.

    A user profile with the same id as a bundled one replaces it.
    """
    profiles = {profile.id: profile for profile in AGENT_PROFILES}
    for profile_id, entry in (user_profiles or {}).items():
        profiles[profile_id] = profile_from_config(profile_id, entry or {})
    return list(profiles.values())


def get_profile(profile_id: str, user_profiles: dict[str, dict[str, Any]] | None = None) -> AgentProfile:
    """Look up a profile by id.

    Raises:
        ConfigurationError: If no profile has that id
    """
    for profile in get_profiles(user_profiles):
        if profile.id == profile_id:
            return profile

    available = ", ".join(profile.id for profile in get_profiles(user_profiles))
    raise ConfigurationError(f"Unknown profile '{profile_id}'. Available profiles: {available}")
