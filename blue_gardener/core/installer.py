"""Install, remove, sync and repair agents in a project.

Every per-agent operation writes the agent's output first and the
manifest last, so an interrupted run can lose at most the update of the
agent being processed.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from blue_gardener import __version__
from blue_gardener.core.adapters import PlatformOutput
from blue_gardener.core.catalog import AgentDefinition, Catalog
from blue_gardener.core.errors import BlueGardenerError, ConfigurationError
from blue_gardener.core.manifest import (
    ManifestData,
    add_agent,
    delete_manifest,
    empty_manifest,
    installed_agents,
    read_manifest,
    remove_agent,
    write_manifest,
)
from blue_gardener.core.platforms import Platform, detect_platform, parse_platform
from blue_gardener.output import MessageType, VerbosityLevel, message


@dataclass
class OperationResult:
    """Per-agent outcome of a batch operation."""

    succeeded: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)
    failed: dict[str, BlueGardenerError] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.failed


@dataclass
class AgentStatus:
    """A catalog agent and the version installed in the project, if any."""

    agent: AgentDefinition
    installed_version: str | None = None

    @property
    def installed(self) -> bool:
        return self.installed_version is not None


@dataclass
class RepairResult:
    """Outcome of reconciling the manifest with the files on disk."""

    platform: Platform
    retracked: list[str] = field(default_factory=list)
    pruned: list[str] = field(default_factory=list)
    manifest_created: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.retracked or self.pruned or self.manifest_created)


def _unique(names: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(name.strip() for name in names if name.strip()))


class Installer:
    """Keeps a project's installed agents and its manifest in agreement."""

    def __init__(
        self,
        project_dir: Path,
        catalog: Catalog | None = None,
        platform: str | Platform | None = None,
        version: str = __version__,
    ):
        """Initialize the installer.

        Args:
            project_dir: Project root that receives agent output
            catalog: Agent catalog. Defaults to the bundled agents.
            platform: Platform to use when the project has no manifest yet
            version: Version recorded for installed agents

        Raises:
            ConfigurationError: If *platform* is not a known platform
        """
        self.project_dir = project_dir
        self.catalog = catalog if catalog is not None else Catalog()
        self.requested_platform = parse_platform(platform) if platform is not None else None
        self.version = version

    # ------------------------------------------------------------------
    # Platform / manifest
    # ------------------------------------------------------------------
    def read_manifest(self) -> ManifestData | None:
        return read_manifest(self.project_dir)

    def current_platform(self) -> Platform | None:
        """Platform recorded in the manifest, else requested, else detected."""
        manifest = self.read_manifest()
        if manifest is not None:
            return Platform(manifest["platform"])
        return self.requested_platform or detect_platform(self.project_dir)

    def resolve_platform(self) -> Platform:
        """Return the platform for this project.

        Raises:
            ConfigurationError: If the requested platform disagrees with the
                manifest, or no platform can be determined
        """
        manifest = self.read_manifest()
        if manifest is not None:
            recorded = Platform(manifest["platform"])
            if self.requested_platform is not None and self.requested_platform != recorded:
                raise ConfigurationError(
                    f"Project is set up for '{recorded}', not '{self.requested_platform}'. "
                    f"Use 'blue-gardener platform set {self.requested_platform}' to switch."
                )
            return recorded

        platform = self.requested_platform or detect_platform(self.project_dir)
        if platform is None:
            raise ConfigurationError("No platform selected and none could be detected. Pass --platform.")
        return platform

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def add(self, names: Iterable[str]) -> OperationResult:
        """Install agents by identifier.

        Unknown identifiers and write failures are collected per agent;
        the remaining agents are still installed.

        Raises:
            ConfigurationError: If no platform can be determined
        """
        result = OperationResult()
        names = _unique(names)
        if not names:
            return result

        platform = self.resolve_platform()
        output = PlatformOutput(platform, self.project_dir)
        manifest = self.read_manifest() or empty_manifest(platform, self.version)

        for name in names:
            previous = dict(manifest["agents"])
            try:
                agent = self.catalog.get(name)
                output.write(agent)
                add_agent(manifest, name, self.version)
                manifest["version"] = self.version
                write_manifest(self.project_dir, manifest)
            except BlueGardenerError as exc:
                manifest["agents"] = previous
                result.failed[name] = exc
                message(f"add {name} failed: {exc}", MessageType.DEBUG, VerbosityLevel.DEBUG)
                continue

            result.succeeded.append(name)
            message(f"Installed {name} -> {output.agent_path(name)}", MessageType.INFO, VerbosityLevel.VERBOSE)

        return result

    def remove(self, names: Iterable[str]) -> OperationResult:
        """Uninstall agents by identifier.

        Identifiers that are not installed are skipped without error.
        """
        result = OperationResult()
        manifest = self.read_manifest()
        tracked = installed_agents(manifest)

        for name in _unique(names):
            if name not in tracked:
                result.skipped.append(name)
                continue

            output = PlatformOutput(manifest["platform"], self.project_dir)
            try:
                output.remove(name)
                remove_agent(manifest, name)
                write_manifest(self.project_dir, manifest)
            except BlueGardenerError as exc:
                manifest["agents"][name] = tracked[name]
                result.failed[name] = exc
                continue

            result.succeeded.append(name)
            message(f"Removed {name}", MessageType.INFO, VerbosityLevel.VERBOSE)

        return result

    def sync(self) -> OperationResult:
        """Overwrite every installed agent with the bundled version."""
        result = OperationResult()
        manifest = self.read_manifest()
        if manifest is None:
            return result

        output = PlatformOutput(manifest["platform"], self.project_dir)
        for name, installed_version in installed_agents(manifest).items():
            try:
                agent = self.catalog.get(name)
                output.write(agent)
                add_agent(manifest, name, self.version)
                manifest["version"] = self.version
                write_manifest(self.project_dir, manifest)
            except BlueGardenerError as exc:
                manifest["agents"][name] = installed_version
                result.failed[name] = exc
                continue

            result.succeeded.append(name)
            message(f"Synced {name} ({installed_version} -> {self.version})", MessageType.INFO, VerbosityLevel.VERBOSE)

        return result

    def list_agents(self) -> list[AgentStatus]:
        """Every catalog agent with its installed version (no side effects)."""
        tracked = installed_agents(self.read_manifest())
        return [AgentStatus(agent, tracked.get(agent.name)) for agent in self.catalog]

    def installed(self) -> list[AgentStatus]:
        return [status for status in self.list_agents() if status.installed]

    def find_untracked(self) -> list[str]:
        """Catalog agents present on disk but missing from the manifest."""
        platform = self.current_platform()
        if platform is None:
            return []
        tracked = installed_agents(self.read_manifest())
        on_disk = PlatformOutput(platform, self.project_dir).installed_names()
        return sorted(name for name in on_disk if name in self.catalog and name not in tracked)

    def repair(self) -> RepairResult:
        """Rebuild the manifest from the agent output on disk.

        Re-tracks catalog agents whose output exists but which the manifest
        lacks, and forgets tracked agents whose output is gone.  Output
        files are never modified.

        Raises:
            ConfigurationError: If there is no manifest and no platform can
                be determined
        """
        manifest = self.read_manifest()
        platform = self.resolve_platform()
        output = PlatformOutput(platform, self.project_dir)

        on_disk = output.installed_names()
        tracked = installed_agents(manifest)
        result = RepairResult(
            platform=platform,
            retracked=sorted(name for name in on_disk if name in self.catalog and name not in tracked),
            pruned=sorted(name for name in tracked if name not in on_disk),
        )
        if not result.retracked and not result.pruned:
            return result

        if manifest is None:
            manifest = empty_manifest(platform, self.version)
            result.manifest_created = True
        for name in result.retracked:
            add_agent(manifest, name, self.version)
        for name in result.pruned:
            remove_agent(manifest, name)

        write_manifest(self.project_dir, manifest)
        return result

    def switch_platform(self, platform: str | Platform) -> OperationResult:
        """Move every installed agent to *platform*'s layout.

        All agents are resolved before anything is written; if one is
        missing from the catalog nothing changes.

        Raises:
            ConfigurationError: If *platform* is unknown
            FilesystemError: If writing the new output fails
        """
        new_platform = parse_platform(platform)
        result = OperationResult()
        manifest = self.read_manifest()

        if manifest is None:
            write_manifest(self.project_dir, empty_manifest(new_platform, self.version))
            return result

        old_platform = Platform(manifest["platform"])
        tracked = installed_agents(manifest)
        if old_platform == new_platform:
            result.skipped.extend(tracked)
            return result

        agents = []
        for name in tracked:
            try:
                agents.append(self.catalog.get(name))
            except BlueGardenerError as exc:
                result.failed[name] = exc
        if result.failed:
            return result

        new_output = PlatformOutput(new_platform, self.project_dir)
        new_manifest = empty_manifest(new_platform, self.version)
        for agent in agents:
            new_output.write(agent)
            add_agent(new_manifest, agent.name, self.version)
        write_manifest(self.project_dir, new_manifest)
        delete_manifest(self.project_dir, old_platform)

        old_output = PlatformOutput(old_platform, self.project_dir)
        for agent in agents:
            try:
                old_output.remove(agent.name)
            except BlueGardenerError as exc:
                message(f"Could not remove old {old_platform} output for {agent.name}: {exc}",
                        MessageType.WARNING, VerbosityLevel.ALWAYS)
            result.succeeded.append(agent.name)

        return result
