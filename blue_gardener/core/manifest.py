"""Manifest system for tracking which agents blue-gardener installed.

Each project gets a ``.blue-generated-manifest.json`` file inside the
active platform's agent directory.  It records the platform and the
version of every installed agent, and is always replaced atomically.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, TypedDict

from blue_gardener.core.errors import BlueGardenerError
from blue_gardener.core.fsutil import atomic_write_text, delete_file, read_text
from blue_gardener.core.platforms import PLATFORMS, Platform, get_platform_spec
from blue_gardener.output import MessageType, VerbosityLevel, message

MANIFEST_FILE = ".blue-generated-manifest.json"


class ManifestData(TypedDict):
    """Type definition for the manifest file."""

    version: str
    platform: str
    agents: dict[str, str]
    last_synced: str | None


# ------------------------------------------------------------------
# Data helpers
# ------------------------------------------------------------------
def empty_manifest(platform: str | Platform, version: str) -> ManifestData:
    """Return an empty manifest for *platform*."""
    return {
        "version": version,
        "platform": str(get_platform_spec(platform).platform),
        "agents": {},
        "last_synced": None,
    }


def manifest_path(project_dir: Path, platform: str | Platform) -> Path:
    """Return where *platform* keeps its manifest inside *project_dir*."""
    return project_dir / get_platform_spec(platform).manifest_dir / MANIFEST_FILE


def find_manifest(project_dir: Path) -> Path | None:
    """Return the first existing manifest path, in platform table order."""
    for platform in PLATFORMS:
        path = manifest_path(project_dir, platform)
        if path.is_file():
            return path
    return None


def _comparable(manifest: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in manifest.items() if key != "last_synced"}


# ------------------------------------------------------------------
# Read / Write
# ------------------------------------------------------------------
def read_manifest(project_dir: Path) -> ManifestData | None:
    """Read the manifest for *project_dir*.

    Returns ``None`` if there is no manifest, or if it is unreadable, so
    that ``repair`` can rebuild it.

    Args:
        project_dir: Project root

    Returns:
        Manifest dictionary, or ``None``
    """
    path = find_manifest(project_dir)
    if path is None:
        return None

    try:
        data = json.loads(read_text(path) or "")
        if not isinstance(data, dict) or not isinstance(data.get("agents", {}), dict):
            raise ValueError("expected an object with an 'agents' mapping")
        data["platform"] = str(get_platform_spec(data.get("platform", "")).platform)
    except (ValueError, BlueGardenerError) as exc:
        message(
            f"Warning: could not read manifest at {path}: {exc}",
            MessageType.WARNING,
            VerbosityLevel.ALWAYS,
        )
        return None

    data.setdefault("version", "")
    data.setdefault("agents", {})
    data.setdefault("last_synced", None)
    return data


def write_manifest(project_dir: Path, manifest: ManifestData) -> bool:
    """Atomically write *manifest* under *project_dir*.

    The write is skipped when the file on disk already holds the same
    data (``last_synced`` aside).  Otherwise ``last_synced`` is set to the
    current UTC time.

    Returns:
        ``True`` if the file was written

    Raises:
        FilesystemError: If the manifest cannot be written
    """
    path = manifest_path(project_dir, manifest["platform"])

    existing = read_text(path)
    if existing is not None:
        try:
            if _comparable(json.loads(existing)) == _comparable(manifest):
                return False
        except ValueError:
            pass

    manifest["last_synced"] = datetime.now(tz=UTC).isoformat(timespec="seconds")
    atomic_write_text(path, json.dumps(manifest, indent=2) + "\n")

    message(f"Manifest written to {path}", MessageType.DEBUG, VerbosityLevel.DEBUG)
    return True


def delete_manifest(project_dir: Path, platform: str | Platform) -> bool:
    """Delete *platform*'s manifest from *project_dir* if present."""
    return delete_file(manifest_path(project_dir, platform))


# ------------------------------------------------------------------
# Update helpers
# ------------------------------------------------------------------
def installed_agents(manifest: ManifestData | None) -> dict[str, str]:
    """Return ``{agent-id: version}`` for *manifest* (empty if ``None``)."""
    if manifest is None:
        return {}
    return dict(manifest.get("agents", {}))


def add_agent(manifest: ManifestData, name: str, version: str) -> None:
    """Record agent *name* at *version* (modified in place)."""
    agents = manifest.setdefault("agents", {})
    agents[name] = version
    manifest["agents"] = dict(sorted(agents.items()))


def remove_agent(manifest: ManifestData, name: str) -> bool:
    """Forget agent *name* (modified in place).

    Returns:
        ``True`` if the agent was tracked
    """
    return manifest.setdefault("agents", {}).pop(name, None) is not None
