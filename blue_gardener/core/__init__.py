"""Core infrastructure for blue-gardener: catalog, platforms, manifest, installer."""

from .adapters import PlatformOutput
from .catalog import AGENT_PREFIX, CATEGORIES, AgentDefinition, Catalog, display_name, parse_agent
from .errors import BlueGardenerError, ConfigurationError, FilesystemError, NotFoundError
from .installer import AgentStatus, Installer, OperationResult, RepairResult
from .manifest import MANIFEST_FILE, ManifestData, find_manifest, manifest_path, read_manifest, write_manifest
from .platforms import PLATFORMS, Platform, PlatformSpec, detect_platform, get_platform_spec, parse_platform
from .profiles import AgentProfile, get_profile, get_profiles

__all__ = [
    "AGENT_PREFIX",
    "CATEGORIES",
    "MANIFEST_FILE",
    "PLATFORMS",
    "AgentDefinition",
    "AgentProfile",
    "AgentStatus",
    "BlueGardenerError",
    "Catalog",
    "ConfigurationError",
    "FilesystemError",
    "Installer",
    "ManifestData",
    "NotFoundError",
    "OperationResult",
    "Platform",
    "PlatformOutput",
    "PlatformSpec",
    "RepairResult",
    "detect_platform",
    "display_name",
    "find_manifest",
    "get_platform_spec",
    "get_profile",
    "get_profiles",
    "manifest_path",
    "parse_agent",
    "parse_platform",
    "read_manifest",
    "write_manifest",
]
