"""CLI commands for installing and maintaining agents in a project."""

import argparse
import sys

from blue_gardener.cli_extensions.context import CommandContext
from blue_gardener.core import CATEGORIES, ConfigurationError, OperationResult, get_profile
from blue_gardener.interactive import pick_agents, pick_installed
from blue_gardener.output import MessageType, VerbosityLevel, message


class AgentCommands:
    """Manages the agent CLI commands: add, remove, list, sync, repair, search."""

    COMMANDS = ("add", "remove", "list", "sync", "repair", "search")

    @staticmethod
    def add_cli_arguments(subparsers) -> None:
        """Add agent commands to the argument parser.

        Args:
            subparsers: The subparsers object to add commands to
        """
        # add
        add_parser = subparsers.add_parser(
            "add",
            help="Install agents into the project",
            description="Install agents by identifier or profile. With no identifiers, pick them interactively.",
        )
        add_parser.add_argument("agents", nargs="*", metavar="AGENT", help="Agent identifier (e.g. blue-react-developer)")
        add_parser.add_argument("--profile", metavar="ID", help="Also install every agent of this profile")
        add_parser.add_argument("--platform", metavar="PLATFORM", help="Target platform for a new project")

        # remove
        remove_parser = subparsers.add_parser(
            "remove",
            help="Remove installed agents",
            description="Remove agents from the project. Agents that are not installed are skipped.",
        )
        remove_parser.add_argument("agents", nargs="*", metavar="AGENT", help="Agent identifier")

        # list
        list_parser = subparsers.add_parser(
            "list",
            help="List available and installed agents",
            description="List catalog agents grouped by category, marking the ones installed in the project.",
        )
        list_parser.add_argument("--category", metavar="NAME", help="Only show this category")
        list_parser.add_argument("--installed", action="store_true", help="Only show installed agents")

        # sync
        sync_parser = subparsers.add_parser(
            "sync",
            help="Update installed agents to the bundled versions",
            description="Overwrite every installed agent with the version bundled with blue-gardener.",
        )
        sync_parser.add_argument("--silent", action="store_true", help="Only print errors (for git hooks)")

        # repair
        repair_parser = subparsers.add_parser(
            "repair",
            help="Rebuild the manifest from files on disk",
            description="Track agents found on disk that the manifest is missing and forget entries whose "
            "files are gone. Agent files are never modified.",
        )
        repair_parser.add_argument("--platform", metavar="PLATFORM", help="Platform to scan when there is no manifest")

        # search
        search_parser = subparsers.add_parser(
            "search",
            help="Search agents by name, description, category or tag",
        )
        search_parser.add_argument("query", nargs="?", help="Text to search for")

    @classmethod
    def process_cli_command(cls, args: argparse.Namespace, context: CommandContext) -> None:
        """Process an agent command and exit non-zero on failure.

        Args:
            args: Parsed command-line arguments
            context: Project and configuration for this run
        """
        if args.command == "add":
            ok = cls.add(context, args.agents, profile=args.profile, platform=args.platform)
        elif args.command == "remove":
            ok = cls.remove(context, args.agents)
        elif args.command == "list":
            ok = cls.list_agents(context, category=args.category, installed_only=args.installed)
        elif args.command == "sync":
            ok = cls.sync(context, silent=args.silent)
        elif args.command == "repair":
            ok = cls.repair(context, platform=args.platform)
        elif args.command == "search":
            ok = cls.search(context, args.query)
        else:
            message(f"Unknown command: {args.command}", MessageType.ERROR, VerbosityLevel.ALWAYS)
            ok = False

        if not ok:
            sys.exit(1)

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------
    @staticmethod
    def report(result: OperationResult, verb: str, silent: bool = False) -> bool:
        """Print a per-agent summary of *result*.

        Returns:
            ``True`` if no agent failed
        """
        if not silent:
            for name in result.succeeded:
                message(f"  {verb} {name}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
            for name in result.skipped:
                message(f"  {name} is not installed, skipped", MessageType.WARNING, VerbosityLevel.ALWAYS)

        for name, error in result.failed.items():
            message(f"  {name}: {error}", MessageType.ERROR, VerbosityLevel.ALWAYS)

        if result.failed:
            message(f"{len(result.failed)} agent(s) failed", MessageType.ERROR, VerbosityLevel.ALWAYS)
        return result.ok

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------
    @classmethod
    def add(
        cls,
        context: CommandContext,
        names: list[str],
        profile: str | None = None,
        platform: str | None = None,
    ) -> bool:
        """Install agents.

        Args:
            context: Command context
            names: Agent identifiers
            profile: Optional profile whose agents are added to *names*
            platform: Platform for a project without a manifest

        Returns:
            ``True`` if every agent was installed

        Raises:
            ConfigurationError: If the profile or platform is unknown, or
                no platform can be determined
        """
        names = list(names)
        if profile:
            selected = get_profile(profile, context.user_profiles)
            message(f"Using profile '{selected.id}': {selected.name}", MessageType.INFO, VerbosityLevel.VERBOSE)
            names.extend(selected.agent_names)

        installer = context.installer(platform, prompt=True)

        if not names:
            if not context.interactive:
                message("No agents given. Pass agent identifiers or --profile.", MessageType.ERROR, VerbosityLevel.ALWAYS)
                return False
            installed = [status.agent.name for status in installer.installed()]
            names = pick_agents(context.catalog, exclude=installed)
            if not names:
                message("Nothing selected.", MessageType.NORMAL, VerbosityLevel.ALWAYS)
                return True

        result = installer.add(names)
        if result.succeeded:
            message(
                f"Installed {len(result.succeeded)} agent(s) for {installer.resolve_platform()}",
                MessageType.SUCCESS,
                VerbosityLevel.ALWAYS,
            )
        return cls.report(result, "+")

    @classmethod
    def remove(cls, context: CommandContext, names: list[str]) -> bool:
        """Remove agents; identifiers that are not installed are skipped."""
        installer = context.installer()

        if not names:
            if not context.interactive:
                message("No agents given.", MessageType.ERROR, VerbosityLevel.ALWAYS)
                return False
            names = pick_installed([status.agent.name for status in installer.installed()])
            if not names:
                return True

        result = installer.remove(names)
        if result.succeeded:
            message(f"Removed {len(result.succeeded)} agent(s)", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        return cls.report(result, "-")

    @classmethod
    def list_agents(cls, context: CommandContext, category: str | None = None, installed_only: bool = False) -> bool:
        """List catalog agents by category with their install state.

        Raises:
            ConfigurationError: If *category* is not a catalog category
        """
        installer = context.installer()
        groups = context.catalog.by_category()
        if category is not None and category not in groups:
            known = ", ".join(groups) or ", ".join(CATEGORIES)
            raise ConfigurationError(f"Unknown category '{category}'. Available categories: {known}")

        statuses = {status.agent.name: status for status in installer.list_agents()}
        platform = installer.current_platform()
        installed_count = sum(1 for status in statuses.values() if status.installed)

        if platform is not None:
            message(f"Platform: {platform} ({installed_count} installed)", MessageType.INFO, VerbosityLevel.ALWAYS)
        else:
            message("Platform: not set", MessageType.INFO, VerbosityLevel.ALWAYS)

        shown = 0
        for group, agents in groups.items():
            if category is not None and group != category:
                continue
            rows = [statuses[agent.name] for agent in agents]
            if installed_only:
                rows = [status for status in rows if status.installed]
            if not rows:
                continue

            message(f"\n=== {group} ===\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            for status in rows:
                mark = "[x]" if status.installed else "[ ]"
                line = f"  {mark} {status.agent.name}"
                if status.installed:
                    line += f" ({status.installed_version})"
                message(line, MessageType.SUCCESS if status.installed else MessageType.NORMAL, VerbosityLevel.ALWAYS)
                message(f"      {status.agent.description}", MessageType.NORMAL, VerbosityLevel.VERBOSE)
                shown += 1

        if shown == 0:
            message("\nNo agents to show.", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        untracked = installer.find_untracked()
        if untracked:
            message(
                f"\n{len(untracked)} agent(s) on disk are not tracked: {', '.join(untracked)}. "
                "Run 'blue-gardener repair' to track them.",
                MessageType.WARNING,
                VerbosityLevel.ALWAYS,
            )
        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        return True

    @classmethod
    def sync(cls, context: CommandContext, silent: bool = False) -> bool:
        """Overwrite installed agents with the bundled versions."""
        installer = context.installer()
        if installer.read_manifest() is None:
            if not silent:
                message("No agents installed in this project.", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            return True

        result = installer.sync()
        if result.succeeded and not silent:
            message(f"Synced {len(result.succeeded)} agent(s) to {installer.version}", MessageType.SUCCESS,
                    VerbosityLevel.ALWAYS)
        return cls.report(result, "~", silent=silent)

    @classmethod
    def repair(cls, context: CommandContext, platform: str | None = None) -> bool:
        """Reconcile the manifest with the agent files on disk."""
        installer = context.installer(platform)
        result = installer.repair()

        if not result.changed:
            message(f"Manifest is up to date ({result.platform}).", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
            return True

        if result.manifest_created:
            message(f"Created a new manifest for {result.platform}", MessageType.INFO, VerbosityLevel.ALWAYS)
        for name in result.retracked:
            message(f"  tracked {name}", MessageType.SUCCESS, VerbosityLevel.ALWAYS)
        for name in result.pruned:
            message(f"  forgot {name} (files missing)", MessageType.WARNING, VerbosityLevel.ALWAYS)
        message(
            f"Repaired manifest: {len(result.retracked)} tracked, {len(result.pruned)} removed",
            MessageType.SUCCESS,
            VerbosityLevel.ALWAYS,
        )
        return True

    @classmethod
    def search(cls, context: CommandContext, query: str | None) -> bool:
        """Print agents matching *query*."""
        if not query:
            if not context.interactive:
                message("No search query given.", MessageType.ERROR, VerbosityLevel.ALWAYS)
                return False
            try:
                query = input("Search agents: ").strip()
            except EOFError:
                return True
            if not query:
                return True

        matches = context.catalog.search(query)
        if not matches:
            message(f"No agents match '{query}'.", MessageType.NORMAL, VerbosityLevel.ALWAYS)
            return True

        message(f"\n{len(matches)} agent(s) match '{query}':\n", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        for agent in matches:
            message(f"  {agent.name} [{agent.category}]", MessageType.INFO, VerbosityLevel.ALWAYS)
            message(f"      {agent.description}", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        message("", MessageType.NORMAL, VerbosityLevel.ALWAYS)
        return True
