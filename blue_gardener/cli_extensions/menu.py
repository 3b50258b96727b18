"""Interactive main menu shown when blue-gardener runs without a command."""

from blue_gardener.cli_extensions.agent_commands import AgentCommands
from blue_gardener.cli_extensions.context import CommandContext
from blue_gardener.core import BlueGardenerError
from blue_gardener.interactive import prompt_choice
from blue_gardener.output import MessageType, VerbosityLevel, message

MENU_ITEMS = (
    ("Add agents", "add"),
    ("Remove agents", "remove"),
    ("List agents", "list"),
    ("Sync installed agents", "sync"),
    ("Repair manifest", "repair"),
    ("Exit", "exit"),
)


class InteractiveMenu:
    """Loops over the main menu until the user exits."""

    def __init__(self, context: CommandContext):
        self.context = context

    def run_action(self, action: str) -> bool:
        """Run one menu action, returning ``False`` if it failed."""
        if action == "add":
            return AgentCommands.add(self.context, [])
        if action == "remove":
            return AgentCommands.remove(self.context, [])
        if action == "list":
            return AgentCommands.list_agents(self.context)
        if action == "sync":
            return AgentCommands.sync(self.context)
        if action == "repair":
            return AgentCommands.repair(self.context)
        raise ValueError(f"unknown menu action: {action}")

    def run(self) -> bool:
        """Show the menu repeatedly.

        Errors from one action are reported and the menu is shown again.

        Returns:
            ``True`` if every action that ran succeeded
        """
        message("Blue Gardener: AI agents for your project", MessageType.INFO, VerbosityLevel.ALWAYS)
        message(f"Project: {self.context.project_dir}", MessageType.NORMAL, VerbosityLevel.ALWAYS)

        all_ok = True
        while True:
            picked = prompt_choice("What would you like to do?", [label for label, _ in MENU_ITEMS])
            if picked is None or MENU_ITEMS[picked][1] == "exit":
                return all_ok

            try:
                ok = self.run_action(MENU_ITEMS[picked][1])
            except BlueGardenerError as e:
                message(str(e), MessageType.ERROR, VerbosityLevel.ALWAYS)
                ok = False
            if not ok:
                all_ok = False
