"""Console output for blue-gardener.

Every user-facing line goes through :func:`message`, which filters by
verbosity and renders through a shared rich console.
"""

from __future__ import annotations

from enum import Enum, IntEnum

from rich.console import Console


class MessageType(Enum):
    """Kind of message, used to pick a style and a stream."""

    NORMAL = "normal"
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    DEBUG = "debug"


class VerbosityLevel(IntEnum):
    """Minimum ``-v`` count required for a message to be shown."""

    ALWAYS = 0
    VERBOSE = 1
    EXTRA_VERBOSE = 2
    DEBUG = 3


STYLES = {
    MessageType.NORMAL: None,
    MessageType.INFO: "cyan",
    MessageType.SUCCESS: "green",
    MessageType.WARNING: "yellow",
    MessageType.ERROR: "bold red",
    MessageType.DEBUG: "dim",
}


class OutputManager:
    """Holds output settings and the consoles used to print."""

    def __init__(self, verbosity: int = 0, use_color: bool = True):
        self.verbosity = verbosity
        self.use_color = use_color
        self._stdout: Console | None = None
        self._stderr: Console | None = None
        self._color_state: bool | None = None

    def _consoles(self) -> tuple[Console, Console]:
        # Rebuild when the colour setting changes after first use
        if self._stdout is None or self._color_state != self.use_color:
            self._stdout = Console(highlight=False, no_color=not self.use_color)
            self._stderr = Console(stderr=True, highlight=False, no_color=not self.use_color)
            self._color_state = self.use_color
        return self._stdout, self._stderr

    def should_show(self, level: VerbosityLevel) -> bool:
        return self.verbosity >= level

    def emit(self, text: str, msg_type: MessageType, level: VerbosityLevel) -> None:
        """Print *text* if the current verbosity allows it."""
        if not self.should_show(level):
            return

        stdout, stderr = self._consoles()
        console = stderr if msg_type in (MessageType.ERROR, MessageType.WARNING) else stdout
        console.print(text, style=STYLES[msg_type], markup=False, soft_wrap=True)


_output = OutputManager()


def get_output() -> OutputManager:
    """Return the process-wide output manager."""
    return _output


def message(
    text: str,
    msg_type: MessageType = MessageType.NORMAL,
    level: VerbosityLevel = VerbosityLevel.ALWAYS,
) -> None:
    """Print a message through the shared output manager.

    Args:
        text: Message text (printed literally, no rich markup)
        msg_type: Kind of message
        level: Minimum verbosity needed to show it
    """
    _output.emit(text, msg_type, level)
