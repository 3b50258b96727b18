"""Exception types raised by blue-gardener core code."""


class BlueGardenerError(Exception):
    """Base class for all blue-gardener errors."""


class NotFoundError(BlueGardenerError):
    """Raised when an agent identifier is not in the catalog."""

    def __init__(self, name: str, hint: str = ""):
        self.name = name
        text = f"Unknown agent '{name}'"
        if hint:
            text = f"{text}. {hint}"
        super().__init__(text)


class ConfigurationError(BlueGardenerError):
    """Raised for unknown platforms and invalid configuration.

    Can contain multiple error messages.
    """

    def __init__(self, errors: str | list[str]):
        """Initialize ConfigurationError.

        Args:
            errors: Single error message or list of error messages
        """
        if isinstance(errors, str):
            self.errors = [errors]
        else:
            self.errors = errors
        super().__init__(self._format_errors())

    def _format_errors(self) -> str:
        """Format errors for display."""
        if len(self.errors) == 1:
            return self.errors[0]
        else:
            error_list = "\n".join(f"  - {err}" for err in self.errors)
            return f"Configuration has {len(self.errors)} errors:\n{error_list}"


class FilesystemError(BlueGardenerError):
    """Raised when reading, writing or deleting a file fails.

    The underlying OS error text is kept verbatim so it can be shown to
    the user.
    """

    def __init__(self, action: str, path, cause: OSError | None = None):
        self.action = action
        self.path = path
        self.cause = cause
        text = f"Could not {action} {path}"
        if cause is not None:
            text = f"{text}: {cause.strerror or cause}"
        super().__init__(text)
