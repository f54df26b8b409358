# src/terminal_shell/core/errors.py


class ShellError(Exception):
    """Base exception for every error scoped to a single command invocation."""
    pass


class ArityError(ShellError):
    """Raised when the number of arguments does not match the command signature."""
    pass


class ParamTypeError(ShellError):
    """Raised when an argument cannot be coerced to its declared type."""
    pass


class UnknownCommandError(ShellError):
    """Raised when no command or command alias matches a name."""

    def __init__(self, name: str):
        super().__init__(f"'{name}' command doesn't exist")
        self.name = name


class InvalidNameError(ShellError):
    """Raised when a user alias would shadow a registered command."""
    pass


class InvalidOperationError(ShellError):
    pass


class InvalidFileTypeError(ShellError):
    pass


class MissingNestedCommandError(ShellError):
    """Raised when a composition command gets an empty or invalid command line."""

    def __init__(self, message: str = "Need a valid command to execute!"):
        super().__init__(message)


class PersistenceError(ShellError):
    """Raised when the key-value storage could not persist a mutation."""
    pass


class TimesError(ShellError):
    pass


class RepeatFailedError(ShellError):
    """Raised after a repeat loop finished with one or more failed iterations."""

    def __init__(self, times: int, failures: list):
        super().__init__(f"{len(failures)} of {times} repeated calls failed")
        self.times = times
        self.failures = failures


class DuplicateCommandError(Exception):
    """Raised when registering a duplicate command name or alias (configuration error)."""
    pass
