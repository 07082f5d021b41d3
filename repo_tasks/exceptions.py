"""Custom exception hierarchy for the repo-tasks runner.

Exception Hierarchy:
    RepoTasksError (base)
    ├── ConfigurationError
    ├── CommandError
    └── TaskError
        └── TaskNotFoundError

Example Usage:
    >>> from repo_tasks.exceptions import ConfigurationError
    >>> settings = TaskSettings.from_env(ctx.env)
    >>> settings.require("REPO_NAME")  # raises ConfigurationError when unset
"""

from collections.abc import Sequence


class RepoTasksError(Exception):
    """Base exception for all repo-tasks errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(RepoTasksError):
    """Configuration-related errors.

    Raised when a task needs an environment variable that is unset or empty,
    or when a dotenv file cannot be read.

    Attributes:
        missing: Names of the environment variables that were not provided
    """

    def __init__(self, message: str, missing: Sequence[str] = ()) -> None:
        self.missing = tuple(missing)
        super().__init__(message)


class CommandError(RepoTasksError):
    """An external command exited with a non-zero status.

    The runner raises this on the first failing command so the whole task
    aborts. The CLI exits with :attr:`returncode`.

    Attributes:
        message: Human-readable error description
        args: The (redacted) command line that failed
        returncode: Exit status of the command, 127 if it could not be found
        stderr: Captured standard error, empty when output was not captured
    """

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        returncode: int = 1,
        stderr: str = "",
    ) -> None:
        """Initialize exception.

        Args:
            message: Error message
            command: The command line that failed
            returncode: Exit status of the command
            stderr: Captured standard error, if any
        """
        self.command = tuple(command)
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"{message} (exit status {returncode})")
        self.message = message


class TaskError(RepoTasksError):
    """A task could not proceed.

    Examples:
        - The generated sample directory is ambiguous
        - A file the task expects is missing
    """

    pass


class TaskNotFoundError(TaskError):
    """No task is registered under the requested name."""

    def __init__(self, name: str, available: Sequence[str] = ()) -> None:
        self.name = name
        self.available = tuple(available)
        message = f"Unknown task: {name}"
        if self.available:
            message = f"{message}. Available tasks: {', '.join(self.available)}"
        super().__init__(message)
