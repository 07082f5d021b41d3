"""Fail-fast subprocess utilities.

Every external tool the tasks drive (cookiecutter, git, gh, pytest,
pre-commit, pip) is invoked through :class:`CommandRunner`. Commands run one
at a time; with ``check=True`` (the default) the first non-zero exit raises
:class:`~repo_tasks.exceptions.CommandError`, which aborts the task.

Key Features:
    - List arguments only, never a shell
    - Explicit working directory and environment for every call
    - Output streams straight to the terminal unless captured or discarded
    - Secret values are redacted before a command line is logged

Example:
    >>> from repo_tasks.utils.subprocess_runner import CommandRunner
    >>> runner = CommandRunner()
    >>> result = runner.run(["git", "status"], cwd="/repo", env=os.environ)
    >>> result.returncode
    0
"""

import subprocess
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import structlog

from repo_tasks.exceptions import CommandError

log = structlog.get_logger(__name__)

REDACTED = "***"

# Exit status used by POSIX shells when a command cannot be found
COMMAND_NOT_FOUND = 127
# Exit status of a failed ``cd``
MISSING_WORKING_DIRECTORY = 1


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a single external command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def redact(args: Sequence[str], secrets: Iterable[str]) -> list[str]:
    """Replace every occurrence of a secret value inside ``args``.

    Args:
        args: Command line to sanitize
        secrets: Values that must never appear in logs; empty values are ignored

    Returns:
        A copy of ``args`` with each secret replaced by ``***``
    """
    values = [secret for secret in secrets if secret]
    redacted = []
    for arg in args:
        for secret in values:
            arg = arg.replace(secret, REDACTED)
        redacted.append(arg)
    return redacted


class CommandRunner:
    """Run external commands sequentially with fail-fast semantics.

    Attributes:
        secrets: Values redacted from logged command lines and error messages
    """

    def __init__(self, secrets: Iterable[str] = ()) -> None:
        self.secrets: set[str] = {secret for secret in secrets if secret}

    def add_secret(self, value: str | None) -> None:
        """Register a value that must be redacted from logs."""
        if value:
            self.secrets.add(value)

    def run(
        self,
        args: Sequence[str],
        *,
        cwd: Path | str | None = None,
        env: Mapping[str, str] | None = None,
        check: bool = True,
        capture_output: bool = False,
        quiet: bool = False,
    ) -> CommandResult:
        """Run a command and wait for it to finish.

        Args:
            args: Command and arguments as separate strings.
            cwd: Working directory for the command.
            env: Complete environment for the command. None inherits the
                parent process environment.
            check: If True, raise CommandError when the command exits non-zero.
            capture_output: If True, capture stdout and stderr as text.
            quiet: If True, discard stdout (the ``> /dev/null`` idiom). Ignored
                when ``capture_output`` is set.

        Returns:
            CommandResult with the exit status and any captured output.

        Raises:
            CommandError: If ``check`` is True and the command fails, the
                executable cannot be found or ``cwd`` does not exist.
        """
        command = [str(arg) for arg in args]
        shown = redact(command, self.secrets)
        log.info("command_started", command=shown, cwd=str(cwd) if cwd else None)

        if cwd is not None and not Path(cwd).is_dir():
            log.error("working_directory_missing", command=shown, cwd=str(cwd))
            if check:
                raise CommandError(f"Working directory does not exist: {cwd}", shown, MISSING_WORKING_DIRECTORY)
            return CommandResult(tuple(command), MISSING_WORKING_DIRECTORY)

        if capture_output:
            stdout = subprocess.PIPE
        elif quiet:
            stdout = subprocess.DEVNULL
        else:
            stdout = None

        try:
            completed = subprocess.run(  # nosec B603 # list arguments, no shell
                command,
                cwd=cwd,
                env=dict(env) if env is not None else None,
                stdout=stdout,
                stderr=subprocess.PIPE if capture_output else None,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            log.error("command_not_found", command=shown)
            if check:
                raise CommandError(f"Command not found: {shown[0]}", shown, COMMAND_NOT_FOUND) from e
            return CommandResult(tuple(command), COMMAND_NOT_FOUND)

        result = CommandResult(
            args=tuple(command),
            returncode=completed.returncode,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
        )

        if not result.ok:
            log.warning("command_failed", command=shown, returncode=result.returncode, check=check)
            if check:
                raise CommandError(
                    f"Command failed: {' '.join(shown)}",
                    shown,
                    result.returncode,
                    result.stderr,
                )

        return result
