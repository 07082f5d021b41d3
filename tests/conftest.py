"""Pytest configuration and shared fixtures."""

from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import pytest
import structlog

from repo_tasks.context import TaskContext
from repo_tasks.exceptions import CommandError
from repo_tasks.utils.subprocess_runner import CommandResult, CommandRunner

Effect = Callable[[tuple[str, ...], Path], None]


@dataclass
class RecordedCall:
    """A command the fake runner was asked to run."""

    args: tuple[str, ...]
    cwd: Path | None
    env: dict[str, str] = field(default_factory=dict)
    check: bool = True
    quiet: bool = False


class FakeRunner(CommandRunner):
    """CommandRunner that records commands instead of executing them.

    Rules registered with :meth:`on` match on a command prefix and can set the
    exit status or run a side effect (e.g. create the directory cookiecutter
    would have generated).
    """

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[RecordedCall] = []
        self._rules: list[tuple[tuple[str, ...], int, Effect | None]] = []

    def on(self, *prefix: str, returncode: int = 0, effect: Effect | None = None) -> None:
        self._rules.append((tuple(prefix), returncode, effect))

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
        command = tuple(str(arg) for arg in args)
        workdir = Path(cwd) if cwd is not None else None
        self.calls.append(RecordedCall(command, workdir, dict(env or {}), check, quiet))

        returncode = 0
        for prefix, code, effect in self._rules:
            if command[: len(prefix)] == prefix:
                if effect is not None:
                    effect(command, workdir or Path.cwd())
                returncode = code
                break

        if returncode != 0 and check:
            raise CommandError(f"Command failed: {' '.join(command)}", command, returncode)
        return CommandResult(command, returncode)

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [call.args for call in self.calls]

    def find(self, *prefix: str) -> RecordedCall:
        for call in self.calls:
            if call.args[: len(prefix)] == prefix:
                return call
        raise AssertionError(f"No command starting with {prefix}; ran {self.commands}")


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo structlog configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def fake_runner() -> FakeRunner:
    """Recording runner; no external command is executed."""
    return FakeRunner()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Template repository root."""
    path = tmp_path / "template"
    path.mkdir()
    return path.resolve()


@pytest.fixture
def task_env() -> dict[str, str]:
    """GitHub settings used by most task tests."""
    return {
        "REPO_NAME": "demo-repo",
        "GITHUB_USERNAME": "octocat",
        "PACKAGE_IMPORT_NAME": "demo_pkg",
        "PATH": "/usr/bin",
    }


@pytest.fixture
def task_ctx(project_dir: Path, task_env: dict[str, str], fake_runner: FakeRunner) -> TaskContext:
    """TaskContext rooted at the template repository with a fake runner."""
    return TaskContext.create(project_dir, task_env, cwd=project_dir, runner=fake_runner)
