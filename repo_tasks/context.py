"""Execution context for tasks.

This module provides the TaskContext dataclass that carries the working
directory, environment and command runner through every task, so no task
touches ``os.chdir`` or ``os.environ``.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from repo_tasks.config.settings import TaskSettings
from repo_tasks.utils.subprocess_runner import CommandResult, CommandRunner


@dataclass
class TaskContext:
    """Context passed to every task.

    Attributes:
        project_dir: Root of the template repository the runner maintains
        cwd: Directory external commands run in
        env: Environment handed to every external command
        runner: Executes external commands
        prog_name: Name the runner was invoked as, shown by `help`
    """

    project_dir: Path
    cwd: Path
    env: dict[str, str] = field(default_factory=dict)
    runner: CommandRunner = field(default_factory=CommandRunner)
    prog_name: str = "repo-tasks"

    @property
    def settings(self) -> TaskSettings:
        """Settings derived from the current environment."""
        return TaskSettings.from_env(self.env)

    def chdir(self, path: Path | str) -> "TaskContext":
        """Create a context rooted at ``path`` (relative paths resolve against cwd).

        The environment is shared with the original context.
        """
        return replace(self, cwd=(self.cwd / path).resolve())

    def with_env(self, **overrides: str) -> "TaskContext":
        """Create a context whose environment has extra variables."""
        return replace(self, env={**self.env, **overrides})

    def update_env(self, values: Mapping[str, str]) -> None:
        """Export ``values`` to all later commands run from this context."""
        self.env.update(values)
        for secret in self.settings.secret_values():
            self.runner.add_secret(secret)

    def run(self, *args: str, **kwargs: Any) -> CommandResult:
        """Run a command in :attr:`cwd` with :attr:`env`.

        Keyword arguments are passed to :meth:`CommandRunner.run`.
        """
        return self.runner.run(args, cwd=self.cwd, env=self.env, **kwargs)

    def run_all(self, commands: Sequence[Sequence[str]]) -> None:
        """Run several commands in order, stopping at the first failure."""
        for command in commands:
            self.run(*command)

    @classmethod
    def create(
        cls,
        project_dir: Path | str,
        env: Mapping[str, str],
        cwd: Path | str | None = None,
        runner: CommandRunner | None = None,
        prog_name: str = "repo-tasks",
    ) -> "TaskContext":
        """Build a context and register the configured tokens for redaction."""
        context = cls(
            project_dir=Path(project_dir).resolve(),
            cwd=Path(cwd).resolve() if cwd is not None else Path(project_dir).resolve(),
            env=dict(env),
            runner=runner or CommandRunner(),
            prog_name=prog_name,
        )
        for secret in context.settings.secret_values():
            context.runner.add_secret(secret)
        return context
