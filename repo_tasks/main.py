"""CLI entry point for the task runner.

Usage::

    repo-tasks [OPTIONS] [TASK] [ARGS]...

The first positional argument selects a task; everything after it is handed
to that task untouched. Without a task the available tasks are listed.
"""

import os
import sys
import time
from pathlib import Path

import click
import structlog

from repo_tasks.config.dotenv import read_dotenv
from repo_tasks.context import TaskContext
from repo_tasks.exceptions import CommandError, RepoTasksError, TaskNotFoundError
from repo_tasks.tasks import registry
from repo_tasks.utils.logging_config import configure_logging

log = structlog.get_logger(__name__)

DEFAULT_TASK = "help"
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def format_elapsed(seconds: float) -> str:
    """Format a duration like bash ``TIMEFORMAT=%3lR``, e.g. ``0m1.234s``."""
    minutes, remainder = divmod(round(max(seconds, 0.0), 3), 60)
    return f"{int(minutes)}m{remainder:.3f}s"


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_interspersed_args": False,
    }
)
@click.option(
    "--project-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="REPO_TASKS_PROJECT_DIR",
    default=None,
    help="Root of the template repository (default: current directory)",
)
@click.option(
    "--env-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Load KEY=VALUE pairs from this file before running the task",
)
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level",
)
@click.argument("task", required=False)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(
    ctx: click.Context,
    project_dir: Path | None,
    env_file: Path | None,
    log_level: str,
    task: str | None,
    args: tuple[str, ...],
) -> None:
    """Task runner for maintaining a cookiecutter template repository.

    \b
    Examples:
        repo-tasks                        # list tasks
        repo-tasks run-tests -k smoke     # forward arguments to pytest
        repo-tasks --env-file .env create-repo-if-not-exists
    """
    configure_logging(log_level)

    try:
        selected = registry.get(task or DEFAULT_TASK)
    except TaskNotFoundError as e:
        raise click.UsageError(e.message, ctx=ctx) from e

    env = dict(os.environ)
    if env_file is not None:
        try:
            env.update(read_dotenv(env_file))
        except RepoTasksError as e:
            click.echo(f"Error: {e.message}", err=True)
            sys.exit(EXIT_ERROR)

    cwd = Path.cwd()
    task_ctx = TaskContext.create(
        project_dir or cwd,
        env,
        cwd=cwd,
        prog_name=ctx.find_root().info_name or "repo-tasks",
    )

    log.info("task_started", task=selected.name, args=list(args))
    started = time.perf_counter()
    try:
        exit_code = selected(task_ctx, args)
    except CommandError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("task_command_failed", task=selected.name, exc_info=True)
        exit_code = e.returncode
    except RepoTasksError as e:
        click.echo(f"Error: {e.message}", err=True)
        log.debug("task_error", task=selected.name, exc_info=True)
        exit_code = EXIT_ERROR
    except OSError as e:
        click.echo(f"Error: {e}", err=True)
        log.debug("task_os_error", task=selected.name, exc_info=True)
        exit_code = EXIT_ERROR
    except KeyboardInterrupt:
        click.echo("\nInterrupted by user", err=True)
        exit_code = EXIT_INTERRUPTED

    click.echo(f"Task completed in {format_elapsed(time.perf_counter() - started)}", err=True)
    log.info("task_finished", task=selected.name, exit_code=exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    cli()
