"""Environment tasks."""

from collections.abc import Sequence

import click
import structlog

from repo_tasks.config.dotenv import DOTENV_FILENAME, read_dotenv
from repo_tasks.context import TaskContext
from repo_tasks.exceptions import ConfigurationError
from repo_tasks.tasks.registry import registry

log = structlog.get_logger(__name__)


@registry.task("try-load-dotenv")
def try_load_dotenv(ctx: TaskContext, args: Sequence[str] = ()) -> int:
    """Export the contents of .env to every later command."""
    try:
        values = read_dotenv(ctx.project_dir / DOTENV_FILENAME)
    except ConfigurationError:
        click.echo("no .env file found")
        return 1

    ctx.update_env(values)
    log.info("dotenv_exported", keys=sorted(values))
    click.echo(f"Loaded {len(values)} variable(s) from {DOTENV_FILENAME}")
    return 0
