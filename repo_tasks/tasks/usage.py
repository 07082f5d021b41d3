"""The ``help`` task, listing every registered task."""

from collections.abc import Sequence

import click

from repo_tasks.context import TaskContext
from repo_tasks.tasks.registry import TaskRegistry, registry


def format_task_list(tasks: TaskRegistry) -> str:
    """Number task names one per line, as ``cat -n`` does."""
    return "\n".join(f"{index:>6}\t{name}" for index, name in enumerate(tasks.names(), start=1))


@registry.task("help")
def show_help(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Print usage and all available tasks."""
    click.echo(f"{ctx.prog_name} <task> <args>")
    click.echo("Tasks:")
    click.echo(format_task_list(registry))
