"""Lookup table from task name to callback.

Tasks register themselves with the :meth:`TaskRegistry.task` decorator. The
registry keeps registration order so ``help`` lists tasks in the order they
are defined.
"""

from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass

from repo_tasks.context import TaskContext
from repo_tasks.exceptions import TaskNotFoundError

TaskCallback = Callable[[TaskContext, Sequence[str]], int | None]


@dataclass(frozen=True)
class Task:
    """A named unit of orchestration selectable from the command line."""

    name: str
    callback: TaskCallback

    def __call__(self, ctx: TaskContext, args: Sequence[str] = ()) -> int:
        return self.callback(ctx, args) or 0


class TaskRegistry:
    """Ordered mapping of task names to :class:`Task` objects."""

    def __init__(self) -> None:
        self._tasks: dict[str, Task] = {}

    def task(self, name: str) -> Callable[[TaskCallback], TaskCallback]:
        """Register the decorated function under ``name``."""

        def decorator(func: TaskCallback) -> TaskCallback:
            self.register(name, func)
            return func

        return decorator

    def register(self, name: str, func: TaskCallback) -> Task:
        if name in self._tasks:
            raise ValueError(f"Task already registered: {name}")
        task = Task(name=name, callback=func)
        self._tasks[name] = task
        return task

    def get(self, name: str) -> Task:
        """Look up a task.

        Raises:
            TaskNotFoundError: If no task is registered under ``name``
        """
        try:
            return self._tasks[name]
        except KeyError:
            raise TaskNotFoundError(name, self.names()) from None

    def names(self) -> list[str]:
        return list(self._tasks)

    def __contains__(self, name: object) -> bool:
        return name in self._tasks

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks.values())

    def __len__(self) -> int:
        return len(self._tasks)


# Default registry populated by the modules in ``repo_tasks.tasks``
registry = TaskRegistry()
