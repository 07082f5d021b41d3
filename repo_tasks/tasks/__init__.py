"""Tasks selectable from the command line.

Importing this package registers every task with :data:`registry`, in the
order ``help`` lists them.

Task Modules:
    development: install, generate-project, lint, lint:ci, test:quick,
        run-tests, clean
    environment: try-load-dotenv
    github: create-repo-if-not-exists, push-initial-readme-to-repo,
        create-sample-repo, configure-repo, open-pr-with-generated-project
    usage: help
"""

from repo_tasks.tasks import development, environment, github, usage  # noqa: F401
from repo_tasks.tasks.registry import Task, TaskRegistry, registry

__all__ = ["Task", "TaskRegistry", "registry"]
