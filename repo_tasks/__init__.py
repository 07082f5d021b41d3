"""repo-tasks: task runner for maintaining a cookiecutter template repository.

Every task is a short, fail-fast sequence of external tool invocations
(cookiecutter, git, gh, pytest, pre-commit).
"""

__version__ = "0.1.0"
