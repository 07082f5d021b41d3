"""Configuration for the task runner.

Key Components:
    - TaskSettings: Typed view of the recognised environment variables
    - read_dotenv: ``.env`` file parsing

Example:
    >>> from repo_tasks.config import TaskSettings
    >>> settings = TaskSettings.from_env({"REPO_NAME": "demo", "GITHUB_USERNAME": "octocat"})
    >>> settings.full_repo_name
    'octocat/demo'
"""

from repo_tasks.config.dotenv import DOTENV_FILENAME, read_dotenv
from repo_tasks.config.settings import TaskSettings

__all__ = ["DOTENV_FILENAME", "TaskSettings", "read_dotenv"]
