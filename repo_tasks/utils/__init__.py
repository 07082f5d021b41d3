"""Shared utilities: logging setup and external command execution."""

from repo_tasks.utils.logging_config import configure_logging
from repo_tasks.utils.subprocess_runner import CommandResult, CommandRunner, redact

__all__ = ["CommandResult", "CommandRunner", "configure_logging", "redact"]
