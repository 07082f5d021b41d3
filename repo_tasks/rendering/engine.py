"""Jinja2 rendering of the text files the tasks write.

The engine renders the initial README, the cookiecutter ``--config-file`` and
the pull-request body from templates shipped in ``repo_tasks/templates``.

Configuration:
    - Sandboxed environment
    - StrictUndefined so a missing value fails the task instead of rendering
      an empty string
    - keep_trailing_newline preserves file format

Example:
    >>> from repo_tasks.rendering.engine import TemplateEngine
    >>> engine = TemplateEngine()
    >>> engine.render("README.md.j2", {"repo_name": "demo"})
    '# demo\\n'
"""

from pathlib import Path
from typing import Any

from jinja2 import FileSystemLoader, StrictUndefined, TemplateError as JinjaTemplateError
from jinja2.sandbox import SandboxedEnvironment

from repo_tasks.exceptions import TaskError

TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class TemplateEngine:
    """Sandboxed Jinja2 environment over the package templates.

    Attributes:
        env: The SandboxedEnvironment instance.
    """

    def __init__(self) -> None:
        self.env = SandboxedEnvironment(
            loader=FileSystemLoader(str(TEMPLATE_DIR)),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, context: dict[str, Any]) -> str:
        """Render a template.

        Args:
            template_name: Template file name under ``repo_tasks/templates``
            context: Template variables

        Returns:
            Rendered text

        Raises:
            TaskError: If the template is missing or a variable is undefined
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except JinjaTemplateError as e:
            raise TaskError(f"Failed to render {template_name}: {e}") from e
