"""Rendering of generated text: README, cookiecutter config, pull-request body.

Key Exports:
    TemplateEngine: Sandboxed Jinja2 engine over ``repo_tasks/templates``.
    render_readme, render_cookiecutter_config, render_pull_request_body:
        Convenience wrappers used by the GitHub tasks.
"""

from .engine import TemplateEngine

__all__ = [
    "TemplateEngine",
    "render_cookiecutter_config",
    "render_pull_request_body",
    "render_readme",
]

# Name the generated pull requests credit
GENERATOR_NAME = "jay-repogen"


def render_readme(repo_name: str) -> str:
    """Initial README of a freshly created repository."""
    return TemplateEngine().render("README.md.j2", {"repo_name": repo_name})


def render_cookiecutter_config(repo_name: str, package_import_name: str) -> str:
    """Cookiecutter user config supplying ``default_context`` for ``--no-input`` runs."""
    return TemplateEngine().render(
        "cookiecutter_config.yaml.j2",
        {"repo_name": repo_name, "package_import_name": package_import_name},
    )


def render_pull_request_body(generator: str = GENERATOR_NAME) -> str:
    return TemplateEngine().render("pull_request_body.md.j2", {"generator": generator}).strip()
