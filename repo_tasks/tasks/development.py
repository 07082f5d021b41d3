"""Local development tasks: tooling, sample generation, lint, tests, cleanup."""

import fnmatch
import os
import shutil
import sys
from collections.abc import Sequence
from pathlib import Path

import click
import structlog

from repo_tasks.context import TaskContext
from repo_tasks.exceptions import TaskError
from repo_tasks.tasks.registry import registry

log = structlog.get_logger(__name__)

SAMPLE_DIRNAME = "sample"
SAMPLE_COMMIT_MESSAGE = "feature: generated sample project with python-course-cookiecutter-v2"

# pre-commit hook that blocks commits to main; merged PRs land on main in CI
CI_SKIPPED_HOOKS = "no-commit-to-branch"

CLEAN_PATHS = ("dist", "build", "coverage.xml", "test-reports", SAMPLE_DIRNAME)
CLEAN_DIR_PATTERNS = ("*cache*", "*.dist-info", "*.egg-info", "*htmlcov")
CLEAN_FILE_PATTERNS = ("*.pyc",)
# Anything inside a virtualenv is left alone
PROTECTED_PATH_PATTERN = "*env/*"


def _pip(*args: str) -> list[str]:
    return [sys.executable, "-m", "pip", "install", *args]


@registry.task("install")
def install(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Install core and development dependencies into the active interpreter."""
    ctx.run_all(
        [
            _pip("--upgrade", "pip"),
            _pip("cookiecutter"),
            _pip("pytest", "pre-commit"),
        ]
    )


def _single_directory(parent: Path) -> Path:
    directories = [child for child in parent.iterdir() if child.is_dir()] if parent.is_dir() else []
    if len(directories) != 1:
        raise TaskError(f"Expected exactly one generated project in {parent}, found {len(directories)}")
    return directories[0]


@registry.task("generate-project")
def generate_project(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Generate a sample project from the template and commit it to a fresh git repository."""
    sample_dir = ctx.project_dir / SAMPLE_DIRNAME
    ctx.run("cookiecutter", str(ctx.cwd), "--output-dir", str(sample_dir))

    project_ctx = ctx.chdir(_single_directory(sample_dir))
    project_ctx.run_all(
        [
            ["git", "init"],
            ["git", "add", "--all"],
            ["git", "branch", "-M", "main"],
            ["git", "commit", "-m", SAMPLE_COMMIT_MESSAGE],
        ]
    )
    log.info("sample_project_generated", path=str(project_ctx.cwd))


@registry.task("lint")
def lint(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Run every pre-commit hook on all files."""
    ctx.run("pre-commit", "run", "--all-files")


@registry.task("lint:ci")
def lint_ci(ctx: TaskContext, args: Sequence[str] = (), *, check: bool = True) -> int:
    """Run pre-commit as CI does, skipping the hook that blocks commits to main."""
    result = ctx.with_env(SKIP=CI_SKIPPED_HOOKS).run("pre-commit", "run", "--all-files", check=check)
    return result.returncode


def _default_test_args(ctx: TaskContext, args: Sequence[str]) -> list[str]:
    return list(args) or [f"{ctx.project_dir / 'tests'}/"]


@registry.task("test:quick")
def test_quick(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Run the test-suite without tests marked slow."""
    run_tests(ctx, ["-m", "not slow", *_default_test_args(ctx, args)])


@registry.task("run-tests")
def run_tests(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Run pytest, forwarding any arguments (default: the tests/ directory)."""
    ctx.run(sys.executable, "-m", "pytest", *_default_test_args(ctx, args))


def _matches(name: str, patterns: Sequence[str]) -> bool:
    return any(fnmatch.fnmatchcase(name, pattern) for pattern in patterns)


def _is_protected(path: Path, root: Path, *, as_directory: bool = False) -> bool:
    relative = f"./{path.relative_to(root).as_posix()}"
    if as_directory:
        relative += "/"
    return fnmatch.fnmatchcase(relative, PROTECTED_PATH_PATTERN)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def clean_artifacts(root: Path) -> list[Path]:
    """Delete build, test and cache artifacts under ``root``.

    Removes the fixed artifact paths at the top level, then walks the tree for
    cache/metadata directories and compiled files. Paths inside a virtualenv
    (``*env/*``) are skipped.

    Args:
        root: Directory to clean

    Returns:
        Every path that was removed
    """
    removed: list[Path] = []

    for name in CLEAN_PATHS:
        target = root / name
        if target.exists() or target.is_symlink():
            _remove(target)
            removed.append(target)

    for dirpath, dirnames, filenames in os.walk(root):
        current = Path(dirpath)

        for dirname in list(dirnames):
            candidate = current / dirname
            if (
                not candidate.is_symlink()
                and _matches(dirname, CLEAN_DIR_PATTERNS)
                and not _is_protected(candidate, root)
            ):
                shutil.rmtree(candidate)
                removed.append(candidate)
                dirnames.remove(dirname)
            elif _is_protected(candidate, root, as_directory=True):
                # Everything below a directory named *env is inside a virtualenv
                dirnames.remove(dirname)

        for filename in filenames:
            candidate = current / filename
            if _matches(filename, CLEAN_FILE_PATTERNS) and not _is_protected(candidate, root):
                candidate.unlink()
                removed.append(candidate)

    return removed


@registry.task("clean")
def clean(ctx: TaskContext, args: Sequence[str] = ()) -> None:
    """Remove all files generated by tests, builds, or operating this codebase."""
    removed = clean_artifacts(ctx.cwd)
    for path in removed:
        log.debug("artifact_removed", path=str(path))
    click.echo(f"Removed {len(removed)} artifact(s)")
