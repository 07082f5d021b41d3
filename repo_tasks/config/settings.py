"""
Task settings using Pydantic for typed access to environment variables.

The runner never reads ``os.environ`` directly inside a task. The CLI snapshots
the environment into :class:`~repo_tasks.context.TaskContext` and tasks build a
:class:`TaskSettings` from that mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

from repo_tasks.exceptions import ConfigurationError

DEFAULT_VISIBILITY = "true"


class TaskSettings(BaseModel):
    """Environment variables recognised by the tasks.

    Field aliases are the environment variable names, so a settings object can
    be validated straight from an environment mapping. Empty values count as
    unset, matching the shell convention ``${VAR:-default}``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    repo_name: str | None = Field(default=None, alias="REPO_NAME", description="Name of the GitHub repository")
    github_username: str | None = Field(
        default=None, alias="GITHUB_USERNAME", description="GitHub user owning the repository"
    )
    is_public_repo: str | None = Field(
        default=None,
        alias="IS_PUBLIC_REPO",
        description="'true' creates a public repository, anything else a private one (default: true)",
    )
    gh_token: SecretStr | None = Field(default=None, alias="GH_TOKEN", description="Token used to push over HTTPS")
    test_pypi_token: SecretStr | None = Field(
        default=None, alias="TEST_PYPI_TOKEN", description="Test PyPI token stored as an Actions secret"
    )
    prod_pypi_token: SecretStr | None = Field(
        default=None, alias="PROD_PYPI_TOKEN", description="PyPI token stored as an Actions secret"
    )
    package_import_name: str | None = Field(
        default=None, alias="PACKAGE_IMPORT_NAME", description="Import name of the generated package"
    )

    @field_validator("*", mode="before")
    @classmethod
    def _blank_as_unset(cls, value: Any) -> Any:
        if value == "":
            return None
        return value

    @classmethod
    def env_names(cls) -> list[str]:
        """Names of every recognised environment variable."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> TaskSettings:
        """Build settings from an environment mapping.

        Args:
            env: Environment variables, typically ``TaskContext.env``

        Returns:
            TaskSettings instance; unknown variables are ignored
        """
        return cls.model_validate({name: env[name] for name in cls.env_names() if name in env})

    @property
    def is_public(self) -> bool:
        """Only the exact value ``true`` selects a public repository."""
        value = self.is_public_repo if self.is_public_repo is not None else DEFAULT_VISIBILITY
        return value == "true"

    @property
    def visibility(self) -> str:
        """Visibility flag value for ``gh repo create``."""
        return "public" if self.is_public else "private"

    @property
    def full_repo_name(self) -> str:
        """``OWNER/NAME`` as accepted by the GitHub CLI."""
        return f"{self.github_username}/{self.repo_name}"

    def require(self, *env_names: str) -> None:
        """Ensure the given environment variables are set.

        Args:
            *env_names: Environment variable names, e.g. ``"REPO_NAME"``

        Raises:
            ConfigurationError: Listing every variable that is unset or empty
        """
        by_alias = {field.alias or name: name for name, field in type(self).model_fields.items()}
        missing = []
        for env_name in env_names:
            if env_name not in by_alias:
                raise ValueError(f"Unknown setting: {env_name}")
            if getattr(self, by_alias[env_name]) is None:
                missing.append(env_name)

        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}",
                missing=missing,
            )

    def secret_values(self) -> list[str]:
        """Plain values of every configured token, for log redaction."""
        secrets = (self.gh_token, self.test_pypi_token, self.prod_pypi_token)
        return [secret.get_secret_value() for secret in secrets if secret is not None]
