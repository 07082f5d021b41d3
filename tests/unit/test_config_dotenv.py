"""Tests for repo_tasks.config.dotenv module."""

import pytest

from repo_tasks.config.dotenv import read_dotenv
from repo_tasks.exceptions import ConfigurationError


@pytest.fixture
def dotenv_file(tmp_path):
    path = tmp_path / ".env"
    path.write_text(
        "# GitHub settings\n"
        "REPO_NAME=demo-repo\n"
        "\n"
        "GITHUB_USERNAME=octocat\n"
        "   \n"
        "#GH_TOKEN=commented-out\n"
        "IS_PUBLIC_REPO=false\n"
    )
    return path


def test_reads_key_value_pairs(dotenv_file):
    assert read_dotenv(dotenv_file) == {
        "REPO_NAME": "demo-repo",
        "GITHUB_USERNAME": "octocat",
        "IS_PUBLIC_REPO": "false",
    }


def test_skips_comment_lines(dotenv_file):
    assert "GH_TOKEN" not in read_dotenv(dotenv_file)


def test_values_are_not_interpolated(tmp_path):
    path = tmp_path / ".env"
    path.write_text("GREETING=hello ${USER}\n")

    assert read_dotenv(path) == {"GREETING": "hello ${USER}"}


def test_lines_without_equals_are_dropped(tmp_path):
    path = tmp_path / ".env"
    path.write_text("JUST_A_NAME\nKEY=value\n")

    assert read_dotenv(path) == {"KEY": "value"}


def test_value_may_contain_equals(tmp_path):
    path = tmp_path / ".env"
    path.write_text("QUERY=a=b\n")

    assert read_dotenv(path) == {"QUERY": "a=b"}


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigurationError, match="no .env file found"):
        read_dotenv(tmp_path / ".env")
