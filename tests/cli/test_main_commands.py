"""Tests for the demo, env and help CLI commands."""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parents[2]


def run_cli(*args: str, env: dict[str, str] | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, ".", *args],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        env=env,
        timeout=30,
    )


@pytest.mark.integration
def test_demo_prints_book_schema():
    result = run_cli("demo")
    assert result.returncode == 0
    schema = json.loads(result.stdout)
    assert list(schema["properties"]) == [
        "isbn",
        "published_year",
        "author_name",
        "genre",
        "page_count",
        "in_print",
    ]
    assert schema["required"] == ["isbn"]


@pytest.mark.integration
def test_demo_full_prints_descriptor():
    result = run_cli("demo", "--full")
    assert result.returncode == 0
    data = json.loads(result.stdout)
    assert data["name"] == "book"
    assert data["ui"]["editor_panel"]["title"] == "Book Details"


@pytest.mark.integration
def test_json_indent_from_environment():
    env = {**os.environ, "CONTENT_MODEL_JSON_INDENT": "0"}
    result = run_cli("demo", env=env)
    assert result.returncode == 0
    assert result.stdout.startswith('{\n"type": "object"')


@pytest.mark.integration
def test_env_lists_variables():
    result = run_cli("env")
    assert result.returncode == 0
    assert "CONTENT_MODEL_LOG_LEVEL" in result.stdout
    assert "CONTENT_MODEL_JSON_INDENT" in result.stdout


@pytest.mark.integration
def test_help():
    result = run_cli("--help")
    assert result.returncode == 0
    assert "Usage: python . {command} [args]" in result.stdout


@pytest.mark.integration
def test_unknown_command():
    result = run_cli("frobnicate")
    assert result.returncode == 1
    assert "Unknown command: frobnicate" in result.stderr
