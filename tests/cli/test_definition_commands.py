"""Tests for the definition CLI commands."""

import json
import subprocess
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).parents[2]

BOOK_DEFINITION = {
    "name": "book",
    "args": {
        "fields": {
            "isbn": {"required": True, "description": "ISBN"},
            "genre": {"enum": ["fiction", "mystery"]},
            "in_print": {"type": "boolean", "default": True},
        }
    },
}


def run_cli(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, ".", *args],
        capture_output=True,
        text=True,
        cwd=REPO_ROOT,
        timeout=30,
    )


@pytest.fixture
def definition(tmp_path):
    path = tmp_path / "book.json"
    path.write_text(json.dumps(BOOK_DEFINITION))
    return path


@pytest.fixture
def write_values(tmp_path):
    def write(values):
        path = tmp_path / "values.json"
        path.write_text(json.dumps(values))
        return str(path)

    return write


@pytest.mark.integration
def test_fields_prints_normalized_fields(definition):
    result = run_cli("fields", str(definition))
    assert result.returncode == 0
    fields = json.loads(result.stdout)
    assert list(fields) == ["isbn", "genre", "in_print"]
    assert fields["genre"]["default"] == "fiction"
    assert fields["in_print"]["control"] == "checkbox"


@pytest.mark.integration
def test_schema_prints_projection(definition):
    result = run_cli("schema", str(definition))
    assert result.returncode == 0
    schema = json.loads(result.stdout)
    assert schema["required"] == ["isbn"]
    assert schema["properties"]["isbn"] == {"type": "string", "description": "ISBN"}


@pytest.mark.integration
def test_schema_single_field(definition):
    result = run_cli("schema", str(definition), "--field", "in_print")
    assert result.returncode == 0
    assert json.loads(result.stdout) == {"type": "boolean", "default": True}


@pytest.mark.integration
def test_schema_unknown_field(definition):
    result = run_cli("schema", str(definition), "--field", "missing")
    assert result.returncode == 1


@pytest.mark.integration
def test_validate_accepts_valid_values(definition, write_values):
    result = run_cli("validate", str(definition), write_values({"isbn": "978-0"}))
    assert result.returncode == 0


@pytest.mark.integration
def test_validate_reports_missing_field(definition, write_values):
    result = run_cli("validate", str(definition), write_values({"genre": "mystery"}))
    assert result.returncode == 1
    error = json.loads(result.stdout)
    assert error["code"] == "missing_required_field"
    assert error["data"] == {"key": "isbn"}


@pytest.mark.integration
def test_validate_reports_enum_violation(definition, write_values):
    values = write_values({"isbn": "978-0", "genre": "romance"})
    result = run_cli("validate", str(definition), values)
    assert result.returncode == 1
    assert json.loads(result.stdout)["code"] == "invalid_enum_value"


@pytest.mark.integration
def test_sanitize_prints_clean_values(definition, write_values):
    values = write_values({"isbn": " <b>978-0</b> ", "genre": "romance"})
    result = run_cli("sanitize", str(definition), values)
    assert result.returncode == 0
    assert json.loads(result.stdout) == {
        "isbn": "978-0",
        "genre": "fiction",
        "in_print": False,
    }


@pytest.mark.integration
def test_invalid_field_type_exits_with_error(tmp_path):
    path = tmp_path / "event.json"
    path.write_text(
        json.dumps({"name": "event", "args": {"fields": {"at": {"type": "date"}}}})
    )
    result = run_cli("fields", str(path))
    assert result.returncode == 1
    assert json.loads(result.stdout)["code"] == "invalid_field_type"


@pytest.mark.integration
def test_missing_definition_exits_with_error(tmp_path):
    result = run_cli("fields", str(tmp_path / "missing.json"))
    assert result.returncode == 1
    assert "Definition file not found" in result.stderr
