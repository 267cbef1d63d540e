"""Unit tests for sanitize module."""

import logging

import pytest

from content_model.fields import normalize_field, normalize_fields
from content_model.sanitize import (
    TYPE_SANITIZERS,
    field_sanitizer,
    resolve_sanitizer,
    sanitize_array,
    sanitize_boolean,
    sanitize_by_type,
    sanitize_integer,
    sanitize_number,
    sanitize_object,
    sanitize_submission,
    sanitize_text,
)
from content_model.schema import FieldType


class TestTypeSanitizers:
    """Tests for the per-type sanitizer table."""

    @pytest.mark.unit
    def test_every_field_type_has_sanitizer(self):
        for field_type in FieldType:
            assert field_type in TYPE_SANITIZERS

    @pytest.mark.unit
    def test_unknown_type_passes_through(self):
        value = {"when": "2024-01-01"}
        assert sanitize_by_type(value, "date") is value

    @pytest.mark.unit
    def test_accepts_enum_and_name(self):
        assert sanitize_by_type("42", "integer") == 42
        assert sanitize_by_type("42", FieldType.NUMBER) == 42.0


class TestSanitizeText:
    """Tests for plain text sanitization."""

    @pytest.mark.unit
    def test_strips_tags(self):
        assert sanitize_text("<b>Hello</b>  <i>world</i>") == "Hello world"

    @pytest.mark.unit
    def test_drops_script_content(self):
        assert sanitize_text("<script>alert(1)</script>Dune") == "Dune"

    @pytest.mark.unit
    def test_collapses_whitespace_and_trims(self):
        assert sanitize_text("  line one\n\tline two \r\n") == "line one line two"

    @pytest.mark.unit
    def test_removes_percent_octets(self):
        assert sanitize_text("50%25 off") == "50 off"

    @pytest.mark.unit
    def test_escapes_bare_less_than(self):
        assert sanitize_text("1 < 2") == "1 &lt; 2"

    @pytest.mark.unit
    def test_keeps_entities(self):
        assert sanitize_text("<i>Tom</i> &amp; Jerry") == "Tom &amp; Jerry"

    @pytest.mark.unit
    def test_non_string_inputs(self):
        assert sanitize_text(None) == ""
        assert sanitize_text(42) == "42"
        assert sanitize_text(True) == "1"
        assert sanitize_text(False) == ""
        assert sanitize_text(["a", "b"]) == ""
        assert sanitize_text({"a": 1}) == ""
        assert sanitize_text(b"bytes") == "bytes"


class TestSanitizeNumeric:
    """Tests for integer and number sanitization."""

    @pytest.mark.unit
    def test_integer_from_strings(self):
        assert sanitize_integer("42") == 42
        assert sanitize_integer(" 7") == 7
        assert sanitize_integer("12abc") == 12
        assert sanitize_integer("-3.9") == -3
        assert sanitize_integer("1e3") == 1000
        assert sanitize_integer("abc") == 0
        assert sanitize_integer("") == 0

    @pytest.mark.unit
    def test_integer_from_other_values(self):
        assert sanitize_integer(4.7) == 4
        assert sanitize_integer(True) == 1
        assert sanitize_integer(None) == 0
        assert sanitize_integer([1]) == 1
        assert sanitize_integer([]) == 0
        assert sanitize_integer(float("nan")) == 0

    @pytest.mark.unit
    def test_integer_result_type(self):
        assert type(sanitize_integer("3.0")) is int
        assert type(sanitize_integer(False)) is int

    @pytest.mark.unit
    def test_number(self):
        assert sanitize_number("3.14abc") == 3.14
        assert sanitize_number("x") == 0.0
        assert sanitize_number(None) == 0.0
        assert type(sanitize_number(2)) is float

    @pytest.mark.unit
    def test_long_digit_strings(self):
        assert sanitize_number("9" * 400) == float("inf")
        assert sanitize_number("-" + "9" * 400) == float("-inf")
        assert sanitize_number(10**400) == float("inf")
        assert sanitize_integer("9" * 5000) == 0
        assert sanitize_integer("9" * 400) == int("9" * 400)

    @pytest.mark.unit
    def test_long_digit_strings_by_type(self):
        assert sanitize_by_type("9" * 400, "number") == float("inf")
        assert sanitize_by_type("9" * 5000, "integer") == 0


class TestSanitizeBoolean:
    """Tests for boolean sanitization."""

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["false", "FALSE", "0", "", 0, None, []])
    def test_false_values(self, value):
        assert sanitize_boolean(value) is False

    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["1", "true", "on", "no", 1, [0]])
    def test_true_values(self, value):
        assert sanitize_boolean(value) is True


class TestSanitizeContainers:
    """Tests for array and object sanitization."""

    @pytest.mark.unit
    def test_array(self):
        assert sanitize_array((1, 2)) == [1, 2]
        assert sanitize_array(["a"]) == ["a"]
        assert sanitize_array("a") == []
        assert sanitize_array({"a": 1}) == []

    @pytest.mark.unit
    def test_object(self):
        assert sanitize_object({"a": 1}) == {"a": 1}
        assert sanitize_object([("a", 1)]) == {}
        assert sanitize_object(None) == {}


class TestFieldSanitizer:
    """Tests for per-field sanitizers and enum clamping."""

    @pytest.mark.unit
    def test_clamps_to_first_enum_member(self):
        field = normalize_field("genre", {"enum": ["fiction", "mystery"]})
        sanitize = field_sanitizer(field)
        assert sanitize("romance") == "fiction"
        assert sanitize("mystery") == "mystery"

    @pytest.mark.unit
    def test_clamps_after_type_sanitization(self):
        field = normalize_field("genre", {"enum": ["fiction", "mystery"]})
        assert field_sanitizer(field)("<b>mystery</b>") == "mystery"

    @pytest.mark.unit
    def test_integer_enum(self):
        field = normalize_field("rating", {"type": "integer", "enum": [1, 2, 3]})
        sanitize = field_sanitizer(field)
        assert sanitize("2") == 2
        assert sanitize("9") == 1

    @pytest.mark.unit
    def test_clamp_logs_debug(self, caplog):
        field = normalize_field("genre", {"enum": ["fiction"]})
        with caplog.at_level(logging.DEBUG, logger="content_model.sanitize.lib"):
            field_sanitizer(field)("romance")
        assert "genre" in caplog.text

    @pytest.mark.unit
    def test_no_enum_no_clamp(self):
        field = normalize_field("title")
        assert field_sanitizer(field)("anything") == "anything"

    @pytest.mark.unit
    def test_custom_sanitizer_wins(self):
        field = normalize_field("code", {"sanitize_callback": str.upper})
        assert resolve_sanitizer(field)("abc") == "ABC"

    @pytest.mark.unit
    def test_default_sanitizer_resolved(self):
        field = normalize_field("pages", {"type": "integer"})
        assert resolve_sanitizer(field)("300 pages") == 300


class TestSanitizeSubmission:
    """Tests for whole-form sanitization."""

    @pytest.fixture
    def fields(self):
        return normalize_fields(
            {
                "title": {},
                "published_year": {"type": "integer"},
                "in_print": {"type": "boolean", "default": True},
            }
        )

    @pytest.mark.unit
    def test_sanitizes_present_values(self, fields):
        result = sanitize_submission(
            fields, {"title": " Dune ", "published_year": "1965", "in_print": "1"}
        )
        assert result == {"title": "Dune", "published_year": 1965, "in_print": True}

    @pytest.mark.unit
    def test_missing_boolean_becomes_false(self, fields):
        result = sanitize_submission(fields, {"title": "Dune"})
        assert result == {"title": "Dune", "in_print": False}

    @pytest.mark.unit
    def test_unknown_keys_dropped(self, fields):
        result = sanitize_submission(fields, {"author": "Herbert", "in_print": "0"})
        assert result == {"in_print": False}

    @pytest.mark.unit
    def test_field_order(self, fields):
        result = sanitize_submission(
            fields, {"in_print": "1", "published_year": "1", "title": "x"}
        )
        assert list(result) == ["title", "published_year", "in_print"]
