"""Unit tests for validation module."""

import pytest

from content_model.errors import (
    InvalidEnumValueError,
    InvalidFieldKeyError,
    InvalidFieldTypeError,
    MissingRequiredFieldError,
)
from content_model.fields import normalize_fields
from content_model.validation import (
    is_valid_fields,
    is_valid_values,
    validate_fields,
    validate_values,
)

ALL_TYPES = ["string", "integer", "number", "boolean", "array", "object"]


@pytest.fixture
def book_fields():
    return normalize_fields(
        {
            "isbn": {"type": "string", "required": True},
            "published_year": {"type": "integer"},
            "genre": {"type": "string", "enum": ["fiction", "mystery"]},
            "in_print": {"type": "boolean", "required": True, "default": True},
        }
    )


class TestValidateFields:
    """Tests for the structural pass."""

    @pytest.mark.unit
    def test_all_catalog_types_pass(self):
        fields = normalize_fields({t: {"type": t} for t in ALL_TYPES})
        validate_fields(fields)
        assert is_valid_fields(fields) is True

    @pytest.mark.unit
    def test_unknown_type_rejected(self):
        fields = normalize_fields({"title": {}, "released": {"type": "date"}})
        with pytest.raises(InvalidFieldTypeError) as exc_info:
            validate_fields(fields)
        error = exc_info.value
        assert error.key == "released"
        assert error.field_type == "date"
        assert error.valid_types == ALL_TYPES

    @pytest.mark.unit
    def test_fail_fast_on_first_offender(self):
        fields = normalize_fields(
            {"a": {"type": "date"}, "b": {"type": "datetime"}}
        )
        with pytest.raises(InvalidFieldTypeError) as exc_info:
            validate_fields(fields)
        assert exc_info.value.key == "a"

    @pytest.mark.unit
    def test_is_valid_fields_false(self):
        assert is_valid_fields(normalize_fields({"x": {"type": "float"}})) is False

    @pytest.mark.unit
    def test_empty_field_set_valid(self):
        validate_fields({})

    @pytest.mark.unit
    def test_empty_key_rejected(self):
        fields = normalize_fields({"title": {}, "": {"type": "integer"}})
        with pytest.raises(InvalidFieldKeyError) as exc_info:
            validate_fields(fields)
        assert exc_info.value.to_dict()["code"] == "invalid_field_key"
        assert is_valid_fields(fields) is False

    @pytest.mark.unit
    def test_empty_bare_key_rejected(self):
        with pytest.raises(InvalidFieldKeyError):
            validate_fields(normalize_fields(["title", ""]))


class TestValidateValuesRequired:
    """Required-field semantics of the value pass."""

    @pytest.mark.unit
    def test_missing_required_string(self):
        fields = normalize_fields({"isbn": {"required": True}})
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_values(fields, {})
        assert exc_info.value.key == "isbn"

    @pytest.mark.unit
    def test_empty_string_counts_as_missing(self):
        fields = normalize_fields({"isbn": {"required": True}})
        with pytest.raises(MissingRequiredFieldError):
            validate_values(fields, {"isbn": ""})

    @pytest.mark.unit
    def test_none_counts_as_missing(self):
        fields = normalize_fields({"isbn": {"required": True}})
        with pytest.raises(MissingRequiredFieldError):
            validate_values(fields, {"isbn": None})

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field_type,value",
        [("boolean", False), ("integer", 0), ("array", []), ("object", {})],
    )
    def test_falsy_non_string_values_present(self, field_type, value):
        """False, 0, and empty containers are not treated as missing."""
        fields = normalize_fields({"flag": {"type": field_type, "required": True}})
        validate_values(fields, {"flag": value})

    @pytest.mark.unit
    def test_required_checked_in_field_order(self, book_fields):
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_values(book_fields, {})
        assert exc_info.value.key == "isbn"

    @pytest.mark.unit
    def test_required_before_enum(self, book_fields):
        """All required checks complete before any enum check."""
        with pytest.raises(MissingRequiredFieldError) as exc_info:
            validate_values(book_fields, {"isbn": "978-0", "genre": "romance"})
        assert exc_info.value.key == "in_print"


class TestValidateValuesEnum:
    """Enum semantics of the value pass."""

    @pytest.mark.unit
    def test_value_outside_enum(self, book_fields):
        values = {"isbn": "978-0", "in_print": False, "genre": "romance"}
        with pytest.raises(InvalidEnumValueError) as exc_info:
            validate_values(book_fields, values)
        assert exc_info.value.key == "genre"
        assert exc_info.value.allowed == ["fiction", "mystery"]

    @pytest.mark.unit
    def test_value_inside_enum(self, book_fields):
        values = {"isbn": "978-0", "in_print": False, "genre": "mystery"}
        validate_values(book_fields, values)
        assert is_valid_values(book_fields, values) is True

    @pytest.mark.unit
    def test_enum_uses_strict_equality(self):
        fields = normalize_fields({"rating": {"type": "integer", "enum": [1, 2, 3]}})
        with pytest.raises(InvalidEnumValueError):
            validate_values(fields, {"rating": "1"})
        with pytest.raises(InvalidEnumValueError):
            validate_values(fields, {"rating": True})

    @pytest.mark.unit
    def test_absent_enum_field_not_checked(self, book_fields):
        validate_values(book_fields, {"isbn": "978-0", "in_print": True})

    @pytest.mark.unit
    def test_unknown_keys_ignored(self, book_fields):
        values = {"isbn": "978-0", "in_print": True, "shelf": "B4"}
        assert is_valid_values(book_fields, values) is True

    @pytest.mark.unit
    def test_is_valid_values_false(self, book_fields):
        assert is_valid_values(book_fields, {}) is False
