"""Unit tests for the error taxonomy."""

import pytest

from content_model.errors import (
    AlreadyRegisteredError,
    ContentModelError,
    ErrorCode,
    InvalidEnumValueError,
    InvalidFieldKeyError,
    InvalidFieldTypeError,
    InvalidNameLengthError,
    MissingRequiredFieldError,
    NotRegisteredError,
    RegistrationError,
    SchemaError,
    StructuralTypeError,
)


class TestHierarchy:
    """Errors group under registration and schema bases."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error",
        [
            InvalidNameLengthError("", 20),
            AlreadyRegisteredError("book"),
            NotRegisteredError("book"),
            StructuralTypeError("book", "reserved"),
        ],
    )
    def test_registration_errors(self, error):
        assert isinstance(error, RegistrationError)
        assert isinstance(error, ContentModelError)

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "error",
        [
            InvalidFieldTypeError("released", "date", ["string"]),
            InvalidFieldKeyError(""),
            MissingRequiredFieldError("isbn"),
            InvalidEnumValueError("genre", ["fiction"]),
        ],
    )
    def test_schema_errors(self, error):
        assert isinstance(error, SchemaError)
        assert not isinstance(error, RegistrationError)


class TestErrorPayloads:
    """Errors carry codes, messages, and structured data."""

    @pytest.mark.unit
    def test_invalid_field_type_message(self):
        error = InvalidFieldTypeError("released", "date", ["string", "integer"])
        assert error.code is ErrorCode.INVALID_FIELD_TYPE
        assert error.key == "released"
        assert error.field_type == "date"
        assert error.valid_types == ["string", "integer"]
        assert str(error) == (
            'Invalid field type "date" for field "released". '
            "Valid types are: string, integer."
        )

    @pytest.mark.unit
    def test_invalid_enum_message_lists_allowed(self):
        error = InvalidEnumValueError("genre", ["fiction", "mystery"], "romance")
        assert "fiction, mystery" in error.message
        assert error.value == "romance"

    @pytest.mark.unit
    def test_missing_required_field(self):
        error = MissingRequiredFieldError("isbn")
        assert error.key == "isbn"
        assert error.code.value == "missing_required_field"

    @pytest.mark.unit
    def test_to_dict(self):
        error = AlreadyRegisteredError("book")
        assert error.to_dict() == {
            "code": "content_type_exists",
            "message": 'Content type "book" is already registered.',
            "data": {"name": "book"},
        }

    @pytest.mark.unit
    def test_name_length_mentions_limit(self):
        error = InvalidNameLengthError("x" * 21, 20)
        assert "between 1 and 20" in str(error)
        assert error.data["max_length"] == 20

    @pytest.mark.unit
    def test_raise_and_catch_by_base(self):
        with pytest.raises(SchemaError) as exc_info:
            raise MissingRequiredFieldError("isbn")
        assert exc_info.value.code is ErrorCode.MISSING_REQUIRED_FIELD
