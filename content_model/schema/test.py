"""Unit tests for the Schema module."""

import pytest

from content_model.schema import (
    FIELD_TYPE_REGISTRY,
    Control,
    FieldType,
    default_control,
    get_field_type_meta,
    is_valid_field_type,
    resolve_field_type,
    strict_contains,
    strict_equals,
    valid_type_names,
    zero_value,
)


class TestFieldTypeRegistry:
    """Tests for FIELD_TYPE_REGISTRY completeness."""

    @pytest.mark.unit
    def test_all_field_types_registered(self):
        """Every FieldType has metadata in registry."""
        for ft in FieldType:
            assert ft in FIELD_TYPE_REGISTRY, f"Missing metadata for {ft}"

    @pytest.mark.unit
    def test_registry_has_6_entries(self):
        assert len(FIELD_TYPE_REGISTRY) == 6

    @pytest.mark.unit
    def test_meta_to_dict(self):
        d = get_field_type_meta(FieldType.NUMBER).to_dict()
        assert d == {
            "type": "number",
            "native_type": "float",
            "control": "number",
            "zero_value": 0.0,
            "description": "Floating-point number",
        }


class TestZeroValues:
    """Zero-values match each kind's native representation."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field_type,expected",
        [
            ("string", ""),
            ("integer", 0),
            ("number", 0.0),
            ("boolean", False),
            ("array", []),
            ("object", {}),
        ],
    )
    def test_zero_value(self, field_type, expected):
        assert strict_equals(zero_value(field_type), expected)

    @pytest.mark.unit
    def test_zero_values_are_fresh(self):
        """Mutable zero-values are never shared between calls."""
        first = zero_value(FieldType.ARRAY)
        first.append("x")
        assert zero_value(FieldType.ARRAY) == []

    @pytest.mark.unit
    def test_unknown_type_falls_back_to_empty_string(self):
        assert zero_value("date") == ""


class TestControls:
    """Default control hints per kind."""

    @pytest.mark.unit
    def test_default_controls(self):
        assert default_control("string") == "text"
        assert default_control("integer") == "number"
        assert default_control("number") == "number"
        assert default_control("boolean") == "checkbox"
        assert default_control("array") == "textarea"
        assert default_control("object") == "textarea"

    @pytest.mark.unit
    def test_unknown_type_falls_back_to_text(self):
        assert default_control("date") == Control.TEXT.value


class TestResolution:
    """Tests for type name resolution."""

    @pytest.mark.unit
    def test_resolve_by_name_and_member(self):
        assert resolve_field_type("integer") is FieldType.INTEGER
        assert resolve_field_type(FieldType.OBJECT) is FieldType.OBJECT

    @pytest.mark.unit
    def test_resolve_is_case_sensitive(self):
        assert resolve_field_type("String") is None

    @pytest.mark.unit
    def test_resolve_unhashable(self):
        assert resolve_field_type(["string"]) is None
        assert is_valid_field_type(None) is False

    @pytest.mark.unit
    def test_valid_type_names_order(self):
        assert valid_type_names() == [
            "string",
            "integer",
            "number",
            "boolean",
            "array",
            "object",
        ]


class TestStrictComparison:
    """strict_equals never coerces across types."""

    @pytest.mark.unit
    def test_bool_and_int_differ(self):
        assert not strict_equals(True, 1)
        assert not strict_equals(0, False)

    @pytest.mark.unit
    def test_int_and_float_differ(self):
        assert not strict_equals(0, 0.0)

    @pytest.mark.unit
    def test_same_type_equal(self):
        assert strict_equals("mystery", "mystery")
        assert strict_equals([1, 2], [1, 2])

    @pytest.mark.unit
    def test_contains(self):
        assert strict_contains(["1", "2"], "1")
        assert not strict_contains(["1", "2"], 1)
