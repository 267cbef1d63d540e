"""Unit tests for field normalization."""

import dataclasses

import pytest

from content_model.fields import (
    FieldDescriptor,
    generate_label,
    normalize_field,
    normalize_fields,
)
from content_model.schema import FieldType, strict_equals


class TestGenerateLabel:
    """Tests for label inference from field keys."""

    @pytest.mark.unit
    def test_underscores(self):
        assert generate_label("published_year") == "Published Year"

    @pytest.mark.unit
    def test_hyphens(self):
        assert generate_label("author-name") == "Author Name"

    @pytest.mark.unit
    def test_existing_capitals_kept(self):
        """Only the first letter of each word changes."""
        assert generate_label("ISBN_code") == "ISBN Code"

    @pytest.mark.unit
    def test_single_word(self):
        assert generate_label("genre") == "Genre"


class TestNormalizeField:
    """Tests for single-declaration normalization."""

    @pytest.mark.unit
    def test_empty_declaration_defaults(self):
        """An empty declaration becomes a fully populated string field."""
        field = normalize_field("subtitle", {})
        assert field == FieldDescriptor(
            key="subtitle",
            type="string",
            label="Subtitle",
            description="",
            required=False,
            default="",
            enum=(),
            single=True,
            exposed_in_api=True,
            control="text",
            revisions_enabled=False,
        )

    @pytest.mark.unit
    def test_enum_infers_first_member_as_default(self):
        field = normalize_field("genre", {"enum": ["fiction", "mystery", "romance"]})
        assert field.default == "fiction"
        assert field.enum == ("fiction", "mystery", "romance")

    @pytest.mark.unit
    def test_explicit_default_wins_over_enum(self):
        """Explicit defaults are kept even when outside the enum."""
        field = normalize_field("genre", {"enum": ["fiction"], "default": "poetry"})
        assert field.default == "poetry"

    @pytest.mark.unit
    def test_none_default_is_treated_as_unspecified(self):
        field = normalize_field("genre", {"enum": ["fiction"], "default": None})
        assert field.default == "fiction"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "field_type,zero,control",
        [
            ("string", "", "text"),
            ("integer", 0, "number"),
            ("number", 0.0, "number"),
            ("boolean", False, "checkbox"),
            ("array", [], "textarea"),
            ("object", {}, "textarea"),
        ],
    )
    def test_type_defaults(self, field_type, zero, control):
        field = normalize_field("value", {"type": field_type})
        assert strict_equals(field.default, zero)
        assert field.control == control

    @pytest.mark.unit
    def test_field_type_member_accepted(self):
        field = normalize_field("count", {"type": FieldType.INTEGER})
        assert field.type == "integer"
        assert field.field_type is FieldType.INTEGER

    @pytest.mark.unit
    def test_unknown_type_still_normalizes(self):
        """Normalization never fails; unknown types get fallbacks."""
        field = normalize_field("released", {"type": "date"})
        assert field.type == "date"
        assert field.field_type is None
        assert field.default == ""
        assert field.control == "text"

    @pytest.mark.unit
    def test_explicit_control_and_label_kept(self):
        field = normalize_field(
            "genre", {"label": "Book Genre", "control": "select", "enum": ["a"]}
        )
        assert field.label == "Book Genre"
        assert field.control == "select"

    @pytest.mark.unit
    def test_wire_aliases(self):
        """Alternate declaration keys map onto canonical attributes."""

        def sanitize(value):
            return value

        def authorize(*_args):
            return True

        field = normalize_field(
            "secret",
            {
                "show_in_rest": False,
                "sanitize_callback": sanitize,
                "auth_callback": authorize,
            },
        )
        assert field.exposed_in_api is False
        assert field.sanitizer is sanitize
        assert field.authorizer is authorize

    @pytest.mark.unit
    def test_non_callable_sanitizer_ignored(self):
        field = normalize_field("title", {"sanitizer": "strtoupper"})
        assert field.sanitizer is None

    @pytest.mark.unit
    def test_items_and_extra_preserved(self):
        field = normalize_field(
            "tags",
            {"type": "array", "items": {"type": "integer"}, "placeholder": "Add"},
        )
        assert field.items == {"type": "integer"}
        assert field.extra == {"placeholder": "Add"}

    @pytest.mark.unit
    def test_default_is_copied(self):
        """Mutating the raw default does not leak into the descriptor."""
        raw_default = ["a"]
        field = normalize_field("tags", {"type": "array", "default": raw_default})
        raw_default.append("b")
        assert field.default == ["a"]

    @pytest.mark.unit
    def test_descriptor_is_frozen(self):
        field = normalize_field("title")
        with pytest.raises(dataclasses.FrozenInstanceError):
            field.label = "Changed"  # type: ignore[misc]

    @pytest.mark.unit
    def test_to_dict(self):
        field = normalize_field("in_print", {"type": "boolean", "default": True})
        d = field.to_dict()
        assert d["key"] == "in_print"
        assert d["default"] is True
        assert d["enum"] == []
        assert d["sanitizer"] is None


class TestNormalizeFields:
    """Tests for field-set normalization."""

    @pytest.mark.unit
    def test_bare_string_entry(self):
        """A bare string value names a string field with defaults."""
        fields = normalize_fields({0: "isbn", "year": {"type": "integer"}})
        assert list(fields) == ["isbn", "year"]
        assert fields["isbn"].type == "string"
        assert fields["isbn"].label == "Isbn"

    @pytest.mark.unit
    def test_list_of_bare_keys(self):
        fields = normalize_fields(["title", "subtitle"])
        assert list(fields) == ["title", "subtitle"]

    @pytest.mark.unit
    def test_declaration_order_preserved(self):
        raw = {"z": {}, "a": {}, "m": {}}
        assert list(normalize_fields(raw)) == ["z", "a", "m"]

    @pytest.mark.unit
    def test_none_yields_empty(self):
        assert normalize_fields(None) == {}

    @pytest.mark.unit
    def test_non_mapping_declaration_tolerated(self):
        fields = normalize_fields({"odd": 42})
        assert fields["odd"].type == "string"
