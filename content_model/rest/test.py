"""Unit tests for REST schema projection."""

import json

import pytest

from content_model.fields import normalize_field, normalize_fields
from content_model.rest import (
    DEFAULT_ITEMS_SCHEMA,
    project_field_schema,
    project_fields_schema,
    project_schema,
)


class TestProjectFieldSchema:
    """Tests for the per-field projection."""

    @pytest.mark.unit
    def test_minimal_string_field(self):
        assert project_field_schema(normalize_field("title")) == {"type": "string"}

    @pytest.mark.unit
    def test_not_exposed_returns_false(self):
        field = normalize_field("secret", {"exposed_in_api": False})
        assert project_field_schema(field) is False

    @pytest.mark.unit
    def test_zero_default_omitted(self):
        field = normalize_field("pages", {"type": "integer", "default": 0})
        assert "default" not in project_field_schema(field)

    @pytest.mark.unit
    def test_non_zero_default_included(self):
        field = normalize_field("in_print", {"type": "boolean", "default": True})
        assert project_field_schema(field) == {"type": "boolean", "default": True}

    @pytest.mark.unit
    def test_default_of_other_type_included(self):
        """An int default on a number field differs from the 0.0 zero-value."""
        field = normalize_field("price", {"type": "number", "default": 0})
        assert project_field_schema(field)["default"] == 0

    @pytest.mark.unit
    def test_enum_field(self):
        field = normalize_field(
            "genre",
            {"description": "Book genre", "enum": ["fiction", "mystery"]},
        )
        assert project_field_schema(field) == {
            "type": "string",
            "description": "Book genre",
            "default": "fiction",
            "enum": ["fiction", "mystery"],
        }

    @pytest.mark.unit
    def test_required_flag(self):
        field = normalize_field("isbn", {"required": True})
        assert project_field_schema(field)["required"] is True

    @pytest.mark.unit
    def test_array_default_items(self):
        field = normalize_field("tags", {"type": "array"})
        assert project_field_schema(field) == {
            "type": "array",
            "items": DEFAULT_ITEMS_SCHEMA,
        }

    @pytest.mark.unit
    def test_array_declared_items(self):
        field = normalize_field("scores", {"type": "array", "items": {"type": "integer"}})
        assert project_field_schema(field)["items"] == {"type": "integer"}

    @pytest.mark.unit
    def test_object_additional_properties(self):
        field = normalize_field("meta", {"type": "object"})
        assert project_field_schema(field) == {
            "type": "object",
            "additionalProperties": True,
        }

    @pytest.mark.unit
    def test_key_order(self):
        field = normalize_field(
            "tags",
            {
                "type": "array",
                "required": True,
                "default": ["a"],
                "enum": [["a"], ["b"]],
                "description": "Tags",
            },
        )
        assert list(project_field_schema(field)) == [
            "type",
            "description",
            "default",
            "enum",
            "required",
            "items",
        ]


class TestProjectSchema:
    """Tests for the content type projection."""

    @pytest.fixture
    def fields(self):
        return normalize_fields(
            {
                "isbn": {"description": "ISBN", "required": True},
                "genre": {"enum": ["fiction", "mystery"]},
                "page_count": {"type": "integer", "required": True},
                "secret": {"exposed_in_api": False},
            }
        )

    @pytest.mark.unit
    def test_object_schema(self, fields):
        assert project_fields_schema(fields) == {
            "type": "object",
            "properties": {
                "isbn": {"type": "string", "description": "ISBN"},
                "genre": {"type": "string", "enum": ["fiction", "mystery"]},
                "page_count": {"type": "integer"},
                "secret": {"type": "string"},
            },
            "required": ["isbn", "page_count"],
        }

    @pytest.mark.unit
    def test_required_omitted_when_empty(self):
        schema = project_fields_schema(normalize_fields(["title"]))
        assert "required" not in schema

    @pytest.mark.unit
    def test_property_order_follows_fields(self, fields):
        assert list(project_fields_schema(fields)["properties"]) == list(fields)

    @pytest.mark.unit
    def test_projection_is_idempotent(self, registry, book_args):
        descriptor = registry.register("book", book_args)
        first = json.dumps(project_schema(descriptor))
        second = json.dumps(project_schema(descriptor))
        assert first == second

    @pytest.mark.unit
    def test_projection_does_not_alias_descriptor(self, fields):
        schema = project_fields_schema(fields)
        schema["properties"]["genre"]["enum"].append("romance")
        assert fields["genre"].enum == ("fiction", "mystery")
