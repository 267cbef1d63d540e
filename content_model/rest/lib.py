"""REST schema projection.

Derives JSON-Schema shaped documents from normalized fields:

- `project_schema` describes a whole content type as an object schema,
  consumed by API serializers.
- `project_field_schema` describes one field for the field-value store,
  or returns False when the field is not exposed.

Both outputs are built through pydantic models and dumped with only the
keys that apply, in a fixed key order and in canonical field order, so
repeated projections of the same descriptor serialize identically.
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from content_model.fields import FieldDescriptor
from content_model.schema import FieldType, strict_equals, zero_value

if TYPE_CHECKING:
    from content_model.registry import ContentTypeDescriptor

DEFAULT_ITEMS_SCHEMA: dict[str, Any] = {"type": FieldType.STRING.value}


# === WIRE MODELS ===


class FieldSchema(BaseModel):
    """Per-field schema handed to the field-value store."""

    model_config = ConfigDict(extra="forbid")

    type: str = Field(..., description="Catalog type name")
    description: str | None = Field(None, description="Field description")
    default: Any = Field(None, description="Default, when not the zero-value")
    enum: list[Any] | None = Field(None, description="Allowed values")
    required: bool | None = Field(None, description="Present only when required")
    items: dict[str, Any] | None = Field(None, description="Array item schema")
    additional_properties: bool | None = Field(
        None,
        alias="additionalProperties",
        description="Open object marker for object fields",
    )


class PropertySchema(BaseModel):
    """One property of a content type object schema."""

    model_config = ConfigDict(extra="forbid")

    type: str
    description: str | None = None
    enum: list[Any] | None = None


class ContentTypeSchema(BaseModel):
    """Object schema describing a whole content type."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["object"] = "object"
    properties: dict[str, PropertySchema] = Field(default_factory=dict)
    required: list[str] | None = None


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_unset=True)


# === PROJECTION ===


def project_field_schema(field: FieldDescriptor) -> dict[str, Any] | Literal[False]:
    """Project one field to its exposed schema.

    Args:
        field: Normalized field descriptor.

    Returns:
        False when the field is not exposed in the API. Otherwise a schema
        dict with ``type`` and, where they apply, ``description``,
        ``default`` (only when it differs from the type's zero-value),
        ``enum``, ``required``, ``items`` (array fields) and
        ``additionalProperties`` (object fields).
    """
    if field.exposed_in_api is False:
        return False

    data: dict[str, Any] = {"type": field.type}

    if field.description:
        data["description"] = field.description

    if not strict_equals(field.default, zero_value(field.type)):
        data["default"] = copy.deepcopy(field.default)

    if field.enum:
        data["enum"] = list(field.enum)

    if field.required:
        data["required"] = True

    if field.type == FieldType.ARRAY.value:
        items = field.items if field.items is not None else DEFAULT_ITEMS_SCHEMA
        data["items"] = copy.deepcopy(items)

    if field.type == FieldType.OBJECT.value:
        data["additionalProperties"] = True

    return _dump(FieldSchema.model_validate(data))


def project_fields_schema(fields: Mapping[str, FieldDescriptor]) -> dict[str, Any]:
    """Project an ordered field set to an object schema.

    Args:
        fields: Ordered mapping of key to FieldDescriptor.

    Returns:
        ``{"type": "object", "properties": {...}}`` plus a ``required`` key
        list when at least one field is required.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for key, field in fields.items():
        prop: dict[str, Any] = {"type": field.type}
        if field.description:
            prop["description"] = field.description
        if field.enum:
            prop["enum"] = list(field.enum)
        properties[key] = prop

        if field.required:
            required.append(key)

    data: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        data["required"] = required

    return _dump(ContentTypeSchema.model_validate(data))


def project_schema(descriptor: ContentTypeDescriptor) -> dict[str, Any]:
    """Project a registered content type to its object schema.

    Example:
        >>> schema = project_schema(registry.get("book"))
        >>> schema["required"]
        ['isbn']
    """
    return project_fields_schema(descriptor.fields)


__all__ = [
    "DEFAULT_ITEMS_SCHEMA",
    # Wire models
    "FieldSchema",
    "PropertySchema",
    "ContentTypeSchema",
    # Projection
    "project_field_schema",
    "project_fields_schema",
    "project_schema",
]
