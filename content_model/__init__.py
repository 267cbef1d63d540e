"""content-model: declarative content types with typed, validated fields."""

from content_model.errors import (
    ContentModelError,
    RegistrationError,
    SchemaError,
)
from content_model.fields import FieldDescriptor, normalize_fields
from content_model.registry import (
    ContentTypeDescriptor,
    ContentTypeRegistry,
    load_definition,
)
from content_model.rest import project_field_schema, project_schema
from content_model.sanitize import field_sanitizer, sanitize_by_type
from content_model.schema import FieldType
from content_model.validation import validate_fields, validate_values

__all__ = [
    # Registry
    "ContentTypeRegistry",
    "ContentTypeDescriptor",
    "load_definition",
    # Fields
    "FieldType",
    "FieldDescriptor",
    "normalize_fields",
    # Validation
    "validate_fields",
    "validate_values",
    # Projection
    "project_schema",
    "project_field_schema",
    # Sanitization
    "sanitize_by_type",
    "field_sanitizer",
    # Errors
    "ContentModelError",
    "RegistrationError",
    "SchemaError",
]
