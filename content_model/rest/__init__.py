"""REST schema projection for content types and fields.

Example usage:
    >>> from content_model.rest import project_schema, project_field_schema
    >>> project_field_schema(fields["genre"])
    {'type': 'string', 'default': 'fiction', 'enum': ['fiction', 'mystery']}
"""

from .lib import (
    DEFAULT_ITEMS_SCHEMA,
    ContentTypeSchema,
    FieldSchema,
    PropertySchema,
    project_field_schema,
    project_fields_schema,
    project_schema,
)

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
