"""Structural and value validation for content type field sets."""

from content_model.validation.lib import (
    EMPTY_VALUE,
    is_valid_fields,
    is_valid_values,
    validate_fields,
    validate_values,
)

__all__ = [
    "EMPTY_VALUE",
    "validate_fields",
    "is_valid_fields",
    "validate_values",
    "is_valid_values",
]
