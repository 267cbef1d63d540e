"""Schema module - authoritative catalog of primitive field kinds.

This module provides:
- The fixed FieldType catalog and editor Control hints
- Per-kind metadata (zero-value, default control)
- Strict, coercion-free value comparison

Example usage:
    >>> from content_model.schema import FieldType, zero_value, default_control
    >>> zero_value(FieldType.ARRAY)
    []
    >>> default_control("boolean")
    'checkbox'
"""

from .lib import (
    FIELD_TYPE_REGISTRY,
    Control,
    FieldType,
    FieldTypeMeta,
    default_control,
    get_field_type_meta,
    is_valid_field_type,
    resolve_field_type,
    strict_contains,
    strict_equals,
    valid_type_names,
    zero_value,
)

__all__ = [
    # Enums
    "FieldType",
    "Control",
    # Metadata
    "FieldTypeMeta",
    "FIELD_TYPE_REGISTRY",
    # Lookup functions
    "get_field_type_meta",
    "resolve_field_type",
    "is_valid_field_type",
    "valid_type_names",
    "zero_value",
    "default_control",
    # Comparison
    "strict_equals",
    "strict_contains",
]
