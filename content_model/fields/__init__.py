"""Field descriptors and declaration normalization."""

from .lib import (
    DEFAULT_FIELD_TYPE,
    Authorizer,
    FieldDescriptor,
    Sanitizer,
    generate_label,
    normalize_field,
    normalize_fields,
)

__all__ = [
    "FieldDescriptor",
    "Sanitizer",
    "Authorizer",
    "DEFAULT_FIELD_TYPE",
    "generate_label",
    "normalize_field",
    "normalize_fields",
]
