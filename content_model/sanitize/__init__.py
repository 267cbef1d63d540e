"""Type-aware value sanitization with enum clamping."""

from content_model.sanitize.lib import (
    TYPE_SANITIZERS,
    field_sanitizer,
    resolve_sanitizer,
    sanitize_array,
    sanitize_boolean,
    sanitize_by_type,
    sanitize_integer,
    sanitize_number,
    sanitize_object,
    sanitize_submission,
    sanitize_text,
)

__all__ = [
    "sanitize_text",
    "sanitize_integer",
    "sanitize_number",
    "sanitize_boolean",
    "sanitize_array",
    "sanitize_object",
    "TYPE_SANITIZERS",
    "sanitize_by_type",
    "field_sanitizer",
    "resolve_sanitizer",
    "sanitize_submission",
]
