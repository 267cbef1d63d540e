"""Schema validation for normalized field sets.

Two independent, side-effect free passes:

- Structural pass (`validate_fields`): every key must be non-empty and
  every declared type must be in the field type catalog. Fails fast on
  the first offending field.
- Value pass (`validate_values`): a candidate value map must supply every
  required field and respect enum constraints. All required checks run
  before any enum check; both iterate in canonical field order.
"""

from collections.abc import Mapping
from typing import Any

from content_model.errors import (
    InvalidEnumValueError,
    InvalidFieldKeyError,
    InvalidFieldTypeError,
    MissingRequiredFieldError,
    SchemaError,
)
from content_model.fields import FieldDescriptor
from content_model.schema import is_valid_field_type, strict_contains, valid_type_names

# The only value a present required field may hold and still count as missing
EMPTY_VALUE = ""


def validate_fields(fields: Mapping[str, FieldDescriptor]) -> None:
    """Validate a normalized field set for structural soundness.

    Args:
        fields: Ordered mapping of key to FieldDescriptor.

    Raises:
        InvalidFieldKeyError: For the first field with an empty key.
        InvalidFieldTypeError: For the first field whose type is not in
            the catalog.
    """
    for key, field in fields.items():
        if not key:
            raise InvalidFieldKeyError(key)
        if not is_valid_field_type(field.type):
            raise InvalidFieldTypeError(key, field.type, valid_type_names())


def is_valid_fields(fields: Mapping[str, FieldDescriptor]) -> bool:
    """Check whether a field set passes the structural pass."""
    try:
        validate_fields(fields)
    except SchemaError:
        return False
    return True


def _is_missing(values: Mapping[str, Any], key: str) -> bool:
    """Only absence, None, or the empty string count as missing.

    A present 0, False, or empty list is a real value.
    """
    if key not in values:
        return True
    value = values[key]
    return value is None or (isinstance(value, str) and value == EMPTY_VALUE)


def validate_values(
    fields: Mapping[str, FieldDescriptor], values: Mapping[str, Any]
) -> None:
    """Validate a value map against required and enum constraints.

    Fields absent from ``values`` are neither defaulted nor enum-checked.
    Keys in ``values`` that name no field are ignored.

    Args:
        fields: Ordered mapping of key to FieldDescriptor.
        values: Candidate values keyed by field key.

    Raises:
        MissingRequiredFieldError: For the first required field (in field
            order) that is missing.
        InvalidEnumValueError: For the first supplied value (in field
            order) that is not strictly equal to one of its enum members.

    Example:
        >>> validate_values(fields, {"isbn": "978-0", "genre": "mystery"})
    """
    for key, field in fields.items():
        if field.required and _is_missing(values, key):
            raise MissingRequiredFieldError(key)

    for key, field in fields.items():
        if key not in values or not field.enum:
            continue
        value = values[key]
        if not strict_contains(field.enum, value):
            raise InvalidEnumValueError(key, field.enum, value)


def is_valid_values(
    fields: Mapping[str, FieldDescriptor], values: Mapping[str, Any]
) -> bool:
    """Check whether a value map passes the value pass.

    Example:
        >>> if not is_valid_values(fields, submitted):
        ...     reject(submitted)
    """
    try:
        validate_values(fields, values)
    except SchemaError:
        return False
    return True


__all__ = [
    "EMPTY_VALUE",
    "validate_fields",
    "is_valid_fields",
    "validate_values",
    "is_valid_values",
]
