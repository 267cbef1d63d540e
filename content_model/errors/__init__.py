"""Error taxonomy for content-model."""

from .lib import (
    AlreadyRegisteredError,
    ContentModelError,
    ErrorCode,
    InvalidEnumValueError,
    InvalidFieldKeyError,
    InvalidFieldTypeError,
    InvalidNameLengthError,
    MissingRequiredFieldError,
    NotRegisteredError,
    RegistrationError,
    SchemaError,
    StructuralTypeError,
)

__all__ = [
    "ErrorCode",
    "ContentModelError",
    # Registration
    "RegistrationError",
    "InvalidNameLengthError",
    "AlreadyRegisteredError",
    "NotRegisteredError",
    "StructuralTypeError",
    # Schema
    "SchemaError",
    "InvalidFieldKeyError",
    "InvalidFieldTypeError",
    "MissingRequiredFieldError",
    "InvalidEnumValueError",
]
