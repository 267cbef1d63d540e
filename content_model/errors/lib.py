"""Error taxonomy for content type registration and validation.

Every failing operation raises exactly one subclass of ContentModelError.
Each error carries a stable machine-readable code, a human message, and
structured data so callers can decide whether to surface, abort, or log.
"""

from enum import Enum
from typing import Any, Sequence


class ErrorCode(str, Enum):
    """Machine-readable error classification."""

    INVALID_NAME_LENGTH = "content_type_length_invalid"
    ALREADY_REGISTERED = "content_type_exists"
    NOT_REGISTERED = "content_type_not_exists"
    STRUCTURAL_TYPE_FAILED = "structural_type_failed"
    INVALID_FIELD_TYPE = "invalid_field_type"
    INVALID_FIELD_KEY = "invalid_field_key"
    MISSING_REQUIRED_FIELD = "missing_required_field"
    INVALID_ENUM_VALUE = "invalid_enum_value"


class ContentModelError(Exception):
    """Base exception for all content model errors.

    Attributes:
        code: ErrorCode classifying the failure.
        message: Human-readable description.
        data: Structured details for programmatic handling.
    """

    code: ErrorCode

    def __init__(self, message: str, **data: Any):
        super().__init__(message)
        self.message = message
        self.data = data

    def to_dict(self) -> dict[str, Any]:
        """Convert the error to a serializable dictionary."""
        return {
            "code": self.code.value,
            "message": self.message,
            "data": dict(self.data),
        }


# =============================================================================
# Registration errors
# =============================================================================


class RegistrationError(ContentModelError):
    """Base exception for registry lifecycle failures."""


class InvalidNameLengthError(RegistrationError):
    """Raised when a content type name is empty or too long."""

    code = ErrorCode.INVALID_NAME_LENGTH

    def __init__(self, name: str, max_length: int):
        super().__init__(
            f"Content type names must be between 1 and {max_length} characters.",
            name=name,
            max_length=max_length,
        )
        self.name = name


class AlreadyRegisteredError(RegistrationError):
    """Raised when registering a name that is already registered."""

    code = ErrorCode.ALREADY_REGISTERED

    def __init__(self, name: str):
        super().__init__(f'Content type "{name}" is already registered.', name=name)
        self.name = name


class NotRegisteredError(RegistrationError):
    """Raised when operating on a content type that does not exist."""

    code = ErrorCode.NOT_REGISTERED

    def __init__(self, name: str):
        super().__init__(f'Content type "{name}" does not exist.', name=name)
        self.name = name


class StructuralTypeError(RegistrationError):
    """Raised by a structural-type registry that rejects a content type."""

    code = ErrorCode.STRUCTURAL_TYPE_FAILED

    def __init__(self, name: str, reason: str):
        super().__init__(
            f'Structural type "{name}" could not be registered: {reason}',
            name=name,
            reason=reason,
        )
        self.name = name
        self.reason = reason


# =============================================================================
# Schema errors
# =============================================================================


class SchemaError(ContentModelError):
    """Base exception for field declaration and value validation failures."""


class InvalidFieldTypeError(SchemaError):
    """Raised when a field declares a type outside the catalog."""

    code = ErrorCode.INVALID_FIELD_TYPE

    def __init__(self, key: str, field_type: Any, valid_types: Sequence[str]):
        super().__init__(
            f'Invalid field type "{field_type}" for field "{key}". '
            f"Valid types are: {', '.join(valid_types)}.",
            key=key,
            field_type=field_type,
            valid_types=list(valid_types),
        )
        self.key = key
        self.field_type = field_type
        self.valid_types = list(valid_types)


class InvalidFieldKeyError(SchemaError):
    """Raised when a field is declared with an empty key."""

    code = ErrorCode.INVALID_FIELD_KEY

    def __init__(self, key: str):
        super().__init__(f'Invalid field key "{key}".', key=key)
        self.key = key


class MissingRequiredFieldError(SchemaError):
    """Raised when a required field is absent or an empty string."""

    code = ErrorCode.MISSING_REQUIRED_FIELD

    def __init__(self, key: str):
        super().__init__(f'Required field "{key}" is missing.', key=key)
        self.key = key


class InvalidEnumValueError(SchemaError):
    """Raised when a value is not one of a field's enum members."""

    code = ErrorCode.INVALID_ENUM_VALUE

    def __init__(self, key: str, allowed: Sequence[Any], value: Any = None):
        super().__init__(
            f'Invalid value for field "{key}". '
            f"Valid values are: {', '.join(str(a) for a in allowed)}.",
            key=key,
            allowed=list(allowed),
            value=value,
        )
        self.key = key
        self.allowed = list(allowed)
        self.value = value


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
