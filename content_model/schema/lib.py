"""Field Type Catalog.

Single source of truth for the fixed universe of primitive field kinds.
Each kind carries its native Python representation (whose no-argument
constructor yields the kind's zero-value), its default editor control,
and its JSON-Schema type name.

All type-related lookups route through this module.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable


class FieldType(str, Enum):
    """Primitive field kinds, in canonical catalog order."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class Control(str, Enum):
    """Editor control hints consumed by form renderers."""

    TEXT = "text"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    SELECT = "select"
    TEXTAREA = "textarea"


@dataclass(frozen=True)
class FieldTypeMeta:
    """Metadata definition for a primitive field kind.

    Attributes:
        type: The field kind.
        native_type: Python type of stored values; calling it with no
            arguments produces the zero-value.
        control: Default editor control for the kind.
        description: Short human-readable description.
    """

    type: FieldType
    native_type: type
    control: Control
    description: str

    def zero_value(self) -> Any:
        """Return a fresh zero-value for this kind."""
        return self.native_type()

    def to_dict(self) -> dict[str, Any]:
        """Convert metadata to dictionary for introspection."""
        return {
            "type": self.type.value,
            "native_type": self.native_type.__name__,
            "control": self.control.value,
            "zero_value": self.zero_value(),
            "description": self.description,
        }


FIELD_TYPE_REGISTRY: dict[FieldType, FieldTypeMeta] = {
    FieldType.STRING: FieldTypeMeta(
        type=FieldType.STRING,
        native_type=str,
        control=Control.TEXT,
        description="Single line of plain text",
    ),
    FieldType.INTEGER: FieldTypeMeta(
        type=FieldType.INTEGER,
        native_type=int,
        control=Control.NUMBER,
        description="Whole number",
    ),
    FieldType.NUMBER: FieldTypeMeta(
        type=FieldType.NUMBER,
        native_type=float,
        control=Control.NUMBER,
        description="Floating-point number",
    ),
    FieldType.BOOLEAN: FieldTypeMeta(
        type=FieldType.BOOLEAN,
        native_type=bool,
        control=Control.CHECKBOX,
        description="True/false flag",
    ),
    FieldType.ARRAY: FieldTypeMeta(
        type=FieldType.ARRAY,
        native_type=list,
        control=Control.TEXTAREA,
        description="Ordered sequence of values",
    ),
    FieldType.OBJECT: FieldTypeMeta(
        type=FieldType.OBJECT,
        native_type=dict,
        control=Control.TEXTAREA,
        description="Mapping of string keys to values",
    ),
}

# Fallbacks for type strings outside the catalog
_FALLBACK_ZERO_VALUE = ""
_FALLBACK_CONTROL = Control.TEXT


def get_field_type_meta(field_type: FieldType) -> FieldTypeMeta:
    """Get metadata for a field kind.

    Args:
        field_type: The field kind to look up.

    Returns:
        FieldTypeMeta for the kind.

    Raises:
        KeyError: If the kind is not in the registry.
    """
    return FIELD_TYPE_REGISTRY[field_type]


def resolve_field_type(value: Any) -> FieldType | None:
    """Resolve a raw type declaration to a catalog kind.

    Args:
        value: A FieldType or a type name string.

    Returns:
        The matching FieldType, or None if the value is not in the catalog.
    """
    try:
        return FieldType(value)
    except (ValueError, TypeError):
        return None


def is_valid_field_type(value: Any) -> bool:
    """Check whether a raw type declaration names a catalog kind."""
    return resolve_field_type(value) is not None


def valid_type_names() -> list[str]:
    """List all catalog type names in canonical order."""
    return [ft.value for ft in FieldType]


def zero_value(field_type: Any) -> Any:
    """Get a fresh zero-value for a type declaration.

    Unrecognized types fall back to the empty string.
    """
    resolved = resolve_field_type(field_type)
    if resolved is None:
        return _FALLBACK_ZERO_VALUE
    return FIELD_TYPE_REGISTRY[resolved].zero_value()


def default_control(field_type: Any) -> str:
    """Get the default editor control name for a type declaration.

    Unrecognized types fall back to a text control.
    """
    resolved = resolve_field_type(field_type)
    if resolved is None:
        return _FALLBACK_CONTROL.value
    return FIELD_TYPE_REGISTRY[resolved].control.value


# === STRICT COMPARISON ===


def strict_equals(left: Any, right: Any) -> bool:
    """Compare two values without cross-type coercion.

    Unlike ``==``, ``1`` does not equal ``True`` and ``0`` does not
    equal ``0.0``.
    """
    return type(left) is type(right) and left == right


def strict_contains(values: Iterable[Any], value: Any) -> bool:
    """Check membership using strict_equals."""
    return any(strict_equals(member, value) for member in values)


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
