"""Collaborator protocols for the content type registry.

The registry layers content types on top of two external systems:

- a structural-type registry, which owns the record type a content type is
  stored as (receives the registration args minus ``fields`` and ``ui``);
- a field-value store, which owns per-instance field values and receives
  one registration record per field.

In-memory implementations are provided for tests, the CLI and embedding
hosts that have no backing store of their own.
"""

import copy
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol

from content_model.errors import StructuralTypeError
from content_model.fields import Authorizer, Sanitizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldStorageArgs:
    """Registration record handed to the field-value store for one field.

    Attributes:
        type: Declared type name.
        single: Whether one value or a list of values is stored.
        exposed_schema: Per-field schema projection, or False when hidden.
        default: Value returned when nothing (or "") is stored.
        sanitizer: Callable every written value goes through.
        authorizer: Optional write authorization callback.
        revisions_enabled: Whether stored values are revisioned.
        description: Field description; None when empty.
    """

    type: str
    single: bool
    exposed_schema: dict[str, Any] | Literal[False]
    default: Any
    sanitizer: Sanitizer
    authorizer: Authorizer | None = None
    revisions_enabled: bool = False
    description: str | None = None


# =============================================================================
# Protocols
# =============================================================================


class StructuralTypeRegistry(Protocol):
    """Interface of the underlying record-type system."""

    def register_type(self, name: str, args: Mapping[str, Any]) -> None:
        """Register a structural type.

        Raises:
            StructuralTypeError: If the type cannot be registered.
        """
        ...

    def unregister_type(self, name: str) -> None:
        """Remove a structural type. Unknown names are ignored."""
        ...


class FieldValueStore(Protocol):
    """Interface of the per-instance field value store."""

    def register_field(self, type_name: str, key: str, args: FieldStorageArgs) -> None:
        """Register a field of a content type."""
        ...

    def unregister_field(self, type_name: str, key: str) -> None:
        """Remove a field registration. Unknown fields are ignored."""
        ...

    def get_value(self, type_name: str, instance_id: int | str, key: str) -> Any:
        """Read a stored value, resolving missing values to the default."""
        ...

    def set_value(
        self, type_name: str, instance_id: int | str, key: str, value: Any
    ) -> Any:
        """Sanitize and store a value; returns the stored value."""
        ...


# =============================================================================
# In-memory implementations
# =============================================================================


class InMemoryTypeRegistry:
    """Structural-type registry backed by a dict.

    Example:
        >>> types = InMemoryTypeRegistry()
        >>> types.register_type("book", {"public": True})
        >>> types.get_type("book")
        {'public': True}
    """

    def __init__(self):
        self._types: dict[str, dict[str, Any]] = {}

    def register_type(self, name: str, args: Mapping[str, Any]) -> None:
        if name in self._types:
            raise StructuralTypeError(name, "type already exists")
        self._types[name] = dict(args)
        logger.debug(f"Registered structural type '{name}'")

    def unregister_type(self, name: str) -> None:
        self._types.pop(name, None)

    def get_type(self, name: str) -> dict[str, Any] | None:
        """Get the args a structural type was registered with."""
        return self._types.get(name)

    def has_type(self, name: str) -> bool:
        return name in self._types


class InMemoryFieldStore:
    """Field-value store backed by dicts.

    Values are keyed by ``(type_name, instance_id, key)``. Reads resolve a
    missing or empty-string value to the field's registered default; writes
    go through the registered sanitizer. Fields of multi-value (non-single)
    registrations store lists and sanitize each item.
    """

    def __init__(self):
        self._fields: dict[tuple[str, str], FieldStorageArgs] = {}
        self._values: dict[tuple[str, int | str, str], Any] = {}

    def register_field(self, type_name: str, key: str, args: FieldStorageArgs) -> None:
        self._fields[(type_name, key)] = args

    def unregister_field(self, type_name: str, key: str) -> None:
        self._fields.pop((type_name, key), None)

    def get_field_args(self, type_name: str, key: str) -> FieldStorageArgs | None:
        """Get the registration record of a field, if registered."""
        return self._fields.get((type_name, key))

    def registered_keys(self, type_name: str) -> list[str]:
        """List registered field keys of a content type, in registration order."""
        return [key for (name, key) in self._fields if name == type_name]

    def get_value(self, type_name: str, instance_id: int | str, key: str) -> Any:
        stored = self._values.get((type_name, instance_id, key))
        args = self._fields.get((type_name, key))
        if args is None:
            return stored
        if stored is None or stored == "":
            return copy.deepcopy(args.default)
        return stored

    def set_value(
        self, type_name: str, instance_id: int | str, key: str, value: Any
    ) -> Any:
        args = self._fields.get((type_name, key))
        if args is not None:
            if args.single:
                value = args.sanitizer(value)
            else:
                items = value if isinstance(value, (list, tuple)) else [value]
                value = [args.sanitizer(item) for item in items]
        self._values[(type_name, instance_id, key)] = value
        return value


__all__ = [
    "FieldStorageArgs",
    # Protocols
    "StructuralTypeRegistry",
    "FieldValueStore",
    # In-memory implementations
    "InMemoryTypeRegistry",
    "InMemoryFieldStore",
]
