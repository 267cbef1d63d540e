"""Content Type Registry.

Owns the table of registered content types and their lifecycle. Each name
moves between exactly two states, unregistered and registered:

    register(name, args)   unregistered -> registered
    unregister(name)       registered   -> unregistered

Registration normalizes and validates the declared fields, registers the
structural type and every field with the collaborators, and only then
stores the descriptor. Any failure leaves the registry unchanged.

Example:
    >>> registry = ContentTypeRegistry()
    >>> book = registry.register("book", {"fields": {"isbn": {"required": True}}})
    >>> book.required_fields()
    ['isbn']
"""

import copy
import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Literal, overload

from content_model.errors import (
    AlreadyRegisteredError,
    InvalidNameLengthError,
    NotRegisteredError,
)
from content_model.fields import FieldDescriptor, normalize_fields
from content_model.rest import project_field_schema, project_schema
from content_model.sanitize import resolve_sanitizer
from content_model.validation import validate_fields
from content_model.validation import validate_values as validate_field_values

from .collaborators import (
    FieldStorageArgs,
    FieldValueStore,
    InMemoryFieldStore,
    InMemoryTypeRegistry,
    StructuralTypeRegistry,
)

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 20

# Registration args consumed here and withheld from the structural type
_CONTENT_ONLY_ARGS = ("fields", "ui")

ArgsFilter = Callable[[dict[str, Any], str], dict[str, Any]]
RegisteredHook = Callable[[str, "ContentTypeDescriptor", dict[str, Any]], None]
UnregisteredHook = Callable[[str, "ContentTypeDescriptor"], None]


@dataclass(frozen=True)
class ContentTypeDescriptor:
    """A registered content type.

    Attributes:
        name: Unique content type name.
        fields: Read-only ordered mapping of key to FieldDescriptor.
        ui: Opaque UI configuration for form renderers.
        args: Registration args as received after filtering.
    """

    name: str
    fields: Mapping[str, FieldDescriptor]
    ui: Any = field(default_factory=dict)
    args: Mapping[str, Any] = field(default_factory=dict)

    def get_field(self, key: str) -> FieldDescriptor | None:
        """Get a field by key, or None if the type has no such field."""
        return self.fields.get(key)

    def required_fields(self) -> list[str]:
        """List keys of required fields, in field order."""
        return [key for key, f in self.fields.items() if f.required]

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "name": self.name,
            "fields": {key: f.to_dict() for key, f in self.fields.items()},
            "ui": self.ui,
        }


def field_storage_args(field_descriptor: FieldDescriptor) -> FieldStorageArgs:
    """Build the field-value store registration record for a field.

    The sanitizer is the field's custom one, or the type-default sanitizer
    with enum clamping.
    """
    return FieldStorageArgs(
        type=field_descriptor.type,
        single=field_descriptor.single,
        exposed_schema=project_field_schema(field_descriptor),
        default=field_descriptor.default,
        sanitizer=resolve_sanitizer(field_descriptor),
        authorizer=field_descriptor.authorizer,
        revisions_enabled=field_descriptor.revisions_enabled,
        description=field_descriptor.description or None,
    )


class ContentTypeRegistry:
    """Registry of content types.

    One instance is created per process (or per test) and passed to its
    users. Register, unregister and list are serialized through a lock so
    concurrent registrations of the same name leave exactly one winner.

    Args:
        type_registry: Structural-type collaborator. Defaults to an
            InMemoryTypeRegistry.
        field_store: Field-value collaborator. Defaults to an
            InMemoryFieldStore.
    """

    def __init__(
        self,
        type_registry: StructuralTypeRegistry | None = None,
        field_store: FieldValueStore | None = None,
    ):
        if type_registry is None:
            type_registry = InMemoryTypeRegistry()
        if field_store is None:
            field_store = InMemoryFieldStore()
        self._type_registry = type_registry
        self._field_store = field_store
        self._content_types: dict[str, ContentTypeDescriptor] = {}
        self._lock = threading.RLock()
        self._args_filters: list[ArgsFilter] = []
        self._registered_hooks: list[RegisteredHook] = []
        self._unregistered_hooks: list[UnregisteredHook] = []

    @property
    def type_registry(self) -> StructuralTypeRegistry:
        return self._type_registry

    @property
    def field_store(self) -> FieldValueStore:
        return self._field_store

    # =========================================================================
    # Hooks
    # =========================================================================

    def add_args_filter(self, args_filter: ArgsFilter) -> None:
        """Add a filter applied to registration args before normalization.

        Filters run in the order added; each receives ``(args, name)`` and
        returns the args to continue with.
        """
        self._args_filters.append(args_filter)

    def on_registered(self, hook: RegisteredHook) -> None:
        """Add a listener called with ``(name, descriptor, args)`` after registration."""
        self._registered_hooks.append(hook)

    def on_unregistered(self, hook: UnregisteredHook) -> None:
        """Add a listener called with ``(name, descriptor)`` after unregistration."""
        self._unregistered_hooks.append(hook)

    def _apply_args_filters(self, args: dict[str, Any], name: str) -> dict[str, Any]:
        for args_filter in self._args_filters:
            logger.debug(f"Applying args filter {args_filter!r} to '{name}'")
            args = dict(args_filter(args, name))
        return args

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def register(
        self, name: str, args: Mapping[str, Any] | None = None
    ) -> ContentTypeDescriptor:
        """Register a content type.

        Args:
            name: Content type name, 1 to 20 characters.
            args: Registration args. ``fields`` holds the field declarations
                and ``ui`` the UI configuration; every other key is passed
                to the structural-type registry.

        Returns:
            The stored ContentTypeDescriptor.

        Raises:
            InvalidNameLengthError: If the name is empty or too long.
            AlreadyRegisteredError: If the name is already registered.
            InvalidFieldTypeError: If a field declares an unknown type.
            StructuralTypeError: If the structural type is rejected.
        """
        with self._lock:
            if not name or len(name) > MAX_NAME_LENGTH:
                error = InvalidNameLengthError(name, MAX_NAME_LENGTH)
                logger.warning(error.message)
                raise error

            if name in self._content_types:
                error = AlreadyRegisteredError(name)
                logger.warning(error.message)
                raise error

            args = copy.deepcopy(self._apply_args_filters(dict(args or {}), name))

            fields = normalize_fields(args.get("fields"))
            validate_fields(fields)

            descriptor = ContentTypeDescriptor(
                name=name,
                fields=MappingProxyType(fields),
                ui=args.get("ui") or {},
                args=MappingProxyType(dict(args)),
            )

            if args.get("show_in_rest") is None:
                args["show_in_rest"] = True

            structural_args = {
                k: v for k, v in args.items() if k not in _CONTENT_ONLY_ARGS
            }
            self._type_registry.register_type(name, structural_args)
            self._register_fields(descriptor)

            self._content_types[name] = descriptor
            logger.info(f"Registered content type '{name}' with {len(fields)} fields")

        for hook in self._registered_hooks:
            logger.debug(f"Dispatching registered hook {hook!r} for '{name}'")
            try:
                hook(name, descriptor, args)
            except Exception:
                logger.exception(f"Registered hook {hook!r} failed for '{name}'")

        return descriptor

    def _register_fields(self, descriptor: ContentTypeDescriptor) -> None:
        """Register every field with the store, undoing all on failure."""
        registered: list[str] = []
        try:
            for key, field_descriptor in descriptor.fields.items():
                self._field_store.register_field(
                    descriptor.name, key, field_storage_args(field_descriptor)
                )
                registered.append(key)
        except Exception:
            logger.warning(
                f"Field registration failed for '{descriptor.name}', rolling back"
            )
            for key in registered:
                self._field_store.unregister_field(descriptor.name, key)
            self._type_registry.unregister_type(descriptor.name)
            raise

    def unregister(self, name: str) -> None:
        """Unregister a content type.

        Fields are removed from the field store first, then the structural
        type, then the registry entry. The name can be registered again.

        Raises:
            NotRegisteredError: If the name is not registered.
        """
        with self._lock:
            descriptor = self._content_types.get(name)
            if descriptor is None:
                error = NotRegisteredError(name)
                logger.warning(error.message)
                raise error

            for key in descriptor.fields:
                self._field_store.unregister_field(name, key)
            self._type_registry.unregister_type(name)

            del self._content_types[name]
            logger.info(f"Unregistered content type '{name}'")

        for hook in self._unregistered_hooks:
            logger.debug(f"Dispatching unregistered hook {hook!r} for '{name}'")
            try:
                hook(name, descriptor)
            except Exception:
                logger.exception(f"Unregistered hook {hook!r} failed for '{name}'")

    # =========================================================================
    # Lookups
    # =========================================================================

    def get(self, name: str) -> ContentTypeDescriptor | None:
        """Get a registered content type, or None."""
        return self._content_types.get(name)

    def exists(self, name: str) -> bool:
        """Check whether a content type is registered."""
        return name in self._content_types

    def __contains__(self, name: object) -> bool:
        return name in self._content_types

    def __len__(self) -> int:
        return len(self._content_types)

    @overload
    def list(self, output: Literal["names"] = "names") -> list[str]: ...
    @overload
    def list(
        self, output: Literal["objects"]
    ) -> dict[str, ContentTypeDescriptor]: ...

    def list(self, output: str = "names") -> Any:
        """List registered content types in registration order.

        Args:
            output: "names" for a list of names, "objects" for a dict of
                name to descriptor.
        """
        with self._lock:
            if output == "objects":
                return dict(self._content_types)
            return list(self._content_types)

    def get_fields(self, name: str) -> Mapping[str, FieldDescriptor] | None:
        """Get the fields of a content type, or None if not registered."""
        descriptor = self.get(name)
        return descriptor.fields if descriptor else None

    def get_field(self, name: str, key: str) -> FieldDescriptor | None:
        """Get one field of a content type, or None."""
        descriptor = self.get(name)
        return descriptor.get_field(key) if descriptor else None

    def get_ui(self, name: str) -> Any:
        """Get the UI configuration of a content type, or None."""
        descriptor = self.get(name)
        return descriptor.ui if descriptor else None

    # =========================================================================
    # Validation and projection
    # =========================================================================

    def validate_values(self, name: str, values: Mapping[str, Any]) -> None:
        """Validate a value map against a registered content type.

        Raises:
            NotRegisteredError: If the name is not registered.
            MissingRequiredFieldError: If a required field is missing.
            InvalidEnumValueError: If a value is outside its field's enum.
        """
        descriptor = self.get(name)
        if descriptor is None:
            raise NotRegisteredError(name)
        validate_field_values(descriptor.fields, values)

    def rest_schema(self, name: str) -> dict[str, Any] | None:
        """Get the object schema of a content type, or None if not registered."""
        descriptor = self.get(name)
        return project_schema(descriptor) if descriptor else None


__all__ = [
    "MAX_NAME_LENGTH",
    "ContentTypeDescriptor",
    "ContentTypeRegistry",
    "field_storage_args",
]
