"""Field descriptors and the field normalizer.

A raw field declaration is a loose, partially specified mapping (or just a
key name). Normalization turns it into a fully populated, immutable
FieldDescriptor, filling every attribute from catalog defaults.

Normalization is total: it never raises, even for type names outside the
catalog. Type validity is checked separately by the validation module so
that registration filters can still rewrite declarations first.
"""

import copy
import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Iterator

from content_model.schema import (
    FieldType,
    default_control,
    resolve_field_type,
    zero_value,
)

logger = logging.getLogger(__name__)

Sanitizer = Callable[[Any], Any]
Authorizer = Callable[..., bool]

DEFAULT_FIELD_TYPE = FieldType.STRING.value

# Canonical attribute -> accepted raw declaration keys, in lookup order
_ALIASES: dict[str, tuple[str, ...]] = {
    "exposed_in_api": ("exposed_in_api", "show_in_rest"),
    "sanitizer": ("sanitizer", "sanitize_callback"),
    "authorizer": ("authorizer", "auth_callback"),
}

_KNOWN_KEYS = frozenset(
    {
        "type",
        "label",
        "description",
        "required",
        "default",
        "enum",
        "single",
        "control",
        "revisions_enabled",
        "items",
    }
    | {alias for aliases in _ALIASES.values() for alias in aliases}
)

_LABEL_SEPARATORS = re.compile(r"[_-]")
_WORD_START = re.compile(r"(^|\s)(\S)")


@dataclass(frozen=True)
class FieldDescriptor:
    """Normalized, canonical definition of one content type field.

    Attributes:
        key: Identifier of the field within its content type.
        type: Declared type name. Catalog membership is not guaranteed
            until the field set passes structural validation.
        label: Human-readable label.
        description: Free text description.
        required: Whether a value must be supplied.
        default: Value used when none is stored.
        enum: Allowed values; empty means unconstrained.
        single: Whether one value (True) or a list of values is stored.
        exposed_in_api: Whether the field appears in API schemas.
        control: Editor control hint.
        revisions_enabled: Whether stored values are revisioned.
        sanitizer: Custom sanitizer replacing the type-default one.
        authorizer: Custom write authorization callback.
        items: Item schema for array fields.
        extra: Unrecognized declaration keys, preserved verbatim.
    """

    key: str
    type: str
    label: str
    description: str = ""
    required: bool = False
    default: Any = ""
    enum: tuple[Any, ...] = ()
    single: bool = True
    exposed_in_api: bool = True
    control: str = "text"
    revisions_enabled: bool = False
    sanitizer: Sanitizer | None = None
    authorizer: Authorizer | None = None
    items: dict[str, Any] | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def field_type(self) -> FieldType | None:
        """The catalog kind of this field, or None if not in the catalog."""
        return resolve_field_type(self.type)

    def to_dict(self) -> dict[str, Any]:
        """Convert the descriptor to a JSON-friendly dictionary.

        Callbacks are represented by their qualified names.
        """
        return {
            "key": self.key,
            "type": self.type,
            "label": self.label,
            "description": self.description,
            "required": self.required,
            "default": self.default,
            "enum": list(self.enum),
            "single": self.single,
            "exposed_in_api": self.exposed_in_api,
            "control": self.control,
            "revisions_enabled": self.revisions_enabled,
            "sanitizer": _callable_name(self.sanitizer),
            "authorizer": _callable_name(self.authorizer),
            "items": self.items,
            **self.extra,
        }


def _callable_name(func: Callable | None) -> str | None:
    if func is None:
        return None
    return getattr(func, "__qualname__", repr(func))


def generate_label(key: str) -> str:
    """Generate a human-readable label from a field key.

    Underscores and hyphens become spaces and the first letter of every
    word is upper-cased; the rest of each word is left untouched.

    Example:
        >>> generate_label("published_year")
        'Published Year'
        >>> generate_label("isbn-13")
        'Isbn 13'
    """
    spaced = _LABEL_SEPARATORS.sub(" ", key)
    return _WORD_START.sub(lambda m: m.group(1) + m.group(2).upper(), spaced)


def _pick(raw: Mapping[str, Any], attribute: str) -> Any:
    """Return the first non-None raw value for an attribute or its aliases."""
    for name in _ALIASES.get(attribute, (attribute,)):
        value = raw.get(name)
        if value is not None:
            return value
    return None


def _as_tuple(value: Any) -> tuple[Any, ...]:
    if value is None:
        return ()
    if isinstance(value, (list, tuple)):
        return tuple(copy.deepcopy(list(value)))
    return (copy.deepcopy(value),)


def _as_callable(key: str, attribute: str, value: Any) -> Callable | None:
    if value is None:
        return None
    if callable(value):
        return value
    logger.warning(f"Ignoring non-callable {attribute} for field '{key}'")
    return None


def _infer_default(raw: Mapping[str, Any], field_type: str, enum: tuple) -> Any:
    """Explicit default > first enum member > the type's zero-value."""
    explicit = raw.get("default")
    if explicit is not None:
        return copy.deepcopy(explicit)
    if enum:
        return copy.deepcopy(enum[0])
    return zero_value(field_type)


def normalize_field(key: str, raw: Mapping[str, Any] | None = None) -> FieldDescriptor:
    """Normalize a single raw field declaration.

    Args:
        key: Field key.
        raw: Partial declaration. None or an empty mapping yields a string
            field with all defaults.

    Returns:
        Fully populated FieldDescriptor.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    declared_type = raw.get("type")
    if declared_type is None:
        field_type = DEFAULT_FIELD_TYPE
    elif isinstance(declared_type, FieldType):
        field_type = declared_type.value
    else:
        field_type = declared_type

    enum = _as_tuple(raw.get("enum"))
    label = raw.get("label")
    control = raw.get("control")
    exposed = _pick(raw, "exposed_in_api")
    items = raw.get("items")

    return FieldDescriptor(
        key=key,
        type=field_type,
        label=generate_label(key) if label is None else str(label),
        description=str(raw.get("description") or ""),
        required=bool(raw.get("required", False)),
        default=_infer_default(raw, field_type, enum),
        enum=enum,
        single=bool(raw.get("single", True)),
        exposed_in_api=True if exposed is None else bool(exposed),
        control=default_control(field_type) if control is None else str(control),
        revisions_enabled=bool(raw.get("revisions_enabled", False)),
        sanitizer=_as_callable(key, "sanitizer", _pick(raw, "sanitizer")),
        authorizer=_as_callable(key, "authorizer", _pick(raw, "authorizer")),
        items=dict(items) if isinstance(items, Mapping) else None,
        extra={k: v for k, v in raw.items() if k not in _KNOWN_KEYS},
    )


def _iter_entries(raw_fields: Any) -> Iterator[tuple[str, Any]]:
    """Yield (key, declaration) pairs from a mapping or a list of entries.

    A bare string entry names a field with all defaults.
    """
    if raw_fields is None:
        return
    entries: Iterable[tuple[Any, Any]]
    if isinstance(raw_fields, Mapping):
        entries = raw_fields.items()
    else:
        entries = enumerate(raw_fields)

    for key, declaration in entries:
        if isinstance(declaration, str):
            yield declaration, {}
        else:
            yield str(key), declaration


def normalize_fields(raw_fields: Any) -> dict[str, FieldDescriptor]:
    """Normalize a set of raw field declarations.

    Args:
        raw_fields: Mapping of key to declaration (or bare key string), or
            a list of bare key strings.

    Returns:
        Ordered mapping of key to FieldDescriptor, in declaration order.

    Example:
        >>> fields = normalize_fields({"genre": {"enum": ["fiction", "mystery"]}})
        >>> fields["genre"].default
        'fiction'
    """
    normalized: dict[str, FieldDescriptor] = {}
    for key, declaration in _iter_entries(raw_fields):
        normalized[key] = normalize_field(key, declaration)
    return normalized


__all__ = [
    "FieldDescriptor",
    "Sanitizer",
    "Authorizer",
    "DEFAULT_FIELD_TYPE",
    "generate_label",
    "normalize_field",
    "normalize_fields",
]
