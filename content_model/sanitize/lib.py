"""Type-aware sanitization of incoming field values.

Sanitizers convert arbitrary input to the canonical native representation
of a field type. They are total: every input produces a best-effort value
and nothing here raises. Field sanitizers additionally clamp values outside
a field's enum to the first enum member.
"""

import copy
import logging
import math
import re
from collections.abc import Mapping
from html.parser import HTMLParser
from typing import Any, Callable

from content_model.fields import FieldDescriptor, Sanitizer
from content_model.schema import FieldType, resolve_field_type, strict_contains

logger = logging.getLogger(__name__)

# Leading numeric prefix, the way loosely typed form input is read as a number
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")
_WHITESPACE_RUN = re.compile(r"[\r\n\t ]+")
_SPACE_RUN = re.compile(r" +")
_PERCENT_OCTET = re.compile(r"%[a-fA-F0-9]{2}")

# Case-insensitive strings read as False; everything else uses truthiness
_FALSE_STRINGS = frozenset({"false", "0"})

# Elements whose content is dropped along with the tags
_SKIP_CONTENT_TAGS = frozenset({"script", "style"})


class _PlainTextParser(HTMLParser):
    """HTML parser that keeps text and entities and drops all markup."""

    def __init__(self):
        super().__init__(convert_charrefs=False)
        self.parts: list[str] = []
        self._skip_depth = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in _SKIP_CONTENT_TAGS:
            self._skip_depth += 1

    def handle_endtag(self, tag: str) -> None:
        if tag in _SKIP_CONTENT_TAGS and self._skip_depth:
            self._skip_depth -= 1

    def handle_data(self, data: str) -> None:
        if not self._skip_depth:
            # A "<" reaching here is not part of a tag
            self.parts.append(data.replace("<", "&lt;"))

    def handle_entityref(self, name: str) -> None:
        if not self._skip_depth:
            self.parts.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        if not self._skip_depth:
            self.parts.append(f"&#{name};")

    def get_text(self) -> str:
        return "".join(self.parts)


def _strip_tags(text: str) -> str:
    parser = _PlainTextParser()
    parser.feed(text)
    parser.close()
    return parser.get_text()


def _parse_numeric_prefix(text: str) -> int | float | None:
    match = _NUMERIC_PREFIX.match(text)
    if match is None:
        return None
    literal = match.group(1)
    if any(c in literal for c in ".eE"):
        return float(literal)
    try:
        return int(literal)
    except ValueError:
        # Beyond the int/str conversion digit limit
        return float(literal)


# =============================================================================
# Per-type sanitizers
# =============================================================================


def sanitize_text(value: Any) -> str:
    """Convert a value to single-line plain text.

    Markup is removed (script and style content included), a bare ``<`` is
    escaped, whitespace runs collapse to one space, percent-encoded octets
    are removed, and the result is trimmed. Lists, mappings and undecodable
    bytes become the empty string.
    """
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    if isinstance(value, (list, tuple, dict, set)):
        return ""
    if isinstance(value, bytes):
        try:
            value = value.decode("utf-8")
        except UnicodeDecodeError:
            return ""

    text = str(value)
    if "<" in text:
        text = _strip_tags(text)

    text = _WHITESPACE_RUN.sub(" ", text).strip()

    if _PERCENT_OCTET.search(text):
        text = _PERCENT_OCTET.sub("", text)
        text = _SPACE_RUN.sub(" ", text).strip()

    return text


def sanitize_integer(value: Any) -> int:
    """Convert a value to an integer, truncating toward zero.

    Strings are read up to their first non-numeric character; anything
    unreadable becomes 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return math.trunc(value) if math.isfinite(value) else 0
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str):
        parsed = _parse_numeric_prefix(value)
        if parsed is None:
            return 0
        return sanitize_integer(parsed)
    if isinstance(value, (list, tuple, dict, set)):
        return 1 if value else 0
    if value is None:
        return 0
    try:
        return sanitize_integer(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


def sanitize_number(value: Any) -> float:
    """Convert a value to a float.

    Strings are read up to their first non-numeric character; anything
    unreadable becomes 0.0.
    """
    if isinstance(value, (bool, int)):
        try:
            return float(value)
        except OverflowError:
            return math.inf if value > 0 else -math.inf
    if isinstance(value, float):
        return value
    if isinstance(value, bytes):
        value = value.decode("utf-8", errors="ignore")
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        return 0.0 if match is None else float(match.group(1))
    if isinstance(value, (list, tuple, dict, set)):
        return 1.0 if value else 0.0
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0


def sanitize_boolean(value: Any) -> bool:
    """Convert a value to a boolean.

    The strings "false" and "0" (any case) are False; any other value
    follows Python truthiness, so "1", "true" and "on" are True and the
    empty string is False.
    """
    if isinstance(value, str) and value.lower() in _FALSE_STRINGS:
        return False
    return bool(value)


def sanitize_array(value: Any) -> list:
    """Pass lists and tuples through as a list; anything else is empty."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def sanitize_object(value: Any) -> dict:
    """Pass mappings through as a dict; anything else is empty."""
    if isinstance(value, Mapping):
        return dict(value)
    return {}


TYPE_SANITIZERS: dict[FieldType, Callable[[Any], Any]] = {
    FieldType.STRING: sanitize_text,
    FieldType.INTEGER: sanitize_integer,
    FieldType.NUMBER: sanitize_number,
    FieldType.BOOLEAN: sanitize_boolean,
    FieldType.ARRAY: sanitize_array,
    FieldType.OBJECT: sanitize_object,
}


# =============================================================================
# Dispatch
# =============================================================================


def sanitize_by_type(value: Any, field_type: Any) -> Any:
    """Sanitize a value for a declared field type.

    Args:
        value: Raw input value.
        field_type: FieldType or type name.

    Returns:
        The value in the type's native representation. Values for types
        outside the catalog are returned unchanged.

    Example:
        >>> sanitize_by_type("42", "integer")
        42
    """
    resolved = resolve_field_type(field_type)
    if resolved is None:
        return value
    return TYPE_SANITIZERS[resolved](value)


def field_sanitizer(field: FieldDescriptor) -> Sanitizer:
    """Build the type-default sanitizer for a field, with enum clamping.

    Values that are not strictly equal to an enum member after type
    sanitization are replaced by the first enum member.

    Args:
        field: Normalized field descriptor.

    Returns:
        Callable mapping a raw value to its sanitized, clamped value.
    """
    field_type = field.type
    enum = field.enum
    key = field.key

    def sanitize(value: Any) -> Any:
        sanitized = sanitize_by_type(value, field_type)
        if enum and not strict_contains(enum, sanitized):
            logger.debug(f"Clamped {sanitized!r} for field '{key}' to {enum[0]!r}")
            return copy.deepcopy(enum[0])
        return sanitized

    sanitize.__qualname__ = f"field_sanitizer.<{key}>"
    return sanitize


def resolve_sanitizer(field: FieldDescriptor) -> Sanitizer:
    """Get the sanitizer a field's values are stored through.

    The field's custom sanitizer when declared, otherwise field_sanitizer.
    """
    if field.sanitizer is not None:
        return field.sanitizer
    return field_sanitizer(field)


def sanitize_submission(
    fields: Mapping[str, FieldDescriptor], submitted: Mapping[str, Any]
) -> dict[str, Any]:
    """Sanitize a submitted form value map for storage.

    Every submitted field goes through its resolved sanitizer. Boolean
    fields missing from the submission are unchecked checkboxes and become
    False. Other missing fields and unknown keys are left out.

    Args:
        fields: Ordered mapping of key to FieldDescriptor.
        submitted: Raw submitted values keyed by field key.

    Returns:
        Sanitized values in field order.
    """
    sanitized: dict[str, Any] = {}
    for key, field in fields.items():
        if key in submitted:
            sanitized[key] = resolve_sanitizer(field)(submitted[key])
        elif field.field_type is FieldType.BOOLEAN:
            sanitized[key] = False
    return sanitized


__all__ = [
    # Per-type sanitizers
    "sanitize_text",
    "sanitize_integer",
    "sanitize_number",
    "sanitize_boolean",
    "sanitize_array",
    "sanitize_object",
    "TYPE_SANITIZERS",
    # Dispatch
    "sanitize_by_type",
    "field_sanitizer",
    "resolve_sanitizer",
    "sanitize_submission",
]
