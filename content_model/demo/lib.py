"""The "book" content type.

A complete example content type with six fields and an editor panel,
plus the save and read flows a form handler runs against the field store.

Example:
    >>> registry = ContentTypeRegistry()
    >>> register_book_content_type(registry)
    >>> save_book(registry, 1, {"isbn": "978-0441013593", "genre": "sci-fi"})
    {'isbn': '978-0441013593', 'genre': 'sci-fi', 'in_print': False}
"""

import copy
import logging
from collections.abc import Mapping
from typing import Any

from content_model.errors import NotRegisteredError
from content_model.registry import ContentTypeDescriptor, ContentTypeRegistry
from content_model.sanitize import sanitize_submission

logger = logging.getLogger(__name__)

BOOK_CONTENT_TYPE = "book"

BOOK_GENRES = [
    "fiction",
    "non-fiction",
    "mystery",
    "romance",
    "sci-fi",
    "fantasy",
    "biography",
    "history",
]

BOOK_ARGS: dict[str, Any] = {
    "labels": {
        "name": "Books",
        "singular_name": "Book",
        "add_new_item": "Add New Book",
        "edit_item": "Edit Book",
        "not_found": "No books found.",
    },
    "public": True,
    "has_archive": True,
    "show_in_rest": True,
    "rest_base": "books",
    "supports": ["title", "editor", "thumbnail", "excerpt", "custom-fields"],
    "rewrite": {"slug": "books"},
    "fields": {
        "isbn": {
            "type": "string",
            "label": "ISBN",
            "description": "International Standard Book Number",
            "required": True,
            "control": "text",
        },
        "published_year": {
            "type": "integer",
            "label": "Published Year",
            "description": "Year the book was published",
            "control": "number",
        },
        "author_name": {
            "type": "string",
            "label": "Author Name",
            "description": "Name of the book author",
            "control": "text",
        },
        "genre": {
            "type": "string",
            "label": "Genre",
            "description": "Book genre category",
            "enum": BOOK_GENRES,
            "control": "select",
        },
        "page_count": {
            "type": "integer",
            "label": "Page Count",
            "description": "Total number of pages",
            "control": "number",
        },
        "in_print": {
            "type": "boolean",
            "label": "Currently In Print",
            "description": "Whether the book is currently available in print",
            "default": True,
            "control": "checkbox",
        },
    },
    "ui": {
        "editor_panel": {
            "title": "Book Details",
            "fields": [
                "isbn",
                "published_year",
                "author_name",
                "genre",
                "page_count",
                "in_print",
            ],
        },
    },
}


def register_book_content_type(registry: ContentTypeRegistry) -> ContentTypeDescriptor:
    """Register the book content type with a registry."""
    return registry.register(BOOK_CONTENT_TYPE, copy.deepcopy(BOOK_ARGS))


def _require_book(registry: ContentTypeRegistry) -> ContentTypeDescriptor:
    descriptor = registry.get(BOOK_CONTENT_TYPE)
    if descriptor is None:
        raise NotRegisteredError(BOOK_CONTENT_TYPE)
    return descriptor


def save_book(
    registry: ContentTypeRegistry, instance_id: int | str, submitted: Mapping[str, Any]
) -> dict[str, Any]:
    """Store a submitted book form.

    Unchecked checkboxes are absent from a submission and are saved as
    False; other absent fields keep their stored value.

    Returns:
        The values written, keyed by field.

    Raises:
        NotRegisteredError: If the book type is not registered.
    """
    descriptor = _require_book(registry)
    values = sanitize_submission(descriptor.fields, submitted)

    stored = {}
    for key, value in values.items():
        stored[key] = registry.field_store.set_value(
            BOOK_CONTENT_TYPE, instance_id, key, value
        )
    logger.debug(f"Saved {len(stored)} fields for book {instance_id}")
    return stored


def read_book(registry: ContentTypeRegistry, instance_id: int | str) -> dict[str, Any]:
    """Read every field of a stored book, with defaults for unset fields.

    Raises:
        NotRegisteredError: If the book type is not registered.
    """
    descriptor = _require_book(registry)
    return {
        key: registry.field_store.get_value(BOOK_CONTENT_TYPE, instance_id, key)
        for key in descriptor.fields
    }


__all__ = [
    "BOOK_CONTENT_TYPE",
    "BOOK_GENRES",
    "BOOK_ARGS",
    "register_book_content_type",
    "save_book",
    "read_book",
]
