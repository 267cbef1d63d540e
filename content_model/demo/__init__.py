"""Example "book" content type."""

from .lib import (
    BOOK_ARGS,
    BOOK_CONTENT_TYPE,
    BOOK_GENRES,
    read_book,
    register_book_content_type,
    save_book,
)

__all__ = [
    "BOOK_CONTENT_TYPE",
    "BOOK_GENRES",
    "BOOK_ARGS",
    "register_book_content_type",
    "save_book",
    "read_book",
]
