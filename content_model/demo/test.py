"""Unit tests for the book content type."""

import pytest

from content_model.errors import InvalidEnumValueError, NotRegisteredError

from .lib import (
    BOOK_ARGS,
    BOOK_CONTENT_TYPE,
    BOOK_GENRES,
    read_book,
    register_book_content_type,
    save_book,
)


class TestBookContentType:
    """Tests for book registration."""

    @pytest.mark.unit
    def test_register(self, registry):
        book = register_book_content_type(registry)
        assert book.name == BOOK_CONTENT_TYPE
        assert book.required_fields() == ["isbn"]
        assert book.get_field("genre").enum == tuple(BOOK_GENRES)
        assert book.get_field("in_print").default is True
        assert book.get_field("page_count").default == 0

    @pytest.mark.unit
    def test_register_does_not_share_args(self, registry):
        book = register_book_content_type(registry)
        assert book.args["fields"] is not BOOK_ARGS["fields"]

    @pytest.mark.unit
    def test_schema(self, registry):
        register_book_content_type(registry)
        schema = registry.rest_schema(BOOK_CONTENT_TYPE)
        assert list(schema["properties"]) == BOOK_ARGS["ui"]["editor_panel"]["fields"]
        assert schema["properties"]["isbn"] == {
            "type": "string",
            "description": "International Standard Book Number",
        }

    @pytest.mark.unit
    def test_enum_validation(self, registry):
        register_book_content_type(registry)
        with pytest.raises(InvalidEnumValueError):
            registry.validate_values(BOOK_CONTENT_TYPE, {"isbn": "1", "genre": "poetry"})


class TestSaveAndRead:
    """Tests for the form save and read flows."""

    @pytest.mark.unit
    def test_save_sanitizes(self, registry):
        register_book_content_type(registry)
        stored = save_book(
            registry,
            1,
            {
                "isbn": " 978-0441013593 ",
                "published_year": "1965",
                "genre": "poetry",
                "in_print": "1",
            },
        )
        assert stored == {
            "isbn": "978-0441013593",
            "published_year": 1965,
            "genre": "fiction",
            "in_print": True,
        }

    @pytest.mark.unit
    def test_unchecked_checkbox_saved_false(self, registry):
        register_book_content_type(registry)
        save_book(registry, 1, {"isbn": "978-0441013593"})
        assert read_book(registry, 1)["in_print"] is False

    @pytest.mark.unit
    def test_read_defaults(self, registry):
        register_book_content_type(registry)
        assert read_book(registry, 7) == {
            "isbn": "",
            "published_year": 0,
            "author_name": "",
            "genre": "fiction",
            "page_count": 0,
            "in_print": True,
        }

    @pytest.mark.unit
    def test_absent_fields_keep_stored_value(self, registry):
        register_book_content_type(registry)
        save_book(registry, 1, {"author_name": "Frank Herbert"})
        save_book(registry, 1, {"page_count": "412"})
        values = read_book(registry, 1)
        assert values["author_name"] == "Frank Herbert"
        assert values["page_count"] == 412

    @pytest.mark.unit
    def test_requires_registration(self, registry):
        with pytest.raises(NotRegisteredError):
            save_book(registry, 1, {})
        with pytest.raises(NotRegisteredError):
            read_book(registry, 1)
