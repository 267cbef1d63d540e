"""Unit tests for registry module."""

import json
import logging
import threading

import pytest

from content_model.errors import (
    AlreadyRegisteredError,
    InvalidFieldKeyError,
    InvalidFieldTypeError,
    InvalidNameLengthError,
    MissingRequiredFieldError,
    NotRegisteredError,
    StructuralTypeError,
)
from content_model.fields import normalize_field

from .collaborators import FieldStorageArgs, InMemoryFieldStore, InMemoryTypeRegistry
from .definition import ContentTypeDefinition, load_definition
from .lib import MAX_NAME_LENGTH, ContentTypeRegistry, field_storage_args


class FailingFieldStore(InMemoryFieldStore):
    """Field store that rejects one field key."""

    def __init__(self, failing_key: str):
        super().__init__()
        self.failing_key = failing_key

    def register_field(self, type_name, key, args):
        if key == self.failing_key:
            raise RuntimeError(f"cannot register {key}")
        super().register_field(type_name, key, args)


class TestRegister:
    """Tests for content type registration."""

    @pytest.mark.unit
    def test_register_returns_descriptor(self, registry, book_args):
        book = registry.register("book", book_args)
        assert book.name == "book"
        assert list(book.fields) == [
            "isbn",
            "published_year",
            "author_name",
            "genre",
            "page_count",
            "in_print",
        ]
        assert book.ui["editor_panel"]["title"] == "Book Details"
        assert registry.get("book") is book
        assert registry.exists("book")

    @pytest.mark.unit
    def test_fields_are_read_only(self, registry, book_args):
        book = registry.register("book", book_args)
        with pytest.raises(TypeError):
            book.fields["extra"] = normalize_field("extra")

    @pytest.mark.unit
    def test_caller_args_detached(self, registry):
        args = {
            "fields": {"title": {"enum": ["a", "b"]}},
            "ui": {"panel": {"title": "T"}},
            "labels": {"name": "Books"},
        }
        book = registry.register("book", args)

        args["ui"]["panel"]["title"] = "changed"
        args["fields"]["title"]["enum"].append("c")
        args["labels"]["name"] = "changed"

        assert book.ui["panel"]["title"] == "T"
        assert book.args["ui"]["panel"]["title"] == "T"
        assert book.args["fields"]["title"]["enum"] == ["a", "b"]
        assert book.args["labels"]["name"] == "Books"
        assert registry.type_registry.get_type("book")["labels"]["name"] == "Books"

    @pytest.mark.unit
    def test_empty_collaborators_kept(self):
        class EmptyTypeRegistry(InMemoryTypeRegistry):
            def __len__(self):
                return 0

        class EmptyFieldStore(InMemoryFieldStore):
            def __len__(self):
                return 0

        types = EmptyTypeRegistry()
        store = EmptyFieldStore()
        registry = ContentTypeRegistry(type_registry=types, field_store=store)
        assert registry.type_registry is types
        assert registry.field_store is store

    @pytest.mark.unit
    def test_no_args(self, registry):
        descriptor = registry.register("note")
        assert dict(descriptor.fields) == {}
        assert descriptor.ui == {}

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["", "x" * (MAX_NAME_LENGTH + 1)])
    def test_invalid_name_length(self, registry, name):
        with pytest.raises(InvalidNameLengthError) as exc_info:
            registry.register(name, {})
        assert exc_info.value.to_dict()["code"] == "content_type_length_invalid"
        assert registry.list() == []

    @pytest.mark.unit
    def test_max_length_name_accepted(self, registry):
        name = "x" * MAX_NAME_LENGTH
        registry.register(name, {})
        assert registry.exists(name)

    @pytest.mark.unit
    def test_duplicate_keeps_first(self, registry, book_args):
        first = registry.register("book", book_args)
        with pytest.raises(AlreadyRegisteredError):
            registry.register("book", {"fields": {"title": {}}})
        assert registry.get("book") is first

    @pytest.mark.unit
    def test_rejection_logged(self, registry, caplog):
        registry.register("book", {})
        with caplog.at_level(logging.WARNING):
            with pytest.raises(AlreadyRegisteredError):
                registry.register("book", {})
        assert 'Content type "book" is already registered.' in caplog.text

    @pytest.mark.unit
    def test_invalid_field_type_leaves_registry_unchanged(self, registry):
        with pytest.raises(InvalidFieldTypeError):
            registry.register("event", {"fields": {"starts": {"type": "date"}}})
        assert not registry.exists("event")
        assert not registry.type_registry.has_type("event")

    @pytest.mark.unit
    def test_empty_field_key_leaves_registry_unchanged(self, registry):
        with pytest.raises(InvalidFieldKeyError):
            registry.register("event", {"fields": {"": {}}})
        assert not registry.exists("event")
        assert not registry.type_registry.has_type("event")

    @pytest.mark.unit
    def test_structural_args(self, registry, book_args):
        del book_args["show_in_rest"]
        book = registry.register("book", book_args)

        structural = registry.type_registry.get_type("book")
        assert "fields" not in structural
        assert "ui" not in structural
        assert structural["show_in_rest"] is True
        assert structural["rest_base"] == "books"
        assert "show_in_rest" not in book.args

    @pytest.mark.unit
    def test_explicit_show_in_rest_kept(self, registry):
        registry.register("private_note", {"show_in_rest": False})
        assert registry.type_registry.get_type("private_note")["show_in_rest"] is False

    @pytest.mark.unit
    def test_structural_failure_propagates(self):
        types = InMemoryTypeRegistry()
        types.register_type("book", {})
        registry = ContentTypeRegistry(type_registry=types)
        with pytest.raises(StructuralTypeError):
            registry.register("book", {"fields": ["title"]})
        assert not registry.exists("book")

    @pytest.mark.unit
    def test_fields_registered_with_store(self, registry, book_args):
        registry.register("book", book_args)
        store = registry.field_store
        assert store.registered_keys("book") == list(book_args["fields"])
        genre = store.get_field_args("book", "genre")
        assert genre.type == "string"
        assert genre.default == "fiction"
        assert genre.sanitizer("romance") == "romance"
        assert genre.sanitizer("poetry") == "fiction"

    @pytest.mark.unit
    def test_field_store_failure_rolls_back(self, book_args):
        store = FailingFieldStore("genre")
        types = InMemoryTypeRegistry()
        registry = ContentTypeRegistry(type_registry=types, field_store=store)

        with pytest.raises(RuntimeError):
            registry.register("book", book_args)

        assert not registry.exists("book")
        assert not types.has_type("book")
        assert store.registered_keys("book") == []

    @pytest.mark.unit
    def test_concurrent_same_name_has_one_winner(self, registry):
        barrier = threading.Barrier(8)
        outcomes = []

        def attempt():
            barrier.wait()
            try:
                registry.register("book", {"fields": ["title"]})
                outcomes.append("registered")
            except AlreadyRegisteredError:
                outcomes.append("rejected")

        threads = [threading.Thread(target=attempt) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("registered") == 1
        assert outcomes.count("rejected") == 7


class TestHooks:
    """Tests for filters and notification hooks."""

    @pytest.mark.unit
    def test_args_filter_runs_before_normalization(self, registry):
        seen = []

        def add_subtitle(args, name):
            seen.append(name)
            args["fields"] = {**args.get("fields", {}), "subtitle": {}}
            return args

        registry.add_args_filter(add_subtitle)
        book = registry.register("book", {"fields": {"title": {}}})

        assert seen == ["book"]
        assert list(book.fields) == ["title", "subtitle"]

    @pytest.mark.unit
    def test_filter_can_fix_field_type(self, registry):
        def fix_dates(args, name):
            for declaration in args["fields"].values():
                if declaration.get("type") == "date":
                    declaration["type"] = "string"
            return args

        registry.add_args_filter(fix_dates)
        event = registry.register("event", {"fields": {"starts": {"type": "date"}}})
        assert event.fields["starts"].type == "string"

    @pytest.mark.unit
    def test_registered_hook(self, registry):
        calls = []
        registry.on_registered(lambda name, d, args: calls.append((name, d, args)))

        book = registry.register("book", {"public": True})

        assert len(calls) == 1
        name, descriptor, args = calls[0]
        assert name == "book"
        assert descriptor is book
        assert args == {"public": True, "show_in_rest": True}

    @pytest.mark.unit
    def test_unregistered_hook(self, registry):
        calls = []
        registry.on_unregistered(lambda name, d: calls.append((name, d)))

        book = registry.register("book", {})
        registry.unregister("book")

        assert calls == [("book", book)]

    @pytest.mark.unit
    def test_hooks_not_fired_on_failure(self, registry):
        calls = []
        registry.on_registered(lambda *args: calls.append(args))
        with pytest.raises(InvalidNameLengthError):
            registry.register("", {})
        assert calls == []

    @pytest.mark.unit
    def test_failing_registered_hook_is_logged(self, registry, caplog):
        calls = []

        def broken(name, descriptor, args):
            raise RuntimeError("listener failed")

        registry.on_registered(broken)
        registry.on_registered(lambda name, d, args: calls.append(name))

        with caplog.at_level(logging.ERROR):
            book = registry.register("book", {})

        assert registry.get("book") is book
        assert calls == ["book"]
        assert "listener failed" in caplog.text

    @pytest.mark.unit
    def test_failing_unregistered_hook_is_logged(self, registry, caplog):
        calls = []

        def broken(name, descriptor):
            raise RuntimeError("listener failed")

        registry.on_unregistered(broken)
        registry.on_unregistered(lambda name, d: calls.append(name))
        registry.register("book", {})

        with caplog.at_level(logging.ERROR):
            registry.unregister("book")

        assert not registry.exists("book")
        assert calls == ["book"]
        assert "listener failed" in caplog.text


class TestUnregister:
    """Tests for content type unregistration."""

    @pytest.mark.unit
    def test_round_trip(self, registry, book_args):
        registry.register("book", book_args)
        registry.unregister("book")

        assert registry.get("book") is None
        assert not registry.type_registry.has_type("book")
        assert registry.field_store.registered_keys("book") == []

        registry.register("book", book_args)
        assert registry.exists("book")

    @pytest.mark.unit
    def test_unknown_name(self, registry):
        with pytest.raises(NotRegisteredError) as exc_info:
            registry.unregister("book")
        assert exc_info.value.to_dict()["code"] == "content_type_not_exists"


class TestLookups:
    """Tests for read accessors."""

    @pytest.mark.unit
    def test_list_in_registration_order(self, registry):
        for name in ["book", "author", "review"]:
            registry.register(name, {})
        assert registry.list() == ["book", "author", "review"]
        objects = registry.list("objects")
        assert list(objects) == ["book", "author", "review"]
        assert objects["author"] is registry.get("author")
        assert len(registry) == 3
        assert "review" in registry

    @pytest.mark.unit
    def test_accessors(self, registry, book_args):
        registry.register("book", book_args)
        assert list(registry.get_fields("book")) == list(book_args["fields"])
        assert registry.get_field("book", "isbn").label == "ISBN"
        assert registry.get_field("book", "missing") is None
        assert registry.get_ui("book") == book_args["ui"]

    @pytest.mark.unit
    def test_accessors_unknown_type(self, registry):
        assert registry.get("book") is None
        assert registry.get_fields("book") is None
        assert registry.get_field("book", "isbn") is None
        assert registry.get_ui("book") is None
        assert registry.rest_schema("book") is None

    @pytest.mark.unit
    def test_descriptor_helpers(self, registry, book_args):
        book = registry.register("book", book_args)
        assert book.required_fields() == ["isbn"]
        assert book.get_field("genre").default == "fiction"
        data = book.to_dict()
        assert list(data) == ["name", "fields", "ui"]
        assert data["fields"]["in_print"]["default"] is True
        json.dumps(data)


class TestValidationAndProjection:
    """Tests for registry-level validation and schema projection."""

    @pytest.mark.unit
    def test_validate_values(self, registry, book_args):
        registry.register("book", book_args)
        registry.validate_values("book", {"isbn": "978-0441013593"})
        with pytest.raises(MissingRequiredFieldError):
            registry.validate_values("book", {"isbn": ""})

    @pytest.mark.unit
    def test_validate_values_unknown_type(self, registry):
        with pytest.raises(NotRegisteredError):
            registry.validate_values("book", {})

    @pytest.mark.unit
    def test_rest_schema(self, registry, book_args):
        registry.register("book", book_args)
        schema = registry.rest_schema("book")
        assert schema["type"] == "object"
        assert schema["required"] == ["isbn"]
        assert schema["properties"]["genre"]["enum"][0] == "fiction"


class TestFieldStorageArgs:
    """Tests for field-value store registration records."""

    @pytest.mark.unit
    def test_record(self):
        field = normalize_field(
            "page_count", {"type": "integer", "description": "Pages", "default": 100}
        )
        args = field_storage_args(field)
        assert args.type == "integer"
        assert args.single is True
        assert args.default == 100
        assert args.description == "Pages"
        assert args.exposed_schema == {
            "type": "integer",
            "description": "Pages",
            "default": 100,
        }
        assert args.sanitizer("12 pages") == 12

    @pytest.mark.unit
    def test_empty_description_omitted(self):
        assert field_storage_args(normalize_field("title")).description is None

    @pytest.mark.unit
    def test_hidden_field(self):
        field = normalize_field("secret", {"show_in_rest": False})
        assert field_storage_args(field).exposed_schema is False

    @pytest.mark.unit
    def test_custom_callbacks(self):
        def allow(*args):
            return True

        field = normalize_field(
            "code", {"sanitize_callback": str.strip, "auth_callback": allow}
        )
        args = field_storage_args(field)
        assert args.sanitizer is str.strip
        assert args.authorizer is allow


class TestInMemoryFieldStore:
    """Tests for the in-memory field-value store."""

    @pytest.fixture
    def store(self):
        declarations = {
            "in_print": {"type": "boolean", "default": True},
            "format": {"default": "hardcover"},
            "tags": {"single": False},
        }
        store = InMemoryFieldStore()
        for key, raw in declarations.items():
            store.register_field("book", key, field_storage_args(normalize_field(key, raw)))
        return store

    @pytest.mark.unit
    def test_missing_value_reads_default(self, store):
        assert store.get_value("book", 1, "in_print") is True

    @pytest.mark.unit
    def test_empty_string_reads_default(self, store):
        assert store.set_value("book", 1, "format", "<br>") == ""
        assert store.get_value("book", 1, "format") == "hardcover"

    @pytest.mark.unit
    def test_set_value_sanitizes(self, store):
        assert store.set_value("book", 1, "in_print", "0") is False
        assert store.get_value("book", 1, "in_print") is False

    @pytest.mark.unit
    def test_multi_value_field(self, store):
        assert store.set_value("book", 1, "tags", [" a ", "<b>b</b>"]) == ["a", "b"]

    @pytest.mark.unit
    def test_unregistered_field_stored_as_is(self, store):
        store.set_value("book", 1, "notes", {"raw": True})
        assert store.get_value("book", 1, "notes") == {"raw": True}
        assert store.get_value("book", 2, "notes") is None

    @pytest.mark.unit
    def test_storage_args_type(self, store):
        assert isinstance(store.get_field_args("book", "tags"), FieldStorageArgs)


class TestDefinitions:
    """Tests for definition file loading."""

    @pytest.mark.unit
    def test_load_and_register(self, tmp_path, registry, book_args):
        path = tmp_path / "book.json"
        path.write_text(json.dumps({"name": "book", "args": book_args}))

        definition = load_definition(path)
        assert isinstance(definition, ContentTypeDefinition)
        assert definition.name == "book"

        book = definition.register(registry)
        assert book.required_fields() == ["isbn"]

    @pytest.mark.unit
    def test_bare_name_resolved_in_definitions_dir(self, tmp_path):
        (tmp_path / "note.json").write_text(json.dumps({"name": "note"}))
        definition = load_definition("note", definitions_dir=tmp_path)
        assert definition.name == "note"
        assert definition.args == {}

    @pytest.mark.unit
    def test_definitions_dir_from_environment(self, tmp_path, monkeypatch):
        (tmp_path / "note.json").write_text(json.dumps({"name": "note"}))
        monkeypatch.setenv("CONTENT_MODEL_DEFINITIONS_DIR", str(tmp_path))
        assert load_definition("note.json").name == "note"

    @pytest.mark.unit
    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_definition(tmp_path / "missing.json")
