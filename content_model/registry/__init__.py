"""Content type registry, collaborator protocols and definition files."""

from .collaborators import (
    FieldStorageArgs,
    FieldValueStore,
    InMemoryFieldStore,
    InMemoryTypeRegistry,
    StructuralTypeRegistry,
)
from .definition import (
    ContentTypeDefinition,
    load_definition,
    resolve_definition_path,
)
from .lib import (
    MAX_NAME_LENGTH,
    ContentTypeDescriptor,
    ContentTypeRegistry,
    field_storage_args,
)

__all__ = [
    # Registry
    "MAX_NAME_LENGTH",
    "ContentTypeDescriptor",
    "ContentTypeRegistry",
    "field_storage_args",
    # Collaborators
    "FieldStorageArgs",
    "StructuralTypeRegistry",
    "FieldValueStore",
    "InMemoryTypeRegistry",
    "InMemoryFieldStore",
    # Definition files
    "ContentTypeDefinition",
    "load_definition",
    "resolve_definition_path",
]
