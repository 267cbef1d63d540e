"""Content type definition files.

A definition file is a JSON document holding the name and registration
args of one content type:

    {"name": "book", "args": {"fields": {...}, "ui": {...}}}
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from content_model.config import get_definitions_dir

from .lib import ContentTypeDescriptor, ContentTypeRegistry

DEFINITION_SUFFIX = ".json"


class ContentTypeDefinition(BaseModel):
    """Serialized registration request for one content type."""

    name: str = Field(..., description="Content type name")
    args: dict[str, Any] = Field(
        default_factory=dict, description="Registration args (fields, ui, ...)"
    )

    def register(self, registry: ContentTypeRegistry) -> ContentTypeDescriptor:
        """Register this definition with a registry."""
        return registry.register(self.name, self.args)


def resolve_definition_path(
    path: Path | str, definitions_dir: Path | str | None = None
) -> Path:
    """Resolve a definition file argument to a path.

    Existing paths are returned as given. Otherwise the definitions
    directory (argument, or CONTENT_MODEL_DEFINITIONS_DIR) is searched for
    the name as given and with a ``.json`` suffix.

    Raises:
        FileNotFoundError: If no candidate exists.
    """
    path = Path(path)
    if path.exists():
        return path

    directory = get_definitions_dir(definitions_dir)
    if directory is not None and not path.is_absolute():
        for candidate in (directory / path, directory / f"{path}{DEFINITION_SUFFIX}"):
            if candidate.exists():
                return candidate

    raise FileNotFoundError(f"Definition file not found: {path}")


def load_definition(
    path: Path | str, definitions_dir: Path | str | None = None
) -> ContentTypeDefinition:
    """Load a content type definition from a JSON file.

    Args:
        path: File path, or a bare name looked up in the definitions dir.
        definitions_dir: Overrides CONTENT_MODEL_DEFINITIONS_DIR.

    Raises:
        FileNotFoundError: If the file cannot be found.
        json.JSONDecodeError: If the file is not valid JSON.
        pydantic.ValidationError: If the document is not a definition.
    """
    resolved = resolve_definition_path(path, definitions_dir)
    with open(resolved, encoding="utf-8") as f:
        data = json.load(f)
    return ContentTypeDefinition.model_validate(data)


__all__ = [
    "DEFINITION_SUFFIX",
    "ContentTypeDefinition",
    "resolve_definition_path",
    "load_definition",
]
