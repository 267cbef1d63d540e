"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- A fresh content type registry per test
- The book content type arguments
"""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING, Any

import pytest
from dotenv import load_dotenv

if TYPE_CHECKING:
    from content_model.registry import ContentTypeRegistry

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Registry Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ContentTypeRegistry:
    """Create an empty registry with in-memory collaborators.

    Returns:
        ContentTypeRegistry owned by the calling test.
    """
    from content_model.registry import (
        ContentTypeRegistry,
        InMemoryFieldStore,
        InMemoryTypeRegistry,
    )

    return ContentTypeRegistry(
        type_registry=InMemoryTypeRegistry(),
        field_store=InMemoryFieldStore(),
    )


@pytest.fixture
def book_args() -> dict[str, Any]:
    """Registration args of the book content type.

    Returns:
        A deep copy the test may mutate.
    """
    from content_model.demo import BOOK_ARGS

    return copy.deepcopy(BOOK_ARGS)
