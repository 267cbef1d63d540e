"""Centralized environment configuration management for content-model.

Provides a unified interface for all environment variables with:
- Single `get_environment()` function for all configuration
- Type-safe enum with metadata (default, type, description)
- Consistent resolution: override > environment > default

Example:
    >>> from content_model.config import EnvVar, get_environment
    >>>
    >>> level = get_environment(EnvVar.CONTENT_MODEL_LOG_LEVEL)  # Returns str
    >>> indent = get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT, override=4)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Metadata for an environment variable.

    Attributes:
        name: Environment variable name (e.g., "CONTENT_MODEL_LOG_LEVEL").
        default: Default value if not set in environment.
        var_type: Python type for value conversion (str, int, Path).
        description: Human-readable description.
        category: Grouping category for documentation.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "general"


class EnvVar(Enum):
    """All environment variables used by content-model.

    Each member contains an EnvConfig with name, default, type, and description.
    Use with `get_environment()` for type-safe access.

    Categories:
        - logging: Logger configuration
        - cli: Command line behaviour
    """

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    CONTENT_MODEL_LOG_LEVEL = EnvConfig(
        name="CONTENT_MODEL_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level name (DEBUG, INFO, WARNING, ERROR)",
        category="logging",
    )

    # -------------------------------------------------------------------------
    # Command Line
    # -------------------------------------------------------------------------
    CONTENT_MODEL_JSON_INDENT = EnvConfig(
        name="CONTENT_MODEL_JSON_INDENT",
        default=2,
        var_type=int,
        description="Indentation of JSON printed by the CLI",
        category="cli",
    )
    CONTENT_MODEL_DEFINITIONS_DIR = EnvConfig(
        name="CONTENT_MODEL_DEFINITIONS_DIR",
        default=None,
        var_type=Path,
        description="Directory searched for definition files given by name",
        category="cli",
    )


# =============================================================================
# Type Conversion Helpers
# =============================================================================


def _convert_value(value: str | None, var_type: type, default: Any) -> Any:
    """Convert string value to target type.

    Args:
        value: Raw string value from environment (or None).
        var_type: Target Python type.
        default: Default value if conversion fails or value is None.

    Returns:
        Converted value or default.
    """
    if value is None:
        return default

    if var_type is str:
        return value

    if var_type is int:
        try:
            return int(value)
        except ValueError:
            return default

    if var_type is Path:
        return Path(value)

    # Unknown type, return as-is
    return value


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Get environment variable value with type conversion.

    Resolution priority:
        1. Explicit override parameter (highest)
        2. Environment variable value
        3. Default from EnvConfig (lowest)

    Args:
        env_var: Environment variable enum member.
        override: Optional override value (bypasses env lookup).

    Returns:
        Value converted to the appropriate type (str, int, or Path).

    Example:
        >>> get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT)
        2
        >>> get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT, override=4)
        4
    """
    config: EnvConfig = env_var.value

    if override is not None:
        return override

    raw_value = os.environ.get(config.name)

    return _convert_value(raw_value, config.var_type, config.default)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Get metadata for an environment variable.

    Args:
        env_var: Environment variable enum member.

    Returns:
        EnvConfig with name, default, type, and description.
    """
    return env_var.value


# =============================================================================
# Convenience Functions
# =============================================================================


def get_log_level(override: str | None = None) -> int:
    """Get the configured log level as a `logging` constant.

    Unknown level names fall back to INFO.
    """
    name = str(get_environment(EnvVar.CONTENT_MODEL_LOG_LEVEL, override)).upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def get_json_indent(override: int | None = None) -> int:
    """Get the indentation used for CLI JSON output."""
    return get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT, override)


def get_definitions_dir(override: Path | str | None = None) -> Path | None:
    """Get the directory searched for definition files.

    Resolution: override > CONTENT_MODEL_DEFINITIONS_DIR > None
    """
    if override is not None:
        return Path(override)
    return get_environment(EnvVar.CONTENT_MODEL_DEFINITIONS_DIR)


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """List all environment variables, optionally filtered by category.

    Args:
        category: Filter by category (logging, cli).
                 None returns all variables.

    Returns:
        List of EnvVar enum members.
    """
    if category is None:
        return list(EnvVar)

    return [var for var in EnvVar if var.value.category == category]


__all__ = [
    # Core types
    "EnvConfig",
    "EnvVar",
    # Main interface
    "get_environment",
    "get_environment_info",
    # Convenience functions
    "get_log_level",
    "get_json_indent",
    "get_definitions_dir",
    # Introspection
    "list_environment_variables",
]
