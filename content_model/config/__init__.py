"""Centralized configuration management for content-model.

Provides unified access to all configuration via the `get_environment()` function.

Example:
    >>> from content_model.config import EnvVar, get_environment
    >>>
    >>> indent = get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT)  # Returns int: 2
    >>> indent = get_environment(EnvVar.CONTENT_MODEL_JSON_INDENT, override=4)

Environment Variable Categories:
    logging: Log level for the CLI and library loggers
    cli: Command line output and definition lookup
"""

from .lib import (
    EnvConfig,
    EnvVar,
    get_definitions_dir,
    get_environment,
    get_environment_info,
    get_json_indent,
    get_log_level,
    list_environment_variables,
)

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
