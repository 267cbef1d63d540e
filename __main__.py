"""CLI entry point for content-model.

This module acts as the central entry point for the project's CLI tools.
Definition commands load a content type definition file, register it in a
fresh registry and print JSON to stdout; logs go to stderr.
"""

import argparse
import json
import subprocess
import sys
from pathlib import Path
from typing import Any, Callable

from dotenv import load_dotenv
from pydantic import ValidationError

from content_model.config import (
    get_environment,
    get_environment_info,
    get_json_indent,
    list_environment_variables,
)
from content_model.core import get_logger, setup_logging
from content_model.demo import BOOK_CONTENT_TYPE, register_book_content_type
from content_model.errors import ContentModelError
from content_model.registry import (
    ContentTypeDescriptor,
    ContentTypeRegistry,
    load_definition,
)
from content_model.rest import project_field_schema
from content_model.sanitize import sanitize_submission

# Load environment variables from .env file
load_dotenv()

logger = get_logger("cli")

Handler = Callable[[argparse.Namespace], int]


# =============================================================================
# Helpers
# =============================================================================


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=get_json_indent()))


def _register_definition(
    path: Path,
) -> tuple[ContentTypeRegistry, ContentTypeDescriptor]:
    """Load a definition file and register it in a fresh registry."""
    definition = load_definition(path)
    registry = ContentTypeRegistry()
    return registry, definition.register(registry)


def _load_values(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        values = json.load(f)
    if not isinstance(values, dict):
        raise ValueError(f"Values file must hold a JSON object: {path}")
    return values


def _run(handler: Handler, args: argparse.Namespace) -> int:
    """Run a command handler, reporting expected failures as exit code 1."""
    try:
        return handler(args)
    except ContentModelError as e:
        logger.error(e.message)
        _print_json(e.to_dict())
        return 1
    except FileNotFoundError as e:
        logger.error(str(e))
        return 1
    except (ValidationError, ValueError) as e:
        logger.error(f"Invalid input: {e}")
        return 1


def _definition_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description=description)
    parser.add_argument(
        "definition",
        type=Path,
        help="Definition JSON file (or its name in CONTENT_MODEL_DEFINITIONS_DIR)",
    )
    return parser


def _values_parser(prog: str, description: str) -> argparse.ArgumentParser:
    parser = _definition_parser(prog, description)
    parser.add_argument("values", type=Path, help="JSON file holding a value map")
    return parser


# =============================================================================
# Fields Command
# =============================================================================


def cmd_fields(args: argparse.Namespace) -> int:
    """Handle the fields command."""
    _, descriptor = _register_definition(args.definition)
    _print_json({key: f.to_dict() for key, f in descriptor.fields.items()})
    return 0


def handle_fields_command(argv: list[str]) -> int:
    """Print the normalized fields of a definition."""
    parser = _definition_parser(
        "python . fields",
        "Print the normalized fields of a content type definition",
    )
    return _run(cmd_fields, parser.parse_args(argv))


# =============================================================================
# Schema Command
# =============================================================================


def cmd_schema(args: argparse.Namespace) -> int:
    """Handle the schema command."""
    registry, descriptor = _register_definition(args.definition)

    if args.field is None:
        _print_json(registry.rest_schema(descriptor.name))
        return 0

    field = descriptor.get_field(args.field)
    if field is None:
        logger.error(f"Unknown field: {args.field}")
        return 1
    _print_json(project_field_schema(field))
    return 0


def handle_schema_command(argv: list[str]) -> int:
    """Print the REST schema of a definition."""
    parser = _definition_parser(
        "python . schema",
        "Print the REST schema of a content type definition",
    )
    parser.add_argument(
        "--field",
        "-f",
        type=str,
        default=None,
        help="Print the schema of one field only",
    )
    return _run(cmd_schema, parser.parse_args(argv))


# =============================================================================
# Validate / Sanitize Commands
# =============================================================================


def cmd_validate(args: argparse.Namespace) -> int:
    """Handle the validate command."""
    registry, descriptor = _register_definition(args.definition)
    registry.validate_values(descriptor.name, _load_values(args.values))
    logger.info(f"Values are valid for '{descriptor.name}'")
    return 0


def cmd_sanitize(args: argparse.Namespace) -> int:
    """Handle the sanitize command."""
    _, descriptor = _register_definition(args.definition)
    _print_json(sanitize_submission(descriptor.fields, _load_values(args.values)))
    return 0


def handle_validate_command(argv: list[str]) -> int:
    """Validate a value map against a definition."""
    parser = _values_parser(
        "python . validate",
        "Check required fields and enum constraints of a value map",
    )
    return _run(cmd_validate, parser.parse_args(argv))


def handle_sanitize_command(argv: list[str]) -> int:
    """Sanitize a submitted value map against a definition."""
    parser = _values_parser(
        "python . sanitize",
        "Sanitize a submitted value map for storage",
    )
    return _run(cmd_sanitize, parser.parse_args(argv))


# =============================================================================
# Demo Command
# =============================================================================


def cmd_demo(args: argparse.Namespace) -> int:
    """Handle the demo command."""
    registry = ContentTypeRegistry()
    descriptor = register_book_content_type(registry)
    if args.full:
        _print_json(descriptor.to_dict())
    else:
        _print_json(registry.rest_schema(BOOK_CONTENT_TYPE))
    return 0


def handle_demo_command(argv: list[str]) -> int:
    """Register the book content type and print its schema."""
    parser = argparse.ArgumentParser(
        prog="python . demo",
        description="Register the book content type and print its schema",
    )
    parser.add_argument(
        "--full",
        action="store_true",
        help="Print the whole descriptor (name, fields, ui)",
    )
    return _run(cmd_demo, parser.parse_args(argv))


# =============================================================================
# Env Command
# =============================================================================


def handle_env_command(argv: list[str]) -> int:
    """List configuration variables and their resolved values."""
    parser = argparse.ArgumentParser(
        prog="python . env",
        description="Show configuration environment variables",
    )
    parser.add_argument(
        "--category",
        "-c",
        type=str,
        default=None,
        choices=["logging", "cli"],
        help="Only show one category",
    )
    args = parser.parse_args(argv)

    for var in list_environment_variables(args.category):
        config = get_environment_info(var)
        print(f"{config.name} = {get_environment(var)!r}")
        print(f"    {config.description} (default: {config.default!r})")
    return 0


# =============================================================================
# Test Command
# =============================================================================


def cmd_test(extra_args: list[str]) -> int:
    """Run pytest with provided arguments and test tier options.

    Usage:
        python . test                # Run all tests
        python . test --unit         # Run only unit tests
        python . test --integration  # Run CLI and other subprocess tests
        python . test -k "registry"  # Run tests matching pattern
    """
    tier_markers = {
        "--unit": ["-m", "unit"],
        "--integration": ["-m", "integration"],
        "--all": [],
    }

    pytest_args: list[str] = []
    remaining_args: list[str] = []

    for arg in extra_args:
        if arg in tier_markers:
            pytest_args.extend(tier_markers[arg])
        else:
            remaining_args.append(arg)

    cmd = [sys.executable, "-m", "pytest", *pytest_args, *remaining_args]
    logger.info(f"Running: {' '.join(cmd)}")

    try:
        return subprocess.call(cmd)
    except KeyboardInterrupt:
        return 130


# =============================================================================
# Main
# =============================================================================


def show_help() -> None:
    """Display CLI help message."""
    print("Usage: python . {command} [args]")
    print("\n=== Content Types ===")
    print("  fields     Print normalized fields of a definition")
    print("  schema     Print the REST schema of a definition")
    print("  validate   Validate a value map against a definition")
    print("  sanitize   Sanitize a submitted value map")
    print("  demo       Print the book content type schema")
    print("\n=== Development ===")
    print("  env        Show configuration variables")
    print("  test       Run the test suite")
    print("\nExamples:")
    print("  python . fields book.json")
    print("  python . schema book.json --field genre")
    print("  python . validate book.json values.json")
    print("  python . sanitize book.json submitted.json")
    print("  python . demo --full")
    print("  python . test --unit")


def main() -> int:
    """Main entry point for the CLI."""
    if len(sys.argv) < 2:
        show_help()
        return 1

    command = sys.argv[1]
    rest_args = sys.argv[2:]

    if command in ("-h", "--help"):
        show_help()
        return 0

    commands = {
        "fields": lambda: handle_fields_command(rest_args),
        "schema": lambda: handle_schema_command(rest_args),
        "validate": lambda: handle_validate_command(rest_args),
        "sanitize": lambda: handle_sanitize_command(rest_args),
        "demo": lambda: handle_demo_command(rest_args),
        "env": lambda: handle_env_command(rest_args),
        "test": lambda: cmd_test(rest_args),
    }

    if command in commands:
        setup_logging()
        return commands[command]()

    logger.error(f"Unknown command: {command}")
    show_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
