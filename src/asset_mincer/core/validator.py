"""JSON Schema validation for manifests and build configuration files.

This module loads the formal JSON Schemas shipped with the package and
validates documents before they are written or used.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema
from jsonschema import ValidationError

from .types import ManifestData

# Schemas are package data next to this package
SCHEMA_DIR = Path(__file__).parent.parent / "schemas"
MANIFEST_SCHEMA_PATH = SCHEMA_DIR / "manifest.schema.json"
CONFIG_SCHEMA_PATH = SCHEMA_DIR / "config.schema.json"


def load_schema(path: Path = MANIFEST_SCHEMA_PATH) -> dict[str, Any]:
    """Load a JSON schema from disk.

    Args:
        path: Schema file to load (defaults to the manifest schema)

    Returns:
        Dictionary containing the JSON Schema.

    Raises:
        FileNotFoundError: If schema file doesn't exist
        json.JSONDecodeError: If schema is invalid JSON
    """
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    with path.open("r", encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def validate_manifest(manifest: ManifestData) -> None:
    """Validate a manifest against the JSON Schema.

    Args:
        manifest: The manifest dictionary to validate

    Raises:
        ValidationError: If the manifest doesn't conform to the schema
        FileNotFoundError: If schema file is missing
        json.JSONDecodeError: If schema is invalid
    """
    schema = load_schema(MANIFEST_SCHEMA_PATH)
    jsonschema.validate(instance=manifest, schema=schema)


def validate_config(config: dict[str, Any]) -> None:
    """Validate a build configuration file's contents.

    Args:
        config: Parsed JSON configuration

    Raises:
        ValidationError: If the configuration doesn't conform to the schema
    """
    schema = load_schema(CONFIG_SCHEMA_PATH)
    jsonschema.validate(instance=config, schema=schema)


def load_config(path: Path) -> dict[str, Any]:
    """Read and validate a JSON build configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        The parsed configuration mapping

    Raises:
        ValidationError: If the configuration is invalid
        json.JSONDecodeError: If the file is not valid JSON
    """
    with path.open("r", encoding="utf-8") as f:
        config = json.load(f)
    validate_config(config)
    return config  # type: ignore[no-any-return]


def validate_manifest_with_error_details(manifest: ManifestData) -> tuple[bool, str | None]:
    """Validate a manifest and return detailed error information.

    This is a convenience wrapper that catches validation errors and
    returns user-friendly error messages.

    Args:
        manifest: The manifest dictionary to validate

    Returns:
        Tuple of (is_valid, error_message). error_message is None if valid.
    """
    try:
        validate_manifest(manifest)
        return True, None
    except ValidationError as e:
        return False, format_validation_error(e)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        return False, f"Schema error: {e}"


def format_validation_error(error: ValidationError) -> str:
    """Build a readable message locating a validation error."""
    error_path = " -> ".join(str(p) for p in error.path) if error.path else "root"
    error_msg = f"Validation error at {error_path}: {error.message}"

    # Add context if available
    if error.instance:
        error_msg += f"\nInvalid value: {error.instance}"

    return error_msg
