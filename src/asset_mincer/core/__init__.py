"""Core utilities for asset compilation.

This package contains schema validation, type definitions and the
build configuration shared by the environment, the compiler and the CLI.
"""

from .options import CompileOptions, MincerOptions
from .types import ManifestData, ManifestFile
from .validator import load_config, validate_config, validate_manifest
from .validator import validate_manifest_with_error_details

__all__ = [
    "CompileOptions",
    "MincerOptions",
    "ManifestData",
    "ManifestFile",
    "load_config",
    "validate_config",
    "validate_manifest",
    "validate_manifest_with_error_details",
]
