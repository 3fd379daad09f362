"""asset-mincer - compile asset trees with a JSON manifest.

This package runs a directory of source assets through an asset
environment (engines, compressors, digests, source maps) and writes the
compiled output, gzip siblings, source maps and a manifest into a
destination directory.
"""

# Core library interface
from .tree import MincerTree, multi_glob
from .manifest import Manifest
from .registry import EngineRegistry
from .environment import Asset, CompiledAsset, Environment, FilesystemEnvironment
from .engines import Engine

# Core utilities
from .core import CompileOptions, MincerOptions, ManifestData
from .core import validate_manifest, validate_manifest_with_error_details
from .paths import complete_extname, find_asset_path
from .writer import gzip_bytes, write_file
from .errors import (
    AssetNotFoundError,
    InvalidEngineError,
    MincerError,
    NoInputFilesError,
    OutputCollisionError,
)

# CLI interface
from .cli import main

__version__ = "0.1.0"

# Auto-discover and register all engines
EngineRegistry.discover_engines()

__all__ = [
    # Primary library interface
    "MincerTree",
    "Manifest",
    "EngineRegistry",
    "Environment",
    "FilesystemEnvironment",
    "Asset",
    "CompiledAsset",
    "Engine",
    # Core utilities
    "CompileOptions",
    "MincerOptions",
    "ManifestData",
    "validate_manifest",
    "validate_manifest_with_error_details",
    "complete_extname",
    "find_asset_path",
    "multi_glob",
    "gzip_bytes",
    "write_file",
    # Errors
    "MincerError",
    "NoInputFilesError",
    "InvalidEngineError",
    "AssetNotFoundError",
    "OutputCollisionError",
    "main",
]
