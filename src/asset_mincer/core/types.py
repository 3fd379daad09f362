"""Type definitions for compiled asset manifests.

This module defines TypedDict classes that mirror the JSON schema structure
defined in schemas/manifest.schema.json.
"""

from typing import TypedDict


class ManifestFile(TypedDict):
    """Metadata recorded for one written output file."""

    logicalPath: str  # Logical path of the asset that produced the file
    size: int  # Size in bytes of the source file
    mtime: str | None  # ISO 8601 modification time of the asset
    digest: str  # Content hash of the compiled asset


class ManifestData(TypedDict):
    """Complete manifest document written next to the compiled assets."""

    assets: dict[str, str]  # logical path -> output path
    files: dict[str, ManifestFile]  # output path -> file metadata
