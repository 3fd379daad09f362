"""Asset environments for the manifest compiler.

This package contains the environment interface and the default
filesystem-backed implementation.
"""

from .base import Asset, Environment
from .filesystem import CompiledAsset, FilesystemEnvironment

__all__ = ["Asset", "Environment", "CompiledAsset", "FilesystemEnvironment"]
