"""Base abstractions for asset environments.

This module defines the interface the manifest compiler relies on. An
environment resolves input paths to compiled assets; how it compiles them
is its own business, so any backend can be plugged in through an adapter.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable, Protocol, runtime_checkable

from ..core.options import Compressor


@runtime_checkable
class Asset(Protocol):
    """Protocol for compiled assets produced by an environment.

    Assets are immutable for the duration of a compile pass.

    Attributes:
        logical_path: Stable, source-relative identifier (``css/app.css``)
        relative_path: Path of the source within its search path
        digest_path: Logical path qualified with the content digest
        digest: Content hash of the compiled bytes
        mtime: Modification time, or None if unknown
        type: ``"bundled"`` for compiled assets, ``"static"`` otherwise
        content_type: MIME type of the compiled output
        buffer: Compiled output bytes
        source: Compiled output as text
        source_map: Serialized source map, or None
    """

    logical_path: str
    relative_path: str
    digest_path: str
    digest: str
    mtime: datetime | None
    type: str
    content_type: str
    buffer: bytes
    source: str
    source_map: str | None

    def mapping_url_comment(self, url: str | None = None) -> str:
        """Return a trailing comment pointing at the asset's source map."""
        ...


class Environment(ABC):
    """Abstract base class for asset environments.

    Implementations wrap a concrete compilation backend. The manifest
    compiler only calls ``find_asset``; the remaining methods are used by
    the driver to configure the environment before a build.
    """

    js_compressor: Compressor | None = None
    css_compressor: Compressor | None = None

    @abstractmethod
    def find_asset(self, path: str) -> Asset:
        """Resolve a file path or logical path to a compiled asset.

        Args:
            path: Absolute source file path or logical path

        Returns:
            The compiled asset

        Raises:
            AssetNotFoundError: If the path cannot be resolved
        """
        pass

    @abstractmethod
    def enable(self, feature: str) -> None:
        """Enable a named environment feature (e.g. ``source_maps``)."""
        pass

    @abstractmethod
    def is_enabled(self, feature: str) -> bool:
        pass

    @abstractmethod
    def append_path(self, path: str) -> None:
        """Add a directory to the asset search paths."""
        pass

    @abstractmethod
    def register_helper(self, name: str, helper: Callable[..., Any]) -> None:
        """Make a callable available to engines under the given name."""
        pass
