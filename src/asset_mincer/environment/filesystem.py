"""Filesystem asset environment.

This module provides the default Environment implementation. It reads
sources from a set of search paths, renders them through the registered
engines, optionally compresses JavaScript and CSS, and computes digests
and source maps.
"""

import hashlib
import json
import logging
import mimetypes
import posixpath
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import rcssmin
import rjsmin

from ..core.options import Compressor
from ..engines.base import Engine
from ..errors import AssetNotFoundError
from ..paths import complete_extname, strip_complete_extname
from ..registry import EngineRegistry
from .base import Asset, Environment

logger = logging.getLogger(__name__)

JAVASCRIPT_TYPES = {"application/javascript", "application/x-javascript", "text/javascript"}
CSS_TYPES = {"text/css"}

# Named compressors accepted by js_compressor / css_compressor
COMPRESSORS: dict[str, Callable[[str], str]] = {
    "rjsmin": rjsmin.jsmin,
    "rcssmin": rcssmin.cssmin,
}


def resolve_compressor(compressor: Compressor | None) -> Callable[[str], str] | None:
    """Turn a compressor name or callable into a callable.

    Raises:
        ValueError: If a compressor name is unknown
    """
    if compressor is None or callable(compressor):
        return compressor
    if compressor not in COMPRESSORS:
        available = ", ".join(COMPRESSORS)
        raise ValueError(f"Unknown compressor: '{compressor}'. Available compressors: {available}")
    return COMPRESSORS[compressor]


def identity_source_map(file: str, source_name: str, content: str, source_content: str) -> str:
    """Build a version 3 source map mapping each line to itself.

    Each output line starts one segment at column 0 that points to the
    same line of the single source.
    """
    line_count = content.count("\n") + 1
    mappings = ";".join(["AAAA"] + ["AACA"] * (line_count - 1))
    return json.dumps(
        {
            "version": 3,
            "file": file,
            "sources": [source_name],
            "sourcesContent": [source_content],
            "names": [],
            "mappings": mappings,
        }
    )


@dataclass(frozen=True)
class CompiledAsset:
    """Compiled asset produced by FilesystemEnvironment.

    Implements the Asset protocol.
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
    source_map: str | None = None

    def mapping_url_comment(self, url: str | None = None) -> str:
        """Return a sourceMappingURL comment in the syntax of the asset type.

        Args:
            url: Map location; defaults to the digest path basename + ".map"
        """
        url = url or posixpath.basename(self.digest_path) + ".map"
        if self.content_type in CSS_TYPES:
            return f"\n/*# sourceMappingURL={url} */"
        return f"\n//# sourceMappingURL={url}"


class FilesystemEnvironment(Environment):
    """Environment compiling assets found in local directories.

    Example:
        >>> env = FilesystemEnvironment(Path('/project/assets'))
        >>> env.enable('source_maps')
        >>> asset = env.find_asset('js/app.js')
        >>> asset.digest_path
        'js/app-5d41402abc4b2a76b9719d911017c592.js'
    """

    def __init__(self, root: str | Path, engines: dict[str, dict[str, Any]] | None = None):
        """Initialize the environment.

        Args:
            root: Base directory; used as the search path when no other
                path is appended, and to resolve relative paths
            engines: Engine name -> engine configuration

        Raises:
            InvalidEngineError: If an engine name is not registered
        """
        self.root = Path(root).resolve()
        self._paths: list[Path] = []
        self._features: set[str] = set()
        self._helpers: dict[str, Callable[..., Any]] = {}
        self._cache: dict[str, CompiledAsset] = {}
        self._engines = self._create_engines(engines or {})

    @staticmethod
    def _create_engines(configs: dict[str, dict[str, Any]]) -> dict[str, Engine]:
        configured = {EngineRegistry.get_engine(name): config for name, config in configs.items()}

        engines: dict[str, Engine] = {}
        for name in EngineRegistry.list_engines():
            engine_cls = EngineRegistry.get_engine(name)
            engine = engine_cls(configured.get(engine_cls))
            for extension in engine_cls.extensions:
                engines[extension] = engine
        return engines

    @property
    def paths(self) -> list[Path]:
        """Search paths in lookup order."""
        return list(self._paths) or [self.root]

    @property
    def helpers(self) -> dict[str, Callable[..., Any]]:
        return dict(self._helpers)

    def enable(self, feature: str) -> None:
        self._features.add(feature)

    def is_enabled(self, feature: str) -> bool:
        return feature in self._features

    def append_path(self, path: str | Path) -> None:
        resolved = (self.root / path).resolve()
        if resolved not in self._paths:
            self._paths.append(resolved)

    def register_helper(self, name: str, helper: Callable[..., Any]) -> None:
        self._helpers[name] = helper

    def find_asset(self, path: str | Path) -> Asset:
        key = str(path)
        if key not in self._cache:
            source_file, search_path = self._resolve(path)
            self._cache[key] = self._build_asset(source_file, search_path)
        return self._cache[key]

    def _resolve(self, path: str | Path) -> tuple[Path, Path]:
        """Locate the source file for a path and the search path containing it."""
        candidate = Path(path)

        if candidate.is_absolute():
            if candidate.is_file():
                resolved = candidate.resolve()
                for search_path in [*self.paths, self.root]:
                    if resolved.is_relative_to(search_path):
                        return resolved, search_path
            raise AssetNotFoundError(str(path))

        logical = candidate.as_posix()
        for search_path in self.paths:
            if (search_path / logical).is_file():
                return (search_path / logical).resolve(), search_path
            for extension in self._engines:
                engine_source = search_path / (logical + extension)
                if engine_source.is_file():
                    return engine_source.resolve(), search_path

        raise AssetNotFoundError(str(path))

    def _build_asset(self, source_file: Path, search_path: Path) -> CompiledAsset:
        relative_path = source_file.relative_to(search_path).as_posix()

        # Strip engine extensions from the end: app.js.tmpl -> app.js
        logical_path = relative_path
        engines: list[Engine] = []
        while posixpath.splitext(logical_path)[1] in self._engines:
            logical_path, extension = posixpath.splitext(logical_path)
            engines.append(self._engines[extension])

        content_type = mimetypes.guess_type(logical_path)[0] or "application/octet-stream"
        is_bundled = content_type in JAVASCRIPT_TYPES or content_type in CSS_TYPES

        raw = source_file.read_bytes()
        source_map = None
        compressor = None

        if is_bundled or engines:
            original = raw.decode("utf-8", errors="replace")
            text = original
            context = {"helpers": self.helpers, "logical_path": logical_path}
            for engine in engines:
                text = engine.render(text, context)

            if is_bundled:
                configured = self.js_compressor if content_type in JAVASCRIPT_TYPES else self.css_compressor
                compressor = resolve_compressor(configured)
            if compressor is not None:
                text = compressor(text)

            buffer = text.encode("utf-8")
        else:
            original = None
            buffer = raw
            text = raw.decode("utf-8", errors="replace")

        digest = hashlib.md5(buffer).hexdigest()
        extension = complete_extname(logical_path)
        digest_path = posixpath.join(
            posixpath.dirname(logical_path),
            f"{strip_complete_extname(logical_path)}-{digest}{extension}",
        )

        if is_bundled and self.is_enabled("source_maps"):
            if compressor is not None:
                logger.warning("Skipping source map for %s: output is compressed", logical_path)
            else:
                source_map = identity_source_map(
                    posixpath.basename(digest_path), relative_path, text, original or ""
                )

        logger.debug("Compiled %s -> %s", relative_path, digest_path)

        return CompiledAsset(
            logical_path=logical_path,
            relative_path=relative_path,
            digest_path=digest_path,
            digest=digest,
            mtime=datetime.fromtimestamp(source_file.stat().st_mtime, tz=timezone.utc),
            type="bundled" if is_bundled else "static",
            content_type=content_type,
            buffer=buffer,
            source=text,
            source_map=source_map,
        )
