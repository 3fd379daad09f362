"""Manifest compiler for asset trees.

This module writes compiled assets into a destination directory and
records them in a JSON manifest. It is backend-agnostic: assets come from
any Environment implementation.
"""

import json
import logging
import os
import posixpath
from collections.abc import Iterable
from pathlib import Path

from .core.options import CompileOptions
from .core.types import ManifestData
from .core.validator import validate_manifest
from .environment.base import Environment
from .errors import OutputCollisionError
from .paths import find_asset_path
from .writer import gzip_bytes, write_file

logger = logging.getLogger(__name__)

# Prefix that stops a source map from being executed as a script when
# fetched cross-origin
XSSI_PREFIX = ")]}'\n"


class Manifest:
    """Compile assets from an environment into a destination directory.

    Example:
        >>> env = FilesystemEnvironment(Path('/project/assets'))
        >>> manifest = Manifest(env, Path('/project/dist'), Path('/project/dist/manifest.json'))
        >>> manifest.compile(['/project/assets/js/app.js'], CompileOptions(compress=True))
    """

    def __init__(
        self,
        environment: Environment,
        dest_dir: str | Path,
        manifest_path: str | Path | None = None,
    ):
        """Initialize the compiler.

        Args:
            environment: Environment used to resolve input files
            dest_dir: Directory receiving the compiled assets
            manifest_path: Where to write the manifest JSON, or None to
                skip writing it
        """
        self.environment = environment
        self.dest_dir = Path(dest_dir)
        self.path = Path(manifest_path) if manifest_path is not None else None

    def compile(self, files: Iterable[str | Path], options: CompileOptions | None = None) -> ManifestData:
        """Compile the given input files.

        Files are processed in order. Any error raised by the environment
        or the filesystem aborts the pass and leaves what was already
        written in place.

        Args:
            files: Absolute paths of the input files
            options: Compile options (defaults apply when omitted)

        Returns:
            The manifest document that was built

        Raises:
            AssetNotFoundError: If the environment cannot resolve a file
            OutputCollisionError: If two input files map to the same
                output path
            OSError: If reading or writing a file fails
        """
        options = options or CompileOptions()
        data: ManifestData = {"assets": {}, "files": {}}
        sources: dict[str, str] = {}

        for file in files:
            asset = self.environment.find_asset(str(file))
            asset_path = find_asset_path(asset, options)
            asset_file = self.dest_dir / asset_path

            source = os.path.realpath(file)
            if sources.setdefault(asset_path, source) != source:
                raise OutputCollisionError(asset_path, sources[asset_path], source)
            asset_buffer = asset.buffer

            data["assets"][asset.logical_path] = asset_path
            data["files"][asset_path] = {
                "logicalPath": asset.logical_path,
                "size": os.stat(file).st_size,
                "mtime": asset.mtime.isoformat() if asset.mtime else None,
                "digest": asset.digest,
            }

            if options.embed_mapping_comments and options.source_maps and asset.source_map:
                map_url = posixpath.basename(asset_path) + ".map"
                asset_buffer = (asset.source + asset.mapping_url_comment(map_url)).encode("utf-8")

            write_file(asset_file, asset_buffer, asset.mtime)

            if asset.type == "bundled" and options.compress:
                write_file(f"{asset_file}.gz", gzip_bytes(asset_buffer), asset.mtime)

            if asset.source_map:
                source_map = XSSI_PREFIX + asset.source_map
                write_file(f"{asset_file}.map", source_map, asset.mtime)
                if options.compress:
                    write_file(f"{asset_file}.map.gz", gzip_bytes(source_map), asset.mtime)

            logger.debug("Wrote asset %s -> %s", asset.logical_path, asset_path)

        if self.path is not None:
            validate_manifest(data)
            write_file(self.path, json.dumps(data, indent=2))
            logger.debug("Wrote manifest %s", self.path)

        logger.info("Compiled %d assets into %s", len(data["assets"]), self.dest_dir)
        return data
