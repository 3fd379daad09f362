"""Build-tree plugin compiling a source tree into an asset tree.

MincerTree selects input files with glob patterns, configures an asset
environment from its options and runs the manifest compiler once per
build.
"""

import glob
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Callable

from .core.options import MincerOptions
from .environment.base import Environment
from .environment.filesystem import FilesystemEnvironment
from .errors import NoInputFilesError
from .manifest import Manifest

logger = logging.getLogger(__name__)

# Resolves an input tree to the directory holding its files
TreeReader = Callable[[Any], str | Path]


def read_directory(tree: Any) -> Path:
    """Default tree reader: the tree is a directory path."""
    return Path(tree)


def multi_glob(patterns: Iterable[str], cwd: str | Path, allow_none: bool = False) -> list[str]:
    """Expand glob patterns relative to a directory.

    Each pattern's matches are sorted; a file matched by several patterns
    is listed once, at its first position. Directories and hidden files
    are never matched.

    Args:
        patterns: Glob patterns, ``**`` matching any number of directories
        cwd: Directory the patterns are relative to
        allow_none: Accept patterns that match nothing

    Returns:
        Matching file paths relative to ``cwd``, with ``/`` separators

    Raises:
        NoInputFilesError: If a pattern matches nothing and not allow_none
    """
    cwd = Path(cwd)
    files: list[str] = []
    seen: set[str] = set()

    for pattern in patterns:
        matches = sorted(
            Path(match).as_posix()
            for match in glob.glob(pattern, root_dir=cwd, recursive=True)
            if (cwd / match).is_file()
        )
        if not matches and not allow_none:
            raise NoInputFilesError(f"Path or pattern '{pattern}' did not match any files")
        for match in matches:
            if match not in seen:
                seen.add(match)
                files.append(match)

    return files


def has_extension(file: str) -> bool:
    """Whether a file's basename has an extension (``LICENSE`` has none)."""
    name = Path(file).name
    return "." in name.lstrip(".")


class MincerTree:
    """Plugin compiling assets from an input tree.

    Example:
        >>> tree = MincerTree('assets', input_files=['**/*.js', '**/*.css'], compress=True)
        >>> tree.build('dist')
    """

    description = "asset-mincer"

    def __init__(self, input_tree: Any, options: MincerOptions | None = None, **kwargs: Any):
        """Initialize the plugin.

        Args:
            input_tree: Tree handed to the reader, a directory path by default
            options: Complete options object
            **kwargs: Individual options, applied over ``options``

        Raises:
            ValueError: If an option name is unknown
        """
        self.input_tree = input_tree
        if options is None:
            options = MincerOptions.from_mapping(kwargs)
        elif kwargs:
            options = MincerOptions.from_mapping({**vars(options), **kwargs})
        self.options = options

        # Setup during build
        self._environment: Environment | None = None

    def environment(self) -> Environment | None:
        """Environment of the most recent build, or None before the first."""
        return self._environment

    def build(self, dest_dir: str | Path) -> None:
        """Build into ``dest_dir``, reading the input tree as a directory."""
        self.write(read_directory, dest_dir)

    def write(self, read_path: TreeReader, dest_dir: str | Path) -> None:
        """Compile the input tree into ``dest_dir``.

        Args:
            read_path: Resolves the input tree to its source directory
            dest_dir: Destination directory

        Raises:
            NoInputFilesError: If no valid input file is found and
                allow_none is off
            InvalidEngineError: If an unknown engine is configured
            AssetNotFoundError: If an input file cannot be compiled
            OSError: If reading or writing a file fails
        """
        options = self.options
        src_dir = Path(read_path(self.input_tree)).resolve()
        dest_dir = Path(dest_dir)

        input_files = self.find_input_files(src_dir)
        resolved_assets = [str(src_dir / file) for file in input_files]

        environment = self._environment = self.create_environment(src_dir)

        impl = options.impl or Manifest
        manifest_path = dest_dir / options.manifest if options.manifest_enabled else None
        impl(environment, dest_dir, manifest_path).compile(resolved_assets, options.compile_options())

    def find_input_files(self, src_dir: Path) -> list[str]:
        """Resolve the configured glob patterns to input files.

        Raises:
            NoInputFilesError: If nothing valid matches and allow_none is off
        """
        options = self.options
        input_files = multi_glob(options.input_files, src_dir, allow_none=options.allow_none)

        valid_files = []
        for file in input_files:
            if has_extension(file):
                valid_files.append(file)
            else:
                logger.warning("Skipping %s: file has no extension", file)

        if not valid_files and not options.allow_none:
            raise NoInputFilesError("No valid input files found")

        logger.info("Found %d input files in %s", len(valid_files), src_dir)
        return valid_files

    def create_environment(self, src_dir: Path) -> Environment:
        """Create and configure the environment for one build.

        Raises:
            InvalidEngineError: If an unknown engine is configured
        """
        options = self.options
        environment = FilesystemEnvironment(src_dir, engines=options.engines)

        for feature in options.enable:
            environment.enable(feature)

        if options.source_maps:
            environment.enable("source_maps")

        if options.js_compressor:
            environment.js_compressor = options.js_compressor
        if options.css_compressor:
            environment.css_compressor = options.css_compressor

        for name, helper in options.helpers.items():
            environment.register_helper(name, helper)

        for path in options.search_paths:
            environment.append_path(src_dir / path)

        return environment
