"""Build configuration for asset trees.

``MincerOptions`` holds everything a build can be configured with.
``CompileOptions`` is the read-only subset seen by the manifest compiler.
"""

import re
from dataclasses import dataclass, field, fields
from typing import Any, Callable

# Compressor given by name ("rjsmin", "rcssmin") or as a str -> str callable
Compressor = str | Callable[[str], str]

DEFAULT_MANIFEST = "manifest.json"


@dataclass(frozen=True)
class CompileOptions:
    """Options read by the manifest compiler and path deriver."""

    digest: bool = True
    original_paths: bool = False
    source_maps: bool = False
    embed_mapping_comments: bool = False
    compress: bool = False


@dataclass
class MincerOptions:
    """Complete configuration of a MincerTree build.

    Attributes:
        input_files: Glob patterns selecting input files, relative to the
            source directory
        digest: Write content-hashed output paths
        original_paths: Keep the source directory structure for outputs
        manifest: Manifest filename, or a falsy value to disable it
        source_maps: Generate source maps (enables the ``source_maps``
            environment feature)
        embed_mapping_comments: Append sourceMappingURL comments to assets
        compress: Write gzip siblings for bundled assets and maps
        enable: Named environment features to enable
        engines: Engine name -> engine configuration
        paths: Additional asset lookup directories
        helpers: Helper name -> callable registered into the environment
        allow_none: Tolerate globs that match no files
        js_compressor: JavaScript compressor name or callable
        css_compressor: CSS compressor name or callable
        impl: Alternative manifest compiler class
    """

    input_files: list[str] = field(default_factory=lambda: ["**/*"])
    digest: bool = True
    original_paths: bool = False
    manifest: str | None = DEFAULT_MANIFEST
    source_maps: bool = False
    embed_mapping_comments: bool = False
    compress: bool = False
    enable: list[str] = field(default_factory=list)
    engines: dict[str, dict[str, Any]] = field(default_factory=dict)
    paths: str | list[str] = field(default_factory=list)
    helpers: dict[str, Callable[..., Any]] = field(default_factory=dict)
    allow_none: bool = False
    js_compressor: Compressor | None = None
    css_compressor: Compressor | None = None
    impl: type | None = None

    def __post_init__(self) -> None:
        # manifest=True means the default filename, any falsy value disables it
        if self.manifest is True:
            self.manifest = DEFAULT_MANIFEST
        elif not self.manifest:
            self.manifest = None

    @classmethod
    def from_mapping(cls, values: dict[str, Any]) -> "MincerOptions":
        """Build options from a mapping of snake_case or camelCase keys.

        Args:
            values: Option values, e.g. parsed from a JSON config file

        Returns:
            MincerOptions with defaults for every missing key

        Raises:
            ValueError: If a key is not a known option
        """
        known = {f.name for f in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            name = _snake_case(key)
            if name not in known:
                raise ValueError(f"Unknown option: '{key}'")
            kwargs[name] = value
        return cls(**kwargs)

    @property
    def manifest_enabled(self) -> bool:
        return bool(self.manifest)

    @property
    def search_paths(self) -> list[str]:
        """Lookup paths as a list, whether configured as a string or a list."""
        if isinstance(self.paths, str):
            return [self.paths]
        return list(self.paths or [])

    def compile_options(self) -> CompileOptions:
        return CompileOptions(
            digest=self.digest,
            original_paths=self.original_paths,
            source_maps=self.source_maps,
            embed_mapping_comments=self.embed_mapping_comments,
            compress=self.compress,
        )


def _snake_case(key: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", key).lower()
