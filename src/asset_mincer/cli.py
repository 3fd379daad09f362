"""Command-line interface for the asset compiler.

This module provides the CLI entry point for compiling a source asset
directory into a destination directory with a JSON manifest.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from jsonschema import ValidationError

from .core.options import MincerOptions
from .core.validator import format_validation_error, load_config
from .errors import MincerError
from .tree import MincerTree


def build_options(args: argparse.Namespace) -> MincerOptions:
    """Merge the config file (if any) with command-line flags.

    Flags that were given override values from the config file.

    Args:
        args: Parsed command-line arguments

    Returns:
        Complete build options
    """
    values: dict[str, Any] = {}
    if args.config:
        values.update(load_config(Path(args.config)))

    overrides = {
        "input_files": args.input,
        "digest": args.digest,
        "original_paths": args.original_paths,
        "manifest": args.manifest,
        "source_maps": args.source_maps,
        "embed_mapping_comments": args.embed_mapping_comments,
        "compress": args.compress,
        "enable": args.enable,
        "paths": args.path,
        "allow_none": args.allow_none,
        "js_compressor": args.js_compressor,
        "css_compressor": args.css_compressor,
    }
    options = MincerOptions.from_mapping(values)
    for name, value in overrides.items():
        if value is not None:
            setattr(options, name, value)

    # Re-run normalisation of the manifest setting
    return MincerOptions.from_mapping(vars(options))


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asset-mincer",
        description="Compile a directory of assets and write a JSON manifest",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Digest every file under assets/ into dist/
  asset-mincer assets dist

  # Only scripts and stylesheets, with source maps and gzip siblings
  asset-mincer assets dist --input "js/**/*.js" "css/**/*.css" \\
      --source-maps --compress

  # Keep source paths, no manifest, options from a config file
  asset-mincer assets dist --config mincer.json --no-digest --no-manifest
        """,
    )

    parser.add_argument("src", help="Source asset directory")
    parser.add_argument("dest", help="Destination directory")
    parser.add_argument("--config", help="JSON configuration file")

    parser.add_argument(
        "--input",
        nargs="+",
        default=None,
        metavar="PATTERN",
        help="Glob patterns selecting input files (default: **/*)",
    )
    parser.add_argument(
        "--no-digest",
        dest="digest",
        action="store_false",
        default=None,
        help="Write outputs without content hashes in their names",
    )
    parser.add_argument(
        "--original-paths",
        action="store_true",
        default=None,
        help="Keep the source directory structure for outputs",
    )

    manifest_group = parser.add_mutually_exclusive_group()
    manifest_group.add_argument("--manifest", metavar="NAME", help="Manifest filename")
    manifest_group.add_argument(
        "--no-manifest",
        dest="manifest",
        action="store_const",
        const="",
        help="Do not write a manifest",
    )

    parser.add_argument("--source-maps", action="store_true", default=None, help="Write source maps")
    parser.add_argument(
        "--embed-mapping-comments",
        action="store_true",
        default=None,
        help="Append sourceMappingURL comments to compiled assets",
    )
    parser.add_argument(
        "--compress", action="store_true", default=None, help="Write gzip siblings"
    )
    parser.add_argument(
        "--enable", nargs="+", default=None, metavar="FEATURE", help="Environment features to enable"
    )
    parser.add_argument(
        "--path", action="append", default=None, help="Additional asset lookup directory"
    )
    parser.add_argument(
        "--allow-none",
        action="store_true",
        default=None,
        help="Do not fail when no input files match",
    )
    parser.add_argument("--js-compressor", help="JavaScript compressor (e.g. rjsmin)")
    parser.add_argument("--css-compressor", help="CSS compressor (e.g. rcssmin)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every written file")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the asset compiler."""
    args = create_parser().parse_args(argv)

    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    # Validate source path
    src = Path(args.src)
    if not src.is_dir():
        print(f"Error: Source is not a directory: {src}", file=sys.stderr)
        sys.exit(1)

    try:
        options = build_options(args)
        tree = MincerTree(src, options)
        tree.build(args.dest)
    except ValidationError as e:
        print("Error: Validation failed:", file=sys.stderr)
        print(format_validation_error(e), file=sys.stderr)
        sys.exit(1)
    except (MincerError, ValueError, OSError) as e:
        print(f"Error: Build failed: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Compiled assets from {src} into {args.dest}", file=sys.stderr)


if __name__ == "__main__":
    main()
