"""Basic asset build example.

This example demonstrates how to:
- Compile a directory of scripts and stylesheets
- Write gzip siblings and source maps
- Read the generated manifest
"""

import json
import sys
from pathlib import Path

from asset_mincer import MincerTree


def main():
    # Source and destination (change these to your project layout)
    asset_dir = Path("assets")
    dist_dir = Path("dist")

    if not asset_dir.exists():
        print(f"Directory not found: {asset_dir}", file=sys.stderr)
        print("Please update the asset_dir variable in this script", file=sys.stderr)
        return

    tree = MincerTree(
        asset_dir,
        input_files=["**/*.js", "**/*.css"],
        source_maps=True,
        embed_mapping_comments=True,
        compress=True,
        allow_none=True,
    )
    tree.build(dist_dir)

    manifest = json.loads((dist_dir / "manifest.json").read_text())

    print(f"\n✓ Compiled {len(manifest['assets'])} assets", file=sys.stderr)
    for logical_path, output_path in manifest["assets"].items():
        print(f"  {logical_path} -> {output_path}", file=sys.stderr)


if __name__ == '__main__':
    main()
