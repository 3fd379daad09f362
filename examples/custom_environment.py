"""Template for plugging in a custom asset environment.

The manifest compiler only calls ``find_asset``, so any backend can be
used by wrapping it in an Environment. This example serves assets from
an in-memory mapping.
"""

import hashlib
from datetime import datetime, timezone
from pathlib import Path

from asset_mincer import AssetNotFoundError, CompileOptions, CompiledAsset, Environment, Manifest


# Step 1: Implement the Environment interface
class MemoryEnvironment(Environment):
    """Environment resolving logical paths from a dict."""

    def __init__(self, files: dict[str, str]):
        self.files = files
        self.features: set[str] = set()

    def find_asset(self, path):
        logical_path = Path(path).name
        if logical_path not in self.files:
            raise AssetNotFoundError(path)

        buffer = self.files[logical_path].encode("utf-8")
        digest = hashlib.md5(buffer).hexdigest()
        stem, ext = logical_path.rsplit(".", 1)
        return CompiledAsset(
            logical_path=logical_path,
            relative_path=logical_path,
            digest_path=f"{stem}-{digest}.{ext}",
            digest=digest,
            mtime=datetime.now(timezone.utc),
            type="bundled",
            content_type="text/javascript",
            buffer=buffer,
            source=self.files[logical_path],
        )

    def enable(self, feature):
        self.features.add(feature)

    def is_enabled(self, feature):
        return feature in self.features

    def append_path(self, path):
        pass

    def register_helper(self, name, helper):
        pass


# Step 2: Compile with the manifest compiler
if __name__ == "__main__":
    # Input files must exist on disk: the manifest records their size
    src = Path("src")
    src.mkdir(exist_ok=True)
    (src / "app.js").write_text("console.log('hello');")

    env = MemoryEnvironment({"app.js": (src / "app.js").read_text()})
    dist = Path("dist")
    manifest = Manifest(env, dist, dist / "manifest.json")
    data = manifest.compile([str(src / "app.js")], CompileOptions(compress=True))
    print(data)
