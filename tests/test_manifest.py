"""Tests for the manifest compiler."""

import gzip
import json
import os
from pathlib import Path
from unittest.mock import Mock

import pytest

from asset_mincer.core.options import CompileOptions
from asset_mincer.environment import FilesystemEnvironment
from asset_mincer.errors import AssetNotFoundError, OutputCollisionError
from asset_mincer.manifest import XSSI_PREFIX, Manifest

from conftest import write_tree

INPUTS = ["js/app.js", "css/site.css", "images/logo.png"]


def compile_tree(
    src_dir: Path,
    dest_dir: Path,
    options: CompileOptions,
    files: list[str] = INPUTS,
    manifest_name: str | None = "manifest.json",
    environment: FilesystemEnvironment | None = None,
) -> dict:
    environment = environment or FilesystemEnvironment(src_dir)
    if options.source_maps:
        environment.enable("source_maps")
    manifest_path = dest_dir / manifest_name if manifest_name else None
    manifest = Manifest(environment, dest_dir, manifest_path)
    return manifest.compile([str(src_dir / f) for f in files], options)


class TestManifestDocument:
    """Test manifest bookkeeping."""

    def test_passthrough_scenario(self, tmp_path: Path, dest_dir: Path) -> None:
        """Test a plain script compiled without digest, gzip or maps."""
        src = write_tree(tmp_path / "src", {"app.js": "var a = 1;\n"})

        compile_tree(src, dest_dir, CompileOptions(digest=False), files=["app.js"])

        data = json.loads((dest_dir / "manifest.json").read_text())
        assert (dest_dir / "app.js").read_text() == "var a = 1;\n"
        assert not (dest_dir / "app.js.gz").exists()
        assert not (dest_dir / "app.js.map").exists()
        assert data["assets"] == {"app.js": "app.js"}
        assert data["files"]["app.js"]["logicalPath"] == "app.js"

    def test_one_entry_per_input(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that assets and files have one entry per input file."""
        data = compile_tree(src_dir, dest_dir, CompileOptions())

        assert set(data["assets"]) == {"js/app.js", "css/site.css", "images/logo.png"}
        assert set(data["files"]) == set(data["assets"].values())
        for output_path in data["files"]:
            assert (dest_dir / output_path).is_file()

    def test_file_entry_metadata(self, src_dir: Path, dest_dir: Path) -> None:
        """Test the metadata recorded per output file."""
        env = FilesystemEnvironment(src_dir)
        asset = env.find_asset(str(src_dir / "js" / "app.js"))

        data = compile_tree(src_dir, dest_dir, CompileOptions(), environment=env)

        entry = data["files"][asset.digest_path]
        assert entry == {
            "logicalPath": "js/app.js",
            "size": (src_dir / "js" / "app.js").stat().st_size,
            "mtime": asset.mtime.isoformat(),
            "digest": asset.digest,
        }

    def test_size_is_source_size(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that size reports the source file, even when output differs."""
        env = FilesystemEnvironment(src_dir)
        env.js_compressor = "rjsmin"

        data = compile_tree(src_dir, dest_dir, CompileOptions(), files=["js/app.js"], environment=env)

        (output_path,) = data["files"]
        assert data["files"][output_path]["size"] == (src_dir / "js" / "app.js").stat().st_size
        assert (dest_dir / output_path).stat().st_size < (src_dir / "js" / "app.js").stat().st_size

    def test_manifest_json_format(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that the manifest is written as two-space indented JSON."""
        data = compile_tree(src_dir, dest_dir, CompileOptions())

        text = (dest_dir / "manifest.json").read_text()
        assert text == json.dumps(data, indent=2)
        assert text.startswith('{\n  "assets": {')

    def test_repeated_logical_path_overwrites(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that the same input twice yields a single entry."""
        data = compile_tree(src_dir, dest_dir, CompileOptions(), files=["js/app.js", "js/app.js"])

        assert len(data["assets"]) == 1
        assert len(data["files"]) == 1

    def test_manifest_disabled(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that no manifest file is written without a manifest path."""
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False), manifest_name=None)

        assert (dest_dir / "js" / "app.js").is_file()
        assert not (dest_dir / "manifest.json").exists()

    def test_custom_manifest_name(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that the manifest can be written under another name."""
        compile_tree(src_dir, dest_dir, CompileOptions(), manifest_name="assets.json")

        assert (dest_dir / "assets.json").is_file()

    def test_empty_input_writes_empty_manifest(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that compiling nothing still writes an empty manifest."""
        compile_tree(src_dir, dest_dir, CompileOptions(), files=[])

        assert json.loads((dest_dir / "manifest.json").read_text()) == {"assets": {}, "files": {}}

    def test_idempotent(self, src_dir: Path, tmp_path: Path) -> None:
        """Test that two identical runs produce identical output."""
        options = CompileOptions(compress=True, source_maps=True)
        first = compile_tree(src_dir, tmp_path / "one", options)
        second = compile_tree(src_dir, tmp_path / "two", options)

        assert first == second
        assert (tmp_path / "one" / "manifest.json").read_text() == (
            tmp_path / "two" / "manifest.json"
        ).read_text()
        for output_path in first["files"]:
            one = tmp_path / "one" / output_path
            two = tmp_path / "two" / output_path
            assert one.read_bytes() == two.read_bytes()


class TestArtifacts:
    """Test files written next to each asset."""

    def test_written_mtime_matches_asset(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that outputs carry the asset modification time."""
        data = compile_tree(src_dir, dest_dir, CompileOptions(digest=False))

        source_mtime = (src_dir / "css" / "site.css").stat().st_mtime
        assert int(os.stat(dest_dir / data["assets"]["css/site.css"]).st_mtime) == int(source_mtime)

    def test_gzip_sibling_for_bundled_assets(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that bundled assets get a .gz sibling with identical content."""
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False, compress=True))

        for name in ["js/app.js", "css/site.css"]:
            written = (dest_dir / name).read_bytes()
            assert gzip.decompress((dest_dir / f"{name}.gz").read_bytes()) == written

    def test_no_gzip_for_static_assets(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that static assets are not compressed."""
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False, compress=True))

        assert (dest_dir / "images" / "logo.png").is_file()
        assert not (dest_dir / "images" / "logo.png.gz").exists()

    def test_no_gzip_without_compress(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that compress=False writes no gzip files."""
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False))

        assert not list(dest_dir.rglob("*.gz"))

    def test_source_map_has_xssi_prefix(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that maps start with the XSSI prefix followed by the map."""
        env = FilesystemEnvironment(src_dir)
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False, source_maps=True), environment=env)

        raw = (dest_dir / "js" / "app.js.map").read_bytes()
        assert raw[:5] == b")]}'\n"
        assert json.loads(raw[5:]) == json.loads(env.find_asset("js/app.js").source_map)

    def test_compressed_source_map(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that maps get a .map.gz sibling when compressing."""
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False, source_maps=True, compress=True))

        map_bytes = (dest_dir / "css" / "site.css.map").read_bytes()
        assert gzip.decompress((dest_dir / "css" / "site.css.map.gz").read_bytes()) == map_bytes
        assert map_bytes.decode("utf-8").startswith(XSSI_PREFIX)

    def test_no_map_for_static_assets(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that only assets with a map get a .map file."""
        compile_tree(src_dir, dest_dir, CompileOptions(digest=False, source_maps=True))

        assert not (dest_dir / "images" / "logo.png.map").exists()

    def test_embedded_mapping_comment(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that the comment references the written map file."""
        data = compile_tree(
            src_dir, dest_dir, CompileOptions(source_maps=True, embed_mapping_comments=True)
        )

        script_path = data["assets"]["js/app.js"]
        style_path = data["assets"]["css/site.css"]
        script_name = script_path.rsplit("/", 1)[-1]
        style_name = style_path.rsplit("/", 1)[-1]

        script = (dest_dir / script_path).read_text()
        assert script.endswith(f"\n//# sourceMappingURL={script_name}.map")
        assert (dest_dir / f"{script_path}.map").is_file()
        style = (dest_dir / style_path).read_text()
        assert style.endswith(f"\n/*# sourceMappingURL={style_name}.map */")

    def test_embedding_requires_source_maps(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that embed_mapping_comments alone leaves the asset untouched."""
        env = FilesystemEnvironment(src_dir)
        env.enable("source_maps")
        compile_tree(
            src_dir,
            dest_dir,
            CompileOptions(digest=False, embed_mapping_comments=True),
            environment=env,
        )

        assert (dest_dir / "js" / "app.js").read_bytes() == (src_dir / "js" / "app.js").read_bytes()

    def test_gzip_contains_embedded_comment(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that the gzip sibling matches the written bytes, comment included."""
        compile_tree(
            src_dir,
            dest_dir,
            CompileOptions(digest=False, source_maps=True, embed_mapping_comments=True, compress=True),
        )

        written = (dest_dir / "js" / "app.js").read_bytes()
        assert b"sourceMappingURL" in written
        assert gzip.decompress((dest_dir / "js" / "app.js.gz").read_bytes()) == written


class TestFailures:
    """Test error propagation."""

    def test_unresolvable_asset_propagates(self, src_dir: Path, dest_dir: Path) -> None:
        """Test that resolution errors abort the pass and leave earlier output."""
        env = FilesystemEnvironment(src_dir)
        files = [str(src_dir / "js" / "app.js"), str(src_dir / "missing.js")]

        with pytest.raises(AssetNotFoundError):
            Manifest(env, dest_dir, dest_dir / "manifest.json").compile(files, CompileOptions(digest=False))

        assert (dest_dir / "js" / "app.js").is_file()
        assert not (dest_dir / "manifest.json").exists()

    def test_colliding_output_paths_raise(self, tmp_path: Path, dest_dir: Path) -> None:
        """Test that two inputs compiling to the same output path are rejected."""
        src = write_tree(tmp_path / "src", {"app.js": "var a = 1;\n", "app.js.tmpl": "var b = 2;\n"})
        env = FilesystemEnvironment(src)
        files = [str(src / "app.js"), str(src / "app.js.tmpl")]

        with pytest.raises(OutputCollisionError, match="Output path 'app.js'"):
            Manifest(env, dest_dir, dest_dir / "manifest.json").compile(files, CompileOptions(digest=False))

        assert (dest_dir / "app.js").read_text() == "var a = 1;\n"
        assert not (dest_dir / "manifest.json").exists()

    def test_environment_is_only_collaborator(self, tmp_path: Path, dest_dir: Path) -> None:
        """Test that any object with find_asset can serve as environment."""
        src = write_tree(tmp_path / "src", {"a.txt": "hello"})
        asset = Mock(
            logical_path="a.txt",
            relative_path="/a.txt",
            digest_path="a-0f.txt",
            digest="0f",
            mtime=None,
            type="static",
            buffer=b"hello",
            source_map=None,
        )
        env = Mock()
        env.find_asset.return_value = asset

        data = Manifest(env, dest_dir, dest_dir / "manifest.json").compile(
            [str(src / "a.txt")], CompileOptions()
        )

        env.find_asset.assert_called_once_with(str(src / "a.txt"))
        assert data["assets"] == {"a.txt": "a-0f.txt"}
        assert data["files"]["a-0f.txt"]["mtime"] is None
        assert (dest_dir / "a-0f.txt").read_bytes() == b"hello"
