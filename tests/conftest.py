"""Shared fixtures for the test suite."""

from pathlib import Path

import pytest


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create files below ``root`` from a path -> content mapping."""
    for name, content in files.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def src_dir(tmp_path: Path) -> Path:
    """A small source tree with scripts, styles and a static file."""
    return write_tree(
        tmp_path / "src",
        {
            "js/app.js": "// entry point\nvar answer = 42;\nconsole.log(answer);\n",
            "css/site.css": "body {\n  color: red;\n}\n",
            "images/logo.png": b"\x89PNG\r\n\x1a\nfake-image-bytes",
            "LICENSE": "MIT\n",
        },
    )


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    return tmp_path / "dist"
