"""Output path derivation for compiled assets.

Output paths are always relative to the destination directory and use
``/`` separators, whatever the platform.
"""

import posixpath
import re
from typing import TYPE_CHECKING

from .core.options import CompileOptions

if TYPE_CHECKING:
    from .environment.base import Asset

# Trailing run of dotted segments that each start with a letter.
# Numeric segments (version numbers) and digest suffixes end the run.
_COMPLETE_EXTNAME = re.compile(r"(?:\.[A-Za-z][A-Za-z0-9_]*)+$")

_LEADING_SEPARATOR = re.compile(r"^[/\\]")


def complete_extname(path: str) -> str:
    """Return the complete extension of a path's basename.

    Examples:
        "js/app.min.js" -> ".min.js"
        "archive.tar.gz" -> ".tar.gz"
        "jquery-1.11.0.min.js" -> ".min.js"
        "app-3f2a9c.min.js" -> ".min.js"
        ".babelrc" -> ""

    Args:
        path: File path (only the basename is inspected)

    Returns:
        The extension including its leading dot, or "" if there is none
    """
    name = posixpath.basename(path.replace("\\", "/")).lstrip(".")
    match = _COMPLETE_EXTNAME.search(name)
    if match:
        return match.group(0)
    # Digit-initial extensions (.3gp, .7z) count as a single extension
    return posixpath.splitext(name)[1]


def strip_complete_extname(path: str) -> str:
    """Return the basename of ``path`` without its complete extension."""
    name = posixpath.basename(path.replace("\\", "/"))
    ext = complete_extname(name)
    return name[: len(name) - len(ext)] if ext else name


def strip_leading_separator(path: str) -> str:
    return _LEADING_SEPARATOR.sub("", path)


def find_asset_path(asset: "Asset | None", options: CompileOptions | None = None) -> str:
    """Derive the destination-relative output path of a compiled asset.

    The stem comes from the digest path when ``digest`` is on, from the
    relative path otherwise. The extension always comes from the digest
    path so it matches the compiled artifact (``app.scss`` -> ``app.css``).
    With ``original_paths`` the directory is taken from the relative path.

    Args:
        asset: Compiled asset, or None
        options: Compile options (defaults apply when omitted)

    Returns:
        The output path, or "" when no asset is given
    """
    if asset is None:
        return ""

    options = options or CompileOptions()
    relative_path = strip_leading_separator(asset.relative_path.replace("\\", "/"))

    if options.digest:
        base_path = asset.digest_path
    else:
        base_path = relative_path

    asset_dir = posixpath.dirname(base_path)
    asset_base = strip_complete_extname(base_path)
    asset_ext = complete_extname(asset.digest_path)

    if options.original_paths:
        asset_dir = posixpath.dirname(relative_path)

    return posixpath.join(asset_dir, asset_base) + asset_ext
