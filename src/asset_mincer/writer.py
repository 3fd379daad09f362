"""File writing and gzip helpers used by the manifest compiler."""

import gzip
import logging
import os
import time
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def write_file(path: str | Path, data: str | bytes, mtime: datetime | float | None = None) -> None:
    """Write data to a file, creating parent directories as needed.

    Existing files are overwritten. Both the access and modification
    times are set to ``mtime``.

    Args:
        path: Destination file path
        data: Content to write; text is encoded as UTF-8
        mtime: Timestamp as a datetime or epoch seconds (defaults to now)
    """
    path = Path(path)
    if isinstance(data, str):
        data = data.encode("utf-8")

    if isinstance(mtime, datetime):
        timestamp = mtime.timestamp()
    elif mtime is None:
        timestamp = time.time()
    else:
        timestamp = float(mtime)

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    os.utime(path, (timestamp, timestamp))
    logger.debug("Wrote %s (%d bytes)", path, len(data))


def gzip_bytes(data: str | bytes) -> bytes:
    """Compress text or bytes with gzip framing."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return gzip.compress(data)
