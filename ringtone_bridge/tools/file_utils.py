"""
File handling utilities.
"""

import os
import shutil
import time
from pathlib import Path
from typing import BinaryIO, Callable, Optional


def ensure_dir(path: str) -> Path:
    """
    Create a directory if it doesn't exist.

    Returns:
        Path of the created/existing directory
    """
    dir_path = Path(os.path.expanduser(path))
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def current_millis() -> int:
    """Wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def cache_file_path(
    cache_dir: Path,
    prefix: str = "bakers_ringtone_",
    suffix: str = ".dat",
    clock: Optional[Callable[[], int]] = None,
) -> Path:
    """
    Timestamped file name inside ``cache_dir``.

    Two calls within the same millisecond produce the same name.
    """
    millis = (clock or current_millis)()
    return cache_dir / f"{prefix}{millis}{suffix}"


def copy_stream_to_file(source: BinaryIO, dest: Path, chunk_size: int = 64 * 1024) -> int:
    """
    Copy ``source`` into a new file at ``dest`` and close both.

    A partially written ``dest`` is removed if the copy fails. If ``dest``
    cannot be opened, whatever already sits at that path is left alone.

    Returns:
        Number of bytes written
    """
    with source:
        out = open(dest, "wb")
        try:
            with out:
                shutil.copyfileobj(source, out, chunk_size)
                written = out.tell()
        except BaseException:
            dest.unlink(missing_ok=True)
            raise
    return written


def format_size(size_bytes: int) -> str:
    """Format a size in human-readable form."""
    for unit in ["B", "KB", "MB", "GB"]:
        if size_bytes < 1024:
            return f"{size_bytes:.1f} {unit}"
        size_bytes /= 1024
    return f"{size_bytes:.1f} TB"
