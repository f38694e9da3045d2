"""
Shared file helpers for Ringtone Bridge.
"""

from ringtone_bridge.tools.file_utils import cache_file_path, copy_stream_to_file, ensure_dir

__all__ = [
    "cache_file_path",
    "copy_stream_to_file",
    "ensure_dir",
]
