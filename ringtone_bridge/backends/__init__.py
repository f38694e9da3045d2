"""
Platform backends for Ringtone Bridge.

- android: the real OS via pyjnius (python-for-android)
- local: desktop simulator backed by a media directory
"""

from ringtone_bridge.backends.auto import auto_detect_backend, get_backend
from ringtone_bridge.backends.base import (
    RESULT_CANCELED,
    RESULT_OK,
    ActivityResult,
    PickerIntent,
    PlatformBackend,
)
from ringtone_bridge.backends.local import LocalBackend

__all__ = [
    "RESULT_CANCELED",
    "RESULT_OK",
    "ActivityResult",
    "LocalBackend",
    "PickerIntent",
    "PlatformBackend",
    "auto_detect_backend",
    "get_backend",
]
