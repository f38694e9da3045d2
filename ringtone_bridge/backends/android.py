"""
Android backend.

Talks to the real OS through pyjnius when running under python-for-android:
- RingtoneManager.ACTION_RINGTONE_PICKER launched with startActivityForResult
- results received through android.activity.bind(on_activity_result=...)
- content read with ContentResolver.openInputStream

Android classes are loaded lazily so the module can be imported (and tested)
anywhere; instantiating the backend off-device raises BackendUnavailableError.
"""

import io
import logging
import os
import sys
from pathlib import Path
from typing import Any, BinaryIO, Optional

from ringtone_bridge.backends.base import ActivityResult, PickerIntent, PlatformBackend
from ringtone_bridge.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)

# Java exceptions meaning "this resource cannot be read", not an I/O failure
UNREADABLE_EXCEPTIONS = (
    "java.io.FileNotFoundException",
    "java.lang.SecurityException",
    "java.lang.IllegalArgumentException",
)


def running_on_android() -> bool:
    """True inside a python-for-android process."""
    return "ANDROID_ARGUMENT" in os.environ or hasattr(sys, "getandroidapilevel")


class AndroidAPI:
    """Java classes used by the backend, loaded on first use."""

    def __init__(self):
        try:
            from android import activity as p4a_activity
            from jnius import JavaException, autoclass, cast
        except ImportError as e:
            raise BackendUnavailableError("android", f"pyjnius/python-for-android missing: {e}") from e

        self.activity_events = p4a_activity
        self.cast = cast
        self.JavaException = JavaException
        self.Intent = autoclass("android.content.Intent")
        self.Uri = autoclass("android.net.Uri")
        self.RingtoneManager = autoclass("android.media.RingtoneManager")
        self.PythonActivity = autoclass("org.kivy.android.PythonActivity")

    @property
    def activity(self) -> Any:
        return self.PythonActivity.mActivity


def _java_exception_name(error: Exception) -> str:
    return getattr(error, "classname", "") or ""


class JavaInputStream(io.RawIOBase):
    """
    Read-only Python file over a java.io.InputStream.

    pyjnius copies a Java byte[] argument back into the bytearray passed for
    it, so read(byte[], int, int) fills ``buffer`` in place.
    """

    def __init__(self, stream: Any, java_exception: type = Exception):
        super().__init__()
        self._stream = stream
        self._java_exception = java_exception

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        size = len(b)
        if size == 0:
            return 0
        buffer = bytearray(size)
        try:
            count = self._stream.read(buffer, 0, size)
        except self._java_exception as e:
            raise OSError(str(e)) from e
        if count < 0:
            return 0
        b[:count] = buffer[:count]
        return count

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._stream.close()
        except self._java_exception as e:
            raise OSError(str(e)) from e
        finally:
            super().close()


class AndroidBackend(PlatformBackend):
    """Backend using the device's RingtoneManager and ContentResolver."""

    name = "android"

    def __init__(self, api: Optional[AndroidAPI] = None):
        super().__init__()
        self.api = api or AndroidAPI()
        self.api.activity_events.bind(on_activity_result=self._on_activity_result)

    def is_available(self) -> bool:
        return running_on_android()

    def close(self) -> None:
        """Stop receiving activity results."""
        self.api.activity_events.unbind(on_activity_result=self._on_activity_result)

    def start_activity_for_result(self, intent: PickerIntent, request_code: int) -> None:
        rm = self.api.RingtoneManager
        java_intent = self.api.Intent(intent.action)
        java_intent.putExtra(rm.EXTRA_RINGTONE_TYPE, intent.ringtone_type)
        java_intent.putExtra(rm.EXTRA_RINGTONE_SHOW_SILENT, intent.show_silent)
        java_intent.putExtra(rm.EXTRA_RINGTONE_SHOW_DEFAULT, intent.show_default)
        if intent.existing_uri is not None:
            existing = self.api.Uri.parse(intent.existing_uri)
            java_intent.putExtra(rm.EXTRA_RINGTONE_EXISTING_URI, self.api.cast("android.os.Parcelable", existing))

        logger.info(f"Starting ringtone picker (request {request_code})")
        self.api.activity.startActivityForResult(java_intent, request_code)

    def _on_activity_result(self, request_code: int, result_code: int, data: Any) -> None:
        picked = None
        if data is not None:
            extra = data.getParcelableExtra(self.api.RingtoneManager.EXTRA_RINGTONE_PICKED_URI)
            if extra is not None:
                picked = self.api.cast("android.net.Uri", extra).toString()

        self.deliver_activity_result(
            ActivityResult(request_code=request_code, result_code=result_code, picked_uri=picked)
        )

    def open_input_stream(self, uri: str) -> Optional[BinaryIO]:
        resolver = self.api.activity.getContentResolver()
        try:
            stream = resolver.openInputStream(self.api.Uri.parse(uri))
        except self.api.JavaException as e:
            if _java_exception_name(e) in UNREADABLE_EXCEPTIONS:
                logger.debug(f"Cannot open {uri}: {e}")
                return None
            raise OSError(str(e)) from e

        if stream is None:
            return None

        return io.BufferedReader(JavaInputStream(stream, self.api.JavaException))

    def cache_dir(self) -> Path:
        return Path(self.api.activity.getCacheDir().getAbsolutePath())
