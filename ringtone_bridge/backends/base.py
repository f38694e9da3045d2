"""
Abstract base class for platform backends.

A backend is the OS collaborator of the bridge: it launches the system
ringtone picker, resolves resource identifiers to readable byte streams and
knows where the application's cache directory lives.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Callable, Optional

# android.media.RingtoneManager
ACTION_RINGTONE_PICKER = "android.intent.action.RINGTONE_PICKER"
TYPE_RINGTONE = 1
TYPE_NOTIFICATION = 2
TYPE_ALARM = 4

# android.app.Activity
RESULT_OK = -1
RESULT_CANCELED = 0


@dataclass
class PickerIntent:
    """Picker configuration handed to the OS."""

    ringtone_type: int = TYPE_ALARM | TYPE_RINGTONE | TYPE_NOTIFICATION
    show_silent: bool = False
    show_default: bool = True
    existing_uri: Optional[str] = None
    action: str = ACTION_RINGTONE_PICKER


@dataclass
class ActivityResult:
    """Result delivered by the OS for an activity launched for result."""

    request_code: int
    result_code: int
    picked_uri: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.result_code == RESULT_OK


ActivityResultListener = Callable[[ActivityResult], None]


class PlatformBackend(ABC):
    """
    Abstract base class for platform backends.

    All backends must implement these methods.
    """

    name: str = "base"

    def __init__(self):
        self._listener: Optional[ActivityResultListener] = None

    @abstractmethod
    def is_available(self) -> bool:
        """Check whether the backend can run in this environment."""

    @abstractmethod
    def start_activity_for_result(self, intent: PickerIntent, request_code: int) -> None:
        """Launch the picker; the result arrives later via the listener."""

    @abstractmethod
    def open_input_stream(self, uri: str) -> Optional[BinaryIO]:
        """
        Open a readable byte stream for a resource.

        Returns None when the resource is missing or unreadable. Other I/O
        failures raise OSError.
        """

    @abstractmethod
    def cache_dir(self) -> Path:
        """Application-private cache directory."""

    def set_activity_result_listener(self, listener: Optional[ActivityResultListener]) -> None:
        self._listener = listener

    def deliver_activity_result(self, result: ActivityResult) -> None:
        """Forward an OS result to the registered listener."""
        if self._listener is not None:
            self._listener(result)
