"""
Exceptions for Ringtone Bridge.
"""

from typing import Any, Optional


class BridgeError(Exception):
    """Base exception for bridge operations that end in an error reply."""

    code: str = "error"

    def __init__(self, message: Optional[str] = None, details: Any = None):
        super().__init__(message or self.code)
        self.message = message
        self.details = details


class AlreadyActiveError(BridgeError):
    """A ringtone picker is already waiting for its result."""

    code = "ALREADY_ACTIVE"

    def __init__(self):
        super().__init__("Ringtone picker already active")


class CopyFailedError(BridgeError):
    """Copying a ringtone into the cache failed."""

    code = "COPY_FAILED"


class PickerUnavailableError(BridgeError):
    """The backend could not launch the ringtone picker."""

    code = "PICKER_UNAVAILABLE"


class PlatformError(Exception):
    """Error reply received from the other side of a method channel."""

    def __init__(self, code: str, message: Optional[str] = None, details: Any = None):
        self.code = code
        self.message = message
        self.details = details
        msg = f"PlatformError({code}"
        if message:
            msg += f", {message}"
        super().__init__(msg + ")")


class MissingPluginError(Exception):
    """No handler implements the requested method."""

    def __init__(self, method: str, channel: str):
        self.method = method
        self.channel = channel
        super().__init__(f"No implementation found for method {method} on channel {channel}")


class ReplyAlreadySubmittedError(Exception):
    """A reply handle received a second outcome."""


class CodecError(ValueError):
    """Message could not be encoded or decoded."""


class BackendUnavailableError(Exception):
    """Requested platform backend cannot run in this environment."""

    def __init__(self, backend: str, reason: str = ""):
        self.backend = backend
        self.reason = reason
        msg = f"Backend not available: {backend}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)
