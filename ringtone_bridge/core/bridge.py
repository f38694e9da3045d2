"""
Ringtone Bridge.

Serves the ringtone method channel:
- pickRingtone: show the OS ringtone picker, reply with the chosen identifier
- copyRingtoneToCache: copy a ringtone into the app cache, reply with its path

At most one picker can be outstanding. Its reply handle is kept until the
backend delivers the activity result for the configured request code.
"""

import logging
import threading
from pathlib import Path
from typing import Callable, Optional

from ringtone_bridge.backends.base import ActivityResult, PickerIntent, PlatformBackend
from ringtone_bridge.core.channel import MethodChannel, Reply
from ringtone_bridge.core.config import Config
from ringtone_bridge.core.types import MethodCall
from ringtone_bridge.core.uri import parse_uri
from ringtone_bridge.exceptions import (
    AlreadyActiveError,
    BridgeError,
    CopyFailedError,
    PickerUnavailableError,
)
from ringtone_bridge.tools.file_utils import cache_file_path, copy_stream_to_file, ensure_dir

logger = logging.getLogger(__name__)

PICK_RINGTONE = "pickRingtone"
COPY_RINGTONE_TO_CACHE = "copyRingtoneToCache"


class RingtoneBridge:
    """
    Adapter between the ringtone method channel and a platform backend.

    Usage:
    ```python
    bridge = RingtoneBridge(backend, config)
    channel = bridge.attach(MethodChannel(config.channel.name))

    reply = channel.invoke_method("pickRingtone", {"existingUri": None})
    # ... later the backend delivers the picker result ...
    print(reply.result())
    ```

    Commands and activity results are expected on one thread; the pending
    slot is still locked because Android delivers results on its UI thread.
    """

    def __init__(
        self,
        backend: PlatformBackend,
        config: Optional[Config] = None,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.backend = backend
        self.config = config or Config()
        self.request_code = self.config.channel.request_code
        self._clock = clock
        self._pending: Optional[Reply] = None
        self._lock = threading.Lock()

        self.backend.set_activity_result_listener(self.on_activity_result)

    @property
    def picker_active(self) -> bool:
        return self._pending is not None

    def attach(self, channel: MethodChannel) -> MethodChannel:
        """Install this bridge as the channel's method call handler."""
        channel.set_method_call_handler(self.handle_method_call)
        return channel

    def handle_method_call(self, call: MethodCall, reply: Reply) -> None:
        logger.debug(f"Method call: {call.method}")

        if call.method == PICK_RINGTONE:
            self.pick_ringtone(reply, call.argument("existingUri"))
        elif call.method == COPY_RINGTONE_TO_CACHE:
            self.copy_ringtone_to_cache(reply, call.argument("uri"))
        else:
            reply.not_implemented()

    # pickRingtone

    def pick_ringtone(self, reply: Reply, existing_uri: Optional[str] = None) -> None:
        """Launch the picker; ``reply`` is resolved by on_activity_result()."""
        with self._lock:
            already_active = self._pending is not None
            if not already_active:
                self._pending = reply

        if already_active:
            logger.warning("Ringtone picker already active, rejecting request")
            self._reply_error(reply, AlreadyActiveError())
            return

        intent = self.build_picker_intent(existing_uri)
        try:
            self.backend.start_activity_for_result(intent, self.request_code)
        except Exception as e:
            logger.error(f"Could not launch ringtone picker: {e}")
            with self._lock:
                if self._pending is reply:
                    self._pending = None
            if not reply.done:
                self._reply_error(reply, PickerUnavailableError(str(e)))

    def build_picker_intent(self, existing_uri: Optional[str] = None) -> PickerIntent:
        """Picker for alarm, ringtone and notification sounds, with no silent entry."""
        intent = PickerIntent()
        existing = parse_uri(existing_uri)
        if existing is not None:
            intent.existing_uri = str(existing)
        elif existing_uri is not None:
            logger.debug(f"Ignoring malformed existingUri: {existing_uri!r}")
        return intent

    def on_activity_result(self, result: ActivityResult) -> bool:
        """
        Completion entry point for the picker.

        Returns False if the result belongs to another request code.
        """
        if result.request_code != self.request_code:
            return False

        with self._lock:
            reply = self._pending
            self._pending = None

        if reply is None:
            logger.warning(f"Stray picker result for request {result.request_code}")
            return True

        if result.ok and result.picked_uri is not None:
            logger.info(f"Ringtone picked: {result.picked_uri}")
            reply.success(str(result.picked_uri))
        else:
            logger.info("Ringtone picker closed without a selection")
            reply.success(None)
        return True

    # copyRingtoneToCache

    def copy_ringtone_to_cache(self, reply: Reply, uri: Optional[str]) -> None:
        try:
            path = self.copy_to_cache(uri)
        except CopyFailedError as e:
            self._reply_error(reply, e)
            return
        reply.success(str(path) if path is not None else None)

    def copy_to_cache(self, uri: Optional[str]) -> Optional[Path]:
        """
        Copy the resource behind ``uri`` into the cache directory.

        Returns:
            Absolute path of the new file, or None if ``uri`` is absent,
            malformed or cannot be opened

        Raises:
            CopyFailedError: if opening, creating or copying fails
        """
        if uri is None:
            return None

        parsed = parse_uri(uri)
        if parsed is None:
            logger.debug(f"Ignoring malformed uri: {uri!r}")
            return None

        try:
            source = self.backend.open_input_stream(str(parsed))
            if source is None:
                logger.debug(f"Resource not readable: {uri}")
                return None

            try:
                dest = cache_file_path(
                    self._cache_dir(),
                    prefix=self.config.cache.prefix,
                    suffix=self.config.cache.suffix,
                    clock=self._clock,
                )
            except BaseException:
                source.close()
                raise

            size = copy_stream_to_file(source, dest, self.config.cache.chunk_size)
        except Exception as e:
            logger.error(f"Copy of {uri} failed: {e}")
            raise CopyFailedError(str(e)) from e

        dest = dest.resolve()
        logger.info(f"Copied {uri} to {dest} ({size} bytes)")
        return dest

    def _cache_dir(self) -> Path:
        if self.config.cache.directory:
            return ensure_dir(self.config.cache.directory)
        return self.backend.cache_dir()

    @staticmethod
    def _reply_error(reply: Reply, error: BridgeError) -> None:
        reply.error(error.code, error.message, error.details)
