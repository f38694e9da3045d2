"""
Method channel between the UI layer and the platform side.

A channel carries named commands (MethodCall) to a single handler. Each call
gets a Reply handle which the handler resolves exactly once, possibly long
after the handler returned (e.g. when an OS activity delivers its result).

Usage:
```python
channel = MethodChannel("bakers_timers/ringtone")
channel.set_method_call_handler(bridge.handle_method_call)

reply = channel.invoke_method("copyRingtoneToCache", {"uri": "content://media/1"})
if reply.done:
    print(reply.result())
```
"""

import logging
import threading
from typing import Any, Callable, Optional

from ringtone_bridge.core.codec import JSONMethodCodec
from ringtone_bridge.core.types import MethodCall, Outcome, ReplyKind
from ringtone_bridge.exceptions import (
    MissingPluginError,
    PlatformError,
    ReplyAlreadySubmittedError,
)

logger = logging.getLogger(__name__)

MethodCallHandler = Callable[[MethodCall, "Reply"], None]


class Reply:
    """
    Promise-like handle for the outcome of one method call.

    Exactly one of success(), error() or not_implemented() may be called.
    """

    def __init__(self, method: str = "", channel: str = ""):
        self.method = method
        self.channel = channel
        self._outcome: Optional[Outcome] = None
        self._callbacks: list[Callable[["Reply"], None]] = []
        self._lock = threading.Lock()
        self._event = threading.Event()

    def __repr__(self) -> str:
        state = self._outcome.kind.value if self._outcome else "pending"
        return f"<Reply {self.channel}#{self.method} {state}>"

    # Resolution (handler side)

    def success(self, value: Any = None) -> None:
        self._submit(Outcome.success(value))

    def error(self, code: str, message: Optional[str] = None, details: Any = None) -> None:
        self._submit(Outcome.error(code, message, details))

    def not_implemented(self) -> None:
        self._submit(Outcome.not_implemented())

    def _submit(self, outcome: Outcome) -> None:
        with self._lock:
            if self._outcome is not None:
                raise ReplyAlreadySubmittedError(f"Reply already submitted for {self.method}")
            self._outcome = outcome
            callbacks = list(self._callbacks)
            self._callbacks.clear()
            self._event.set()

        logger.debug(f"{self.channel}#{self.method} -> {outcome.kind.value}")
        for callback in callbacks:
            callback(self)

    # Observation (caller side)

    @property
    def done(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[Outcome]:
        return self._outcome

    def add_done_callback(self, callback: Callable[["Reply"], None]) -> None:
        """Call ``callback(reply)`` once resolved (immediately if already done)."""
        with self._lock:
            if self._outcome is None:
                self._callbacks.append(callback)
                return
        callback(self)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until resolved; returns False if the timeout expired."""
        return self._event.wait(timeout)

    def result(self) -> Any:
        """
        Return the success value.

        Raises:
            PlatformError: the call was answered with an error
            MissingPluginError: no handler implements the method
            RuntimeError: the reply is still pending
        """
        outcome = self._outcome
        if outcome is None:
            raise RuntimeError(f"Reply for {self.method} is still pending")
        if outcome.kind == ReplyKind.ERROR:
            raise PlatformError(outcome.code, outcome.message, outcome.details)
        if outcome.kind == ReplyKind.NOT_IMPLEMENTED:
            raise MissingPluginError(self.method, self.channel)
        return outcome.value


class MethodChannel:
    """Named channel dispatching method calls to one handler."""

    def __init__(self, name: str, codec: Optional[JSONMethodCodec] = None):
        self.name = name
        self.codec = codec or JSONMethodCodec()
        self._handler: Optional[MethodCallHandler] = None

    def set_method_call_handler(self, handler: Optional[MethodCallHandler]) -> None:
        """Install (or remove, with None) the handler for incoming calls."""
        self._handler = handler

    def invoke_method(self, method: str, arguments: Any = None) -> Reply:
        """Dispatch a call and return its reply handle without waiting."""
        return self.dispatch(MethodCall(method=method, arguments=arguments))

    def dispatch(self, call: MethodCall) -> Reply:
        reply = Reply(method=call.method, channel=self.name)

        if self._handler is None:
            logger.debug(f"No handler on {self.name} for {call.method}")
            reply.not_implemented()
            return reply

        try:
            self._handler(call, reply)
        except Exception as e:
            if reply.done:
                raise
            logger.error(f"Handler failed for {self.name}#{call.method}: {e}")
            reply.error("error", str(e), None)

        return reply

    def handle_message(self, message: bytes, callback: Callable[[bytes], None]) -> Reply:
        """
        Binary entry point: decode a call, dispatch it and hand the encoded
        envelope to ``callback`` once the reply is resolved.
        """
        call = self.codec.decode_method_call(message)
        reply = self.dispatch(call)
        reply.add_done_callback(lambda r: callback(self.codec.encode_outcome(r.outcome)))
        return reply
