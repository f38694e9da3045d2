"""Core components of Ringtone Bridge."""

from ringtone_bridge.core.bridge import RingtoneBridge
from ringtone_bridge.core.channel import MethodChannel, Reply
from ringtone_bridge.core.codec import JSONMethodCodec
from ringtone_bridge.core.config import Config
from ringtone_bridge.core.types import MethodCall, Outcome, ReplyKind

__all__ = [
    "Config",
    "JSONMethodCodec",
    "MethodCall",
    "MethodChannel",
    "Outcome",
    "Reply",
    "ReplyKind",
    "RingtoneBridge",
]
