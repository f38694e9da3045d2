"""
JSON method codec.

Wire format shared with the UI layer:

    call              {"method": "<name>", "args": <any>}
    success envelope  [<result>]
    error envelope    [<code>, <message>, <details>]
    not implemented   empty message
"""

import json
from typing import Any

from ringtone_bridge.core.types import MethodCall, Outcome, ReplyKind
from ringtone_bridge.exceptions import CodecError


class JSONMethodCodec:
    """Encodes method calls and reply envelopes as UTF-8 JSON."""

    encoding = "utf-8"

    def _dumps(self, obj: Any) -> bytes:
        try:
            return json.dumps(obj, separators=(",", ":")).encode(self.encoding)
        except (TypeError, ValueError) as e:
            raise CodecError(f"Value is not JSON serializable: {e}") from e

    def _loads(self, data: bytes) -> Any:
        try:
            return json.loads(data.decode(self.encoding))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise CodecError(f"Invalid JSON message: {e}") from e

    def encode_method_call(self, call: MethodCall) -> bytes:
        return self._dumps({"method": call.method, "args": call.arguments})

    def decode_method_call(self, data: bytes) -> MethodCall:
        obj = self._loads(data)
        if not isinstance(obj, dict) or not isinstance(obj.get("method"), str):
            raise CodecError(f"Invalid method call: {obj!r}")
        return MethodCall(method=obj["method"], arguments=obj.get("args"))

    def encode_outcome(self, outcome: Outcome) -> bytes:
        """Encode an outcome as an envelope (empty for not implemented)."""
        if outcome.kind == ReplyKind.SUCCESS:
            return self._dumps([outcome.value])
        if outcome.kind == ReplyKind.ERROR:
            return self._dumps([outcome.code, outcome.message, outcome.details])
        return b""

    def decode_envelope(self, data: bytes) -> Outcome:
        if not data:
            return Outcome.not_implemented()

        obj = self._loads(data)
        if not isinstance(obj, list):
            raise CodecError(f"Invalid envelope: {obj!r}")

        if len(obj) == 1:
            return Outcome.success(obj[0])
        if len(obj) == 3 and isinstance(obj[0], str) and (obj[1] is None or isinstance(obj[1], str)):
            return Outcome.error(obj[0], obj[1], obj[2])

        raise CodecError(f"Invalid envelope: {obj!r}")
