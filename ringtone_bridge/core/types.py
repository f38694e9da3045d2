"""Type definitions for the method channel."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


@dataclass
class MethodCall:
    """A named command with its arguments."""

    method: str
    arguments: Any = None

    def argument(self, key: str) -> Any:
        """Return a named argument, or None if absent."""
        if isinstance(self.arguments, dict):
            return self.arguments.get(key)
        return None


class ReplyKind(str, Enum):
    """Terminal outcome categories of a reply."""

    SUCCESS = "success"
    ERROR = "error"
    NOT_IMPLEMENTED = "not_implemented"


@dataclass
class Outcome:
    """What a reply handle was resolved with."""

    kind: ReplyKind
    value: Any = None
    code: Optional[str] = None
    message: Optional[str] = None
    details: Any = None

    @classmethod
    def success(cls, value: Any = None) -> "Outcome":
        return cls(kind=ReplyKind.SUCCESS, value=value)

    @classmethod
    def error(cls, code: str, message: Optional[str] = None, details: Any = None) -> "Outcome":
        return cls(kind=ReplyKind.ERROR, code=code, message=message, details=details)

    @classmethod
    def not_implemented(cls) -> "Outcome":
        return cls(kind=ReplyKind.NOT_IMPLEMENTED)

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dict (used by the CLI)."""
        if self.kind == ReplyKind.SUCCESS:
            return {"kind": self.kind.value, "value": self.value}
        if self.kind == ReplyKind.ERROR:
            return {
                "kind": self.kind.value,
                "code": self.code,
                "message": self.message,
                "details": self.details,
            }
        return {"kind": self.kind.value}
