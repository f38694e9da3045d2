"""
Resource identifier parsing.

Identifiers come from the UI layer as plain strings (``content://media/...``,
``file:///...``). Parsing never raises: anything that is not an absolute,
whitespace-free URI yields ``None`` and callers treat it as absent.
"""

import re
from dataclasses import dataclass
from typing import Optional
from urllib.parse import unquote, urlsplit

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")
_FORBIDDEN_RE = re.compile(r"[\s\x00-\x1f\x7f]")


@dataclass(frozen=True)
class ResourceUri:
    """An absolute resource identifier."""

    raw: str
    scheme: str
    authority: str
    path: str

    @property
    def segments(self) -> list[str]:
        """Decoded, non-empty path segments."""
        return [unquote(s) for s in self.path.split("/") if s]

    def __str__(self) -> str:
        return self.raw


def parse_uri(value: Optional[str]) -> Optional[ResourceUri]:
    """Parse ``value`` into a ResourceUri, or return None if it is not one."""
    if not value or not isinstance(value, str):
        return None
    if _FORBIDDEN_RE.search(value) or not _SCHEME_RE.match(value):
        return None

    try:
        parts = urlsplit(value)
    except ValueError:
        return None

    # "scheme:" alone identifies nothing
    if not (parts.netloc or parts.path):
        return None

    return ResourceUri(
        raw=value,
        scheme=parts.scheme.lower(),
        authority=parts.netloc,
        path=parts.path,
    )
