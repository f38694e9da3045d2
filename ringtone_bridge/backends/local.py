"""
Local (desktop) backend.

Simulates the OS side on a regular machine:
- ringtones are files under a media directory, exposed as content://media/<name>
- file:// identifiers resolve directly to the filesystem
- the picker is "opened" by recording the launch; finish_picker() (or the CLI's
  interactive chooser) delivers the result like the OS would
"""

import logging
import os
from pathlib import Path
from typing import BinaryIO, Optional
from urllib.parse import quote, unquote

from ringtone_bridge.backends.base import (
    RESULT_CANCELED,
    RESULT_OK,
    ActivityResult,
    PickerIntent,
    PlatformBackend,
)
from ringtone_bridge.core.uri import parse_uri

logger = logging.getLogger(__name__)

MEDIA_AUTHORITY = "media"


class LocalBackend(PlatformBackend):
    """Filesystem-backed stand-in for the Android ringtone APIs."""

    name = "local"

    def __init__(self, media_dir: str, cache_dir: str):
        super().__init__()
        self.media_dir = Path(os.path.expanduser(media_dir))
        self._cache_dir = Path(os.path.expanduser(cache_dir))
        self._open_picker: Optional[tuple[PickerIntent, int]] = None
        self.launches: list[tuple[PickerIntent, int]] = []

    def is_available(self) -> bool:
        return True

    # Picker

    def start_activity_for_result(self, intent: PickerIntent, request_code: int) -> None:
        if self._open_picker is not None:
            raise RuntimeError("A picker activity is already open")
        self._open_picker = (intent, request_code)
        self.launches.append((intent, request_code))
        logger.info(f"Picker opened (request {request_code}, existing={intent.existing_uri})")

    @property
    def open_picker(self) -> Optional[tuple[PickerIntent, int]]:
        """(intent, request_code) of the picker currently shown, if any."""
        return self._open_picker

    def finish_picker(self, result_code: int = RESULT_OK, picked_uri: Optional[str] = None) -> None:
        """Close the open picker and deliver its result."""
        if self._open_picker is None:
            raise RuntimeError("No picker activity is open")
        _, request_code = self._open_picker
        self._open_picker = None
        self.deliver_activity_result(
            ActivityResult(request_code=request_code, result_code=result_code, picked_uri=picked_uri)
        )

    def cancel_picker(self) -> None:
        self.finish_picker(RESULT_CANCELED)

    # Content resolution

    def resolve(self, uri: str) -> Optional[Path]:
        """Map an identifier to a file path, or None if it names nothing here."""
        parsed = parse_uri(uri)
        if parsed is None:
            return None

        if parsed.scheme == "file":
            return Path(unquote(parsed.path))

        if parsed.scheme != "content" or parsed.authority != MEDIA_AUTHORITY:
            return None

        segments = parsed.segments
        if not segments or any(s in (".", "..") for s in segments):
            return None

        candidate = self.media_dir.joinpath(*segments)
        if candidate.exists():
            return candidate

        # content://media/alarm -> media/alarm.ogg
        parent = candidate.parent
        if parent.is_dir():
            for path in sorted(parent.iterdir()):
                if path.is_file() and path.stem == candidate.name:
                    return path

        return candidate

    def open_input_stream(self, uri: str) -> Optional[BinaryIO]:
        path = self.resolve(uri)
        if path is None:
            return None
        try:
            return open(path, "rb")
        except (FileNotFoundError, IsADirectoryError, PermissionError) as e:
            logger.debug(f"Cannot open {uri}: {e}")
            return None

    def cache_dir(self) -> Path:
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        return self._cache_dir

    def list_ringtones(self) -> list[dict]:
        """Media files exposed as content:// identifiers."""
        if not self.media_dir.is_dir():
            return []

        ringtones = []
        for path in sorted(self.media_dir.rglob("*")):
            if not path.is_file() or path.name.startswith("."):
                continue
            rel = path.relative_to(self.media_dir).with_suffix("")
            ringtones.append(
                {
                    "uri": f"content://{MEDIA_AUTHORITY}/{quote(rel.as_posix())}",
                    "title": path.stem,
                    "path": str(path),
                    "size": path.stat().st_size,
                }
            )
        return ringtones
