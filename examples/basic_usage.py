#!/usr/bin/env python3
"""
Ringtone Bridge - Basic Usage Examples

This file demonstrates how to drive the bridge programmatically with the
local (desktop) backend.
"""

import tempfile
from pathlib import Path

from ringtone_bridge.backends import RESULT_OK, LocalBackend
from ringtone_bridge.core.bridge import RingtoneBridge
from ringtone_bridge.core.channel import MethodChannel
from ringtone_bridge.core.config import Config


def example_pick_and_copy():
    """Pick a ringtone, then copy it into the cache."""
    workdir = Path(tempfile.mkdtemp())
    (workdir / "media").mkdir()
    (workdir / "media" / "chime.ogg").write_bytes(b"OggS" + b"\x00" * 16)

    config = Config()
    backend = LocalBackend(media_dir=str(workdir / "media"), cache_dir=str(workdir / "cache"))
    bridge = RingtoneBridge(backend, config)
    channel = bridge.attach(MethodChannel(config.channel.name))

    # The reply stays pending until the picker closes
    pick = channel.invoke_method("pickRingtone", {"existingUri": None})
    print(f"Picker open: {backend.open_picker is not None}, reply done: {pick.done}")

    backend.finish_picker(RESULT_OK, "content://media/chime")
    uri = pick.result()
    print(f"Picked: {uri}")

    copy = channel.invoke_method("copyRingtoneToCache", {"uri": uri})
    print(f"Cached at: {copy.result()}")


def example_wire_messages():
    """Send JSON-encoded calls the way a UI layer would."""
    config = Config()
    backend = LocalBackend(media_dir=config.local.media_dir, cache_dir=config.local.cache_dir)
    channel = RingtoneBridge(backend, config).attach(MethodChannel(config.channel.name))

    for message in (
        b'{"method": "copyRingtoneToCache", "args": {"uri": null}}',
        b'{"method": "frobnicate", "args": null}',
    ):
        channel.handle_message(message, lambda envelope: print(f"{message!r} -> {envelope!r}"))


if __name__ == "__main__":
    print("=" * 50)
    print("Ringtone Bridge - Usage Examples")
    print("=" * 50)

    print("\n1. Pick and copy:")
    example_pick_and_copy()

    print("\n2. Wire messages:")
    example_wire_messages()
