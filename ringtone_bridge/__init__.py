"""
Ringtone Bridge - OS ringtone picker for cross-platform UIs
============================================================

Serves the ``bakers_timers/ringtone`` method channel:

- pickRingtone: open the system ringtone picker and return the chosen URI
- copyRingtoneToCache: copy a ringtone into the app cache and return its path

Backends:
- android: python-for-android + pyjnius
- local: desktop simulator backed by a media directory

Usage:
    ringtone-bridge pick                 # Open the picker
    ringtone-bridge copy content://...   # Copy to cache
    ringtone-bridge --help               # Show help
"""

__version__ = "0.1.0"

from ringtone_bridge.core.bridge import RingtoneBridge
from ringtone_bridge.core.channel import MethodChannel, Reply

__all__ = ["__version__", "MethodChannel", "Reply", "RingtoneBridge"]
