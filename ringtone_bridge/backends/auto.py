"""
Platform backend auto-detection.
"""

import logging
from typing import Optional

from ringtone_bridge.backends.android import AndroidBackend, running_on_android
from ringtone_bridge.backends.base import PlatformBackend
from ringtone_bridge.backends.local import LocalBackend
from ringtone_bridge.core.config import Config
from ringtone_bridge.exceptions import BackendUnavailableError

logger = logging.getLogger(__name__)


def auto_detect_backend(preferred: Optional[str] = None) -> str:
    """
    Pick the backend name to use.

    Priority:
    1. Preferred backend (if given and not "auto")
    2. android when running under python-for-android
    3. local
    """
    if preferred and preferred != "auto":
        return preferred
    return "android" if running_on_android() else "local"


def get_backend(config: Config, name: Optional[str] = None) -> PlatformBackend:
    """Instantiate the configured backend."""
    backend = auto_detect_backend(name or config.backend)
    logger.debug(f"Using backend: {backend}")

    if backend == "android":
        if not running_on_android():
            raise BackendUnavailableError("android", "not running under python-for-android")
        return AndroidBackend()

    if backend == "local":
        return LocalBackend(media_dir=config.local.media_dir, cache_dir=config.local.cache_dir)

    raise ValueError(f"Unknown backend: {backend}. Available: android, local")
