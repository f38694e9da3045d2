"""
Central configuration for Ringtone Bridge.

Supports two platform backends:
- android: python-for-android runtime (pyjnius)
- local: desktop simulator backed by a media directory
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel

from ringtone_bridge.tools.file_utils import ensure_dir

DEFAULT_CONFIG_PATH = "~/.ringtone-bridge/config.yaml"
CONFIG_ENV_VAR = "RINGTONE_BRIDGE_CONFIG"

BACKENDS = ("auto", "android", "local")


class ChannelConfig(BaseModel):
    """Method channel configuration."""

    name: str = "bakers_timers/ringtone"

    # Correlates the picker result with the call that launched it
    request_code: int = 1999


class CacheConfig(BaseModel):
    """Where and how copied ringtones are stored."""

    directory: Optional[str] = None  # None = backend's cache dir
    prefix: str = "bakers_ringtone_"
    suffix: str = ".dat"
    chunk_size: int = 64 * 1024


class LocalConfig(BaseModel):
    """Desktop simulator configuration."""

    media_dir: str = "~/.ringtone-bridge/media"
    cache_dir: str = "~/.ringtone-bridge/cache"


class Config(BaseModel):
    """Main Ringtone Bridge configuration."""

    channel: ChannelConfig = ChannelConfig()
    cache: CacheConfig = CacheConfig()
    local: LocalConfig = LocalConfig()

    # Backend: auto, android, local
    backend: str = "auto"

    log_level: str = "WARNING"

    @staticmethod
    def default_path() -> str:
        """Config path, honouring the RINGTONE_BRIDGE_CONFIG override."""
        return os.environ.get(CONFIG_ENV_VAR) or os.path.expanduser(DEFAULT_CONFIG_PATH)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Load configuration from YAML file or use defaults."""

        if config_path is None:
            config_path = cls.default_path()

        path = Path(os.path.expanduser(config_path))

        if path.exists():
            with open(path) as f:
                data = yaml.safe_load(f)
                return cls(**data) if data else cls()

        return cls()

    def save(self, config_path: Optional[str] = None) -> Path:
        """Save configuration to YAML file."""

        if config_path is None:
            config_path = self.default_path()

        path = Path(os.path.expanduser(config_path))
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w") as f:
            yaml.dump(self.model_dump(), f, default_flow_style=False)

        return path

    def ensure_directories(self) -> None:
        """Create the local simulator directories if they don't exist."""

        for dir_path in [self.local.media_dir, self.local.cache_dir, self.cache.directory]:
            if dir_path:
                ensure_dir(dir_path)


def get_default_config() -> Config:
    """Return default configuration."""
    return Config()
