"""
Pytest fixtures for Ringtone Bridge.

Shared fixtures for the bridge, its channel and the local backend.
"""

import os
from pathlib import Path
from typing import Generator

import pytest

from ringtone_bridge.backends.local import LocalBackend
from ringtone_bridge.core.bridge import RingtoneBridge
from ringtone_bridge.core.channel import MethodChannel
from ringtone_bridge.core.config import CONFIG_ENV_VAR, CacheConfig, Config, LocalConfig

TEN_BYTES = b"0123456789"


# === Config Fixtures ===


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Temporary directory, cleaned up by pytest."""
    return tmp_path


@pytest.fixture
def mock_config(temp_dir: Path) -> Config:
    """Configuration pointing every directory into the temp dir."""
    return Config(
        backend="local",
        cache=CacheConfig(),
        local=LocalConfig(
            media_dir=str(temp_dir / "media"),
            cache_dir=str(temp_dir / "cache"),
        ),
    )


@pytest.fixture
def config_file(temp_dir: Path) -> Path:
    """Temporary configuration file."""
    config_path = temp_dir / "config.yaml"
    config_path.write_text(
        """
channel:
  name: test/ringtone
  request_code: 42
cache:
  prefix: tone_
backend: local
log_level: DEBUG
"""
    )
    return config_path


# === Media Fixtures ===


@pytest.fixture
def media_dir(mock_config: Config) -> Path:
    """Media directory with a few ringtones."""
    media = Path(mock_config.local.media_dir)
    media.mkdir(parents=True)
    (media / "1").write_bytes(TEN_BYTES)
    (media / "alarm.ogg").write_bytes(b"OggS" + bytes(range(256)) * 8)
    (media / "beep.wav").write_bytes(b"RIFF....WAVE")
    return media


@pytest.fixture
def cache_dir(mock_config: Config) -> Path:
    return Path(mock_config.local.cache_dir)


# === Bridge Fixtures ===


@pytest.fixture
def backend(mock_config: Config, media_dir: Path) -> LocalBackend:
    return LocalBackend(media_dir=mock_config.local.media_dir, cache_dir=mock_config.local.cache_dir)


@pytest.fixture
def bridge(backend: LocalBackend, mock_config: Config) -> RingtoneBridge:
    return RingtoneBridge(backend, mock_config)


@pytest.fixture
def channel(bridge: RingtoneBridge, mock_config: Config) -> MethodChannel:
    return bridge.attach(MethodChannel(mock_config.channel.name))


# === Environment Fixtures ===


@pytest.fixture
def clean_env() -> Generator[None, None, None]:
    """Remove config-related environment variables for the test."""
    saved = os.environ.pop(CONFIG_ENV_VAR, None)

    yield

    if saved is not None:
        os.environ[CONFIG_ENV_VAR] = saved
    else:
        os.environ.pop(CONFIG_ENV_VAR, None)
