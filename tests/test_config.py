"""Tests for configuration loading and saving."""

from pathlib import Path

import yaml

from ringtone_bridge.core.config import CONFIG_ENV_VAR, Config, get_default_config


class TestConfig:
    """Tests for Config."""

    def test_defaults(self):
        cfg = get_default_config()
        assert cfg.channel.name == "bakers_timers/ringtone"
        assert cfg.channel.request_code == 1999
        assert cfg.cache.prefix == "bakers_ringtone_"
        assert cfg.cache.suffix == ".dat"
        assert cfg.cache.directory is None
        assert cfg.backend == "auto"

    def test_load_file(self, config_file: Path):
        cfg = Config.load(str(config_file))
        assert cfg.channel.name == "test/ringtone"
        assert cfg.channel.request_code == 42
        assert cfg.cache.prefix == "tone_"
        assert cfg.cache.suffix == ".dat"
        assert cfg.backend == "local"
        assert cfg.log_level == "DEBUG"

    def test_load_missing_file(self, temp_dir: Path):
        cfg = Config.load(str(temp_dir / "missing.yaml"))
        assert cfg == Config()

    def test_load_empty_file(self, temp_dir: Path):
        path = temp_dir / "empty.yaml"
        path.write_text("")
        assert Config.load(str(path)) == Config()

    def test_env_override(self, config_file: Path, monkeypatch, clean_env):
        monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
        assert Config.load().channel.request_code == 42

    def test_save_roundtrip(self, temp_dir: Path, mock_config: Config):
        mock_config.cache.prefix = "saved_"
        path = mock_config.save(str(temp_dir / "nested" / "config.yaml"))

        assert path.exists()
        assert yaml.safe_load(path.read_text())["cache"]["prefix"] == "saved_"
        assert Config.load(str(path)) == mock_config

    def test_ensure_directories(self, mock_config: Config, temp_dir: Path):
        mock_config.cache.directory = str(temp_dir / "cache-override")
        mock_config.ensure_directories()

        assert Path(mock_config.local.media_dir).is_dir()
        assert Path(mock_config.local.cache_dir).is_dir()
        assert (temp_dir / "cache-override").is_dir()
