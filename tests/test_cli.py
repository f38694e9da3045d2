"""Tests for the command line interface."""

import json
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from ringtone_bridge import __version__
from ringtone_bridge.main import cli


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_config(temp_dir: Path, mock_config, media_dir) -> Path:
    """Config file for a local backend with media."""
    path = temp_dir / "config.yaml"
    mock_config.save(str(path))
    return path


def invoke(runner: CliRunner, config: Path, *args: str, input: str = None):
    return runner.invoke(cli, ["--config", str(config), "--backend", "local", *args], obj={}, input=input)


class TestCLI:
    """Tests for ringtone-bridge commands."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"], obj={})
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, runner):
        result = runner.invoke(cli, ["--help"], obj={})
        assert result.exit_code == 0
        assert "pick" in result.output
        assert "copy" in result.output

    def test_copy(self, runner, cli_config, cache_dir):
        result = invoke(runner, cli_config, "copy", "content://media/1")

        assert result.exit_code == 0, result.output
        copies = list(cache_dir.iterdir())
        assert len(copies) == 1
        assert copies[0].name.startswith("bakers_ringtone_")
        assert copies[0].read_bytes() == b"0123456789"

    def test_copy_missing(self, runner, cli_config):
        result = invoke(runner, cli_config, "copy", "content://media/missing")
        assert result.exit_code == 0
        assert "null" in result.output

    def test_pick_choose(self, runner, cli_config):
        result = invoke(runner, cli_config, "pick", input="2\n")

        assert result.exit_code == 0, result.output
        assert "content://media/alarm" in result.output.splitlines()[-1]

    def test_pick_default(self, runner, cli_config):
        result = invoke(runner, cli_config, "pick", input="0\n")
        assert result.exit_code == 0
        assert "content://settings/system/ringtone" in result.output

    def test_pick_cancel(self, runner, cli_config):
        result = invoke(runner, cli_config, "pick", input="\n")
        assert result.exit_code == 0
        assert result.output.strip().endswith("null")

    def test_call_unknown_method(self, runner, cli_config):
        result = invoke(runner, cli_config, "call", "frobnicate")

        assert result.exit_code == 0
        first_line = result.output.splitlines()[0]
        assert json.loads(first_line) == {"kind": "not_implemented"}
        assert "<empty>" in result.output

    def test_call_copy(self, runner, cli_config):
        result = invoke(runner, cli_config, "call", "copyRingtoneToCache", "--args", '{"uri": null}')

        assert result.exit_code == 0
        assert json.loads(result.output.splitlines()[0]) == {"kind": "success", "value": None}
        assert "[null]" in result.output

    def test_call_invalid_args(self, runner, cli_config):
        result = invoke(runner, cli_config, "call", "copyRingtoneToCache", "--args", "{oops")
        assert result.exit_code != 0
        assert "Invalid JSON" in result.output

    def test_ringtones(self, runner, cli_config):
        result = invoke(runner, cli_config, "ringtones")
        assert result.exit_code == 0
        assert "content://media/alarm" in result.output

    def test_config_show(self, runner, cli_config):
        result = invoke(runner, cli_config, "config")
        assert result.exit_code == 0
        assert "bakers_timers/ringtone" in result.output

    def test_config_init(self, runner, temp_dir, monkeypatch):
        monkeypatch.setenv("HOME", str(temp_dir))
        path = temp_dir / "new" / "config.yaml"
        result = runner.invoke(cli, ["--config", str(path), "config", "--init"], obj={})

        assert result.exit_code == 0
        assert yaml.safe_load(path.read_text())["channel"]["request_code"] == 1999
