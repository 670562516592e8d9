"""Tests for Config model validation and TOML overrides."""

from datetime import timedelta
from pathlib import Path

import pytest
from pydantic import ValidationError

from rpc_handshake.config import DEFAULT_URL, Config

DATA_DIR = Path("/fake/data-dir")


class TestConfigPaths:
    """Computed path properties derive from data_dir."""

    def test_config_path(self):
        """Config file is data_dir / config.toml."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.config_path == DATA_DIR / "config.toml"

    def test_log_path(self):
        """Log file is data_dir / handshake.log."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.log_path == DATA_DIR / "handshake.log"


class TestConfigValidation:
    """Pydantic field constraints."""

    def test_defaults(self):
        """Default values for optional fields."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.url == DEFAULT_URL
        assert cfg.device_id == ""
        assert cfg.mount_point == ""
        assert cfg.heartbeat_interval == 60
        assert cfg.read_timeout == 10.0

    def test_heartbeat(self):
        """heartbeat_interval converts to a duration; 0 disables it."""
        assert Config(data_dir=DATA_DIR).heartbeat == timedelta(seconds=60)
        assert Config(data_dir=DATA_DIR, heartbeat_interval=0).heartbeat is None

    def test_heartbeat_below_minimum(self):
        """heartbeat_interval < 0 is rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, heartbeat_interval=-1)

    def test_read_timeout_must_be_positive(self):
        """read_timeout <= 0 is rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, read_timeout=0)


class TestConfigBuild:
    """Config.build() with an optional config.toml."""

    def test_no_file(self, tmp_path: Path):
        """Missing config.toml gives defaults."""
        cfg = Config.build(tmp_path)
        assert cfg.data_dir == tmp_path
        assert cfg.url == DEFAULT_URL

    def test_overrides(self, tmp_path: Path):
        """Typed values from config.toml are applied."""
        (tmp_path / "config.toml").write_text(
            'url = "unix:///run/broker.sock"\ndevice_id = "plc-01"\nheartbeat_interval = 30\nread_timeout = 2.5\n'
        )
        cfg = Config.build(tmp_path)
        assert cfg.url == "unix:///run/broker.sock"
        assert cfg.device_id == "plc-01"
        assert cfg.heartbeat_interval == 30
        assert cfg.read_timeout == 2.5

    def test_wrong_types_ignored(self, tmp_path: Path):
        """Wrongly typed values fall back to defaults."""
        (tmp_path / "config.toml").write_text('heartbeat_interval = "fast"\ndevice_id = 5\nread_timeout = true\n')
        cfg = Config.build(tmp_path)
        assert cfg.heartbeat_interval == 60
        assert cfg.device_id == ""
        assert cfg.read_timeout == 10.0
