"""Centralized application configuration."""

import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "rpc-handshake"
DEFAULT_URL = "tcp://localhost:3755"

# config.toml keys and the types they must have to be applied
_TOML_FIELDS: dict[str, type | tuple[type, ...]] = {
    "url": str,
    "device_id": str,
    "mount_point": str,
    "heartbeat_interval": int,
    "read_timeout": (int, float),
}


class Config(BaseModel):
    """Application-wide configuration."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Base directory for configuration and logs")
    url: str = Field(default=DEFAULT_URL, description="Broker URL, credentials in the userinfo part")
    device_id: str = Field(default="", description="Device identifier announced at login")
    mount_point: str = Field(default="", description="Mount point requested when no device id is set")
    heartbeat_interval: int = Field(default=60, ge=0, description="Heartbeat interval in seconds (0 = no watchdog)")
    read_timeout: float = Field(default=10.0, gt=0, description="Connect and read timeout in seconds")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "handshake.log"

    @property
    def heartbeat(self) -> timedelta | None:
        """Heartbeat interval as a duration, or None when disabled."""
        return timedelta(seconds=self.heartbeat_interval) if self.heartbeat_interval else None

    @staticmethod
    def build(data_dir: Path | None = None) -> "Config":
        """Build a Config from defaults and optional config.toml. Wrongly typed entries are ignored."""
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            for key, expected in _TOML_FIELDS.items():
                value = toml_data.get(key)
                if isinstance(value, expected) and not isinstance(value, bool):
                    kwargs[key] = value

        return Config(**kwargs)
