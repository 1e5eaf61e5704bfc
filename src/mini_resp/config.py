"""Centralized client configuration."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_DATA_DIR = Path.home() / ".local" / "mini-resp"

# config.toml keys and the types they must have to be applied
_TOML_KEYS: dict[str, tuple[type, ...]] = {
    "host": (str,),
    "port": (int,),
    "connect_timeout": (int, float),
    "read_timeout": (int, float),
    "recv_bufsize": (int,),
    "max_depth": (int,),
}


class Config(BaseModel):
    """Client configuration: server address, transport timeouts and decoder limits."""

    model_config = ConfigDict(frozen=True)

    data_dir: Path = Field(description="Directory holding config.toml and the log file")
    host: str = Field(default="127.0.0.1", min_length=1, description="Server host name or IP address")
    port: int = Field(default=6379, ge=1, le=65535, description="Server TCP port")
    connect_timeout: float = Field(default=5.0, gt=0, description="Connect timeout in seconds")
    read_timeout: float = Field(default=10.0, gt=0, description="Per-read timeout in seconds")
    recv_bufsize: int = Field(default=65536, ge=1, description="Maximum bytes requested per socket read")
    max_depth: int = Field(default=128, ge=1, description="Maximum accepted reply nesting depth")

    @computed_field(description="Optional TOML configuration file")
    @property
    def config_path(self) -> Path:
        """Optional TOML configuration file."""
        return self.data_dir / "config.toml"

    @computed_field(description="Log file")
    @property
    def log_path(self) -> Path:
        """Log file."""
        return self.data_dir / "mini-resp.log"

    @computed_field(description="Server address as host:port")
    @property
    def address(self) -> str:
        """Server address as host:port."""
        return f"{self.host}:{self.port}"

    @staticmethod
    def build(data_dir: Path | None = None, **overrides: Any) -> Config:  # noqa: ANN401
        """Build a Config from defaults, optional config.toml, then non-None overrides.

        Raises:
            pydantic.ValidationError: A resulting value is out of range.

        """
        resolved_dir = data_dir if data_dir is not None else DEFAULT_DATA_DIR
        config_path = resolved_dir / "config.toml"

        kwargs: dict[str, Any] = {"data_dir": resolved_dir}
        if config_path.is_file():
            with config_path.open("rb") as f:
                toml_data = tomllib.load(f)
            for key, types in _TOML_KEYS.items():
                value = toml_data.get(key)
                if isinstance(value, types) and not isinstance(value, bool):
                    kwargs[key] = value

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return Config(**kwargs)
