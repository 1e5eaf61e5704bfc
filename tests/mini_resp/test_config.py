"""Tests for Config model validation, computed fields and TOML loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from mini_resp.config import Config

DATA_DIR = Path("/fake/data-dir")


class TestConfigPaths:
    """Computed properties derive from other fields."""

    def test_config_path(self):
        """Config file is data_dir / config.toml."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.config_path == DATA_DIR / "config.toml"

    def test_log_path(self):
        """Log file is data_dir / mini-resp.log."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.log_path == DATA_DIR / "mini-resp.log"

    def test_address(self):
        """Address joins host and port."""
        cfg = Config(data_dir=DATA_DIR, host="redis.local", port=6380)
        assert cfg.address == "redis.local:6380"


class TestConfigValidation:
    """Pydantic field constraints."""

    def test_defaults(self):
        """Default values for optional fields."""
        cfg = Config(data_dir=DATA_DIR)
        assert cfg.host == "127.0.0.1"
        assert cfg.port == 6379
        assert cfg.connect_timeout == 5.0
        assert cfg.read_timeout == 10.0
        assert cfg.recv_bufsize == 65536
        assert cfg.max_depth == 128

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range(self, port):
        """Ports outside 1..65535 are rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, port=port)

    @pytest.mark.parametrize("field", ["connect_timeout", "read_timeout"])
    def test_timeout_must_be_positive(self, field):
        """Zero timeouts are rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, **{field: 0})

    def test_max_depth_below_minimum(self):
        """max_depth < 1 is rejected."""
        with pytest.raises(ValidationError):
            Config(data_dir=DATA_DIR, max_depth=0)

    def test_frozen(self):
        """Config is immutable."""
        cfg = Config(data_dir=DATA_DIR)
        with pytest.raises(ValidationError):
            cfg.port = 1  # type: ignore[misc]


class TestConfigBuild:
    """Config.build() layering: defaults, config.toml, overrides."""

    def test_no_config_file(self, tmp_path: Path):
        """Missing config.toml yields defaults."""
        cfg = Config.build(tmp_path)
        assert cfg.data_dir == tmp_path
        assert cfg.port == 6379

    def test_reads_config_file(self, tmp_path: Path):
        """Known keys are loaded from config.toml."""
        (tmp_path / "config.toml").write_text('host = "db.example"\nport = 7000\nread_timeout = 2.5\nconnect_timeout = 1\n')
        cfg = Config.build(tmp_path)
        assert cfg.host == "db.example"
        assert cfg.port == 7000
        assert cfg.read_timeout == 2.5
        assert cfg.connect_timeout == 1.0

    def test_ignores_wrong_types(self, tmp_path: Path):
        """Values of the wrong type are skipped."""
        (tmp_path / "config.toml").write_text('port = "7000"\nmax_depth = true\nunknown = 1\n')
        cfg = Config.build(tmp_path)
        assert cfg.port == 6379
        assert cfg.max_depth == 128

    def test_overrides_win(self, tmp_path: Path):
        """Non-None overrides replace file values; None overrides are ignored."""
        (tmp_path / "config.toml").write_text('host = "db.example"\nport = 7000\n')
        cfg = Config.build(tmp_path, host=None, port=7001)
        assert cfg.host == "db.example"
        assert cfg.port == 7001

    def test_invalid_file_value(self, tmp_path: Path):
        """Out-of-range values from the file fail validation."""
        (tmp_path / "config.toml").write_text("port = 0\n")
        with pytest.raises(ValidationError):
            Config.build(tmp_path)
