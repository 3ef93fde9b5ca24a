"""Configuration tests driven by PRODUCTIVITY_OS_* environment variables."""

from __future__ import annotations

from zoneinfo import ZoneInfo

import pytest

from productivity_os.config import BaseConfig, DevConfig


def test_defaults_point_at_data_dir(tmp_path):
    config = BaseConfig()

    assert config.DATA_DIR == tmp_path.resolve()
    assert config.DATABASE_URL == f"sqlite:///{tmp_path.resolve() / 'productivity_os.db'}"
    assert config.TIMEZONE == "UTC"
    assert config.DEV_MODE is True


def test_environment_overrides(monkeypatch, tmp_path):
    data_dir = tmp_path / "nested" / "data"
    monkeypatch.setenv("PRODUCTIVITY_OS_DATA_DIR", str(data_dir))
    monkeypatch.setenv("PRODUCTIVITY_OS_TIMEZONE", "Europe/Berlin")
    monkeypatch.setenv("PRODUCTIVITY_OS_DEV_MODE", "off")
    monkeypatch.setenv("PRODUCTIVITY_OS_DATABASE_URL", "sqlite:///:memory:")

    config = BaseConfig()

    assert data_dir.is_dir()
    assert config.DEV_MODE is False
    assert config.DATABASE_URL == "sqlite:///:memory:"
    assert config.reference_timezone() == ZoneInfo("Europe/Berlin")


def test_unknown_timezone_fails_fast(monkeypatch):
    monkeypatch.setenv("PRODUCTIVITY_OS_TIMEZONE", "Mars/Olympus_Mons")

    with pytest.raises(ValueError, match="Unknown timezone"):
        BaseConfig()


def test_sqlite_engine_options():
    options = BaseConfig().sqlalchemy_engine_options()
    assert options["connect_args"]["check_same_thread"] is False


def test_non_sqlite_engine_options(monkeypatch):
    monkeypatch.setenv("PRODUCTIVITY_OS_DATABASE_URL", "postgresql://localhost/productivity")
    assert BaseConfig().sqlalchemy_engine_options() == {}


def test_dev_config_flags():
    config = DevConfig()
    assert config.DEBUG is True
    assert config.TESTING is False
