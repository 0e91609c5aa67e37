import os

import pytest

from bda_dashboard.config import DashboardConfig, load_env_file
from bda_dashboard.errors import ConfigError, DashboardError

ENV_KEYS = ("BDA_DATA_BASE_PATH", "BDA_LAYOUTS_VARIANT", "BDA_FETCH_TIMEOUT", "BDA_LOG_LEVEL", "BDA_DEFAULT_SECTION")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Private copy of the environment so .env loading cannot leak between tests."""
    monkeypatch.setattr(os, "environ", {k: v for k, v in os.environ.items() if k not in ENV_KEYS})


def test_defaults(tmp_path):
    config = DashboardConfig.from_env(env_path=str(tmp_path / "absent.env"))
    assert config.data_base_path == "data"
    assert config.layouts_variant == "all"
    assert config.fetch_timeout == 15.0
    assert config.log_level == "INFO"
    assert config.default_section == "overview"
    assert not config.is_remote


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("BDA_DATA_BASE_PATH", "https://data.example.org/bda")
    monkeypatch.setenv("BDA_LAYOUTS_VARIANT", "Sample")
    monkeypatch.setenv("BDA_FETCH_TIMEOUT", "2.5")
    monkeypatch.setenv("BDA_LOG_LEVEL", "debug")
    config = DashboardConfig.from_env(env_path=str(tmp_path / "absent.env"))
    assert config.is_remote
    assert config.layouts_variant == "sample"
    assert config.fetch_timeout == 2.5
    assert config.log_level == "DEBUG"


def test_env_file_does_not_override(monkeypatch, tmp_path):
    """Values already in the environment win over the .env file."""
    env = tmp_path / ".env"
    env.write_text('# comment\nBDA_DEFAULT_SECTION="sources"\nBDA_LOG_LEVEL=WARNING\n', encoding="utf-8")
    monkeypatch.setenv("BDA_LOG_LEVEL", "ERROR")
    load_env_file(str(env))
    config = DashboardConfig.from_env(env_path=str(env))
    assert config.default_section == "sources"
    assert config.log_level == "ERROR"


@pytest.mark.parametrize("kwargs", [
    {"layouts_variant": "everything"},
    {"fetch_timeout": 0},
    {"fetch_timeout": -1},
])
def test_invalid_values(kwargs):
    with pytest.raises(ConfigError):
        DashboardConfig(**kwargs)


def test_timeout_not_a_number(monkeypatch, tmp_path):
    monkeypatch.setenv("BDA_FETCH_TIMEOUT", "soon")
    with pytest.raises(DashboardError):
        DashboardConfig.from_env(env_path=str(tmp_path / "absent.env"))
