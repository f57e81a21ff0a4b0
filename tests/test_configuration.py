"""Tests for configuration loading and application start-up."""

import importlib

import pytest
import yaml

from waypoint import configuration
from waypoint.repository.configuration import ConfigurationRepository
from waypoint.view import state as view_state

# The package re-exports initialize(), which hides the module attribute
initialize_module = importlib.import_module("waypoint.initialize")


@pytest.fixture
def config_paths(tmp_path, monkeypatch):
    config_dir = tmp_path / "config"
    monkeypatch.setattr(configuration, "CONFIG_PATH", config_dir)
    monkeypatch.setattr(configuration, "APP_CONFIG_PATH", config_dir / "config.yaml")
    monkeypatch.setattr(configuration, "DATA_PATH", tmp_path / "data")
    monkeypatch.setattr(configuration, "DATA_CACHE_DIR", tmp_path / "data" / "cache")
    return tmp_path


def test_empty_file_loads_defaults(config_paths):
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text("")
    repository = ConfigurationRepository()

    assert repository.get_config() == configuration.get_default_configuration()
    assert repository.flush() is True
    assert yaml.safe_load(configuration.APP_CONFIG_PATH.read_text())["log_level"] == "WARNING"


def test_missing_keys_are_back_filled(config_paths):
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(yaml.dump({"show_header": False}))
    repository = ConfigurationRepository()

    config = repository.get_config()

    assert config["show_header"] is False
    assert config["log_level"] == configuration.DEFAULT_LOG_LEVEL
    assert repository.is_dirty is True


def test_flush_without_changes_does_nothing(config_paths):
    configuration.APP_CONFIG_PATH.parent.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(
        yaml.dump(configuration.get_default_configuration())
    )
    repository = ConfigurationRepository()
    repository.get_config()

    assert repository.flush() is False


def test_initialize_creates_files_and_honours_data_path(config_paths, monkeypatch):
    monkeypatch.setattr(initialize_module, "CONFIGURATION_REPO", ConfigurationRepository())
    custom_data = config_paths / "elsewhere"
    configuration.CONFIG_PATH.mkdir(parents=True)
    configuration.APP_CONFIG_PATH.write_text(
        yaml.dump(
            {"data_path": str(custom_data), "log_level": "INFO", "show_header": False}
        )
    )

    initialize_module.initialize()

    assert configuration.DATA_PATH == custom_data
    assert (custom_data / "cache").is_dir()
    assert view_state.get_show_header() is False
    view_state.set_show_header(True)


def test_initialize_writes_default_config(config_paths, monkeypatch):
    monkeypatch.setattr(initialize_module, "CONFIGURATION_REPO", ConfigurationRepository())

    initialize_module.initialize()

    written = yaml.safe_load(configuration.APP_CONFIG_PATH.read_text())
    assert written == configuration.get_default_configuration()
    assert configuration.DATA_CACHE_DIR.is_dir()
