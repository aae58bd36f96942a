# tests/unit/config/test_settings.py
# Unit tests for configuration management including load/save, defaults & validation

import json
from pathlib import Path

import pytest

from justlog.config.settings import (
    HOME_ENV_VAR,
    JustlogSettings,
    SettingsManager,
    justlog_home,
)
from justlog.core.exceptions import SettingsValidationError


# * Test JustlogSettings dataclass behavior
class TestJustlogSettings:

    # * Test default values are correctly set
    def test_default_settings(self):
        settings = JustlogSettings()
        assert settings.session_filename == "session.json"
        assert settings.tick_interval == 1.0
        assert settings.default_rest_seconds == 90
        assert settings.weight_unit == "KG"
        assert settings.distance_unit == "KM"

    # * Test empty data_dir resolves to the justlog home
    def test_default_session_path(self, isolate_config):
        assert JustlogSettings().session_path == isolate_config / ".justlog" / "session.json"

    # * Test custom data_dir is used for the session file
    def test_custom_data_dir(self, tmp_path):
        settings = JustlogSettings(data_dir=str(tmp_path / "d"), session_filename="s.json")
        assert settings.session_path == tmp_path / "d" / "s.json"

    # * Test invalid values raise SettingsValidationError
    @pytest.mark.parametrize(
        "kwargs,setting",
        [
            ({"tick_interval": 0.0}, "tick_interval"),
            ({"tick_interval": True}, "tick_interval"),
            ({"default_rest_seconds": 0}, "default_rest_seconds"),
            ({"default_rest_seconds": 1.5}, "default_rest_seconds"),
            ({"weight_unit": "STONE"}, "weight_unit"),
            ({"distance_unit": "FURLONG"}, "distance_unit"),
            ({"session_filename": "  "}, "session_filename"),
        ],
    )
    def test_validation(self, kwargs, setting):
        with pytest.raises(SettingsValidationError) as exc:
            JustlogSettings(**kwargs)
        assert exc.value.setting_name == setting


# * Test JUSTLOG_HOME override
def test_home_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path / "custom"))
    assert justlog_home() == tmp_path / "custom"
    assert SettingsManager().config_path == tmp_path / "custom" / "config.json"


# * Test SettingsManager configuration persistence & operations
class TestSettingsManager:

    # * Test loading settings from existing valid config file
    def test_load_existing_valid_config(self, tmp_path):
        config_path = tmp_path / "config.json"
        config_path.write_text(json.dumps({"tick_interval": 0.5, "weight_unit": "LBS"}))

        settings = SettingsManager(config_path).load()
        assert settings.tick_interval == 0.5
        assert settings.weight_unit == "LBS"
        assert settings.default_rest_seconds == 90

    # * Test missing config file gives defaults
    def test_load_missing_config(self, tmp_path):
        assert SettingsManager(tmp_path / "none.json").load() == JustlogSettings()

    # * Test invalid config file falls back to defaults w/ a warning
    @pytest.mark.parametrize(
        "content",
        ["{ not json", json.dumps({"tick_interval": -1}), json.dumps({"unknown_key": 1})],
    )
    def test_load_invalid_config(self, tmp_path, capsys, content):
        config_path = tmp_path / "config.json"
        config_path.write_text(content)

        settings = SettingsManager(config_path).load()
        assert settings == JustlogSettings()
        assert "Using default settings" in capsys.readouterr().out

    # * Test set persists & revalidates
    def test_set_persists(self, tmp_path):
        config_path = tmp_path / "config.json"
        manager = SettingsManager(config_path)
        manager.set("default_rest_seconds", 60)

        assert json.loads(config_path.read_text())["default_rest_seconds"] == 60
        assert SettingsManager(config_path).get("default_rest_seconds") == 60

    # * Test set rejects unknown keys & invalid values
    def test_set_rejects(self, tmp_path):
        manager = SettingsManager(tmp_path / "config.json")
        with pytest.raises(ValueError):
            manager.set("theme", "dark")
        with pytest.raises(SettingsValidationError):
            manager.set("tick_interval", 0)
        assert manager.load().tick_interval == 1.0

    # * Test reset restores defaults
    def test_reset(self, tmp_path):
        manager = SettingsManager(tmp_path / "config.json")
        manager.set("weight_unit", "LBS")
        manager.reset()
        assert manager.list_settings()["weight_unit"] == "KG"

    # * Test assigning config_path drops the cached settings
    def test_config_path_setter_resets_cache(self, tmp_path):
        first = tmp_path / "a.json"
        second = tmp_path / "b.json"
        second.write_text(json.dumps({"default_rest_seconds": 30}))

        manager = SettingsManager(first)
        assert manager.load().default_rest_seconds == 90
        manager.config_path = second
        assert manager.load().default_rest_seconds == 30

    # * Test unknown keys read as None
    def test_get_unknown(self, tmp_path):
        assert SettingsManager(tmp_path / "c.json").get("nope") is None


def test_default_config_path_under_home(isolate_config):
    assert SettingsManager().config_path == Path(isolate_config) / ".justlog" / "config.json"
