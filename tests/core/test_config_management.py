# tests/core/test_config_management.py
import json

import pytest

from matcher_shell.core.handlers.config_handler import handle_config
from matcher_shell.core.managers.config_manager import ConfigManager
from matcher_shell.core.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING"
    },
    "loader": {
        "trim_text": False
    },
    "suite": {
        "workers": 1,
        "show_progress": True
    }
}


@pytest.fixture
def config_env(tmp_path, monkeypatch):
    """
    Een fixture die een geïsoleerde testomgeving opzet voor de ConfigManager:
    - Plaatst een nep 'settings.json' bestand in een tijdelijke map.
    - Monkeypatched PathUtils om naar dit bestand te wijzen.
    - Herlaadt na de test de echte configuratie, zodat andere tests er geen last van hebben.
    """
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: settings_file)

    # De singleton is mogelijk al geladen; forceer herladen vanuit ons nep-bestand.
    manager = ConfigManager()
    manager.reset()

    yield manager

    monkeypatch.undo()
    manager.reset()


# --- Tests voor de ConfigManager direct ---

def test_config_manager_is_a_singleton():
    assert ConfigManager() is ConfigManager()


def test_config_manager_load(config_env):
    """Test of de manager de configuratie correct laadt."""
    config = config_env.get_all()
    assert config["debug"]["level"] == "WARNING"
    assert config["suite"]["workers"] == 1


def test_config_manager_get_nested(config_env):
    """Test het ophalen van geneste waarden."""
    assert config_env.get_nested("suite.show_progress") is True
    assert config_env.get_nested("non.existent.key", "default") == "default"
    assert config_env.get_nested("debug.level.deeper", "default") == "default"


def test_config_manager_set_nested(config_env):
    """Test het aanpassen van waarden in het geheugen, inclusief type-casting."""
    config_env.set_nested("debug.level", "INFO")
    assert config_env.get_nested("debug.level") == "INFO"

    config_env.set_nested("new_feature.enabled", "True")
    assert config_env.get_nested("new_feature.enabled") == "True"

    # De originele waarde is een int, dus de string '4' wordt een int.
    config_env.set_nested("suite.workers", "4")
    assert config_env.get_nested("suite.workers") == 4

    # De originele waarde is een bool: 'false' moet False worden, niet bool('false').
    config_env.set_nested("suite.show_progress", "false")
    assert config_env.get_nested("suite.show_progress") is False
    config_env.set_nested("loader.trim_text", "yes")
    assert config_env.get_nested("loader.trim_text") is True


def test_config_manager_set_nested_uncastable_value(config_env):
    """Een waarde die niet te casten is, wordt als string opgeslagen."""
    config_env.set_nested("suite.workers", "many")
    assert config_env.get_nested("suite.workers") == "many"


def test_config_manager_set_nested_through_a_leaf_fails(config_env):
    assert config_env.set_nested("debug.level.sub", "x") is False


def test_config_manager_reset(config_env):
    """Test of de reset-functie de configuratie herlaadt vanaf schijf."""
    config_env.set_nested("debug.level", "DEBUG")
    assert config_env.get_nested("debug.level") == "DEBUG"

    config_env.reset()
    assert config_env.get_nested("debug.level") == "WARNING"


def test_config_manager_missing_file(tmp_path, monkeypatch):
    """Zonder settings.json is de configuratie leeg."""
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: tmp_path / "nope.json")
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_all() == {}
        assert manager.get_nested("loader.trim_text", False) is False
    finally:
        monkeypatch.undo()
        manager.reset()


# --- Tests voor de 'config' command handler ---

def test_handle_config_list(config_env, capsys):
    assert handle_config(["list"]) == 0
    output_json = json.loads(capsys.readouterr().out)
    assert output_json["suite"]["workers"] == 1


def test_handle_config_set(config_env, capsys):
    assert handle_config(["set", "suite.workers", "3"]) == 0
    assert "Config updated: suite.workers = 3" in capsys.readouterr().out
    assert config_env.get_nested("suite.workers") == 3


def test_handle_config_reset(config_env, capsys):
    handle_config(["set", "debug.level", "CRITICAL"])
    assert config_env.get_nested("debug.level") == "CRITICAL"

    assert handle_config(["reset"]) == 0
    assert "Configuration has been reset" in capsys.readouterr().out
    assert config_env.get_nested("debug.level") == "WARNING"


def test_handle_config_usage_errors(config_env, capsys):
    assert handle_config([]) == 1
    assert handle_config(["set", "only.key"]) == 1
    assert handle_config(["bogus"]) == 1
    assert "Unknown command: 'config bogus'" in capsys.readouterr().out


def test_config_manager_corrupt_file(tmp_path, monkeypatch):
    """Een kapot settings.json levert een lege configuratie op, geen crash."""
    broken = tmp_path / "settings.json"
    broken.write_text("{ not json", encoding="utf-8")
    monkeypatch.setattr(PathUtils, "get_settings_file", lambda: broken)
    manager = ConfigManager()
    manager.reset()
    try:
        assert manager.get_all() == {}
    finally:
        monkeypatch.undo()
        manager.reset()
