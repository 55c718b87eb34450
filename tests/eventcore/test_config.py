import json

import pytest

from src.eventcore.config import ConfigManager
from src.eventcore.events import Event, EventDispatcher, Events
from src.eventcore.exceptions import ConfigError


class TestConfigDefaults:
    """Defaults and lookups."""

    def test_defaults_without_file(self):
        """Test defaults without file."""
        config = ConfigManager()
        assert config.data.dispatcher.allow_duplicates is True
        assert config.data.dispatcher.suppress_listener_errors is False
        assert config.data.logging.debug_mode is True
        assert config.is_writable is False

    def test_missing_file_keeps_defaults_and_writes_nothing(self, tmp_path):
        """Test missing file keeps defaults and writes nothing."""
        path = tmp_path / "eventcore.json"
        config = ConfigManager(str(path))

        assert config.get("dispatcher", "allow_duplicates") is True
        assert not path.exists()

    def test_get_invalid_section_or_key(self):
        """Test get invalid section or key."""
        config = ConfigManager()
        with pytest.raises(ConfigError):
            config.get("nope", "allow_duplicates")
        with pytest.raises(ConfigError):
            config.get("dispatcher", "nope")


class TestConfigLoading:
    """JSON/TOML loading."""

    def test_load_json(self, tmp_path):
        """Test loading a JSON config file."""
        path = tmp_path / "eventcore.json"
        path.write_text(json.dumps({"dispatcher": {"allow_duplicates": False}}), encoding="utf-8")

        config = ConfigManager(str(path))

        assert config.data.dispatcher.allow_duplicates is False
        assert config.data.dispatcher.trace_dispatch is False

    def test_load_toml(self, tmp_path):
        """Test loading a read-only TOML config file."""
        path = tmp_path / "eventcore.toml"
        path.write_text("[dispatcher]\nsuppress_listener_errors = true\n\n[logging]\ndebug_mode = false\n",
                        encoding="utf-8")

        config = ConfigManager(str(path))

        assert config.data.dispatcher.suppress_listener_errors is True
        assert config.data.logging.debug_mode is False
        assert config.is_writable is False

    def test_broken_file_keeps_defaults(self, tmp_path, caplog):
        """Test broken file keeps defaults."""
        path = tmp_path / "eventcore.json"
        path.write_text("{not json", encoding="utf-8")

        config = ConfigManager(str(path))

        assert config.data.dispatcher.allow_duplicates is True
        assert path.read_text(encoding="utf-8") == "{not json"
        assert "Failed to load config" in caplog.text

    def test_invalid_values_keep_defaults(self, tmp_path):
        """Test invalid values keep defaults."""
        path = tmp_path / "eventcore.json"
        path.write_text(json.dumps({"dispatcher": {"allow_duplicates": "sometimes"}}), encoding="utf-8")

        config = ConfigManager(str(path))

        assert config.data.dispatcher.allow_duplicates is True

    def test_reload_updates_live_settings(self, tmp_path):
        """Test reload updates live settings."""
        path = tmp_path / "eventcore.json"
        config = ConfigManager(str(path))
        dispatcher = EventDispatcher(config.data.dispatcher)
        loaded = []
        dispatcher.add_listener(Events.CONFIG_LOADED, lambda e: loaded.append(e.get_argument("path")))
        config.set_dispatcher(dispatcher)

        path.write_text(json.dumps({"dispatcher": {"suppress_listener_errors": True}}), encoding="utf-8")
        config.reload()

        assert dispatcher.settings.suppress_listener_errors is True
        assert loaded == [str(path)]


class TestConfigUpdate:
    """Validated updates, autosave and change events."""

    def test_update_and_autosave(self, tmp_path):
        """Test update writes the JSON file."""
        path = tmp_path / "conf" / "eventcore.json"
        config = ConfigManager(str(path))

        config.update("dispatcher", "trace_dispatch", True)

        assert config.data.dispatcher.trace_dispatch is True
        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["dispatcher"]["trace_dispatch"] is True

    def test_update_in_memory(self):
        """Test update in memory."""
        config = ConfigManager()
        config.update("logging", "log_dir", "var/log")
        assert config.get("logging", "log_dir") == "var/log"

    def test_update_invalid_section_key_value(self):
        """Test bad section, key or value raises ConfigError."""
        config = ConfigManager()
        with pytest.raises(ConfigError):
            config.update("nope", "key", 1)
        with pytest.raises(ConfigError):
            config.update("dispatcher", "nope", 1)
        with pytest.raises(ConfigError):
            config.update("dispatcher", "allow_duplicates", "sometimes")

        assert config.data.dispatcher.allow_duplicates is True

    def test_failed_autosave_rolls_back(self, tmp_path, caplog):
        """A write error leaves memory, disk and listeners unchanged."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")
        config = ConfigManager(str(blocker / "eventcore.json"))
        dispatcher = EventDispatcher()
        names = []
        dispatcher.add_listener(Events.CONFIG_CHANGED, lambda e: names.append(e.name))
        dispatcher.add_listener(Events.CONFIG_SAVED, lambda e: names.append(e.name))
        config.set_dispatcher(dispatcher)

        with pytest.raises(ConfigError, match="Failed to save config"):
            config.update("dispatcher", "trace_dispatch", True)

        assert config.data.dispatcher.trace_dispatch is False
        assert names == []
        assert "Failed to save config" in caplog.text

    def test_save_write_error_is_config_error(self, tmp_path):
        """Explicit save() wraps OS errors too."""
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(ConfigError):
            ConfigManager(str(blocker / "eventcore.json")).save()

    def test_save_not_writable(self, tmp_path):
        """Test save without a JSON path raises ConfigError."""
        with pytest.raises(ConfigError):
            ConfigManager().save()
        with pytest.raises(ConfigError):
            ConfigManager(str(tmp_path / "eventcore.toml")).save()

    def test_update_dispatches_change_event(self):
        """Test update dispatches change event."""
        config = ConfigManager()
        dispatcher = EventDispatcher(config.data.dispatcher)
        received = []
        dispatcher.add_listener(Events.CONFIG_CHANGED, received.append)
        config.set_dispatcher(dispatcher)

        config.update("dispatcher", "suppress_listener_errors", True)

        assert len(received) == 1
        event = received[0]
        assert isinstance(event, Event)
        assert event.target is config
        assert (event.get_argument("section"), event.get_argument("key"), event.get_argument("value")) == \
            ("dispatcher", "suppress_listener_errors", True)
        assert dispatcher.settings.suppress_listener_errors is True

    def test_save_dispatches_saved_event(self, tmp_path):
        """Test save dispatches saved event."""
        path = tmp_path / "eventcore.json"
        config = ConfigManager(str(path))
        dispatcher = EventDispatcher()
        names = []
        dispatcher.add_listener(Events.CONFIG_CHANGED, lambda e: names.append(e.name))
        dispatcher.add_listener(Events.CONFIG_SAVED, lambda e: names.append(e.name))
        config.set_dispatcher(dispatcher)

        config.update("logging", "file_logging", True)

        assert names == [Events.CONFIG_SAVED, Events.CONFIG_CHANGED]

    def test_no_events_without_dispatcher(self):
        """Test no events without dispatcher."""
        config = ConfigManager()
        config.update("logging", "debug_mode", False)
        assert config.dispatcher is None
