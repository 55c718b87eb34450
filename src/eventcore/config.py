from typing import Any, Optional
import json
import os

from loguru import logger
from pydantic import BaseModel, ValidationError

from .events.aware import DispatcherAware
from .events.constants import Events
from .events.event import Event
from .exceptions import ConfigError
from .settings import AppConfig, DispatcherSettings, LoggingSettings

__all__ = ["ConfigManager", "AppConfig", "DispatcherSettings", "LoggingSettings"]


# --- Manager ---
class ConfigManager(DispatcherAware):
    """
    Manages eventcore configuration with persistence and change events.

    JSON files are read and written; TOML files are read-only. Without a
    filepath the configuration lives in memory only.

    Usage:
        config = ConfigManager("eventcore.json")
        dispatcher = EventDispatcher(config.data.dispatcher)
        config.set_dispatcher(dispatcher)

        config.update("dispatcher", "suppress_listener_errors", True)  # dispatches config.changed
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = AppConfig()
        self._load()

    @property
    def data(self) -> AppConfig:
        return self._data

    @property
    def is_writable(self) -> bool:
        return bool(self.filepath) and not self.filepath.endswith(".toml")

    def get(self, section: str, key: str) -> Any:
        section_obj = self._section(section)
        if key not in type(section_obj).model_fields:
            raise ConfigError(f"Invalid key: {key} in section {section}")
        return getattr(section_obj, key)

    def update(self, section: str, key: str, value: Any) -> None:
        """Update a setting, validate via Pydantic, autosave, and dispatch config.changed."""
        section_obj = self._section(section)
        if key not in type(section_obj).model_fields:
            raise ConfigError(f"Invalid key: {key} in section {section}")

        previous = getattr(section_obj, key)
        try:
            setattr(section_obj, key, value)
        except ValidationError as e:
            raise ConfigError(f"Invalid value for {section}.{key}: {value!r}") from e

        if self.is_writable:
            try:
                self._write()
            except ConfigError:
                setattr(section_obj, key, previous)
                raise
            self._announce(Events.CONFIG_SAVED, path=self.filepath)

        logger.debug(f"Config {section}.{key} = {value!r}")
        self._announce(Events.CONFIG_CHANGED, section=section, key=key, value=getattr(section_obj, key))

    def reload(self) -> None:
        """Re-read the config file and dispatch config.loaded."""
        self._load()
        self._announce(Events.CONFIG_LOADED, path=self.filepath)

    def save(self) -> None:
        """
        Persist current config to the JSON file and dispatch config.saved.

        Raises:
            ConfigError: If the config has no writable path or the write fails
        """
        self._write()
        self._announce(Events.CONFIG_SAVED, path=self.filepath)

    def _write(self) -> None:
        if not self.is_writable:
            raise ConfigError(f"Config is not writable: {self.filepath!r}")
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except OSError as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
            raise ConfigError(f"Failed to save config to {self.filepath}: {e}") from e

    def _section(self, section: str) -> BaseModel:
        section_obj = getattr(self._data, section, None)
        if not isinstance(section_obj, BaseModel):
            raise ConfigError(f"Invalid section: {section}")
        return section_obj

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if not self.filepath or not os.path.isfile(self.filepath):
            return
        try:
            if self.filepath.endswith('.toml'):
                import tomllib
                with open(self.filepath, "rb") as f:
                    raw = tomllib.load(f)
            else:
                with open(self.filepath, "r", encoding="utf-8") as f:
                    raw = json.load(f)
            loaded = AppConfig.model_validate(raw)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to load config from {self.filepath}: {e}")
            return

        # Update sections in place so dispatchers holding them see new values.
        for name in AppConfig.model_fields:
            section_obj = getattr(self._data, name)
            for key in type(section_obj).model_fields:
                setattr(section_obj, key, getattr(getattr(loaded, name), key))
        logger.info(f"Config loaded from {self.filepath}")

    def _announce(self, event_name: str, **arguments: Any) -> None:
        if self.dispatcher is not None:
            self.dispatch(Event(event_name, target=self, arguments=arguments))
