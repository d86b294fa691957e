"""Configuration service for the todotxt command line.

``ConfigService`` owns ``config.json`` in the platform config directory:
loading it (creating defaults on first run), saving it, dot-key access for
``todotxt config get/set`` and resolving the todo.txt file to work on.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir, user_data_dir
from pydantic import BaseModel

from todotxt_cli.models.config_models import AppConfig
from todotxt_cli.models.filter import FilterPreset

APP_NAME = "todotxt_cli"
DEFAULT_TODO_FILE = "todo.txt"


class ConfigService:
    """Load, save and query the application configuration."""

    def __init__(self):
        self.config_dir = Path(user_config_dir(APP_NAME))
        self.config_path = self.config_dir / "config.json"
        self.data_dir = Path(user_data_dir(APP_NAME))

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, writing defaults on first run."""
        if self._config is not None:
            return self._config

        try:
            with open(self.config_path, encoding="utf-8") as f:
                self._config = AppConfig.model_validate_json(f.read())
        except FileNotFoundError:
            self._config = AppConfig()
            self.save_config()
        except Exception as e:
            raise RuntimeError(f"Failed to load config: {e}") from e

        return self._config

    def save_config(self) -> None:
        """Write the current configuration to ``config.json``."""
        if self._config is None:
            raise RuntimeError("No configuration to save")

        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                f.write(self._config.model_dump_json(indent=4))
            # may hold an API key
            self.config_path.chmod(0o600)
        except Exception as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> AppConfig:
        """Replace the configuration with defaults."""
        self._config = AppConfig()
        self.save_config()
        return self._config

    def get(self, key: str) -> Any:
        """Get a value by dot-separated key, e.g. ``ai.retry.max_retries``.

        Raises:
            KeyError: If any part of the key does not exist
        """
        value: Any = self.config
        for part in key.split("."):
            if isinstance(value, BaseModel) and part in type(value).model_fields:
                value = getattr(value, part)
            elif isinstance(value, dict) and part in value:
                value = value[part]
            else:
                raise KeyError(key)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-separated key and save.

        The result is validated as a whole, so a bad value raises
        ``pydantic.ValidationError`` and leaves the configuration unchanged.
        """
        self.get(key)
        parts = key.split(".")
        data = self.config.model_dump()
        current = data
        for part in parts[:-1]:
            current = current[part]
        current[parts[-1]] = value

        self._config = AppConfig.model_validate(data)
        self.save_config()

    def get_todo_path(self, override: str | Path | None = None) -> Path:
        """Resolve the todo.txt file: explicit override, configured file, data dir."""
        if override:
            return Path(override).expanduser()
        if self.config.todo_file:
            return Path(self.config.todo_file).expanduser()
        return self.data_dir / DEFAULT_TODO_FILE

    def save_presets(self, presets: list[FilterPreset]) -> None:
        self.config.filter_presets = list(presets)
        self.save_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Get a cached ConfigService instance."""
    config_service = ConfigService()
    config_service.load_config()
    return config_service
