"""Configuration service for joinboard.

Loads and saves ``config.json`` from the platform config directory. A
missing file yields the defaults; a corrupt one falls back to the defaults
without overwriting the file.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

from platformdirs import user_config_dir
from pydantic import BaseModel, ValidationError

from joinboard.models.config_models import AppConfig
from joinboard.utils.logger import get_logger

TOKEN_ENV_VAR = "JOINBOARD_API_TOKEN"


class ConfigService:
    """Service for loading, querying and persisting application configuration."""

    def __init__(self):
        """Initialize the config service."""
        self.config_dir = Path(user_config_dir("joinboard"))
        self.config_path = self.config_dir / "config.json"
        self.config_dir.mkdir(parents=True, exist_ok=True)

        self._config: AppConfig | None = None

    @property
    def config(self) -> AppConfig:
        """Get or load the current configuration."""
        if self._config is None:
            self._config = self.load_config()
        return self._config

    def load_config(self) -> AppConfig:
        """Load configuration from disk, applying environment overrides."""
        try:
            config = AppConfig.model_validate_json(
                self.config_path.read_text(encoding="utf-8")
            )
        except FileNotFoundError:
            config = AppConfig()
        except (ValidationError, ValueError) as e:
            get_logger("config").error(
                "invalid config at %s, using defaults: %s", self.config_path, e
            )
            config = AppConfig()

        token = os.environ.get(TOKEN_ENV_VAR)
        if token:
            config.api.token = token
        return config

    def save_config(self) -> None:
        """Save the current configuration."""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            self.config_path.write_text(
                self.config.model_dump_json(indent=4), encoding="utf-8"
            )
            self.config_path.chmod(0o600)
        except OSError as e:
            raise RuntimeError(f"Failed to save config: {e}") from e

    def reset_config(self) -> None:
        """Drop the stored configuration and revert to defaults."""
        if self.config_path.exists():
            self.config_path.unlink()
        self._config = AppConfig()

    def get(self, key: str) -> Any:
        """Get a configuration value by dot-separated key, e.g. ``api.endpoint``."""
        value: Any = self.config
        for part in key.split("."):
            if not isinstance(value, BaseModel) or part not in type(value).model_fields:
                return None
            value = getattr(value, part)
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a configuration value by dot-separated key and save.

        Raises:
            KeyError: If the key does not name a configuration field
        """
        *parents, leaf = key.split(".")
        target: Any = self.config
        for part in parents:
            if not isinstance(target, BaseModel) or part not in type(target).model_fields:
                raise KeyError(key)
            target = getattr(target, part)
        if not isinstance(target, BaseModel) or leaf not in type(target).model_fields:
            raise KeyError(key)

        data = target.model_dump()
        data[leaf] = value
        validated = type(target).model_validate(data)
        setattr(target, leaf, getattr(validated, leaf))
        self.save_config()


@lru_cache(maxsize=1)
def get_config_service() -> ConfigService:
    """Return the process-wide ConfigService."""
    return ConfigService()
