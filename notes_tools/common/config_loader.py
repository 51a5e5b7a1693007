"""
================================================================================
Suite Configuration
================================================================================

Settings of the notes application suite, read from `config/config.yaml`
and overridable per run through environment variables.

Lookup order for `get("ui.timeouts.probe", 2000)`:
    1. UI_TIMEOUTS_PROBE environment variable, coerced to the default's type
    2. ui -> timeouts -> probe in the YAML file
    3. The default

Keys used by the suite:
    ui.base_url, ui.browser, ui.headless, ui.live,
    ui.timeouts.{probe,action,message,navigation},
    auth.email, auth.password, logging.*

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

TRUE_VALUES = ("true", "1", "yes", "on")

_MISSING = object()


class ConfigurationError(Exception):
    """Raised when the configuration file or an override is unusable."""
    pass


def env_key(key: str) -> str:
    """Environment variable overriding a dotted key (ui.base_url -> UI_BASE_URL)."""
    return key.upper().replace(".", "_")


class ConfigLoader:
    """
    Process-wide view of the suite configuration.

    Loaded once; `reset()` drops the cached instance so tests can point it
    at another file.
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        if self._initialized:
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._settings: Dict[str, Any] = {}
        self._load()
        self._initialized = True

    def _load(self) -> None:
        if not self._config_path.exists():
            logger.warning(
                f"No configuration file at {self._config_path}, "
                f"using defaults and environment overrides"
            )
            self._settings = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self._config_path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(
                f"Configuration root must be a mapping, got {type(loaded).__name__}"
            )
        self._settings = loaded
        logger.debug(f"Loaded configuration from: {self._config_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value of a dotted key, or `default`.

        Raises:
            ConfigurationError: An environment override cannot be coerced
                to the type of a numeric default
        """
        raw = os.environ.get(env_key(key))
        if raw is not None:
            return self._coerce(key, raw, default)

        value = self._from_file(key)
        return default if value is _MISSING else value

    def get_timeout(self, key: str, default: int) -> int:
        """
        A millisecond budget; must be a non-negative integer.

        Raises:
            ConfigurationError: The configured value is not a valid budget
        """
        value = self.get(key, default)
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError(
                f"{key} must be a non-negative number of milliseconds, got {value!r}"
            )
        return value

    def reload(self) -> None:
        """Re-read the configuration file."""
        self._load()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _from_file(self, key: str) -> Any:
        node: Any = self._settings
        for part in key.split("."):
            if not isinstance(node, dict) or node.get(part) is None:
                return _MISSING
            node = node[part]
        return node

    @staticmethod
    def _coerce(key: str, raw: str, default: Any) -> Any:
        """Environment strings take the type of the default."""
        if isinstance(default, bool):
            return raw.strip().lower() in TRUE_VALUES
        if isinstance(default, (int, float)):
            try:
                return type(default)(raw.strip())
            except ValueError:
                raise ConfigurationError(
                    f"{env_key(key)}={raw!r} is not a valid {type(default).__name__} for {key}"
                ) from None
        return raw

    @classmethod
    def reset(cls) -> None:
        """Forget the loaded configuration."""
        cls._instance = None


def get_config(key: str, default: Any = None) -> Any:
    """Shortcut for `ConfigLoader().get(key, default)`."""
    return ConfigLoader().get(key, default)


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "env_key",
    "get_config",
]
