"""
================================================================================
Configuration Loader
================================================================================

Settings for the demoqa UI harness, read from config/config.yaml and
overridden per key by environment variables.

A dotted key maps to an environment variable by upper-casing it and
replacing dots with underscores (wait.timeout -> WAIT_TIMEOUT).

Plain get() returns whatever is stored. The typed accessors (get_float,
get_int, get_bool, get_choice) reject values the harness cannot run with
and raise ConfigurationError naming the offending key.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import yaml
from loguru import logger


# Default configuration file path (repository root /config)
DEFAULT_CONFIG_PATH = (
    Path(__file__).parent.parent.parent.parent / "config" / "config.yaml"
)

# Load events accepted by page.goto / reload / go_back / go_forward
WAIT_UNTIL_EVENTS = ("commit", "domcontentloaded", "load", "networkidle")

BROWSER_TYPES = ("chromium", "firefox", "webkit")

_TRUE_WORDS = ("true", "1", "yes", "on")
_FALSE_WORDS = ("false", "0", "no", "off")


class ConfigurationError(Exception):
    """Raised when configuration loading or access fails."""
    pass


def env_name(key: str) -> str:
    """Environment variable that overrides ``key``."""
    return key.upper().replace(".", "_")


def read_config_file(path: Path) -> Dict[str, Any]:
    """
    Parse a YAML configuration file into a mapping.

    A missing file yields an empty mapping; malformed YAML, or a document
    whose top level is not a mapping, raises ConfigurationError.
    """
    if not path.exists():
        logger.warning(
            f"Configuration file not found: {path}. "
            f"Using defaults and environment variables only."
        )
        return {}

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a mapping, got {type(data).__name__}"
        )
    logger.debug(f"Loaded configuration from: {path}")
    return data


def _coerce(value: str, reference: Any) -> Any:
    # Env values are strings; shape them like the default when possible
    if isinstance(reference, bool):
        return value.strip().lower() in _TRUE_WORDS
    for kind in (int, float):
        if isinstance(reference, kind):
            try:
                return kind(value)
            except ValueError:
                return value
    return value


class ConfigLoader:
    """
    Process-wide harness settings.

    Priority (highest first): environment variable, YAML file, default.

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.base_url", "https://demoqa.com")
        'https://demoqa.com'
        >>> config.get_float("wait.poll_interval", 0.25, positive=True)
        0.25
        >>> config.get_choice("navigation.wait_until", WAIT_UNTIL_EVENTS, "domcontentloaded")
        'domcontentloaded'
    """

    _instance: Optional["ConfigLoader"] = None

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        # One instance per process: every session and page shares timeouts
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Args:
            config_path: YAML file to read. Falls back to $UI_CONFIG_FILE,
                then DEFAULT_CONFIG_PATH.
        """
        if getattr(self, "_initialized", False):
            return

        self.path = Path(config_path or os.environ.get("UI_CONFIG_FILE") or DEFAULT_CONFIG_PATH)
        self._data = read_config_file(self.path)
        self._initialized = True

    # =========================================================================
    # Raw lookups
    # =========================================================================

    def _env_value(self, key: str) -> Optional[str]:
        return os.environ.get(env_name(key))

    def _file_value(self, key: str) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node

    def get(self, key: str, default: Any = None) -> Any:
        """
        Value stored under a dotted ``key``, or ``default``.

        Environment values are converted to the type of ``default`` when
        they parse; otherwise the raw string is returned.
        """
        env_value = self._env_value(key)
        if env_value is not None:
            return _coerce(env_value, default)

        value = self._file_value(key)
        return default if value is None else value

    # =========================================================================
    # Typed accessors
    # =========================================================================

    def get_float(self, key: str, default: float, positive: bool = False) -> float:
        value = self.get(key, default)
        if isinstance(value, bool):
            raise ConfigurationError(f"{key} must be a number, got {value!r}")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{key} must be a number, got {value!r}") from None
        if positive and number <= 0:
            raise ConfigurationError(f"{key} must be greater than 0, got {number}")
        return number

    def get_int(self, key: str, default: int, positive: bool = False) -> int:
        value = self.get(key, default)
        if isinstance(value, bool) or not isinstance(value, (int, str)):
            raise ConfigurationError(f"{key} must be an integer, got {value!r}")
        try:
            number = int(value)
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {value!r}") from None
        if positive and number <= 0:
            raise ConfigurationError(f"{key} must be greater than 0, got {number}")
        return number

    def get_bool(self, key: str, default: bool) -> bool:
        env_value = self._env_value(key)
        value = env_value if env_value is not None else self._file_value(key)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        word = str(value).strip().lower()
        if word in _TRUE_WORDS:
            return True
        if word in _FALSE_WORDS:
            return False
        raise ConfigurationError(f"{key} must be a boolean, got {value!r}")

    def get_choice(self, key: str, choices: Sequence[str], default: str) -> str:
        value = self.get(key, default)
        if value not in choices:
            raise ConfigurationError(
                f"{key} must be one of {', '.join(choices)}; got {value!r}"
            )
        return value

    @classmethod
    def reset(cls) -> None:
        """Forget the process-wide instance so the next one re-reads the file."""
        cls._instance = None


__all__ = [
    "BROWSER_TYPES",
    "ConfigLoader",
    "ConfigurationError",
    "DEFAULT_CONFIG_PATH",
    "WAIT_UNTIL_EVENTS",
    "env_name",
    "read_config_file",
]
