"""Settings loader for the parse engine.

Reads engine settings from a JSON file and validates it against
``SETTINGS_SCHEMA`` with ``jsonschema``. Without a file the built-in defaults
apply. ``NPM_SEMVER_CACHE_SIZE`` overrides the cache size from either source.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

from .cache import DEFAULT_CACHE_SIZE
from .grammar import MAX_LENGTH, MAX_SAFE_INTEGER
from .options import Options

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV_VAR = "NPM_SEMVER_CONFIG"
CACHE_SIZE_ENV_VAR = "NPM_SEMVER_CACHE_SIZE"

SETTINGS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "cacheSize": {"type": "integer", "minimum": 0},
        "maxLength": {"type": "integer", "minimum": 1},
        "maxSafeInteger": {"type": "integer", "minimum": 0},
        "loose": {"type": "boolean"},
        "includePrerelease": {"type": "boolean"},
    },
}


class ConfigError(RuntimeError):
    """Raised when the settings file cannot be loaded or is invalid."""


@dataclass(slots=True, frozen=True)
class Settings:
    """Engine settings: cache bound, grammar limits and default parse options."""

    cache_size: int = DEFAULT_CACHE_SIZE
    max_length: int = MAX_LENGTH
    max_safe_integer: int = MAX_SAFE_INTEGER
    loose: bool = False
    include_prerelease: bool = False

    @property
    def options(self) -> Options:
        return Options(loose=self.loose, include_prerelease=self.include_prerelease)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Settings:
        """Create settings from a schema-valid mapping."""
        return cls(
            cache_size=data.get("cacheSize", DEFAULT_CACHE_SIZE),
            max_length=data.get("maxLength", MAX_LENGTH),
            max_safe_integer=data.get("maxSafeInteger", MAX_SAFE_INTEGER),
            loose=data.get("loose", False),
            include_prerelease=data.get("includePrerelease", False),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "cacheSize": self.cache_size,
            "maxLength": self.max_length,
            "maxSafeInteger": self.max_safe_integer,
            "loose": self.loose,
            "includePrerelease": self.include_prerelease,
        }


def _format_errors(errors: Iterable) -> str:
    messages = []
    for error in errors:
        pointer = "/".join(str(p) for p in error.path)
        messages.append(f"- {pointer or '<root>'}: {error.message}")
    return "\n".join(messages)


def validate_settings(data: Any) -> None:
    """Validate a decoded settings document.

    Raises:
        ConfigError: listing every schema violation, one per line.
    """
    validator = Draft202012Validator(SETTINGS_SCHEMA)
    errors = sorted(validator.iter_errors(data), key=lambda e: e.path)
    if errors:
        raise ConfigError("Invalid settings:\n" + _format_errors(errors))


def _resolve_config_path(path: Path | str | None = None) -> Path | None:
    """Resolve the settings file path.

    Priority:
    1. Explicit path argument
    2. NPM_SEMVER_CONFIG environment variable
    3. None (built-in defaults)
    """
    if path is not None:
        return Path(path)

    env_path = os.environ.get(CONFIG_PATH_ENV_VAR)
    if env_path:
        return Path(env_path)

    return None


def _cache_size_override() -> int | None:
    raw = os.environ.get(CACHE_SIZE_ENV_VAR, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise ConfigError(f"{CACHE_SIZE_ENV_VAR} must be an integer, got {raw!r}") from exc
    if value < 0:
        raise ConfigError(f"{CACHE_SIZE_ENV_VAR} must be non-negative, got {value}")
    return value


def load_settings(path: Path | str | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Optional path to a JSON settings file. If not provided, uses the
            NPM_SEMVER_CONFIG env var, or the built-in defaults when unset.

    Returns:
        A Settings object.

    Raises:
        ConfigError: If the file cannot be read or contains invalid data.
    """
    config_path = _resolve_config_path(path)

    if config_path is None:
        data: dict[str, Any] = {}
    else:
        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

        try:
            content = config_path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Failed to read configuration file: {exc}") from exc

        try:
            data = json.loads(content)
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Invalid JSON in configuration file: {exc}") from exc

        validate_settings(data)
        logger.debug("Loaded semver settings from %s", config_path)

    override = _cache_size_override()
    if override is not None:
        logger.debug("Cache size overridden by %s=%d", CACHE_SIZE_ENV_VAR, override)
        data = {**data, "cacheSize": override}

    return Settings.from_dict(data)
