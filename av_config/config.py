"""Settings file for the av-config service.

The file is JSON, looked up as ``av-config.config.json`` in the working
directory unless a path is given. Only ``db_path`` is required; ``host``,
``port`` and ``log_level`` fall back to ``DEFAULTS``.
"""

import json
from pathlib import Path
from typing import Any


class ConfigError(Exception):
    """The settings file is missing, malformed, or has a bad value."""


CONFIG_FILENAME = "av-config.config.json"

REQUIRED_FIELDS = ["db_path"]

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

DEFAULTS: dict[str, Any] = {
    "host": "127.0.0.1",
    "port": 8000,
    "log_level": "INFO",
}


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Read the settings file and return it with defaults filled in.

    ``db_path`` has ``~`` expanded and ``log_level`` is upper-cased.
    Raises ConfigError for anything that would stop the service starting.
    """
    path = Path(config_path) if config_path is not None else Path.cwd() / CONFIG_FILENAME
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        settings = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(settings, dict):
        raise ConfigError(f"Expected a JSON object in {path}")

    _check(settings)
    return {
        **DEFAULTS,
        **settings,
        "db_path": str(Path(settings["db_path"]).expanduser()),
        "log_level": str(settings.get("log_level", DEFAULTS["log_level"])).upper(),
    }


def _check(settings: dict[str, Any]) -> None:
    missing = [name for name in REQUIRED_FIELDS if name not in settings]
    if missing:
        raise ConfigError(
            f"Missing required config field: '{missing[0]}'. "
            f"See {CONFIG_FILENAME}.example for the expected format."
        )
    if not isinstance(settings["db_path"], str):
        raise ConfigError(f"'db_path' must be a string, got {settings['db_path']!r}")

    port = settings.get("port", DEFAULTS["port"])
    if not isinstance(port, int) or isinstance(port, bool):
        raise ConfigError(f"'port' must be an integer, got {port!r}")

    level = str(settings.get("log_level", DEFAULTS["log_level"]))
    if level.upper() not in LOG_LEVELS:
        raise ConfigError(
            f"'log_level' must be one of {', '.join(LOG_LEVELS)}, got {level!r}"
        )
