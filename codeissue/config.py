"""Settings loading for codeissue."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_NAME = "codeissue"
SETTINGS_FILE = "settings.json"
DEFAULT_PROJECT = "go"


@dataclass
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass
class AppConfig:
    email: str
    password: str = field(repr=False)
    project: str = DEFAULT_PROJECT
    timeout: Optional[float] = None
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    settings_dir: Optional[str] = None


def settings_dir(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Return the per-user directory holding settings and drafts."""
    env = os.environ if environ is None else environ
    if sys.platform.startswith("win"):
        return Path(env.get("USERPROFILE", ""), "Application Data", APP_NAME)
    return Path(env.get("HOME", ""), ".config", APP_NAME)


def default_settings_path() -> Path:
    return settings_dir() / SETTINGS_FILE


def _resolve_path(base_path: Path, target_path: str) -> str:
    """Resolve a path relative to the settings file if it's not absolute."""
    target = Path(target_path).expanduser()
    if target.is_absolute():
        return str(target)
    return str((base_path.parent / target).resolve())


def _required_string(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ConfigError(f"failed to get {key} from your {SETTINGS_FILE}")
    return value


def parse_settings(path: str | Path) -> AppConfig:
    """Parse the JSON settings file."""
    settings_path = Path(path).expanduser().resolve()
    if not settings_path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    logger.info("Loading settings from %s", settings_path)
    try:
        data = json.loads(settings_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigError(f"failed to unmarshal {SETTINGS_FILE}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{SETTINGS_FILE} must contain a JSON object")

    email = _required_string(data, "email")
    password = _required_string(data, "password")

    project = data.get("project", DEFAULT_PROJECT)
    if not isinstance(project, str) or not project:
        raise ConfigError("project must be a non-empty string")

    timeout = data.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("timeout must be a positive number of seconds")
        timeout = float(timeout)

    logging_config = LoggingConfig()
    log_node = data.get("logging")
    if log_node is not None:
        if not isinstance(log_node, dict):
            raise ConfigError("logging must be a JSON object")
        logging_config.level = log_node.get("level", logging_config.level)
        log_file = log_node.get("file")
        if log_file:
            logging_config.file = _resolve_path(settings_path, log_file)

    return AppConfig(
        email=email,
        password=password,
        project=project,
        timeout=timeout,
        logging=logging_config,
        settings_dir=str(settings_path.parent),
    )
