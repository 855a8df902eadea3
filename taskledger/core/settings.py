"""Load runtime settings from an optional YAML file and the environment (with fallbacks)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path

import yaml

from .config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_WORKLOG_PATH,
    ENV_CONFIG_PATH,
    ENV_JIRA_SERVER,
    ENV_JIRA_TOKEN,
    JIRA_DEFAULT_SERVER,
    TIMEZONE,
)

logger = logging.getLogger(__name__)

_CACHE: dict[str, Settings] = {}


@dataclass(slots=True, frozen=True)
class Settings:
    jira_server: str = JIRA_DEFAULT_SERVER
    jira_token: str = ""
    timezone: str = TIMEZONE
    worklog_path: str = DEFAULT_WORKLOG_PATH

    def __repr__(self) -> str:
        token = "***" if self.jira_token else ""
        return (
            f"Settings(jira_server={self.jira_server!r}, jira_token={token!r}, "
            f"timezone={self.timezone!r}, worklog_path={self.worklog_path!r})"
        )


def _config_path(path: str | Path | None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _from_file(yaml_path: Path) -> dict[str, str]:
    if not yaml_path.exists():
        return {}
    try:
        data = yaml.safe_load(yaml_path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", yaml_path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a mapping", yaml_path)
        return {}
    known = {"jira_server", "jira_token", "timezone", "worklog_path"}
    return {k: str(v) for k, v in data.items() if k in known and v is not None}


def load_settings(path: str | Path | None = None, *, refresh: bool = False) -> Settings:
    """Resolve settings: defaults <- YAML file <- environment.

    The YAML file is ``path`` if given, else ``$TASKLEDGER_CONFIG``, else
    ``~/.config/taskledger/config.yaml``. A missing or invalid file falls back
    to defaults.
    """
    yaml_path = _config_path(path)
    cache_key = str(yaml_path)
    if not refresh and cache_key in _CACHE:
        return _CACHE[cache_key]

    settings = replace(Settings(), **_from_file(yaml_path))
    env_server = os.environ.get(ENV_JIRA_SERVER)
    env_token = os.environ.get(ENV_JIRA_TOKEN)
    if env_server:
        settings = replace(settings, jira_server=env_server)
    if env_token:
        settings = replace(settings, jira_token=env_token)

    logger.debug("Resolved %r from %s", settings, yaml_path)
    _CACHE[cache_key] = settings
    return settings


def clear_settings_cache() -> None:
    _CACHE.clear()
