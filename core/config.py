"""Settings: YAML file + environment overrides for TaskFlow."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from core.commands import ID_STRATEGIES
from core.fileio import read_yaml
from core.models import Filter

VALID_FILTERS = {f.value for f in Filter}
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

# env var -> settings key
ENV_OVERRIDES = {
    "TASKFLOW_ID_STRATEGY": "id_strategy",
    "TASKFLOW_LOG_LEVEL": "log_level",
    "TASKFLOW_USERNAME": "web_username",
    "TASKFLOW_PASSWORD": "web_password",
}


def config_path() -> Path:
    """Settings file location, from TASKFLOW_CONFIG or the user config dir."""
    return Path(
        os.environ.get("TASKFLOW_CONFIG", str(Path.home() / ".config" / "taskflow" / "settings.yaml"))
    ).expanduser().resolve()


@dataclass
class Settings:
    id_strategy: str = "counter"
    initial_filter: str = "all"
    log_level: str = "INFO"
    log_file: Path | None = None
    web_username: str = ""
    web_password: str = ""
    web_host: str = "127.0.0.1"
    web_port: int = 8000

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        web = d.get("web") or {}
        log_file = d.get("log_file")
        return cls(
            id_strategy=str(d.get("id_strategy", "counter")).strip().lower(),
            initial_filter=str(d.get("initial_filter", "all")).strip().lower(),
            log_level=str(d.get("log_level", "INFO")).strip().upper(),
            log_file=Path(log_file).expanduser() if log_file else None,
            web_username=str(d.get("web_username", web.get("username", ""))),
            web_password=str(d.get("web_password", web.get("password", ""))),
            web_host=str(web.get("host", "127.0.0.1")),
            web_port=int(web.get("port", 8000)),
        )

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.web_username and self.web_password)


def validate_settings(d: dict[str, Any]) -> list[str]:
    """Validate raw settings and return list of errors (empty if valid)."""
    errors = []
    if "id_strategy" in d and str(d["id_strategy"]).strip().lower() not in ID_STRATEGIES:
        errors.append(f"Invalid id_strategy: {d['id_strategy']}")
    if "initial_filter" in d and str(d["initial_filter"]).strip().lower() not in VALID_FILTERS:
        errors.append(f"Invalid initial_filter: {d['initial_filter']}")
    if "log_level" in d and str(d["log_level"]).strip().upper() not in VALID_LOG_LEVELS:
        errors.append(f"Invalid log_level: {d['log_level']}")
    web = d.get("web")
    if web is not None:
        if not isinstance(web, dict):
            errors.append("web must be a mapping")
        elif "port" in web:
            port = web["port"]
            if not isinstance(port, int) or isinstance(port, bool) or not 0 < port < 65536:
                errors.append("web.port must be integer 1-65535")
    return errors


def load_settings(path: Path | None = None) -> Settings:
    """Load settings.yaml, apply env overrides, validate."""
    if path is None:
        path = config_path()
    data = read_yaml(path)
    for env_name, key in ENV_OVERRIDES.items():
        value = os.environ.get(env_name)
        if value:
            data[key] = value
    errors = validate_settings(data)
    if errors:
        raise ValueError("; ".join(errors))
    return Settings.from_dict(data)
