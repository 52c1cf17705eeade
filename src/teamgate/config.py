from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings

from teamgate.exceptions import ConfigError

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_instance: TeamgateConfig | None = None

DEFAULT_RESERVED_TEAM_NAMES = (
    "signup",
    "login",
    "admin",
    "channel",
    "post",
    "api",
    "oauth",
    "error",
    "help",
    "plugins",
    "landing",
    "mfa",
)


class TeamgateConfig(BaseSettings):
    model_config = {"env_prefix": "TEAMGATE_"}

    wakeup_check_interval: float = 30.0
    wakeup_threshold: float = 60.0
    unread_check_seconds: float = 10.0
    reserved_team_names: list[str] = list(DEFAULT_RESERVED_TEAM_NAMES)
    group_page_size: int = 60
    state_dir: str = str(Path.home() / ".teamgate")
    discard_stale_channel_results: bool = False
    error_path: str = "/error?type=team_not_found"
    mfa_setup_path: str = "/mfa/setup"

    def is_reserved(self, slug: str) -> bool:
        return slug in self.reserved_team_names


def get_config() -> TeamgateConfig:
    global _instance
    if _instance is None:
        with _lock:
            if _instance is None:
                _instance = TeamgateConfig()
    return _instance


def reset_config() -> None:
    global _instance
    with _lock:
        _instance = None


def load_config(path: str | Path) -> TeamgateConfig:
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")
    if path.suffix not in {".yaml", ".yml", ".json"}:
        raise ConfigError(f"Unsupported config format: {path.suffix}")
    raw = path.read_text(encoding="utf-8")
    try:
        if path.suffix == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Could not parse config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
    if "teamgate" in data and isinstance(data["teamgate"], dict):
        data = data["teamgate"]
    try:
        config = TeamgateConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {path}: {exc}") from exc
    logger.info("Loaded teamgate config from %s", path)
    return config
