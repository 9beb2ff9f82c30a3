from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .classic import DURATIONS
from .words import CONTENT_MODES

log = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).resolve().parent / "typefall.config.json"
CONFIG_ENV = "TYPEFALL_CONFIG"

GAME_MODES = ["classic", "falling"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@dataclass
class Settings:
    game: str = "classic"
    content: str = "words"
    duration_sec: int = 30
    day_night: bool = True
    sound: bool = True
    log_level: str = "WARNING"


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Optional[Path] = None) -> Dict[str, object]:
    path = path or config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        log.warning("ignoring unreadable config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("ignoring config %s: expected a JSON object", path)
        return {}
    return data


def load_settings(path: Optional[Path] = None) -> Settings:
    config = load_config(path)
    settings = Settings()

    game = str(config.get("game", settings.game))
    if game in GAME_MODES:
        settings.game = game

    content = str(config.get("content", settings.content))
    if content in CONTENT_MODES:
        settings.content = content

    try:
        duration = int(config.get("duration_sec", settings.duration_sec))
    except (TypeError, ValueError):
        duration = settings.duration_sec
    if duration in DURATIONS:
        settings.duration_sec = duration

    for key in ("day_night", "sound"):
        value = config.get(key)
        if isinstance(value, bool):
            setattr(settings, key, value)

    level = str(config.get("log_level", settings.log_level)).upper()
    if level in LOG_LEVELS:
        settings.log_level = level
    return settings
