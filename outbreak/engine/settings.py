"""Runtime settings loaded from settings.json."""
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Tuple

SETTINGS_PATH = Path("settings.json")

DEFAULT_RESOLUTION = (1280, 720)
DEFAULT_MAX_FPS = 60
DEFAULT_STARTING_BALANCE = 500


def read_settings_file(path: Path) -> Dict[str, Any]:
    """Return the top-level JSON object in ``path``, or ``{}`` if unusable.

    Logging, bindings and game settings all share settings.json, so every
    reader goes through here and a bad file only costs the defaults.
    """

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def int_setting(data: Dict[str, Any], key: str, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool):
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


@dataclass(frozen=True)
class GameSettings:
    """Display and economy settings for a session.

    Each key falls back to its own default when missing or unparseable; a
    missing or malformed file yields the defaults outright so the game always
    boots.
    """

    resolution: Tuple[int, int] = DEFAULT_RESOLUTION
    max_fps: int = DEFAULT_MAX_FPS
    starting_balance: int = DEFAULT_STARTING_BALANCE
    fullscreen: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameSettings":
        resolution = data.get("resolution", DEFAULT_RESOLUTION)
        try:
            width, height = (int(value) for value in resolution)
        except (TypeError, ValueError, OverflowError):
            width, height = DEFAULT_RESOLUTION
        fullscreen = data.get("fullscreen", False)
        return cls(
            resolution=(max(0, width), max(0, height)),
            max_fps=max(1, int_setting(data, "maxFps", DEFAULT_MAX_FPS)),
            starting_balance=int_setting(data, "startingBalance", DEFAULT_STARTING_BALANCE),
            fullscreen=fullscreen if isinstance(fullscreen, bool) else False,
        )

    @classmethod
    def load(cls, path: Path = SETTINGS_PATH) -> "GameSettings":
        return cls.from_dict(read_settings_file(path))


__all__ = ["GameSettings", "SETTINGS_PATH", "read_settings_file", "int_setting"]
