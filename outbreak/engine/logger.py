"""Game logging utilities with channel toggles."""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from outbreak.engine.settings import SETTINGS_PATH, read_settings_file

DEFAULT_CHANNELS = {
    "economy": True,
    "outcome": True,
    "ui": False,
    "input": False,
}

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def parse_level(value: Any, default: int = logging.INFO) -> int:
    """Accept a level name (any case) or a numeric level; else ``default``."""

    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        return _LEVELS.get(value.strip().upper(), default)
    return default


def parse_channels(value: Any) -> Dict[str, bool]:
    """Overlay a ``logChannels`` mapping on the defaults, ignoring other shapes."""

    channels = DEFAULT_CHANNELS.copy()
    if isinstance(value, dict):
        for name, enabled in value.items():
            if isinstance(enabled, bool):
                channels[str(name)] = enabled
    return channels


@dataclass
class LoggerConfig:
    """Level and channel switches read from the ``logLevel``/``logChannels`` keys."""

    level: int = logging.INFO
    channels: Dict[str, bool] = field(default_factory=lambda: DEFAULT_CHANNELS.copy())

    @classmethod
    def from_settings(cls, settings_path: Path) -> "LoggerConfig":
        data = read_settings_file(settings_path)
        return cls(
            level=parse_level(data.get("logLevel")),
            channels=parse_channels(data.get("logChannels")),
        )


class ChannelLogger:
    """Named gate in front of a stdlib logger; drops records while disabled."""

    def __init__(self, name: str, logger: logging.Logger, enabled: bool) -> None:
        self.name = name
        self.enabled = enabled
        self._logger = logger

    def log(self, level: int, msg: str, *args, **kwargs) -> None:
        if self.enabled:
            self._logger.log(level, msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.log(logging.ERROR, msg, *args, **kwargs)


class GameLogger:
    """Owns the ``outbreak`` logger hierarchy and its channels."""

    def __init__(self, config: LoggerConfig) -> None:
        logging.basicConfig(
            level=config.level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            stream=sys.stdout,
        )
        logging.getLogger("outbreak").setLevel(config.level)
        self._channels: Dict[str, ChannelLogger] = {}
        for name, enabled in config.channels.items():
            self._add(name, enabled)

    def _add(self, name: str, enabled: bool) -> ChannelLogger:
        channel = ChannelLogger(name, logging.getLogger(f"outbreak.{name}"), enabled)
        self._channels[name] = channel
        return channel

    def channel(self, name: str) -> ChannelLogger:
        # Channels not named in settings stay quiet until switched on.
        return self._channels.get(name) or self._add(name, False)

    def set_enabled(self, name: str, enabled: bool) -> None:
        self.channel(name).enabled = enabled

    def channels(self) -> Iterable[str]:
        return self._channels.keys()


def init_logger(settings_path: Optional[Path] = None) -> GameLogger:
    return GameLogger(LoggerConfig.from_settings(settings_path or SETTINGS_PATH))


__all__ = [
    "GameLogger",
    "LoggerConfig",
    "ChannelLogger",
    "init_logger",
    "parse_level",
    "parse_channels",
    "DEFAULT_CHANNELS",
]
