"""Input mapping and rebind support."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

import pygame

from outbreak.engine.settings import read_settings_file

DEFAULT_BINDINGS = {
    "buy_1": ["K_1"],
    "buy_2": ["K_2"],
    "buy_3": ["K_3"],
    "buy_4": ["K_4"],
    "buy_5": ["K_5"],
    "buy_6": ["K_6"],
    "buy_7": ["K_7"],
    "advance_day": ["K_SPACE"],
    "declare_victory": ["K_v"],
    "declare_defeat": ["K_x"],
    "confirm": ["K_RETURN"],
    "quit": ["K_ESCAPE"],
}


def _copy_bindings(source: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {action: list(keys) for action, keys in source.items()}


@dataclass
class InputBindings:
    """Runtime structure representing current bindings."""

    actions: Dict[str, List[str]] = field(default_factory=lambda: _copy_bindings(DEFAULT_BINDINGS))

    @classmethod
    def load(cls, path: Path) -> "InputBindings":
        overrides = read_settings_file(path).get("bindings")
        actions = _copy_bindings(DEFAULT_BINDINGS)
        if isinstance(overrides, dict):
            for action, keys in overrides.items():
                if isinstance(keys, list) and all(isinstance(key, str) for key in keys):
                    actions[str(action)] = list(keys)
        return cls(actions=actions)

    def save(self, path: Path) -> None:
        """Write bindings back, keeping any other keys already in the file."""

        data: Dict[str, object] = dict(read_settings_file(path))
        data["bindings"] = self.actions
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")


class InputMapper:
    """Translates key presses into bound action names."""

    def __init__(self, bindings: Optional[InputBindings] = None) -> None:
        self.bindings = bindings or InputBindings()
        self._key_codes: Dict[int, List[str]] = {}
        for action, keys in self.bindings.actions.items():
            for key_name in keys:
                code = getattr(pygame, key_name, None)
                if isinstance(code, int):
                    self._key_codes.setdefault(code, []).append(action)

    def actions_for(self, event: pygame.event.Event) -> List[str]:
        if event.type != pygame.KEYDOWN:
            return []
        return list(self._key_codes.get(event.key, []))

    def is_action(self, event: pygame.event.Event, name: str) -> bool:
        return name in self.actions_for(event)


__all__ = ["InputMapper", "InputBindings", "DEFAULT_BINDINGS"]
