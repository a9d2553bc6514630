"""Scene management utilities."""
from __future__ import annotations

from typing import Dict, Optional, Type

import pygame

from outbreak.engine.logger import ChannelLogger


class Scene:
    """Base scene interface.

    The manager's shared context arrives as keyword arguments to ``on_enter``;
    the base implementation keeps it on ``self.context`` so subclasses can pull
    collaborators with :meth:`require`.
    """

    def __init__(self, manager: "SceneManager") -> None:
        self.manager = manager
        self.context: Dict[str, object] = {}

    def on_enter(self, **kwargs) -> None:
        self.context = dict(kwargs)

    def on_exit(self) -> None:  # pragma: no cover - hooks
        pass

    def require(self, name: str) -> object:
        try:
            return self.context[name]
        except KeyError:
            raise KeyError(f"{type(self).__name__} needs '{name}' in the scene context") from None

    def handle_event(self, event: pygame.event.Event) -> None:
        pass

    def update(self, dt: float) -> None:
        pass

    def render(self, surface: pygame.Surface) -> None:
        pass


class SceneManager:
    """Registers scenes by name and swaps the active one."""

    def __init__(self, log: Optional[ChannelLogger] = None) -> None:
        self._scenes: Dict[str, Type[Scene]] = {}
        self._active: Optional[Scene] = None
        self._active_name: Optional[str] = None
        self._log = log
        self.context: Dict[str, object] = {}

    def register(self, name: str, scene_cls: Type[Scene]) -> None:
        self._scenes[name] = scene_cls

    def activate(self, name: str, **kwargs) -> None:
        if name not in self._scenes:
            raise KeyError(f"Scene '{name}' is not registered")
        previous = self._active_name
        if self._active:
            self._active.on_exit()
        self._active = self._scenes[name](self)
        self._active_name = name
        if self._log:
            self._log.debug("Scene %s -> %s", previous, name)
        self._active.on_enter(**{**self.context, **kwargs})

    def set_context(self, **kwargs) -> None:
        self.context.update(kwargs)

    def active(self) -> Optional[Scene]:
        return self._active

    def active_name(self) -> Optional[str]:
        return self._active_name

    def handle_event(self, event: pygame.event.Event) -> None:
        if self._active:
            self._active.handle_event(event)

    def update(self, dt: float) -> None:
        if self._active:
            self._active.update(dt)

    def render(self, surface: pygame.Surface) -> None:
        if self._active:
            self._active.render(surface)


__all__ = ["Scene", "SceneManager"]
