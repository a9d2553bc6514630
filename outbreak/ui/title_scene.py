"""Title screen scene."""
from __future__ import annotations

import pygame

from outbreak.engine.scene import Scene
from outbreak.ui.drawing import TEXT_BRIGHT, TEXT_DIM, blit_centered


class TitleScene(Scene):
    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.font = None

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type != pygame.KEYDOWN:
            return
        mapper = self.context.get("input")
        if mapper is not None and mapper.is_action(event, "quit"):
            pygame.event.post(pygame.event.Event(pygame.QUIT))
            return
        self.require("run").start_run()
        self.manager.activate("upgrades")

    def render(self, surface: pygame.Surface) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 32)
        surface.fill((0, 0, 0))
        title = self.font.render("OUTBREAK RESPONSE", True, TEXT_BRIGHT)
        prompt = self.font.render("Press any key to begin", True, TEXT_DIM)
        blit_centered(surface, title, surface.get_height() // 2 - 100)
        blit_centered(surface, prompt, surface.get_height() // 2)


__all__ = ["TitleScene"]
