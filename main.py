"""Entry point for the outbreak response upgrade prototype."""
from __future__ import annotations

import pygame

from outbreak.engine.input import InputBindings, InputMapper
from outbreak.engine.logger import init_logger
from outbreak.engine.loop import FrameLoop
from outbreak.engine.scene import SceneManager
from outbreak.engine.settings import SETTINGS_PATH, GameSettings
from outbreak.systems.run import RunController
from outbreak.ui.end_scene import EndScene
from outbreak.ui.title_scene import TitleScene
from outbreak.ui.upgrade_panel import UpgradePanelScene


def main() -> None:
    settings = GameSettings.load(SETTINGS_PATH)
    logger = init_logger(SETTINGS_PATH)
    input_mapper = InputMapper(InputBindings.load(SETTINGS_PATH))

    pygame.init()
    resolution = settings.resolution
    if resolution == (0, 0):
        display_info = pygame.display.Info()
        resolution = (display_info.current_w, display_info.current_h)
    flags = pygame.FULLSCREEN if settings.fullscreen else 0
    screen = pygame.display.set_mode(resolution, flags)
    pygame.display.set_caption("Outbreak Response")
    clock = pygame.time.Clock()

    run = RunController(
        starting_balance=settings.starting_balance,
        economy_log=logger.channel("economy"),
        outcome_log=logger.channel("outcome"),
    )

    manager = SceneManager(log=logger.channel("ui"))
    manager.register("title", TitleScene)
    manager.register("upgrades", UpgradePanelScene)
    manager.register("end", EndScene)
    manager.set_context(settings=settings, input=input_mapper, logger=logger, run=run)
    manager.activate("title")

    def process_events() -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                loop.stop()
                return
            manager.handle_event(event)

    def render() -> None:
        manager.render(screen)
        pygame.display.flip()

    loop = FrameLoop(manager.update, render, process_events, clock, max_fps=settings.max_fps)
    try:
        loop.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
