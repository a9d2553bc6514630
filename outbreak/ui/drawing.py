"""Small pygame drawing helpers shared by the menu scenes."""
from __future__ import annotations

from typing import Optional, Tuple

import pygame

PANEL_FILL = (12, 18, 26, 210)
PANEL_BORDER = (82, 132, 168)
TEXT_BRIGHT = (220, 236, 255)
TEXT_DIM = (150, 176, 200)
TEXT_WARN = (240, 180, 120)
VICTORY_ACCENT = (120, 220, 160)
DEFEAT_ACCENT = (230, 110, 100)


def blit_panel(
    target: pygame.Surface,
    rect: pygame.Rect,
    fill_color: Tuple[int, ...],
    border_color: Optional[Tuple[int, int, int]] = None,
    border_width: int = 1,
) -> None:
    overlay = pygame.Surface(rect.size, pygame.SRCALPHA)
    if len(fill_color) == 3:
        overlay.fill((*fill_color, 255))
    else:
        overlay.fill(fill_color)
    target.blit(overlay, rect.topleft)
    if border_color and border_width > 0:
        pygame.draw.rect(target, border_color, rect, border_width)


def blit_centered(target: pygame.Surface, text: pygame.Surface, y: int) -> None:
    target.blit(text, (target.get_width() // 2 - text.get_width() // 2, y))


__all__ = [
    "blit_panel",
    "blit_centered",
    "PANEL_FILL",
    "PANEL_BORDER",
    "TEXT_BRIGHT",
    "TEXT_DIM",
    "TEXT_WARN",
    "VICTORY_ACCENT",
    "DEFEAT_ACCENT",
]
