"""End-of-run summary screen."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import pygame

from outbreak.engine.input import InputMapper
from outbreak.engine.scene import Scene
from outbreak.systems.outcome import OutcomeKind, RunOutcome
from outbreak.systems.run import RunController
from outbreak.ui.drawing import (
    DEFEAT_ACCENT,
    PANEL_BORDER,
    PANEL_FILL,
    TEXT_BRIGHT,
    TEXT_DIM,
    VICTORY_ACCENT,
    blit_centered,
    blit_panel,
)

_TITLES = {
    OutcomeKind.VICTORY: ("CURE DEPLOYED - VICTORY", "Hope restored across the republic."),
    OutcomeKind.DEFEAT: ("OUTBREAK LOST - DEFEAT", "Containment failed - regroup and try again."),
    OutcomeKind.NONE: ("MISSION COMPLETE", "Review your path and jump back in."),
}

_STYLE_CLASSES = {
    OutcomeKind.VICTORY: "end-outcome--victory",
    OutcomeKind.DEFEAT: "end-outcome--defeat",
}


@dataclass(frozen=True)
class OutcomeSummary:
    """Text shown on the end screen for a recorded (or missing) outcome."""

    title: str
    subtitle: str
    style_class: Optional[str]
    stat_lines: Tuple[str, ...]

    @classmethod
    def from_outcome(cls, outcome: RunOutcome) -> "OutcomeSummary":
        kind = outcome.outcome
        title, subtitle = _TITLES[kind]
        if not outcome.has_outcome:
            lines = (
                "Days elapsed: --",
                "Cure progress: --",
                "Provinces saved: --",
                "Outposts: --",
                "Budget remaining: --",
            )
            return cls(title=title, subtitle=subtitle, style_class=None, stat_lines=lines)

        saved = outcome.saved_provinces
        total_provinces = max(saved + outcome.fully_lost_provinces, 1)
        cure_percent = int(round(outcome.cure_progress * 100.0))
        lines = (
            f"Days elapsed: {max(1, outcome.day_index)}",
            f"Cure progress: {cure_percent}%",
            f"Provinces saved: {saved} / {total_provinces}",
            f"Outposts: {outcome.active_outposts} active / {outcome.total_outposts} total",
            f"Budget remaining: R {outcome.balance}",
        )
        return cls(title=title, subtitle=subtitle, style_class=_STYLE_CLASSES.get(kind), stat_lines=lines)


class EndScene(Scene):
    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.run: Optional[RunController] = None
        self.input: Optional[InputMapper] = None
        self.summary: Optional[OutcomeSummary] = None
        self.font = None
        self.small_font = None

    def on_enter(self, **kwargs) -> None:
        super().on_enter(**kwargs)
        self.run = self.require("run")  # type: ignore[assignment]
        self.input = self.require("input")  # type: ignore[assignment]
        self.summary = OutcomeSummary.from_outcome(self.run.outcome)

    def handle_event(self, event: pygame.event.Event) -> None:
        if not self.input or not self.run:
            return
        actions = self.input.actions_for(event)
        if "confirm" in actions:
            self.run.start_run()
            self.manager.activate("upgrades")
        elif "quit" in actions:
            self.run.outcome.reset()
            self.manager.activate("title")

    def render(self, surface: pygame.Surface) -> None:
        if not self.summary:
            return
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 32)
            self.small_font = pygame.font.SysFont("consolas", 20)
        surface.fill((4, 8, 12))
        accent = TEXT_BRIGHT
        if self.summary.style_class == _STYLE_CLASSES[OutcomeKind.VICTORY]:
            accent = VICTORY_ACCENT
        elif self.summary.style_class == _STYLE_CLASSES[OutcomeKind.DEFEAT]:
            accent = DEFEAT_ACCENT

        panel = pygame.Rect(0, 0, min(720, surface.get_width() - 40), 360)
        panel.center = (surface.get_width() // 2, surface.get_height() // 2)
        blit_panel(surface, panel, PANEL_FILL, PANEL_BORDER, 2)

        y = panel.y + 24
        blit_centered(surface, self.font.render(self.summary.title, True, accent), y)
        y += 44
        blit_centered(surface, self.small_font.render(self.summary.subtitle, True, TEXT_DIM), y)
        y += 48
        for line in self.summary.stat_lines:
            surface.blit(self.small_font.render(line, True, TEXT_BRIGHT), (panel.x + 48, y))
            y += 32
        prompt = self.small_font.render("ENTER play again  ESC title", True, TEXT_DIM)
        blit_centered(surface, prompt, panel.bottom - 36)


__all__ = ["OutcomeSummary", "EndScene"]
