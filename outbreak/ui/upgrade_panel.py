"""Upgrade panel: card data for each upgrade and the run hub scene."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import pygame

from outbreak.engine.input import InputMapper
from outbreak.engine.logger import ChannelLogger
from outbreak.engine.scene import Scene
from outbreak.systems.outcome import OutcomeKind
from outbreak.systems.run import RunController
from outbreak.systems.upgrades import PurchaseResult, UpgradeDefinition, UpgradeGroup, UpgradeKind, UpgradeLedger
from outbreak.ui.drawing import (
    PANEL_BORDER,
    PANEL_FILL,
    TEXT_BRIGHT,
    TEXT_DIM,
    TEXT_WARN,
    blit_centered,
    blit_panel,
)

DEFAULT_PROVINCES = 9


def format_budget(balance: int) -> str:
    return f"R {balance}"


@dataclass(frozen=True)
class UpgradeCardData:
    kind: UpgradeKind
    name: str
    description: str
    level_text: str
    cost_text: str
    button_label: str
    enabled: bool
    maxed: bool


def build_card(ledger: UpgradeLedger, definition: UpgradeDefinition, balance: int) -> UpgradeCardData:
    level = ledger.get_level(definition.kind)
    maxed = ledger.is_max_level(definition.kind)
    if maxed:
        cost_text = "MAXED"
        button_label = "Maxed"
        enabled = False
    else:
        cost_text = f"Cost: R {ledger.get_cost(definition.kind)}"
        button_label = "Unlock" if definition.is_one_time_bonus else "Upgrade"
        enabled = ledger.can_afford(definition.kind, balance)
    return UpgradeCardData(
        kind=definition.kind,
        name=definition.name,
        description=definition.description,
        level_text=f"{level} / {definition.max_level}",
        cost_text=cost_text,
        button_label=button_label,
        enabled=enabled,
        maxed=maxed,
    )


class UpgradePanelService:
    """Back-end operations for the upgrade panel."""

    def __init__(self, run: RunController, log: Optional[ChannelLogger] = None) -> None:
        self._run = run
        self._log = log

    def cards(self, group: Optional[UpgradeGroup] = None) -> List[UpgradeCardData]:
        ledger = self._run.ledger
        balance = self._run.state.balance
        return [
            build_card(ledger, definition, balance)
            for definition in ledger.catalogue.all_definitions()
            if group is None or definition.group is group
        ]

    def budget_text(self) -> str:
        return format_budget(self._run.state.balance)

    def click(self, kind: UpgradeKind) -> PurchaseResult:
        result = self._run.purchase(kind)
        if result.success and result.bonus > 0 and self._log:
            definition = self._run.ledger.catalogue.get_definition(kind)
            name = definition.name if definition else kind.name
            self._log.info("%s bonus: +R %d", name, result.bonus)
        return result


class UpgradePanelScene(Scene):
    """Run hub: budget, upgrade cards and the end-of-run hotkeys."""

    def __init__(self, manager) -> None:
        super().__init__(manager)
        self.run: Optional[RunController] = None
        self.input: Optional[InputMapper] = None
        self.service: Optional[UpgradePanelService] = None
        self.slots: List[UpgradeKind] = []
        self.provinces = DEFAULT_PROVINCES
        self.last_message = ""
        self.font = None
        self.small_font = None

    def on_enter(self, **kwargs) -> None:
        super().on_enter(**kwargs)
        self.run = self.require("run")  # type: ignore[assignment]
        self.input = self.require("input")  # type: ignore[assignment]
        logger = kwargs.get("logger")
        economy_log = logger.channel("economy") if logger else None
        self.service = UpgradePanelService(self.run, economy_log)
        self.slots = [definition.kind for definition in self.run.ledger.catalogue.all_definitions()]
        self.provinces = int(kwargs.get("provinces", DEFAULT_PROVINCES))
        self.last_message = ""

    def handle_event(self, event: pygame.event.Event) -> None:
        if not self.input or not self.run or not self.service:
            return
        for action in self.input.actions_for(event):
            if action.startswith("buy_"):
                self._buy_slot(int(action[len("buy_"):]) - 1)
            elif action == "advance_day":
                day = self.run.advance_day()
                self.last_message = f"Day {day}"
            elif action == "declare_victory":
                self._finish(OutcomeKind.VICTORY)
            elif action == "declare_defeat":
                self._finish(OutcomeKind.DEFEAT)
            elif action == "quit":
                pygame.event.post(pygame.event.Event(pygame.QUIT))

    def _buy_slot(self, index: int) -> None:
        if not 0 <= index < len(self.slots):
            return
        kind = self.slots[index]
        result = self.service.click(kind)
        if not result.success:
            self.last_message = "Maxed" if self.run.ledger.is_max_level(kind) else "Insufficient funds"
        elif result.bonus:
            self.last_message = f"Spent R {result.cost}, received R {result.bonus}"
        else:
            self.last_message = f"Spent R {result.cost}"

    def _finish(self, outcome: OutcomeKind) -> None:
        if outcome is OutcomeKind.VICTORY:
            saved, lost = self.provinces, 0
        else:
            saved, lost = 0, self.provinces
        if self.run.end_run(outcome, saved, lost):
            self.manager.activate("end")

    def _ensure_fonts(self) -> None:
        if self.font is None:
            self.font = pygame.font.SysFont("consolas", 24)
            self.small_font = pygame.font.SysFont("consolas", 16)

    def render(self, surface: pygame.Surface) -> None:
        if not self.service or not self.run:
            return
        self._ensure_fonts()
        surface.fill((6, 10, 16))
        width = surface.get_width()
        header = self.font.render(
            f"Day {self.run.day_index}    Budget: {self.service.budget_text()}", True, TEXT_BRIGHT
        )
        blit_centered(surface, header, 24)

        card_height = 64
        top = 80
        for index, card in enumerate(self.service.cards()):
            rect = pygame.Rect(40, top + index * (card_height + 8), width - 80, card_height)
            border = PANEL_BORDER if card.enabled else (56, 72, 90)
            blit_panel(surface, rect, PANEL_FILL, border, 2 if card.enabled else 1)
            title = self.font.render(f"[{index + 1}] {card.name}  {card.level_text}", True, TEXT_BRIGHT)
            surface.blit(title, (rect.x + 16, rect.y + 8))
            desc = self.small_font.render(card.description, True, TEXT_DIM)
            surface.blit(desc, (rect.x + 16, rect.y + 38))
            colour = TEXT_BRIGHT if card.enabled else TEXT_DIM
            action = self.small_font.render(f"{card.cost_text}  {card.button_label}", True, colour)
            surface.blit(action, (rect.right - action.get_width() - 16, rect.y + 24))

        footer = self.small_font.render(
            "1-7 buy  SPACE next day  V victory  X defeat  ESC quit", True, TEXT_DIM
        )
        blit_centered(surface, footer, surface.get_height() - 40)
        if self.last_message:
            message = self.small_font.render(self.last_message, True, TEXT_WARN)
            blit_centered(surface, message, surface.get_height() - 64)


__all__ = [
    "UpgradeCardData",
    "UpgradePanelService",
    "UpgradePanelScene",
    "build_card",
    "format_budget",
]
