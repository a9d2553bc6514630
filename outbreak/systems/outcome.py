"""End-of-run outcome record read by the end screen."""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from outbreak.systems.cure_state import GlobalCureState


class OutcomeKind(Enum):
    NONE = "none"
    VICTORY = "victory"
    DEFEAT = "defeat"


@dataclass(frozen=True)
class OutcomeSnapshot:
    """Figures captured when a run ends."""

    outcome: OutcomeKind = OutcomeKind.NONE
    cure_progress: float = 0.0
    total_outposts: int = 0
    active_outposts: int = 0
    balance: int = 0
    day_index: int = 0
    saved_provinces: int = 0
    fully_lost_provinces: int = 0


_BASELINE = OutcomeSnapshot()


def _clamp01(value: float) -> float:
    if math.isnan(value):
        return 0.0
    if value < 0.0:
        return 0.0
    return 1.0 if value > 1.0 else value


class RunOutcome:
    """Holds the last finished run.

    :meth:`record` is the only writer and replaces every field in one step, so
    readers never see a half-written result. :meth:`reset` restores the
    no-outcome baseline before the next run.
    """

    def __init__(self) -> None:
        self._snapshot = _BASELINE

    def record(
        self,
        outcome: OutcomeKind,
        state: Optional[GlobalCureState],
        day_index: int,
        saved_provinces: int,
        fully_lost_provinces: int,
    ) -> OutcomeSnapshot:
        if state is not None:
            cure_progress = _clamp01(float(state.cure_progress))
            total_outposts = max(0, int(state.total_outposts))
            active_outposts = max(0, int(state.active_outposts))
            balance = int(state.balance)
        else:
            cure_progress = 0.0
            total_outposts = 0
            active_outposts = 0
            balance = 0
        self._snapshot = OutcomeSnapshot(
            outcome=outcome,
            cure_progress=cure_progress,
            total_outposts=total_outposts,
            active_outposts=active_outposts,
            balance=balance,
            day_index=max(1, int(day_index)),
            saved_provinces=max(0, int(saved_provinces)),
            fully_lost_provinces=max(0, int(fully_lost_provinces)),
        )
        return self._snapshot

    def reset(self) -> None:
        self._snapshot = _BASELINE

    @property
    def snapshot(self) -> OutcomeSnapshot:
        return self._snapshot

    @property
    def has_outcome(self) -> bool:
        return self._snapshot.outcome is not OutcomeKind.NONE

    @property
    def outcome(self) -> OutcomeKind:
        return self._snapshot.outcome

    @property
    def cure_progress(self) -> float:
        return self._snapshot.cure_progress

    @property
    def total_outposts(self) -> int:
        return self._snapshot.total_outposts

    @property
    def active_outposts(self) -> int:
        return self._snapshot.active_outposts

    @property
    def balance(self) -> int:
        return self._snapshot.balance

    @property
    def day_index(self) -> int:
        return self._snapshot.day_index

    @property
    def saved_provinces(self) -> int:
        return self._snapshot.saved_provinces

    @property
    def fully_lost_provinces(self) -> int:
        return self._snapshot.fully_lost_provinces


__all__ = ["OutcomeKind", "OutcomeSnapshot", "RunOutcome"]
