"""Run lifecycle: start, day counter, upgrade purchases and the single end record."""
from __future__ import annotations

from typing import Optional

from outbreak.engine.logger import ChannelLogger
from outbreak.systems.cure_state import GlobalCureState
from outbreak.systems.outcome import OutcomeKind, RunOutcome
from outbreak.systems.upgrades import PurchaseResult, UpgradeCatalogue, UpgradeKind, UpgradeLedger


class RunController:
    """Owns the ledger, the outcome record and the live cure state of a run."""

    def __init__(
        self,
        starting_balance: int = 500,
        catalogue: Optional[UpgradeCatalogue] = None,
        economy_log: Optional[ChannelLogger] = None,
        outcome_log: Optional[ChannelLogger] = None,
    ) -> None:
        self.starting_balance = starting_balance
        self.ledger = UpgradeLedger(catalogue, log=economy_log)
        self.outcome = RunOutcome()
        self.state = GlobalCureState(balance=starting_balance)
        self.day_index = 1
        self._running = False
        self._log = outcome_log

    @property
    def running(self) -> bool:
        return self._running

    def start_run(self) -> None:
        self.state = GlobalCureState(balance=self.starting_balance)
        self.ledger.reset()
        self.outcome.reset()
        self.day_index = 1
        self._running = True
        if self._log:
            self._log.info("Run started with R %d", self.starting_balance)

    def advance_day(self) -> int:
        if self._running:
            self.day_index += 1
        return self.day_index

    def purchase(self, kind: UpgradeKind) -> PurchaseResult:
        if not self._running:
            return PurchaseResult(False, 0, 0)
        return self.ledger.purchase(kind, self.state)

    def end_run(self, outcome: OutcomeKind, saved_provinces: int, fully_lost_provinces: int) -> bool:
        """Record the result once; returns False when nothing was recorded."""

        if outcome is OutcomeKind.NONE:
            if self._log:
                self._log.warning("Ignoring end of run without an outcome")
            return False
        if not self._running:
            if self._log:
                self._log.warning("Ignoring %s: no run in progress", outcome.name)
            return False
        snapshot = self.outcome.record(
            outcome,
            self.state,
            self.day_index,
            saved_provinces,
            fully_lost_provinces,
        )
        self._running = False
        if self._log:
            self._log.info(
                "Run ended in %s on day %d with cure %.0f%% and R %d",
                snapshot.outcome.name,
                snapshot.day_index,
                snapshot.cure_progress * 100.0,
                snapshot.balance,
            )
        return True


__all__ = ["RunController"]
