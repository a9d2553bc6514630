"""Global cure state shared with the outbreak simulation."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class GlobalCureState:
    """Mutable figures the simulation owns.

    ``balance`` is the Zar budget. Upgrade purchases adjust it in place, which
    is why the ledger takes this object rather than a plain integer.
    """

    balance: int = 0
    cure_progress: float = 0.0
    total_outposts: int = 0
    active_outposts: int = 0


__all__ = ["GlobalCureState"]
