"""Upgrade catalogue and the per-session ledger of purchased levels."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import (
    Callable,
    Dict,
    Iterable,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
)

from outbreak.engine.logger import ChannelLogger
from outbreak.systems.upgrade_data import UPGRADE_DATA

LOGGER = logging.getLogger(__name__)

# Price of a level that cannot be bought. Compares greater than any balance.
UNAFFORDABLE = math.inf

Cost = Union[int, float]


class UpgradeGroup(Enum):
    INFRASTRUCTURE = "infrastructure"
    CURE = "cure"


class UpgradeKind(Enum):
    TAX_EFFICIENCY = "tax_efficiency"
    ECONOMIC_RECOVERY = "economic_recovery"
    EMERGENCY_FUNDS = "emergency_funds"
    RESEARCH_EFFICIENCY = "research_efficiency"
    OUTPOST_CAPACITY = "outpost_capacity"
    RAPID_DEPLOYMENT = "rapid_deployment"
    VACCINE_BREAKTHROUGH = "vaccine_breakthrough"


class CatalogueIntegrityError(ValueError):
    """Raised when upgrade data cannot back the cost and bonus rules."""


@dataclass(frozen=True)
class UpgradeDefinition:
    """Immutable costs, cap and bonus schedule for one upgrade kind."""

    kind: UpgradeKind
    name: str
    description: str
    group: UpgradeGroup
    base_cost: int
    cost_per_level: int
    max_level: int
    is_one_time_bonus: bool = False
    bonus_amounts: Tuple[int, ...] = ()

    def cost_for_level(self, level: int) -> Cost:
        """Return the price of advancing from ``level`` to ``level + 1``."""

        if level >= self.max_level:
            return UNAFFORDABLE
        return self.base_cost + self.cost_per_level * level

    def bonus_for_level(self, level: int) -> int:
        """Return the refund granted on reaching ``level``; 0 when unscheduled."""

        if not self.is_one_time_bonus:
            return 0
        index = level - 1
        if 0 <= index < len(self.bonus_amounts):
            return self.bonus_amounts[index]
        return 0

    def integrity_problems(self) -> List[str]:
        problems: List[str] = []
        label = self.kind.name
        if self.base_cost < 0:
            problems.append(f"{label}: base cost {self.base_cost} is negative")
        if self.cost_per_level < 0:
            problems.append(f"{label}: cost per level {self.cost_per_level} is negative")
        if self.max_level < 0:
            problems.append(f"{label}: max level {self.max_level} is negative")
        if self.is_one_time_bonus:
            if len(self.bonus_amounts) < self.max_level:
                problems.append(
                    f"{label}: bonus schedule covers {len(self.bonus_amounts)} of {self.max_level} levels"
                )
            if any(amount < 0 for amount in self.bonus_amounts):
                problems.append(f"{label}: bonus schedule has negative amounts")
        elif self.bonus_amounts:
            problems.append(f"{label}: bonus amounts given for a kind without a one-time bonus")
        return problems


def definition_from_dict(data: Mapping[str, object]) -> UpgradeDefinition:
    """Build a definition from a raw data entry such as ``UPGRADE_DATA`` rows."""

    kind = UpgradeKind(str(data["kind"]))
    return UpgradeDefinition(
        kind=kind,
        name=str(data.get("name", kind.name.replace("_", " ").title())),
        description=str(data.get("description", "")),
        group=UpgradeGroup(str(data.get("group", UpgradeGroup.INFRASTRUCTURE.value))),
        base_cost=int(data.get("base_cost", 0)),
        cost_per_level=int(data.get("cost_per_level", 0)),
        max_level=int(data.get("max_level", 1)),
        is_one_time_bonus=bool(data.get("one_time_bonus", False)),
        bonus_amounts=tuple(int(amount) for amount in data.get("bonus_amounts", ())),
    )


class UpgradeCatalogue:
    """Read-only table of upgrade definitions keyed by kind.

    The table is checked once on construction. With ``strict`` set, any data
    problem raises :class:`CatalogueIntegrityError`; otherwise problems are
    logged and lookups degrade (missing kinds read as absent, missing bonus
    entries pay nothing).
    """

    def __init__(self, definitions: Iterable[UpgradeDefinition], strict: bool = True) -> None:
        table: Dict[UpgradeKind, UpgradeDefinition] = {}
        problems: List[str] = []
        for definition in definitions:
            if definition.kind in table:
                problems.append(f"{definition.kind.name}: defined more than once")
            table[definition.kind] = definition
            problems.extend(definition.integrity_problems())
        for kind in UpgradeKind:
            if kind not in table:
                problems.append(f"{kind.name}: no definition")
        if problems:
            if strict:
                raise CatalogueIntegrityError("; ".join(problems))
            for problem in problems:
                LOGGER.warning("Upgrade data problem: %s", problem)
        ordered = {kind: table[kind] for kind in UpgradeKind if kind in table}
        self._definitions: Mapping[UpgradeKind, UpgradeDefinition] = MappingProxyType(ordered)

    @classmethod
    def from_data(cls, entries: Sequence[Mapping[str, object]], strict: bool = True) -> "UpgradeCatalogue":
        try:
            definitions = [definition_from_dict(entry) for entry in entries]
        except (KeyError, TypeError, ValueError) as exc:
            raise CatalogueIntegrityError(f"Malformed upgrade entry: {exc}") from exc
        return cls(definitions, strict=strict)

    def get_definition(self, kind: object) -> Optional[UpgradeDefinition]:
        try:
            return self._definitions.get(kind)  # type: ignore[call-overload]
        except TypeError:
            return None

    def all_definitions(self) -> Tuple[UpgradeDefinition, ...]:
        return tuple(self._definitions.values())

    def kinds_in(self, group: UpgradeGroup) -> Tuple[UpgradeKind, ...]:
        return tuple(kind for kind, definition in self._definitions.items() if definition.group is group)

    def __contains__(self, kind: object) -> bool:
        return self.get_definition(kind) is not None

    def __len__(self) -> int:
        return len(self._definitions)


CATALOGUE: UpgradeCatalogue = UpgradeCatalogue.from_data(UPGRADE_DATA)


def infrastructure_upgrades() -> Tuple[UpgradeKind, ...]:
    return CATALOGUE.kinds_in(UpgradeGroup.INFRASTRUCTURE)


def cure_upgrades() -> Tuple[UpgradeKind, ...]:
    return CATALOGUE.kinds_in(UpgradeGroup.CURE)


class Wallet(Protocol):
    balance: int


class PurchaseResult(NamedTuple):
    success: bool
    cost: int = 0
    bonus: int = 0


PurchaseListener = Callable[[UpgradeKind, int], None]


@dataclass
class UpgradeLevel:
    kind: UpgradeKind
    current_level: int = 0


class UpgradeLedger:
    """Current level of every upgrade kind for one session.

    Levels only move through :meth:`purchase` (one step up) and :meth:`reset`
    (all back to zero). Lookups never raise: kinds the ledger does not know
    read as level 0, maxed and unaffordable.
    """

    def __init__(
        self,
        catalogue: Optional[UpgradeCatalogue] = None,
        log: Optional[ChannelLogger] = None,
    ) -> None:
        self.catalogue = CATALOGUE if catalogue is None else catalogue
        self._levels: Dict[UpgradeKind, UpgradeLevel] = {kind: UpgradeLevel(kind) for kind in UpgradeKind}
        self._listeners: List[PurchaseListener] = []
        self._log = log

    def _entry(self, kind: object) -> Optional[UpgradeLevel]:
        try:
            return self._levels.get(kind)  # type: ignore[call-overload]
        except TypeError:
            return None

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get_level(self, kind: object) -> int:
        entry = self._entry(kind)
        return entry.current_level if entry else 0

    def get_cost(self, kind: object) -> Cost:
        definition = self.catalogue.get_definition(kind)
        if definition is None:
            return UNAFFORDABLE
        return definition.cost_for_level(self.get_level(kind))

    def is_max_level(self, kind: object) -> bool:
        definition = self.catalogue.get_definition(kind)
        if definition is None or self._entry(kind) is None:
            return True
        return self.get_level(kind) >= definition.max_level

    def can_afford(self, kind: object, balance: int) -> bool:
        if self.is_max_level(kind):
            return False
        return balance >= self.get_cost(kind)

    def levels(self) -> Dict[UpgradeKind, int]:
        return {kind: entry.current_level for kind, entry in self._levels.items()}

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------
    def subscribe(self, listener: PurchaseListener) -> Callable[[], None]:
        """Call ``listener(kind, new_level)`` after each successful purchase.

        Listeners run once the purchase is committed. A listener that raises
        is logged and skipped; the purchase still succeeds and the remaining
        listeners are still called. Returns a callable that removes the
        listener again.
        """

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def purchase(self, kind: object, wallet: Wallet) -> PurchaseResult:
        """Buy the next level of ``kind`` out of ``wallet.balance``.

        Any reason the level cannot be bought (maxed, unknown, short on funds)
        is the same failure: ``(False, 0, 0)`` with nothing changed.
        """

        if not self.can_afford(kind, wallet.balance):
            if self._log:
                self._log.debug("Purchase of %s rejected at balance R %s", kind, wallet.balance)
            return PurchaseResult(False, 0, 0)

        definition = self.catalogue.get_definition(kind)
        entry = self._entry(kind)
        if definition is None or entry is None:
            return PurchaseResult(False, 0, 0)

        cost = int(definition.cost_for_level(entry.current_level))
        wallet.balance -= cost
        entry.current_level += 1

        bonus = definition.bonus_for_level(entry.current_level)
        if bonus:
            wallet.balance += bonus

        if self._log:
            self._log.info(
                "Purchased %s level %d/%d for R %d (bonus R %d, balance R %d)",
                definition.name,
                entry.current_level,
                definition.max_level,
                cost,
                bonus,
                wallet.balance,
            )
        self._notify(entry.kind, entry.current_level)
        return PurchaseResult(True, cost, bonus)

    def _notify(self, kind: UpgradeKind, level: int) -> None:
        for listener in list(self._listeners):
            try:
                listener(kind, level)
            except Exception:
                LOGGER.exception("Purchase listener %r failed for %s level %d", listener, kind.name, level)

    def reset(self) -> None:
        for entry in self._levels.values():
            entry.current_level = 0


__all__ = [
    "UNAFFORDABLE",
    "UpgradeGroup",
    "UpgradeKind",
    "UpgradeDefinition",
    "UpgradeCatalogue",
    "CatalogueIntegrityError",
    "CATALOGUE",
    "definition_from_dict",
    "infrastructure_upgrades",
    "cure_upgrades",
    "PurchaseResult",
    "UpgradeLevel",
    "UpgradeLedger",
    "Wallet",
]
