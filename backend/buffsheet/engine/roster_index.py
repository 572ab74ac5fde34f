"""Roster-wide "who can buff me" / "who can I buff" listings."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, List, Optional, Sequence, Tuple, TypeVar, Union

from buffsheet.models.roster import IncomingBuff, OutgoingBuff

from .aggregator import compute_buff_damage
from .records import as_record, as_roster, resolve_level, same_unit, unit_name
from .resolver import resolve_buffs

logger = logging.getLogger(__name__)

_Entry = TypeVar("_Entry", IncomingBuff, OutgoingBuff)


def _rank(entries: List[_Entry]) -> List[_Entry]:
    # sorted() is stable with reverse=True, so ties keep roster order.
    return sorted(entries, key=lambda entry: entry.buff_data.totals.combined, reverse=True)


def _collect_incoming(
    target_unit: Any, target: Mapping, members: List[Tuple[Any, Mapping]], level: int
) -> List[IncomingBuff]:
    entries: List[IncomingBuff] = []
    for original, source in members:
        if original is target_unit or same_unit(source, target):
            continue
        resolved = resolve_buffs(source, target)
        if not resolved:
            continue
        entries.append(
            IncomingBuff(
                source_unit=original,
                buffs=resolved,
                buff_data=compute_buff_damage(target, resolved, level),
            )
        )

    logger.debug("%s: %d incoming buff sources at level %s", unit_name(target), len(entries), level)
    return _rank(entries)


def _collect_outgoing(
    source_unit: Any, source: Mapping, members: List[Tuple[Any, Mapping]], level: int
) -> List[OutgoingBuff]:
    entries: List[OutgoingBuff] = []
    for original, target in members:
        if original is source_unit or same_unit(source, target):
            continue
        resolved = resolve_buffs(source, target)
        if not resolved:
            continue
        entries.append(
            OutgoingBuff(
                target_unit=original,
                buffs=resolved,
                buff_data=compute_buff_damage(target, resolved, level),
            )
        )

    logger.debug("%s: %d outgoing buff targets at level %s", unit_name(source), len(entries), level)
    return _rank(entries)


def incoming_buffs(target_unit: Any, roster: Sequence[Any], level: Optional[int] = None) -> List[IncomingBuff]:
    """Every other roster member with at least one buff that applies to ``target_unit``."""
    target = as_record(target_unit, role="target unit")
    return _collect_incoming(target_unit, target, as_roster(roster), resolve_level(level))


def outgoing_buffs(source_unit: Any, roster: Sequence[Any], level: Optional[int] = None) -> List[OutgoingBuff]:
    """Every other roster member that at least one of ``source_unit``'s buffs applies to."""
    source = as_record(source_unit, role="source unit")
    return _collect_outgoing(source_unit, source, as_roster(roster), resolve_level(level))


class RosterBuffIndex:
    """A roster snapshot bound to one reference level.

    Records are converted once at construction and reused by every query.
    The roster is read, never modified; one index can serve concurrent
    queries for different focal units.
    """

    def __init__(self, roster: Sequence[Any], level: Optional[int] = None) -> None:
        self.members = as_roster(roster)
        self.roster = roster
        self.level = resolve_level(level)

    def _member(self, name: str) -> Optional[Tuple[Any, Mapping]]:
        key = (name or "").strip().lower()
        if not key:
            return None
        for original, record in self.members:
            if unit_name(record).strip().lower() == key:
                return original, record
        return None

    def unit(self, name: str) -> Any:
        member = self._member(name)
        if member is None:
            raise KeyError(f"Unknown unit: {name}")
        return member[0]

    def _focal(self, unit: Union[str, Any]) -> Tuple[Any, Mapping]:
        if isinstance(unit, str):
            member = self._member(unit)
            if member is None:
                raise KeyError(f"Unknown unit: {unit}")
            return member
        for original, record in self.members:
            if original is unit:
                return original, record
        return unit, as_record(unit, role="focal unit")

    def incoming(self, unit: Union[str, Any]) -> List[IncomingBuff]:
        original, record = self._focal(unit)
        return _collect_incoming(original, record, self.members, self.level)

    def outgoing(self, unit: Union[str, Any]) -> List[OutgoingBuff]:
        original, record = self._focal(unit)
        return _collect_outgoing(original, record, self.members, self.level)
