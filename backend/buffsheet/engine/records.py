"""Roster record coercion shared by every engine operation.

The engine reads roster records as plain mappings with the contract field
names. Typed callers may pass ``CombatUnit`` models instead; both forms can
be mixed within one roster.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Iterable, List, Optional, Set, Tuple

from buffsheet.config import settings
from buffsheet.models.unit import CombatUnit


class RecordTypeError(TypeError):
    """A unit, roster or level of the wrong shape was passed to the engine."""


def as_record(unit: Any, *, role: str = "unit") -> Mapping:
    if isinstance(unit, CombatUnit):
        return unit.to_record()
    if isinstance(unit, Mapping):
        return unit
    raise RecordTypeError(
        f"{role} must be a mapping record or CombatUnit, got {type(unit).__name__}"
    )


def as_roster(roster: Any) -> List[Tuple[Any, Mapping]]:
    """Return ``(original, record)`` pairs in roster order."""
    if isinstance(roster, (str, bytes, Mapping)) or not isinstance(roster, Sequence):
        raise RecordTypeError(
            f"roster must be a sequence of unit records, got {type(roster).__name__}"
        )
    return [(unit, as_record(unit, role=f"roster[{index}]")) for index, unit in enumerate(roster)]


def resolve_level(level: Optional[int]) -> int:
    if level is None:
        return settings.reference_level
    if isinstance(level, bool) or not isinstance(level, int):
        raise RecordTypeError(f"level must be an integer, got {type(level).__name__}")
    return level


def unit_name(record: Mapping) -> str:
    name = record.get("name")
    return name if isinstance(name, str) else ""


def same_unit(a: Mapping, b: Mapping) -> bool:
    """Identity check used to keep a unit from buffing itself."""
    if a is b:
        return True
    name = unit_name(a)
    return bool(name) and name == unit_name(b)


def string_set(value: Any) -> Set[str]:
    """Collect the strings of a list-like field; anything else is empty."""
    if isinstance(value, (str, bytes)) or not isinstance(value, Iterable):
        return set()
    return {item for item in value if isinstance(item, str)}


def find_unit(roster: Any, name: str) -> Optional[Any]:
    """Case-insensitive lookup by unit name. Returns the unit as stored in the roster."""
    key = (name or "").strip().lower()
    if not key:
        return None
    for original, record in as_roster(roster):
        if unit_name(record).strip().lower() == key:
            return original
    return None
