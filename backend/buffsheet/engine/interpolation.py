"""Sparse level table lookup.

A LevelMap maps a level to a buff value, e.g. ``{"8": "10", "17": "22"}``.
Values are read at an arbitrary level by exact match, linear interpolation
between the surrounding keys, or clamping to the nearest end of the table.
"""
from __future__ import annotations

import logging
import math
import re
from bisect import bisect_left
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class LevelEntry:
    level: int
    # Truthiness of the stored raw value. A falsy value (numeric 0, "")
    # never satisfies an exact-match lookup and falls through to interpolation.
    present: bool
    value: Optional[int]


@dataclass(frozen=True)
class LevelTable:
    """A LevelMap parsed once and sorted by level."""

    entries: Tuple[LevelEntry, ...]

    @property
    def levels(self) -> Tuple[int, ...]:
        return tuple(entry.level for entry in self.entries)

    def value_at(self, level: int) -> Optional[int]:
        levels = self.levels
        index = bisect_left(levels, level)

        exact = index < len(levels) and levels[index] == level
        if exact:
            entry = self.entries[index]
            if entry.present and entry.value is not None:
                return entry.value

        lower = self.entries[index - 1] if index > 0 else None
        upper_index = index + 1 if exact else index
        upper = self.entries[upper_index] if upper_index < len(self.entries) else None

        if lower is None and upper is not None:
            return upper.value
        if upper is None and lower is not None:
            return lower.value
        if lower is None or upper is None:
            return None
        if lower.value is None or upper.value is None:
            return None

        ratio = (level - lower.level) / (upper.level - lower.level)
        return round_half_away(lower.value + (upper.value - lower.value) * ratio)


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def _parse_int(raw: Any) -> Optional[int]:
    if isinstance(raw, bool):
        return int(raw)
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        return int(raw) if math.isfinite(raw) else None
    if isinstance(raw, str):
        # Leading integer prefix only: "12abc" -> 12, "1e3" -> 1, "10.9" -> 10.
        match = _INT_PREFIX.match(raw)
        return int(match.group(1)) if match else None
    return None


def _parse_level_key(key: Any) -> Optional[int]:
    if isinstance(key, bool):
        return None
    if isinstance(key, int):
        return key
    if isinstance(key, str):
        try:
            return int(key.strip())
        except ValueError:
            return None
    return None


def compile_level_map(level_map: Any) -> Optional[LevelTable]:
    """Parse a LevelMap into a sorted table; None for absent/malformed/empty input."""
    if not isinstance(level_map, Mapping):
        if level_map is not None:
            logger.debug("Ignoring non-mapping level map: %r", level_map)
        return None

    entries = {}
    for key, raw in level_map.items():
        level = _parse_level_key(key)
        if level is None:
            logger.debug("Ignoring non-integer level key %r", key)
            continue
        if level in entries:
            continue
        value = _parse_int(raw)
        if value is None:
            logger.debug("Unparseable value %r at level %s", raw, level)
        entries[level] = LevelEntry(level=level, present=bool(raw), value=value)

    if not entries:
        return None
    return LevelTable(entries=tuple(entries[level] for level in sorted(entries)))


def value_at(level_map: Any, level: int) -> Optional[int]:
    """Value of ``level_map`` at ``level``, or None when the map is absent or empty.

    Examples:
        >>> value_at({"8": "10", "17": "22"}, 17)
        22
        >>> value_at({"8": "10", "17": "22"}, 12)
        15
        >>> value_at({"8": "10", "17": "22"}, 5)
        10
    """
    table = compile_level_map(level_map)
    if table is None:
        return None
    return table.value_at(level)
