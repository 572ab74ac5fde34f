"""Buff damage aggregation.

Turns resolved buffs into per-buff rows and running totals for one target,
split by attack type (melee/ranged) and by channel (``damage`` vs.
``damage_bonus``).
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Tuple

from buffsheet.models.buff import ResolvedBuffInstance
from buffsheet.models.damage import BuffDamageResult, BuffRow

from .interpolation import value_at
from .records import as_record, resolve_level

logger = logging.getLogger(__name__)

RESTRICTION_MELEE = "melee"
RESTRICTION_RANGED = "ranged"


@dataclass(frozen=True)
class _Channel:
    key: str
    suffix: str
    is_bonus: bool


_CHANNELS = (
    _Channel(key="damage", suffix="", is_bonus=False),
    _Channel(key="damage_bonus", suffix="+", is_bonus=True),
)


def _hits(raw: Any) -> int:
    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, int):
        return raw
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 0


def _buff_fields(entry: Any) -> Tuple[str, Optional[Mapping]]:
    if isinstance(entry, ResolvedBuffInstance):
        return entry.buff_name, entry.effect
    if isinstance(entry, Mapping):
        name = entry.get("buff_name", entry.get("buffName"))
        return str(name or ""), entry.get("effect")
    return "", None


def compute_buff_damage(
    target_unit: Any,
    resolved_buffs: Optional[Iterable[Any]],
    level: Optional[int] = None,
) -> BuffDamageResult:
    """
    Aggregate resolved buffs against one target.

    Args:
        target_unit: unit record or CombatUnit; only ``stats`` is read.
        resolved_buffs: ResolvedBuffInstance values (or equivalent mappings).
        level: level at which every LevelMap is evaluated.

    Returns:
        BuffDamageResult: rows and totals. A channel whose melee and ranged
        contributions are both zero adds neither a row nor its flat value.
    """
    target = as_record(target_unit, role="target unit")
    level = resolve_level(level)

    stats = target.get("stats")
    if not isinstance(stats, Mapping):
        if stats is not None:
            logger.debug("Target %r has non-object stats; treating as no attacks", target.get("name"))
        stats = {}

    has_melee = "melee" in stats
    has_range = "range" in stats
    result = BuffDamageResult(
        has_melee=has_melee,
        has_range=has_range,
        melee_hits=stats.get("melee") if has_melee else None,
        range_hits=stats.get("range") if has_range else None,
    )
    melee_hits = _hits(result.melee_hits)
    range_hits = _hits(result.range_hits)

    totals = result.totals
    for entry in resolved_buffs or ():
        name, effect = _buff_fields(entry)
        if not isinstance(effect, Mapping):
            logger.debug("Buff %r has no effect object; skipped", name)
            continue

        restriction = effect.get("restriction")
        single_hit = effect.get("single_hit") is True

        for channel in _CHANNELS:
            level_map = effect.get(channel.key)
            if not level_map:
                continue
            value = value_at(level_map, level)
            if value is None:
                continue

            buffed_melee = 0
            buffed_range = 0
            if has_melee and restriction != RESTRICTION_RANGED:
                buffed_melee = value if single_hit else melee_hits * value
            if has_range and restriction != RESTRICTION_MELEE:
                buffed_range = value if single_hit else range_hits * value

            if buffed_melee <= 0 and buffed_range <= 0:
                continue

            if channel.is_bonus:
                totals.bonus += value
                totals.buffed_bonus_melee += buffed_melee
                totals.buffed_bonus_range += buffed_range
            else:
                totals.damage += value
                totals.buffed_melee += buffed_melee
                totals.buffed_range += buffed_range

            result.buff_rows.append(
                BuffRow(
                    name=name + channel.suffix,
                    value=value,
                    buffed_melee=buffed_melee,
                    buffed_range=buffed_range,
                    is_bonus=channel.is_bonus,
                )
            )

    return result
