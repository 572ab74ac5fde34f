"""
Buff damage result models
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class BuffRow:
    """One effect channel of one buff (``name`` ends with "+" for damage_bonus)."""

    name: str
    value: int
    buffed_melee: int = 0
    buffed_range: int = 0
    is_bonus: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "value": self.value,
            "buffedMelee": self.buffed_melee,
            "buffedRange": self.buffed_range,
            "isBonus": self.is_bonus,
        }


@dataclass
class BuffTotals:
    # ===== flat values (not multiplied by hit count) =====
    damage: int = 0
    bonus: int = 0

    # ===== per attack type =====
    buffed_melee: int = 0
    buffed_range: int = 0
    buffed_bonus_melee: int = 0
    buffed_bonus_range: int = 0

    @property
    def combined(self) -> int:
        """Sum of the four buffed totals, used for roster ranking."""
        return (
            self.buffed_melee
            + self.buffed_bonus_melee
            + self.buffed_range
            + self.buffed_bonus_range
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "damage": self.damage,
            "bonus": self.bonus,
            "buffedMelee": self.buffed_melee,
            "buffedRange": self.buffed_range,
            "buffedBonusMelee": self.buffed_bonus_melee,
            "buffedBonusRange": self.buffed_bonus_range,
        }


@dataclass
class BuffDamageResult:
    """
    Aggregated buff damage for one target at one level.

    ``melee_hits``/``range_hits`` echo the target's stats and are None when
    the corresponding stat is absent.
    """

    has_melee: bool = False
    has_range: bool = False
    melee_hits: Optional[Any] = None
    range_hits: Optional[Any] = None
    buff_rows: List[BuffRow] = field(default_factory=list)
    totals: BuffTotals = field(default_factory=BuffTotals)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "hasMelee": self.has_melee,
            "hasRange": self.has_range,
            "meleeHits": self.melee_hits,
            "rangeHits": self.range_hits,
            "buffRows": [row.to_dict() for row in self.buff_rows],
            "totals": self.totals.to_dict(),
        }
