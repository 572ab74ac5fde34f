"""
Roster buff listing entries
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .buff import ResolvedBuffInstance
from .damage import BuffDamageResult


def _unit_to_dict(unit: Any) -> Any:
    to_record = getattr(unit, "to_record", None)
    if callable(to_record):
        return to_record()
    return unit


@dataclass
class IncomingBuff:
    """A roster member that can buff the focal unit."""

    source_unit: Any
    buffs: List[ResolvedBuffInstance] = field(default_factory=list)
    buff_data: BuffDamageResult = field(default_factory=BuffDamageResult)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sourceUnit": _unit_to_dict(self.source_unit),
            "buffs": [buff.to_dict() for buff in self.buffs],
            "buffData": self.buff_data.to_dict(),
        }


@dataclass
class OutgoingBuff:
    """A roster member the focal unit can buff."""

    target_unit: Any
    buffs: List[ResolvedBuffInstance] = field(default_factory=list)
    buff_data: BuffDamageResult = field(default_factory=BuffDamageResult)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "targetUnit": _unit_to_dict(self.target_unit),
            "buffs": [buff.to_dict() for buff in self.buffs],
            "buffData": self.buff_data.to_dict(),
        }
