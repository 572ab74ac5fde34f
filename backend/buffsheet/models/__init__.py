"""Data models for the buff sheet."""

from .unit import AffectsPredicate, BuffDefinition, BuffEffect, CombatUnit, LevelMap, UnitStats
from .buff import ResolvedBuffInstance
from .damage import BuffDamageResult, BuffRow, BuffTotals
from .roster import IncomingBuff, OutgoingBuff

__all__ = [
    "AffectsPredicate",
    "BuffDefinition",
    "BuffEffect",
    "CombatUnit",
    "LevelMap",
    "UnitStats",
    "ResolvedBuffInstance",
    "BuffDamageResult",
    "BuffRow",
    "BuffTotals",
    "IncomingBuff",
    "OutgoingBuff",
]
