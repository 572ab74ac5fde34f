"""Roster record schema.

Field names are the stable contract shared with the rest of the roster
tooling (``grand_alliance``, ``damage_types``, ``buffs[].affects`` ...), so
they stay snake_case and unknown extras are kept.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# 稀疏等级表：等级 -> 数值。数值保持原样（"0" 与 0 的真值不同）
LevelMap = Dict[int, Union[int, float, str]]


class UnitStats(BaseModel):
    """Hit counts per attack type. A missing key means the unit has no such attack."""

    model_config = ConfigDict(extra="allow")

    melee: Optional[int] = Field(default=None, ge=0)
    range: Optional[int] = Field(default=None, ge=0)


class BuffEffect(BaseModel):
    model_config = ConfigDict(extra="allow")

    damage: Optional[LevelMap] = None
    damage_bonus: Optional[LevelMap] = None
    restriction: Optional[Literal["melee", "ranged"]] = None
    single_hit: bool = False


class AffectsPredicate(BaseModel):
    """Targeting predicate. ``"*"`` in grand_alliance or faction means everyone."""

    model_config = ConfigDict(extra="allow")

    grand_alliance: List[str] = Field(default_factory=list)
    faction: List[str] = Field(default_factory=list)
    traits: List[str] = Field(default_factory=list)
    damage_types: List[str] = Field(default_factory=list)


class BuffDefinition(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    effect: BuffEffect = Field(default_factory=BuffEffect)
    affects: AffectsPredicate = Field(default_factory=AffectsPredicate)
    omit: Optional[Literal["normal", "non-normal"]] = None


class CombatUnit(BaseModel):
    """A roster entry that can grant and/or receive buffs."""

    model_config = ConfigDict(extra="allow")

    name: str = Field(..., min_length=1)
    faction: Optional[str] = None
    grand_alliance: Optional[str] = None
    traits: List[str] = Field(default_factory=list)
    damage_types: List[str] = Field(default_factory=list)
    stats: Optional[UnitStats] = None
    buffs: List[BuffDefinition] = Field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        """Plain mapping form used by the engine.

        Unset optional fields are dropped so that stat presence stays a
        key-presence test (``stats.melee`` absent vs. present).
        """
        return self.model_dump(exclude_none=True)
