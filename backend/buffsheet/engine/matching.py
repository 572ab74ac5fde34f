"""Buff targeting predicate evaluation."""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional

from buffsheet.models.unit import AffectsPredicate

from .records import as_record, string_set

WILDCARD = "*"


class Specificity(IntEnum):
    """How narrowly a predicate targeted the unit it matched."""

    UNIVERSAL = 0
    TRAIT = 1  # trait or damage type
    GRAND_ALLIANCE = 2
    FACTION = 3


@dataclass(frozen=True)
class AffectsMatch:
    matches: bool
    specificity: Optional[Specificity] = None
    is_universal: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "matches": self.matches,
            "specificity": None if self.specificity is None else int(self.specificity),
            "isUniversal": self.is_universal,
        }


NO_MATCH = AffectsMatch(matches=False)


def _predicate_fields(predicate: Any) -> Mapping:
    if isinstance(predicate, AffectsPredicate):
        return predicate.model_dump()
    if isinstance(predicate, Mapping):
        return predicate
    return {}


def match_affects(predicate: Any, target: Any) -> AffectsMatch:
    """
    Decide whether ``predicate`` selects ``target``.

    Rules are tried in order and the first hit wins:
    wildcard, faction, grand alliance, traits, damage types.
    """
    fields = _predicate_fields(predicate)
    record = as_record(target, role="target unit")

    alliances = string_set(fields.get("grand_alliance"))
    factions = string_set(fields.get("faction"))

    if WILDCARD in alliances or WILDCARD in factions:
        return AffectsMatch(matches=True, specificity=Specificity.UNIVERSAL, is_universal=True)

    faction = record.get("faction")
    if isinstance(faction, str) and faction in factions:
        return AffectsMatch(matches=True, specificity=Specificity.FACTION)

    grand_alliance = record.get("grand_alliance")
    if isinstance(grand_alliance, str) and grand_alliance in alliances:
        return AffectsMatch(matches=True, specificity=Specificity.GRAND_ALLIANCE)

    traits = string_set(fields.get("traits"))
    if traits and traits & string_set(record.get("traits")):
        return AffectsMatch(matches=True, specificity=Specificity.TRAIT)

    damage_types = string_set(fields.get("damage_types"))
    if damage_types and damage_types & string_set(record.get("damage_types")):
        return AffectsMatch(matches=True, specificity=Specificity.TRAIT)

    return NO_MATCH
