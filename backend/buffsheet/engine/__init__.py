"""Buff engine: matching, resolution, interpolation and aggregation."""

from .aggregator import compute_buff_damage
from .interpolation import LevelTable, compile_level_map, value_at
from .matching import AffectsMatch, Specificity, match_affects
from .records import RecordTypeError, find_unit
from .resolver import resolve_buffs
from .roster_index import RosterBuffIndex, incoming_buffs, outgoing_buffs

__all__ = [
    "compute_buff_damage",
    "LevelTable",
    "compile_level_map",
    "value_at",
    "AffectsMatch",
    "Specificity",
    "match_affects",
    "RecordTypeError",
    "find_unit",
    "resolve_buffs",
    "RosterBuffIndex",
    "incoming_buffs",
    "outgoing_buffs",
]
