"""Resolved buff value objects."""
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ResolvedBuffInstance:
    """A buff known to apply to one target, detached from its predicate."""

    buff_name: str
    source_name: str
    effect: Optional[Dict[str, Any]] = None
    omit: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "buffName": self.buff_name,
            "sourceName": self.source_name,
            "effect": self.effect,
            "omit": self.omit,
        }
