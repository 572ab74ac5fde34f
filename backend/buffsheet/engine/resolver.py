"""Per-target buff resolution for one source unit."""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Dict, List, Tuple

from buffsheet.models.buff import ResolvedBuffInstance

from .matching import AffectsMatch, match_affects
from .records import as_record, same_unit, unit_name

logger = logging.getLogger(__name__)


def _buff_definitions(source: Mapping) -> List[Mapping]:
    buffs = source.get("buffs")
    if not isinstance(buffs, (list, tuple)):
        return []
    return [buff for buff in buffs if isinstance(buff, Mapping)]


def resolve_buffs(source_unit: Any, target_unit: Any) -> List[ResolvedBuffInstance]:
    """
    Buffs of ``source_unit`` that apply to ``target_unit``, one per buff name.

    Same-named variants compete on specificity; an exact tie keeps the
    earliest-declared variant. A unit never resolves buffs against itself.
    """
    source = as_record(source_unit, role="source unit")
    target = as_record(target_unit, role="target unit")
    if source_unit is target_unit or same_unit(source, target):
        return []

    source_name = unit_name(source)
    best: Dict[str, Tuple[AffectsMatch, Mapping]] = {}

    for buff in _buff_definitions(source):
        name = buff.get("name")
        if not isinstance(name, str) or not name:
            logger.debug("Skipping unnamed buff on %s", source_name)
            continue

        match = match_affects(buff.get("affects"), target)
        if not match.matches:
            continue

        current = best.get(name)
        if current is None:
            best[name] = (match, buff)
        elif match.specificity > current[0].specificity:
            logger.debug(
                "%s: %s variant with specificity %s replaces %s for %s",
                source_name,
                name,
                int(match.specificity),
                int(current[0].specificity),
                unit_name(target),
            )
            best[name] = (match, buff)

    resolved: List[ResolvedBuffInstance] = []
    for name, (_, buff) in best.items():
        effect = buff.get("effect")
        resolved.append(
            ResolvedBuffInstance(
                buff_name=name,
                source_name=source_name,
                effect=dict(effect) if isinstance(effect, Mapping) else None,
                omit=buff.get("omit"),
            )
        )
    return resolved
