"""Local roster file reader.

The roster is a JSON list of unit records, or an object wrapping that list
under ``units``/``roster``. Records are returned in file order.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from buffsheet.models.unit import CombatUnit

logger = logging.getLogger(__name__)

_WRAPPER_KEYS = ("units", "roster")


class RosterLoadError(RuntimeError):
    """Roster file missing or not decodable."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to load roster {path}: {reason}")
        self.path = path
        self.reason = reason


def _extract_units(payload: Any) -> List[Any]:
    if isinstance(payload, dict):
        for key in _WRAPPER_KEYS:
            if isinstance(payload.get(key), list):
                return payload[key]
        return []
    if isinstance(payload, list):
        return payload
    return []


def _dedupe(entries: List[Any]) -> List[Dict[str, Any]]:
    seen: set[str] = set()
    deduped: List[Dict[str, Any]] = []

    for entry in entries:
        if not isinstance(entry, dict):
            continue
        name = str(entry.get("name") or "").strip()
        if not name:
            continue
        if name in seen:
            logger.warning("Duplicate unit %r in roster; keeping the first one", name)
            continue
        seen.add(name)
        deduped.append(entry)

    return deduped


def load_roster(path: Union[str, Path], *, validate: bool = False) -> List[Any]:
    """
    Read a roster file.

    Args:
        path: JSON file path.
        validate: return ``CombatUnit`` models instead of raw records
            (raises pydantic ``ValidationError`` on schema violations).

    Returns:
        List of unit records (dicts) or CombatUnit models.
    """
    path = Path(path)
    if not path.exists():
        raise RosterLoadError(path, "file not found")

    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("Failed to load %s: %s", path, exc)
        raise RosterLoadError(path, str(exc)) from exc

    roster = _dedupe(_extract_units(payload))
    logger.info("Loaded %d units from %s", len(roster), path)

    if validate:
        return [CombatUnit.model_validate(entry) for entry in roster]
    return roster
