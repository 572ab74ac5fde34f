import copy
import json
from pathlib import Path

import pytest

DATA_DIR = Path(__file__).parent / "data"

_ROSTER = json.loads((DATA_DIR / "units.json").read_text(encoding="utf-8"))


@pytest.fixture
def roster_path() -> Path:
    return DATA_DIR / "units.json"


@pytest.fixture
def roster():
    return copy.deepcopy(_ROSTER)


@pytest.fixture
def units(roster):
    """Roster records keyed by name (same objects as in ``roster``)."""
    return {unit["name"]: unit for unit in roster}
