"""RosterBuffIndex: incoming/outgoing listings, ranking and self exclusion."""
import copy

import pytest

from buffsheet.config import settings
from buffsheet.engine.records import RecordTypeError, find_unit
from buffsheet.engine.roster_index import RosterBuffIndex, incoming_buffs, outgoing_buffs
from buffsheet.models import CombatUnit

LEVEL = 37


def _names(entries, attr):
    return [getattr(entry, attr)["name"] for entry in entries]


class TestIncoming:
    def test_sygex_receives_heavy_weapon_spotter(self, roster, units):
        entries = incoming_buffs(units["Sy-gex"], roster, LEVEL)

        assert _names(entries, "source_unit") == ["Thaddeus Noble"]
        entry = entries[0]
        assert entry.source_unit is units["Thaddeus Noble"]
        assert [buff.buff_name for buff in entry.buffs] == ["Spotter"]
        assert entry.buff_data.totals.buffed_range == 3 * 140
        assert entry.buff_data.totals.buffed_melee == 0

    def test_ranked_by_combined_total(self, roster, units):
        entries = incoming_buffs(units["Haarken Worldclaimer"], roster, LEVEL)

        assert _names(entries, "source_unit") == ["Abaddon the Despoiler", "Thaddeus Noble"]
        assert entries[0].buff_data.totals.combined == 5 * 50 + 5 * 24
        # Spotter resolves but Haarken has no ranged attack: listed with zero.
        assert entries[1].buff_data.totals.combined == 0
        assert entries[1].buff_data.buff_rows == []

    def test_excludes_self(self, roster, units):
        # First Among Traitors targets Chaos, which includes Abaddon himself.
        entries = incoming_buffs(units["Abaddon the Despoiler"], roster, LEVEL)
        assert _names(entries, "source_unit") == ["Thaddeus Noble"]
        assert entries[0].buff_data.totals.buffed_range == 2 * 114

    def test_unit_nobody_buffs(self, roster):
        loner = {"name": "Loner", "faction": "None", "stats": {"melee": 1}}
        entries = incoming_buffs(loner, roster, LEVEL)
        # Only the universal Spotter reaches an unaffiliated unit.
        assert _names(entries, "source_unit") == ["Thaddeus Noble"]

    def test_level_changes_values(self, roster, units):
        entries = incoming_buffs(units["Sy-gex"], roster, 17)
        assert entries[0].buff_data.totals.buffed_range == 3 * 30


class TestOutgoing:
    def test_thaddeus_ranking_and_ties(self, roster, units):
        entries = outgoing_buffs(units["Thaddeus Noble"], roster, LEVEL)

        assert _names(entries, "target_unit") == [
            "Sy-gex",
            "Abaddon the Despoiler",
            "Bellator",
            "Haarken Worldclaimer",
        ]
        combined = [entry.buff_data.totals.combined for entry in entries]
        assert combined == [3 * 140, 2 * 114, 0, 0]

    def test_excludes_self(self, roster, units):
        entries = outgoing_buffs(units["Thaddeus Noble"], roster, LEVEL)
        assert "Thaddeus Noble" not in _names(entries, "target_unit")

    def test_abaddon_buffs_chaos_only(self, roster, units):
        entries = outgoing_buffs(units["Abaddon the Despoiler"], roster, LEVEL)
        assert _names(entries, "target_unit") == ["Haarken Worldclaimer"]
        rows = entries[0].buff_data.buff_rows
        assert [row.name for row in rows] == ["First Among Traitors", "First Among Traitors+"]

    def test_source_without_buffs(self, roster, units):
        assert outgoing_buffs(units["Bellator"], roster, LEVEL) == []

    def test_to_dict(self, roster, units):
        payload = outgoing_buffs(units["Abaddon the Despoiler"], roster, LEVEL)[0].to_dict()
        assert payload["targetUnit"]["name"] == "Haarken Worldclaimer"
        assert payload["buffs"][0]["sourceName"] == "Abaddon the Despoiler"
        assert payload["buffData"]["totals"]["buffedBonusMelee"] == 5 * 24


class TestRanking:
    def test_equal_totals_keep_roster_order(self):
        source = {
            "name": "Banner",
            "buffs": [{"name": "Hold", "affects": {"faction": ["*"]}, "effect": {"damage": {"1": "1"}}}],
        }
        roster = [
            {"name": "A", "stats": {"melee": 2}},
            source,
            {"name": "B", "stats": {"melee": 3}},
            {"name": "C", "stats": {"melee": 2}},
            {"name": "D", "stats": {"range": 2}},
        ]
        entries = outgoing_buffs(source, roster, 1)
        assert _names(entries, "target_unit") == ["B", "A", "C", "D"]


class TestContract:
    def test_roster_is_not_mutated(self, roster, units):
        snapshot = copy.deepcopy(roster)
        incoming_buffs(units["Sy-gex"], roster, LEVEL)
        outgoing_buffs(units["Thaddeus Noble"], roster, LEVEL)
        assert roster == snapshot

    @pytest.mark.parametrize("bad_roster", ["units.json", {"name": "Bellator"}, None, 3])
    def test_non_sequence_roster_raises(self, units, bad_roster):
        with pytest.raises(RecordTypeError):
            incoming_buffs(units["Bellator"], bad_roster, LEVEL)

    def test_non_record_member_raises(self, roster, units):
        with pytest.raises(RecordTypeError):
            outgoing_buffs(units["Thaddeus Noble"], roster + ["Ghost"], LEVEL)

    def test_non_record_focal_raises(self, roster):
        with pytest.raises(TypeError):
            incoming_buffs("Sy-gex", roster, LEVEL)

    def test_typed_roster(self, roster):
        typed = [CombatUnit.model_validate(unit) for unit in roster]
        sygex = typed[3]

        entries = incoming_buffs(sygex, typed, LEVEL)

        assert [entry.source_unit.name for entry in entries] == ["Thaddeus Noble"]
        assert entries[0].buff_data.totals.buffed_range == 3 * 140
        assert entries[0].to_dict()["sourceUnit"]["name"] == "Thaddeus Noble"

    def test_mixed_roster(self, roster):
        mixed = list(roster)
        mixed[0] = CombatUnit.model_validate(roster[0])
        entries = outgoing_buffs(mixed[0], mixed, LEVEL)
        assert len(entries) == 4


class TestRosterBuffIndex:
    def test_lookup_by_name(self, roster):
        index = RosterBuffIndex(roster, level=LEVEL)
        assert index.unit("sy-GEX ")["name"] == "Sy-gex"
        assert _names(index.incoming("Sy-gex"), "source_unit") == ["Thaddeus Noble"]
        assert len(index.outgoing("Thaddeus Noble")) == 4

    def test_accepts_unit_records(self, roster, units):
        index = RosterBuffIndex(roster, level=LEVEL)
        assert _names(index.outgoing(units["Abaddon the Despoiler"]), "target_unit") == ["Haarken Worldclaimer"]

    def test_unknown_unit(self, roster):
        with pytest.raises(KeyError):
            RosterBuffIndex(roster).incoming("Nobody")

    def test_default_level(self, roster):
        assert RosterBuffIndex(roster).level == settings.reference_level

    def test_rejects_bad_roster(self):
        with pytest.raises(RecordTypeError):
            RosterBuffIndex("units.json")

    def test_find_unit(self, roster):
        assert find_unit(roster, "bellator") is roster[2]
        assert find_unit(roster, "") is None
        assert find_unit(roster, "Nobody") is None


class TestRosterBuffIndexReuse:
    def test_records_converted_once(self, roster, monkeypatch):
        typed = [CombatUnit.model_validate(unit) for unit in roster]
        index = RosterBuffIndex(typed, level=LEVEL)
        assert [record["name"] for _, record in index.members] == [unit.name for unit in typed]

        def _fail(self):
            raise AssertionError("roster member converted again")

        monkeypatch.setattr(CombatUnit, "to_record", _fail)

        incoming = index.incoming("Sy-gex")
        outgoing = index.outgoing(typed[0])

        assert [entry.source_unit.name for entry in incoming] == ["Thaddeus Noble"]
        assert incoming[0].buff_data.totals.buffed_range == 3 * 140
        assert [entry.target_unit.name for entry in outgoing][:2] == ["Sy-gex", "Abaddon the Despoiler"]

    def test_matches_module_functions(self, roster, units):
        index = RosterBuffIndex(roster, level=LEVEL)
        for name in units:
            assert [e.to_dict() for e in index.incoming(name)] == [
                e.to_dict() for e in incoming_buffs(units[name], roster, LEVEL)
            ]
            assert [e.to_dict() for e in index.outgoing(name)] == [
                e.to_dict() for e in outgoing_buffs(units[name], roster, LEVEL)
            ]

    def test_focal_outside_roster(self, roster):
        index = RosterBuffIndex(roster, level=LEVEL)
        loner = {"name": "Loner", "faction": "None", "stats": {"melee": 1}}
        assert [entry.source_unit["name"] for entry in index.incoming(loner)] == ["Thaddeus Noble"]
