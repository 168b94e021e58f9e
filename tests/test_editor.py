"""Tests for the lineup editor session."""

import datetime

import pytest

from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.slots import SlotId
from bootroom.core.models.match import MatchLineup
from bootroom.editor import LineupEditor
from bootroom.interaction.drag import DragOrigin, DropAction

STARTING_SLOTS = ["GK", "RB", "LCB", "RCB", "LB", "LCDM", "RCDM", "RW", "CAM", "LW", "ST"]
ROSTER = (600, 400)
CAM = (300, 290)
ST = (300, 158)


def _fill(editor: LineupEditor, slots=STARTING_SLOTS, **overrides) -> None:
    """Place players 1-11 in order, with per-slot replacements."""
    for player_id, slot_id in enumerate(slots, start=1):
        editor.store.assign(overrides.get(slot_id, player_id), slot_id)


class TestFormats:
    """Tests for game format handling."""

    def test_eleven_a_side_defaults(self, editor):
        assert editor.formation.id == "4-2-3-1"
        assert editor.slot_count == 11
        assert len(editor.formations) == 12

    def test_default_format_from_config(self, directory, engine_config):
        engine_config.default_game_format = "9v9"
        editor = LineupEditor(directory)
        assert editor.formation.id == "9v9-3-2-3"
        assert editor.slot_count == 9

    def test_small_sided(self, directory):
        editor = LineupEditor(directory, game_format="7v7")
        assert editor.formation.id == "7v7-2-3-1"
        assert {f.id for f in editor.formations} == {"7v7-2-3-1", "7v7-3-2-1", "7v7-2-1-2-1"}


class TestDetection:
    """Tests for the derived formation label."""

    def test_needs_all_but_one(self, editor):
        _fill(editor, STARTING_SLOTS[1:10])
        assert editor.detected_formation is None
        editor.store.assign(10, "ST")
        assert editor.detected_formation == "4-2-3-1"

    def test_freeform_changes_label(self, editor):
        """Moving the CAM back into midfield changes the shape."""
        _fill(editor)
        editor.store.move_to_freeform(9, 50.0, 48.0)
        assert editor.detected_formation == "4-2-1-2-1"

    def test_stale_players_not_counted(self, editor):
        _fill(editor, GK=999, ST=998)
        assert editor.assigned_count == 11
        assert editor.detected_formation is None


class TestSnapshot:
    """Tests for the save payload."""

    def test_template_id_until_detected(self, editor):
        editor.change_formation("4-3-3-dm")
        editor.store.assign(1, "GK")
        assert editor.snapshot().formation == "4-3-3-dm"

    def test_detected_label_when_ready(self, editor):
        editor.change_formation("4-3-3-dm")
        _fill(editor, [slot.id for slot in editor.formation.slots])
        snapshot = editor.snapshot()
        assert snapshot.formation == "4-1-2-3"
        assert len(snapshot.lineup) == 11

    def test_to_dict(self, full_editor):
        data = full_editor.snapshot().to_dict()
        assert data["bench"] == [12, 13, 14]
        assert {"slotId": "ST", "playerId": 11} in data["lineup"]


@pytest.fixture
def full_editor(editor) -> LineupEditor:
    _fill(editor)
    for player_id in (12, 13, 14):
        editor.store.move_to_bench(player_id)
    return editor


class TestLoading:
    """Tests for new_lineup and load_match."""

    def test_load_match(self, editor, last_match):
        editor.load_match(last_match)
        assert editor.match_id == 100
        assert editor.assigned_count == 11
        assert editor.store.bench == [12, 13]

    def test_load_filters_departed_players(self, editor):
        match = MatchLineup(
            id=7,
            date=datetime.date(2024, 1, 6),
            lineup=(LineupEntry(slot_id="GK", player_id=1), LineupEntry(slot_id="ST", player_id=999)),
            bench=(998, 12),
            formation="4-2-3-1",
        )
        editor.load_match(match)
        assert editor.store.assignments == {SlotId("GK"): 1}
        assert editor.store.bench == [12]

    def test_unknown_formation_falls_back(self, editor):
        match = MatchLineup(id=7, date=datetime.date(2024, 1, 6), formation="2-3-5")
        editor.load_match(match)
        assert editor.formation.id == "4-2-3-1"

    def test_load_reseeds_freeform(self, editor):
        match = MatchLineup(
            id=7,
            date=datetime.date(2024, 1, 6),
            lineup=(LineupEntry(slot_id="ff-4", player_id=5, x=10.0, y=30.0, label="LWB"),),
            formation="4-2-3-1",
        )
        editor.load_match(match)
        assert editor.store.move_to_freeform(2, 90.0, 30.0) == SlotId("ff-5")

    def test_new_lineup(self, full_editor):
        full_editor.click_player(15)
        full_editor.change_formation("4-4-2")
        full_editor.new_lineup()
        assert full_editor.assigned_count == 0
        assert full_editor.formation.id == "4-2-3-1"
        assert full_editor.match_id is None
        assert not full_editor.clicks.has_pending


class TestSquadViews:
    """Tests for available players, bench and roles."""

    def test_available_players(self, full_editor):
        assert [p.id for p in full_editor.available_players()] == [15, 16]
        assert [p.id for p in full_editor.available_players("conor")] == [16]

    def test_bench_players(self, full_editor):
        assert [p.name for p in full_editor.bench_players()] == ["Cody Gakpo", "Harvey Elliott", "Curtis Jones"]

    def test_role_tags(self, full_editor):
        """Override per slot, else the player's default role."""
        full_editor.set_role_tag("LCDM", "Anchor")
        full_editor.set_role_tag("ST", "Pressing Forward")
        roles = full_editor.role_tags()
        assert roles[SlotId("LCDM")] == "Anchor"
        assert roles[SlotId("ST")] == "Pressing Forward"
        assert roles[SlotId("GK")] == "Sweeper Keeper"
        assert SlotId("LCB") not in roles


class TestLineupDiff:
    """Tests for the change banner."""

    def test_requires_saved_match(self, full_editor, last_match):
        assert full_editor.lineup_diff([last_match]) is None

    def test_requires_enough_players(self, editor, last_match, this_match):
        editor.load_match(this_match)
        _fill(editor, STARTING_SLOTS[:7])
        assert editor.lineup_diff([last_match, this_match]) is None
        _fill(editor, STARTING_SLOTS[:8])
        assert editor.lineup_diff([last_match, this_match]) is not None

    def test_new_spine(self, editor, last_match, this_match):
        editor.load_match(this_match)
        _fill(editor, GK=15, LCB=16, ST=12)
        diff = editor.lineup_diff([last_match, this_match])
        assert diff.new_spine
        assert diff.message == "New Spine This Week"

    def test_no_previous_match(self, editor, this_match):
        editor.load_match(this_match)
        _fill(editor)
        assert editor.lineup_diff([this_match]) is None


class TestInteraction:
    """Tests for pointer and click routing."""

    def test_drag_assigns(self, editor):
        editor.pointer_down(15, DragOrigin.ROSTER, *ROSTER)
        editor.pointer_move(*ST)
        result = editor.pointer_up(*ST)
        assert result.action is DropAction.ASSIGN_SLOT
        assert editor.store.occupant("ST") == 15
        assert editor.last_drop == result

    def test_tap_on_roster_chip_selects(self, editor):
        """A gesture that never crossed the threshold selects the player."""
        editor.pointer_down(15, DragOrigin.ROSTER, *ROSTER)
        editor.pointer_up(*ROSTER)
        assert editor.clicks.pending_player_id == 15

    def test_tap_then_tap_slot_assigns(self, editor):
        editor.click_player(15)
        assert editor.click_slot("CAM")
        assert editor.store.occupant("CAM") == 15

    def test_tap_on_field_chip_selects_occupant(self, full_editor):
        full_editor.pointer_down(9, DragOrigin.FIELD, *CAM)
        full_editor.pointer_up(*CAM)
        assert full_editor.clicks.pending_player_id == 9

    def test_clicks_ignored_while_dragging(self, full_editor):
        full_editor.click_player(15)
        full_editor.pointer_down(16, DragOrigin.ROSTER, *ROSTER)
        full_editor.pointer_move(*CAM)

        assert full_editor.click_player(16) == 15
        assert full_editor.click_slot("ST") is False
        assert full_editor.store.occupant("ST") == 11
