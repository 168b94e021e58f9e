"""Tests for lineup state transitions."""

import random

import pytest

from bootroom.core.formations import get_formations_for_format
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.slots import SlotId
from bootroom.core.lineup.state import (
    LineupState,
    assign,
    change_formation,
    hydrate,
    move_to_bench,
    move_to_freeform,
    move_to_roster,
    serialize,
    set_label,
    set_role_tag,
)


@pytest.fixture
def empty() -> LineupState:
    return LineupState.empty("4-2-3-1", "ff-")


class TestAssign:
    """Tests for assign."""

    def test_assign_from_roster(self, empty):
        """A roster player takes an empty native slot."""
        state = assign(empty, 3, "LCB")
        assert state.occupant("LCB") == 3
        assert state.slot_of(3) == SlotId("LCB")
        assert empty.assignments == {}

    def test_assign_from_bench(self, empty):
        """Assigning a benched player takes them off the bench."""
        state = move_to_bench(empty, 3)
        state = assign(state, 3, "LCB")
        assert not state.is_benched(3)
        assert state.occupant("LCB") == 3

    def test_move_between_slots_vacates_origin(self, empty):
        """A slot-to-slot move frees the origin slot."""
        state = assign(empty, 9, "CAM")
        state = assign(state, 9, "ST")
        assert state.occupant("CAM") is None
        assert state.occupant("ST") == 9

    def test_displaced_player_becomes_available(self, empty):
        """Without swap the previous occupant is neither placed nor benched."""
        state = assign(empty, 11, "ST")
        state = assign(state, 12, "ST")
        assert state.occupant("ST") == 12
        assert state.slot_of(11) is None
        assert not state.is_benched(11)

    def test_swap(self, empty):
        """With swap the displaced player takes the mover's origin."""
        state = assign(empty, 9, "CAM")
        state = assign(state, 11, "ST")
        state = assign(state, 9, "ST", swap=True)
        assert state.occupant("ST") == 9
        assert state.occupant("CAM") == 11

    def test_swap_with_freeform_origin_keeps_geometry(self, empty):
        """The origin slot keeps its position and label; only the occupant changes."""
        state, free = move_to_freeform(empty, 9, 30.0, 66.0, carry_label="SS")
        state = assign(state, 11, "ST")
        state = assign(state, 9, "ST", swap=True)

        assert state.occupant(free) == 11
        assert state.positions[free] == (30.0, 66.0)
        assert state.labels[free] == "SS"

    def test_swap_from_bench_does_not_bench_displaced(self, empty):
        """Swap only applies to slot-to-slot moves."""
        state = assign(empty, 11, "ST")
        state = move_to_bench(state, 12)
        state = assign(state, 12, "ST", swap=True)
        assert state.occupant("ST") == 12
        assert state.slot_of(11) is None
        assert state.bench == ()

    def test_same_slot_is_noop(self, empty):
        state = assign(empty, 3, "LCB")
        assert assign(state, 3, "LCB") is state

    def test_unknown_slot_is_noop(self, empty):
        """Targets outside the template and not yet assigned are ignored."""
        assert assign(empty, 3, "LWB") is empty
        assert assign(empty, 3, "ff-9") is empty

    def test_assigned_freeform_slot_is_a_valid_target(self, empty):
        """A freeform slot somebody holds can be dropped onto."""
        state, free = move_to_freeform(empty, 5, 10.0, 30.0)
        state = assign(state, 16, free)
        assert state.occupant(free) == 16
        assert state.slot_of(5) is None

    def test_role_tag_follows_player(self, empty):
        """A per-match role travels with the player, not the slot."""
        state = assign(empty, 11, "ST")
        state = set_role_tag(state, "ST", "Poacher")
        state = assign(state, 11, "CAM")
        assert state.role_tags == {SlotId("CAM"): "Poacher"}

    def test_displaced_role_tag_follows_on_swap(self, empty):
        state = assign(empty, 9, "CAM")
        state = assign(state, 11, "ST")
        state = set_role_tag(state, "ST", "Poacher")
        state = set_role_tag(state, "CAM", "Regista")
        state = assign(state, 9, "ST", swap=True)
        assert state.role_tags == {SlotId("ST"): "Regista", SlotId("CAM"): "Poacher"}


class TestFreeformAndContainers:
    """Tests for move_to_freeform, move_to_bench and move_to_roster."""

    def test_freeform_allocates_fresh_ids(self, empty):
        """Each freeform placement gets a new id."""
        state, first = move_to_freeform(empty, 3, 40.0, 20.0)
        state, second = move_to_freeform(state, 3, 45.0, 20.0)
        assert first == SlotId("ff-1")
        assert second == SlotId("ff-2")
        assert state.occupant(first) is None
        assert state.positions == {second: (45.0, 20.0)}

    def test_freeform_clamps(self, empty):
        """Coordinates are clamped into the data space."""
        state, slot = move_to_freeform(empty, 3, -5.0, 140.0)
        assert state.positions[slot] == (0.0, 100.0)

    def test_freeform_from_bench(self, empty):
        state = move_to_bench(empty, 3)
        state, slot = move_to_freeform(state, 3, 40.0, 20.0)
        assert state.bench == ()
        assert state.occupant(slot) == 3

    def test_bench_from_field(self, empty):
        """Benching a placed player empties their slot."""
        state = assign(empty, 3, "LCB")
        state = move_to_bench(state, 3)
        assert state.occupant("LCB") is None
        assert state.bench == (3,)

    def test_bench_idempotent(self, empty):
        state = move_to_bench(empty, 3)
        assert move_to_bench(state, 3) is state

    def test_roster(self, empty):
        """Roster removes from both field and bench."""
        state = assign(empty, 3, "LCB")
        state = move_to_bench(state, 4)
        state = move_to_roster(move_to_roster(state, 3), 4)
        assert state.assignments == {}
        assert state.bench == ()
        assert move_to_roster(state, 3) is state

    def test_vacating_freeform_drops_metadata(self, empty):
        """Leaving a freeform slot removes its position and label."""
        state, slot = move_to_freeform(empty, 3, 40.0, 20.0, carry_label="CB")
        state = move_to_bench(state, 3)
        assert state.positions == {}
        assert state.labels == {}


class TestChangeFormation:
    """Tests for change_formation."""

    def test_shared_slots_keep_ids(self):
        """Slots native to both templates are untouched."""
        state = LineupState.empty("4-2-3-1", "ff-")
        state = assign(assign(state, 1, "GK"), 11, "ST")
        state = change_formation(state, "4-3-3-dm")
        assert state.formation_id == "4-3-3-dm"
        assert state.occupant("GK") == 1
        assert state.occupant("ST") == 11
        assert state.positions == {}

    def test_orphaned_slot_becomes_freeform(self):
        """A wing back with no slot in a back four keeps position, label and role."""
        state = LineupState.empty("5-2-3", "ff-")
        state = assign(state, 5, "LWB")
        state = set_role_tag(state, "LWB", "Overlapping FB")
        state = change_formation(state, "4-2-3-1")

        slot = state.slot_of(5)
        assert slot == SlotId("ff-1")
        assert state.positions[slot] == (10, 28)
        assert state.labels[slot] == "LWB"
        assert state.role_tags[slot] == "Overlapping FB"

    def test_existing_freeform_slots_kept(self):
        """Slots that were already freeform keep their id."""
        state = LineupState.empty("4-2-3-1", "ff-")
        state, slot = move_to_freeform(state, 7, 70.0, 50.0)
        state = change_formation(state, "4-4-2")
        assert state.slot_of(7) == slot
        assert state.positions[slot] == (70.0, 50.0)

    def test_nobody_lost(self, empty):
        """Every player placed before a switch is placed after it."""
        state = empty
        for player_id, slot in enumerate(empty.formation.slots, start=1):
            state = assign(state, player_id, slot.id)
        state = change_formation(state, "3-4-3")
        assert sorted(state.placed_player_ids) == list(range(1, 12))
        assert state.invariant_violations() == []

    def test_unknown_and_same_formation_noop(self, empty):
        assert change_formation(empty, "retired") is empty
        assert change_formation(empty, "4-2-3-1") is empty


class TestLabelsAndRoles:
    """Tests for set_role_tag and set_label."""

    def test_set_and_clear_role(self, empty):
        state = set_role_tag(assign(empty, 6, "LCDM"), "LCDM", "Anchor")
        assert state.role_tags[SlotId("LCDM")] == "Anchor"
        state = set_role_tag(state, "LCDM", None)
        assert state.role_tags == {}

    def test_role_on_empty_slot_noop(self, empty):
        assert set_role_tag(empty, "LCDM", "Anchor") is empty

    def test_label_override(self, empty):
        state = set_label(assign(empty, 11, "ST"), "ST", "F9")
        assert state.labels == {SlotId("ST"): "F9"}
        assert set_label(state, "ST", "F9") is state


class TestInvariants:
    """Sequences of operations never break the state invariants."""

    def test_mixed_sequence(self, empty):
        """No player is ever in two places; no metadata is orphaned."""
        state = empty
        state = assign(state, 1, "GK")
        state = assign(state, 2, "ST")
        state, free = move_to_freeform(state, 3, 20.0, 45.0, carry_label="LM")
        state = set_role_tag(state, free, "Winger")
        state = move_to_bench(state, 2)
        state = assign(state, 2, free, swap=True)
        state = assign(state, 4, "ST")
        state = assign(state, 4, "GK", swap=True)
        state = change_formation(state, "5-2-3")
        state = move_to_roster(state, 3)
        state = move_to_bench(state, 1)
        state, _ = move_to_freeform(state, 1, 50.0, 8.0)

        assert state.invariant_violations() == []
        placed = state.placed_player_ids
        assert len(placed) == len(set(placed))
        assert not set(placed) & set(state.bench)

    def test_violations_reported(self):
        """Hand-built broken state is diagnosed."""
        state = LineupState(
            formation_id="4-2-3-1",
            allocator=LineupState.empty("4-2-3-1", "ff-").allocator,
            assignments={SlotId("GK"): 1},
            bench=(1,),
            labels={SlotId("ff-3"): "X"},
        )
        problems = state.invariant_violations()
        assert "player 1 appears more than once" in problems
        assert "labels has orphaned slot ff-3" in problems


class TestPersistence:
    """Tests for hydrate and serialize."""

    def test_round_trip_reseeds_counter(self):
        """A hydrated lineup never reissues an existing freeform id."""
        state = LineupState.empty("4-2-3-1", "ff-")
        state = assign(state, 1, "GK")
        state, _ = move_to_freeform(state, 2, 10.0, 30.0, carry_label="LWB")
        state, _ = move_to_freeform(state, 3, 90.0, 30.0)
        state = set_role_tag(state, "GK", "Sweeper Keeper")
        state = move_to_bench(state, 4)

        restored = hydrate(serialize(state), state.bench, "4-2-3-1", "ff-")
        assert restored.assignments == state.assignments
        assert restored.positions == state.positions
        assert restored.labels == state.labels
        assert restored.role_tags == state.role_tags
        assert restored.bench == (4,)

        restored, slot = move_to_freeform(restored, 5, 50.0, 50.0)
        assert slot == SlotId("ff-3")

    def test_serialize_omits_template_geometry(self):
        """Native slots without overrides persist only slot and player."""
        state = assign(LineupState.empty("4-2-3-1", "ff-"), 9, "CAM")
        assert serialize(state) == [LineupEntry(slot_id="CAM", player_id=9)]

    def test_duplicates_keep_first(self):
        """A player or slot appearing twice keeps the first occurrence."""
        entries = [
            LineupEntry(slot_id="ST", player_id=11),
            LineupEntry(slot_id="CAM", player_id=11),
            LineupEntry(slot_id="ST", player_id=12),
        ]
        state = hydrate(entries, [11, 13], "4-2-3-1", "ff-")
        assert state.assignments == {SlotId("ST"): 11}
        assert state.bench == (13,)
        assert state.invariant_violations() == []

    def test_hydrate_non_ascii_suffix(self):
        """A freeform-looking id with a non-ASCII digit still hydrates."""
        entries = [LineupEntry(slot_id="ff-²", player_id=7, x=40.0, y=50.0)]
        state = hydrate(entries, [], "4-2-3-1", "ff-")
        assert state.occupant("ff-²") == 7
        assert state.allocator.next_index == 1

        state, slot = move_to_freeform(state, 8, 60.0, 50.0)
        assert slot == SlotId("ff-1")
        assert state.invariant_violations() == []


class TestRandomSequences:
    """Randomised operation sequences keep every invariant."""

    FORMATIONS = [formation.id for formation in get_formations_for_format("11v11")]
    PLAYERS = list(range(1, 17))

    def _step(self, state: LineupState) -> LineupState:
        player_id = random.choice(self.PLAYERS)
        op = random.choice(["assign", "swap", "freeform", "bench", "roster", "formation"])

        if op in ("assign", "swap"):
            targets = [slot.id for slot in state.formation.slots] + [str(s) for s in state.assignments]
            return assign(state, player_id, random.choice(targets), swap=op == "swap")
        if op == "freeform":
            label = random.choice([None, "LM", "F9"])
            state, _ = move_to_freeform(state, player_id, random.uniform(0, 100), random.uniform(0, 100), label)
            return state
        if op == "bench":
            return move_to_bench(state, player_id)
        if op == "roster":
            return move_to_roster(state, player_id)
        return change_formation(state, random.choice(self.FORMATIONS))

    def test_invariants_hold_after_every_step(self):
        """No duplicate players or orphaned metadata after each operation."""
        random.seed(42)

        for _ in range(5):
            state = LineupState.empty(random.choice(self.FORMATIONS), "ff-")
            for step in range(300):
                state = self._step(state)
                assert state.invariant_violations() == [], f"step {step}"

                placed = state.placed_player_ids
                assert len(placed) == len(set(placed))
                assert not set(placed) & set(state.bench)

    def test_role_tags_follow_players(self):
        """Tagged players keep their tag through any sequence that keeps them placed."""
        random.seed(42)
        state = LineupState.empty("4-2-3-1", "ff-")
        state = set_role_tag(assign(state, 6, "LCDM"), "LCDM", "Anchor")

        for _ in range(200):
            player_id = random.choice([p for p in self.PLAYERS if p != 6])
            targets = [slot.id for slot in state.formation.slots]
            state = assign(state, player_id, random.choice(targets), swap=True)
            if random.random() < 0.1:
                state = change_formation(state, random.choice(self.FORMATIONS))

            slot = state.slot_of(6)
            if slot is not None:
                assert state.role_tags.get(slot) == "Anchor"
