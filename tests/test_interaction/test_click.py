"""Tests for tap-to-assign."""

import pytest

from bootroom.interaction.click import ClickAssigner


@pytest.fixture
def clicks(full_store) -> ClickAssigner:
    return ClickAssigner(full_store)


class TestClickAssigner:
    """Tests for ClickAssigner."""

    def test_click_player_toggles(self, clicks):
        """Clicking the pending player again deselects them."""
        assert clicks.click_player(15) == 15
        assert clicks.has_pending
        assert clicks.click_player(15) is None
        assert not clicks.has_pending

    def test_click_other_player_replaces(self, clicks):
        clicks.click_player(15)
        assert clicks.click_player(16) == 16

    def test_pending_player_assigned_on_slot_click(self, clicks, full_store):
        """The occupant is displaced, not swapped."""
        clicks.click_player(12)
        assert clicks.click_slot("ST") is True
        assert full_store.occupant("ST") == 12
        assert full_store.is_available(11)
        assert clicks.pending_player_id is None

    def test_click_own_slot_deselects(self, clicks, full_store):
        before = full_store.state
        clicks.click_player(11)
        assert clicks.click_slot("ST") is False
        assert clicks.pending_player_id is None
        assert full_store.state is before

    def test_slot_click_without_pending_selects_occupant(self, clicks):
        assert clicks.click_slot("CAM") is False
        assert clicks.pending_player_id == 9

    def test_field_player_to_other_slot(self, clicks, full_store):
        """Picking a placed player then another slot moves them without a swap."""
        clicks.click_slot("CAM")
        clicks.click_slot("ST")
        assert full_store.occupant("ST") == 9
        assert full_store.occupant("CAM") is None
        assert full_store.is_available(11)

    def test_unknown_slot_clears_selection(self, clicks, full_store):
        clicks.click_player(15)
        assert clicks.click_slot("LWB") is False
        assert clicks.pending_player_id is None
        assert full_store.is_available(15)

    def test_clear(self, clicks):
        clicks.click_player(15)
        clicks.clear()
        assert not clicks.has_pending
