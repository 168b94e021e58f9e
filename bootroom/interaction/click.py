"""
Tap-to-assign.

An alternative to dragging for touch screens: pick a player, then pick a
slot. Selecting a slot with nobody pending picks up whoever stands there.
"""

import logging
from typing import Optional

from bootroom.core.lineup.slots import SlotId, SlotIdLike
from bootroom.core.lineup.store import AssignmentStore

logger = logging.getLogger(__name__)


class ClickAssigner:
    """Holds at most one pending player and commits it on a slot click."""

    def __init__(self, store: AssignmentStore) -> None:
        self.store = store
        self.pending_player_id: Optional[int] = None

    @property
    def has_pending(self) -> bool:
        return self.pending_player_id is not None

    def click_player(self, player_id: int) -> Optional[int]:
        """
        Toggle a player as pending.

        Clicking the pending player again deselects them; clicking anyone
        else replaces the selection.

        Returns:
            The pending player id after the click
        """
        if self.pending_player_id == player_id:
            self.pending_player_id = None
        else:
            self.pending_player_id = player_id
        return self.pending_player_id

    def click_slot(self, slot_id: SlotIdLike) -> bool:
        """
        Handle a click on a slot.

        With a player pending, assigns them to the slot (no swap: anyone
        displaced becomes available) unless the slot already holds them, in
        which case the selection is cleared. With nobody pending, the slot's
        occupant becomes pending.

        Returns:
            True if the lineup changed
        """
        slot = SlotId.of(slot_id)
        occupant = self.store.occupant(slot)

        if self.pending_player_id is None:
            self.pending_player_id = occupant
            return False

        player_id = self.pending_player_id
        self.pending_player_id = None
        if occupant == player_id:
            return False

        changed = self.store.assign(player_id, slot)
        logger.debug(f"Click-assigned player {player_id} to {slot}: {'ok' if changed else 'ignored'}")
        return changed

    def clear(self) -> None:
        """Drop the pending selection."""
        self.pending_player_id = None
