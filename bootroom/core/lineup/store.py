"""
Assignment store.

The authoritative holder of one editing session's LineupState. Every
mutation is a single whole-state transition from `bootroom.core.lineup.state`;
the store swaps its reference once and notifies listeners.
"""

import logging
from typing import TYPE_CHECKING, Iterable, Optional

from bootroom.config import get_config
from bootroom.core.formations.catalog import FormationTemplate
from bootroom.core.lineup import state as transitions
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.slots import SlotId, SlotIdLike
from bootroom.core.lineup.state import LineupState
from bootroom.events.types import LineupChangedEvent

if TYPE_CHECKING:
    from bootroom.core.models.player import PlayerDirectory, PlayerRef
    from bootroom.events.bus import EventBus

logger = logging.getLogger(__name__)


class AssignmentStore:
    """
    Mapping of players to slots plus the bench, for one editing session.

    Operations never raise for bad input: a transition that would change
    nothing (unknown slot, unknown formation, player already where asked)
    leaves the state untouched and returns False / None.
    """

    def __init__(
        self,
        formation_id: str,
        freeform_prefix: Optional[str] = None,
        event_bus: Optional["EventBus"] = None,
        state: Optional[LineupState] = None,
    ) -> None:
        self.freeform_prefix = freeform_prefix or get_config().freeform_prefix
        self._event_bus = event_bus
        self._state = state or LineupState.empty(formation_id, self.freeform_prefix)

    # =========================================================================
    # Construction / persistence
    # =========================================================================

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[LineupEntry],
        bench: Iterable[int],
        formation_id: str,
        freeform_prefix: Optional[str] = None,
        event_bus: Optional["EventBus"] = None,
    ) -> "AssignmentStore":
        """Hydrate a store from a persisted lineup."""
        store = cls(formation_id, freeform_prefix, event_bus=event_bus)
        store.load(entries, bench, formation_id)
        return store

    def load(self, entries: Iterable[LineupEntry], bench: Iterable[int], formation_id: str) -> None:
        """Replace the whole lineup with a persisted one."""
        self._commit(transitions.hydrate(entries, bench, formation_id, self.freeform_prefix), "load")

    def to_entries(self) -> list[LineupEntry]:
        """Serialize the assignments for saving."""
        return transitions.serialize(self._state)

    def reset(self, formation_id: str) -> None:
        """Start over with an empty lineup."""
        self._commit(LineupState.empty(formation_id, self.freeform_prefix), "reset")

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> LineupState:
        """Current immutable state."""
        return self._state

    @property
    def formation(self) -> FormationTemplate:
        return self._state.formation

    @property
    def formation_id(self) -> str:
        return self._state.formation_id

    @property
    def assignments(self) -> dict[SlotId, int]:
        return dict(self._state.assignments)

    @property
    def bench(self) -> list[int]:
        return list(self._state.bench)

    @property
    def filled_slot_ids(self) -> list[SlotId]:
        return list(self._state.assignments)

    def slot_of(self, player_id: int) -> Optional[SlotId]:
        return self._state.slot_of(player_id)

    def occupant(self, slot_id: SlotIdLike) -> Optional[int]:
        return self._state.occupant(slot_id)

    def is_benched(self, player_id: int) -> bool:
        return self._state.is_benched(player_id)

    def is_available(self, player_id: int) -> bool:
        """Neither placed nor benched."""
        return self.slot_of(player_id) is None and not self.is_benched(player_id)

    def available_players(self, directory: "PlayerDirectory") -> list["PlayerRef"]:
        """Players in the directory who are neither placed nor benched."""
        return [player for player in directory if self.is_available(player.id)]

    # =========================================================================
    # Mutations
    # =========================================================================

    def assign(self, player_id: int, slot_id: SlotIdLike, swap: bool = False) -> bool:
        """
        Put a player into a slot.

        Args:
            player_id: Player being placed
            slot_id: Native slot of the current formation, or an assigned slot
            swap: Slot-to-slot move; a displaced player takes the origin slot

        Returns:
            True if the lineup changed
        """
        return self._commit(
            transitions.assign(self._state, player_id, slot_id, swap=swap),
            "assign",
            player_id,
        )

    def move_to_freeform(
        self,
        player_id: int,
        x: float,
        y: float,
        carry_label: Optional[str] = None,
    ) -> SlotId:
        """
        Place a player at a free point on the field.

        Returns:
            The newly allocated freeform slot id
        """
        new_state, slot_id = transitions.move_to_freeform(self._state, player_id, x, y, carry_label)
        self._commit(new_state, "freeform", player_id)
        return slot_id

    def move_to_bench(self, player_id: int) -> bool:
        return self._commit(transitions.move_to_bench(self._state, player_id), "bench", player_id)

    def move_to_roster(self, player_id: int) -> bool:
        return self._commit(transitions.move_to_roster(self._state, player_id), "roster", player_id)

    def change_formation(self, formation_id: str) -> bool:
        """Switch templates; orphaned native slots degrade to freeform."""
        return self._commit(transitions.change_formation(self._state, formation_id), "formation")

    def set_role_tag(self, slot_id: SlotIdLike, role_tag: Optional[str]) -> bool:
        return self._commit(
            transitions.set_role_tag(self._state, slot_id, role_tag),
            "role",
            self.occupant(slot_id),
        )

    def set_label(self, slot_id: SlotIdLike, label: Optional[str]) -> bool:
        return self._commit(
            transitions.set_label(self._state, slot_id, label),
            "label",
            self.occupant(slot_id),
        )

    def _commit(self, new_state: LineupState, operation: str, player_id: Optional[int] = None) -> bool:
        if new_state is self._state:
            return False
        self._state = new_state
        logger.debug(f"Committed {operation} ({len(new_state.assignments)} placed, {len(new_state.bench)} benched)")
        if self._event_bus is not None:
            self._event_bus.emit(
                LineupChangedEvent(operation=operation, player_id=player_id, state=new_state)
            )
        return True
