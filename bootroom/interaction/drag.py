"""
Drag and drop of player chips.

A three-phase state machine turns a pointer gesture into at most one
AssignmentStore operation:

    IDLE --pointer down on a chip--> ARMED
    ARMED --moved past the threshold--> DRAGGING
    ARMED --released--> IDLE (a plain click, for the ClickAssigner)
    DRAGGING --released--> IDLE (drop dispatched, or nothing if no target)

Nothing is written to the store until the pointer is released; while
dragging only the highlight changes. Global pointer listeners are
registered on the event bus for the duration of one gesture and removed
on release whatever the outcome.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from bootroom.config import get_config
from bootroom.core.formations.resolver import resolve_labels
from bootroom.core.lineup.slots import SlotId
from bootroom.core.lineup.store import AssignmentStore
from bootroom.events.bus import EventBus
from bootroom.events.types import PointerMovedEvent, PointerReleasedEvent
from bootroom.interaction.geometry import DropZone, Layout
from bootroom.interaction.hit_test import (
    FieldTarget,
    FreeformTarget,
    SlotTarget,
    hit_test_drop_zone,
    hit_test_field,
)

logger = logging.getLogger(__name__)


class DragPhase(Enum):
    """Where the gesture is."""

    IDLE = auto()
    ARMED = auto()  # Pointer down, not yet past the drag threshold
    DRAGGING = auto()


class DragOrigin(Enum):
    """Where the dragged chip was picked up."""

    ROSTER = "roster"
    BENCH = "bench"
    FIELD = "field"


class DropAction(Enum):
    """What a released gesture turned into."""

    ASSIGN_SLOT = "assign_slot"
    FREEFORM = "freeform"
    BENCH = "bench"
    ROSTER = "roster"
    NONE = "none"  # Released over nothing recognized
    CLICK = "click"  # Never crossed the threshold


@dataclass(frozen=True)
class DropResult:
    """Outcome of one gesture."""

    action: DropAction
    player_id: int
    slot_id: Optional[SlotId] = None  # Target slot, or the new freeform slot
    changed: bool = False
    origin_slot: Optional[SlotId] = None


class DragController:
    """
    Turns pointer events into drops against an AssignmentStore.

    Only one gesture can be in progress; a pointer down during a gesture
    is ignored.
    """

    def __init__(
        self,
        store: AssignmentStore,
        layout: Layout,
        event_bus: Optional[EventBus] = None,
        on_drop: Optional[Callable[[DropResult], None]] = None,
        drag_threshold_px: Optional[float] = None,
        snap_radius: Optional[float] = None,
    ) -> None:
        config = get_config()
        self.store = store
        self.layout = layout
        self.event_bus = event_bus
        self.on_drop = on_drop
        self.drag_threshold_px = config.drag_threshold_px if drag_threshold_px is None else drag_threshold_px
        self.snap_radius = config.snap_radius if snap_radius is None else snap_radius

        self.phase = DragPhase.IDLE
        self.player_id: Optional[int] = None
        self.origin: Optional[DragOrigin] = None
        self.origin_slot: Optional[SlotId] = None
        self.start: Optional[tuple[float, float]] = None
        self.position: Optional[tuple[float, float]] = None
        self.highlight: Optional[FieldTarget] = None

    @property
    def is_active(self) -> bool:
        """A pointer is down on a chip."""
        return self.phase is not DragPhase.IDLE

    @property
    def is_dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    @property
    def highlight_slot_id(self) -> Optional[SlotId]:
        """Slot to highlight while dragging, if the pointer is snapping to one."""
        if isinstance(self.highlight, SlotTarget):
            return self.highlight.slot_id
        return None

    # =========================================================================
    # Pointer input
    # =========================================================================

    def pointer_down(
        self,
        player_id: int,
        origin: DragOrigin,
        x: float,
        y: float,
        origin_slot: Optional[SlotId | str] = None,
    ) -> bool:
        """
        Pick up a player chip.

        Args:
            player_id: Player under the pointer
            origin: Where the chip lives
            x: Screen x
            y: Screen y
            origin_slot: Slot of a field chip (looked up if omitted)

        Returns:
            True if a gesture started
        """
        if self.is_active:
            logger.debug(f"Ignoring pointer down on {player_id}, a drag is already in progress")
            return False

        if origin is DragOrigin.FIELD:
            origin_slot = SlotId.of(origin_slot) if origin_slot is not None else self.store.slot_of(player_id)
        else:
            origin_slot = None

        self.phase = DragPhase.ARMED
        self.player_id = player_id
        self.origin = origin
        self.origin_slot = origin_slot
        self.start = (x, y)
        self.position = (x, y)
        self._listen()
        logger.debug(f"Armed drag of player {player_id} from {origin.value}")
        return True

    def pointer_move(self, x: float, y: float) -> None:
        """Track the pointer; past the threshold, the gesture becomes a drag."""
        if not self.is_active:
            return
        self.position = (x, y)

        if self.phase is DragPhase.ARMED:
            dx = x - self.start[0]
            dy = y - self.start[1]
            if math.hypot(dx, dy) > self.drag_threshold_px:
                self.phase = DragPhase.DRAGGING
                logger.debug(f"Dragging player {self.player_id}")

        if self.phase is DragPhase.DRAGGING:
            self.highlight = hit_test_field(
                x, y, self.layout.field, self.store.formation, self.snap_radius
            )

    def pointer_up(self, x: float, y: float) -> Optional[DropResult]:
        """
        Release the pointer.

        Returns:
            The drop outcome, a CLICK result if the pointer never moved past
            the threshold, or None if no gesture was in progress
        """
        if not self.is_active:
            return None
        try:
            if self.phase is DragPhase.ARMED:
                result = DropResult(DropAction.CLICK, self.player_id, origin_slot=self.origin_slot)
            else:
                result = self._drop(x, y)
        finally:
            self._reset()

        if self.on_drop is not None:
            self.on_drop(result)
        return result

    # =========================================================================
    # Internals
    # =========================================================================

    def _drop(self, x: float, y: float) -> DropResult:
        player_id = self.player_id
        target = hit_test_field(x, y, self.layout.field, self.store.formation, self.snap_radius)

        if isinstance(target, SlotTarget):
            changed = self.store.assign(
                player_id, target.slot_id, swap=self.origin is DragOrigin.FIELD
            )
            return DropResult(DropAction.ASSIGN_SLOT, player_id, target.slot_id, changed)

        if isinstance(target, FreeformTarget):
            new_slot = self.store.move_to_freeform(
                player_id, target.x, target.y, carry_label=self._origin_label()
            )
            return DropResult(DropAction.FREEFORM, player_id, new_slot, True)

        zone = hit_test_drop_zone(x, y, self.layout.zones)
        if zone is DropZone.BENCH:
            return DropResult(DropAction.BENCH, player_id, changed=self.store.move_to_bench(player_id))
        if zone is DropZone.ROSTER:
            return DropResult(DropAction.ROSTER, player_id, changed=self.store.move_to_roster(player_id))

        logger.debug(f"Drop of player {player_id} hit no target")
        return DropResult(DropAction.NONE, player_id)

    def _origin_label(self) -> Optional[str]:
        if self.origin_slot is None:
            return None
        state = self.store.state
        labels = resolve_labels([self.origin_slot], state.formation, state.labels)
        return labels.get(self.origin_slot)

    def _on_pointer_moved(self, event: PointerMovedEvent) -> None:
        self.pointer_move(event.x, event.y)

    def _on_pointer_released(self, event: PointerReleasedEvent) -> None:
        self.pointer_up(event.x, event.y)

    def _listen(self) -> None:
        if self.event_bus is None:
            return
        self.event_bus.subscribe(PointerMovedEvent, self._on_pointer_moved)
        self.event_bus.subscribe(PointerReleasedEvent, self._on_pointer_released)

    def _unlisten(self) -> None:
        if self.event_bus is None:
            return
        self.event_bus.unsubscribe(PointerMovedEvent, self._on_pointer_moved)
        self.event_bus.unsubscribe(PointerReleasedEvent, self._on_pointer_released)

    def _reset(self) -> None:
        self._unlisten()
        self.phase = DragPhase.IDLE
        self.player_id = None
        self.origin = None
        self.origin_slot = None
        self.start = None
        self.position = None
        self.highlight = None
