"""
Lineup editor session.

Ties one AssignmentStore to its interaction controllers and to the
reference data around it (the squad, the game format, earlier matches),
and produces what the rest of the application needs: the derived
formation label, the save snapshot and the change banner.
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from bootroom.config import EngineConfig, get_config
from bootroom.core.enums import GameFormat
from bootroom.core.formations.catalog import (
    FormationTemplate,
    get_default_formation,
    get_formation,
    get_formations_for_format,
)
from bootroom.core.formations.detection import detect_if_ready
from bootroom.core.formations.resolver import ResolvedSlot, resolve_lineup
from bootroom.core.lineup.diff import LineupDiff, compare_lineups
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.slots import SlotId, SlotIdLike
from bootroom.core.lineup.store import AssignmentStore
from bootroom.core.models.match import MatchLineup, find_previous_match
from bootroom.core.models.player import PlayerDirectory, PlayerRef
from bootroom.events.bus import EventBus
from bootroom.interaction.click import ClickAssigner
from bootroom.interaction.drag import DragController, DragOrigin, DropAction, DropResult
from bootroom.interaction.geometry import Layout, Rect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineupSnapshot:
    """What gets handed to persistence on save."""

    lineup: list[LineupEntry] = field(default_factory=list)
    bench: list[int] = field(default_factory=list)
    formation: str = ""  # Detected label when available, else the template id

    def to_dict(self) -> dict[str, Any]:
        return {
            "lineup": [entry.to_dict() for entry in self.lineup],
            "bench": list(self.bench),
            "formation": self.formation,
        }


class LineupEditor:
    """
    One lineup being edited for one team.

    All mutation goes through the store, either directly, through the drag
    controller (pointer gestures) or through the click assigner (taps).
    """

    def __init__(
        self,
        directory: PlayerDirectory,
        game_format: "GameFormat | str | None" = None,
        layout: Optional[Layout] = None,
        event_bus: Optional[EventBus] = None,
        config: Optional[EngineConfig] = None,
    ) -> None:
        self.config = config or get_config()
        self.directory = directory
        self.game_format = GameFormat.parse(game_format or self.config.default_game_format)
        self.event_bus = event_bus or EventBus()
        self.match_id: Optional[int] = None
        self.last_drop: Optional[DropResult] = None

        self.store = AssignmentStore(
            self.default_formation.id,
            freeform_prefix=self.config.freeform_prefix,
            event_bus=self.event_bus,
        )
        self.clicks = ClickAssigner(self.store)
        self.drag = DragController(
            self.store,
            layout or Layout(field=Rect(0, 0, 100, 100)),
            event_bus=self.event_bus,
            on_drop=self._on_drop,
            drag_threshold_px=self.config.drag_threshold_px,
            snap_radius=self.config.snap_radius,
        )

    # =========================================================================
    # Format and formation
    # =========================================================================

    @property
    def default_formation(self) -> FormationTemplate:
        return get_default_formation(self.game_format)

    @property
    def formations(self) -> list[FormationTemplate]:
        """Templates offered for this team's game format."""
        return get_formations_for_format(self.game_format)

    @property
    def formation(self) -> FormationTemplate:
        return self.store.formation

    @property
    def slot_count(self) -> int:
        return self.game_format.slot_count

    @property
    def assigned_count(self) -> int:
        return len(self.store.state.assignments)

    def change_formation(self, formation_id: str) -> bool:
        return self.store.change_formation(formation_id)

    def set_layout(self, layout: Layout) -> None:
        """Update the on-screen rectangles used for hit testing."""
        self.drag.layout = layout

    # =========================================================================
    # Loading and saving
    # =========================================================================

    def new_lineup(self) -> None:
        """Start an empty lineup for a new match."""
        self.match_id = None
        self.clicks.clear()
        self.store.reset(self.default_formation.id)

    def load_match(self, match: MatchLineup) -> None:
        """
        Load a saved match lineup for editing.

        Players who have since left the squad are dropped, and a stored
        formation that no longer resolves falls back to the format default.
        """
        formation_id = match.formation if get_formation(match.formation) else self.default_formation.id
        if match.formation and formation_id != match.formation:
            logger.warning(f"Match {match.id} formation {match.formation} not found, using {formation_id}")

        entries = [entry for entry in match.lineup if entry.player_id in self.directory]
        bench = [player_id for player_id in match.bench if player_id in self.directory]
        dropped = len(match.lineup) + len(match.bench) - len(entries) - len(bench)
        if dropped:
            logger.warning(f"Match {match.id}: skipped {dropped} players no longer on the roster")

        self.match_id = match.id
        self.clicks.clear()
        self.store.load(entries, bench, formation_id)

    def snapshot(self) -> LineupSnapshot:
        """Serializable lineup, bench and formation for saving."""
        return LineupSnapshot(
            lineup=self.store.to_entries(),
            bench=self.store.bench,
            formation=self.detected_formation or self.store.formation_id,
        )

    # =========================================================================
    # Derived views
    # =========================================================================

    def resolved_slots(self) -> list[ResolvedSlot]:
        """Every live placed player with geometry, label, tier and role."""
        return resolve_lineup(self.store.state, self.directory)

    @property
    def detected_formation(self) -> Optional[str]:
        """Formation label once all but one position is filled, else None."""
        return detect_if_ready(self.resolved_slots(), self.game_format.detection_threshold) or None

    def role_tags(self) -> dict[SlotId, str]:
        """Per-slot role: the match override, else the player's default role."""
        return {slot.slot_id: slot.role_tag for slot in self.resolved_slots() if slot.role_tag}

    def set_role_tag(self, slot_id: SlotIdLike, role_tag: Optional[str]) -> bool:
        return self.store.set_role_tag(slot_id, role_tag)

    def available_players(self, query: str = "") -> list[PlayerRef]:
        """Squad members neither placed nor benched, filtered by name or number."""
        return [player for player in self.directory.search(query) if self.store.is_available(player.id)]

    def bench_players(self) -> list[PlayerRef]:
        return [player for pid in self.store.bench if (player := self.directory.get(pid)) is not None]

    def lineup_diff(self, matches: Sequence[MatchLineup]) -> Optional[LineupDiff]:
        """
        Compare with the most recent earlier match that has a lineup.

        Only runs for a saved match once enough of the lineup is filled in.
        """
        if self.match_id is None:
            return None
        if self.assigned_count < math.ceil(self.slot_count * self.config.diff_min_fill_ratio):
            return None

        current = next((match for match in matches if match.id == self.match_id), None)
        if current is None:
            return None
        previous = find_previous_match(matches, current)
        if previous is None:
            return None

        previous_formation = get_formation(previous.formation)
        previous_slots = previous_formation.slots if previous_formation else self.formation.slots
        return compare_lineups(
            self.store.to_entries(),
            previous.lineup,
            self.formation.slots,
            previous_slots,
            spine_threshold=self.config.spine_change_threshold,
            churn_threshold=self.config.churn_change_threshold,
        )

    # =========================================================================
    # Interaction
    # =========================================================================

    def pointer_down(
        self,
        player_id: int,
        origin: DragOrigin,
        x: float,
        y: float,
        origin_slot: Optional[SlotIdLike] = None,
    ) -> bool:
        """Start a gesture on a player chip (roster, bench or field)."""
        return self.drag.pointer_down(player_id, origin, x, y, origin_slot)

    def pointer_move(self, x: float, y: float) -> None:
        self.drag.pointer_move(x, y)

    def pointer_up(self, x: float, y: float) -> Optional[DropResult]:
        return self.drag.pointer_up(x, y)

    def click_player(self, player_id: int) -> Optional[int]:
        """Tap a chip in the roster or bench list; ignored mid-drag."""
        if self.drag.is_dragging:
            return self.clicks.pending_player_id
        return self.clicks.click_player(player_id)

    def click_slot(self, slot_id: SlotIdLike) -> bool:
        """Tap a position on the field; ignored mid-drag."""
        if self.drag.is_dragging:
            return False
        return self.clicks.click_slot(slot_id)

    def _on_drop(self, result: DropResult) -> None:
        self.last_drop = result
        if result.action is not DropAction.CLICK:
            return
        # A gesture that never became a drag is a tap on the chip
        if result.origin_slot is not None:
            self.clicks.click_slot(result.origin_slot)
        else:
            self.clicks.click_player(result.player_id)
