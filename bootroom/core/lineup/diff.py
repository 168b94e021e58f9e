"""
Lineup diff.

Compares the lineup being edited with a previous one and flags churn. A
retained player counts as unchanged whichever slot they now occupy; only
who is in the side matters, not where.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Sequence

from bootroom.config import get_config
from bootroom.core.enums import SPINE_TIERS, Tier
from bootroom.core.formations.catalog import PositionSlot
from bootroom.core.lineup.entries import LineupEntry

NEW_SPINE_MESSAGE = "New Spine This Week"


@dataclass(frozen=True)
class LineupDiff:
    """Summary of how much a lineup changed from the last one."""

    total_changes: int
    spine_changes: int
    new_spine: bool
    message: Optional[str] = None


def _entry_tier(entry: LineupEntry, slots_by_id: dict[str, PositionSlot]) -> Optional[Tier]:
    slot = slots_by_id.get(entry.slot_id)
    if slot is not None:
        return slot.tier
    # Freeform entries carry their own coordinates
    if entry.y is not None:
        return Tier.from_y(entry.y)
    return None


def spine_players(entries: Iterable[LineupEntry], slots: Sequence[PositionSlot]) -> set[int]:
    """Players standing in GK/DEF/DMID/FWD positions of their lineup's geometry."""
    slots_by_id = {slot.id: slot for slot in slots}
    return {
        entry.player_id
        for entry in entries
        if _entry_tier(entry, slots_by_id) in SPINE_TIERS
    }


def compare_lineups(
    current: Sequence[LineupEntry],
    previous: Sequence[LineupEntry],
    current_slots: Sequence[PositionSlot],
    previous_slots: Sequence[PositionSlot],
    spine_threshold: Optional[int] = None,
    churn_threshold: Optional[int] = None,
) -> LineupDiff:
    """
    Classify the change between two lineups.

    Args:
        current: Lineup being edited
        previous: Lineup it is compared against
        current_slots: Geometry the current lineup was built under
        previous_slots: Geometry the previous lineup was built under
        spine_threshold: Spine changes that make a new spine (config default 3)
        churn_threshold: Total changes before the generic message (config default 3)

    Returns:
        LineupDiff with the counts and the advisory message, if any
    """
    config = get_config()
    if spine_threshold is None:
        spine_threshold = config.spine_change_threshold
    if churn_threshold is None:
        churn_threshold = config.churn_change_threshold

    current_ids = {entry.player_id for entry in current}
    previous_ids = {entry.player_id for entry in previous}
    total_changes = len(current_ids - previous_ids)

    current_spine = spine_players(current, current_slots)
    previous_spine = spine_players(previous, previous_slots)
    spine_changes = len(current_spine - previous_spine)

    new_spine = spine_changes >= spine_threshold
    if new_spine:
        message = NEW_SPINE_MESSAGE
    elif total_changes >= churn_threshold:
        message = f"{total_changes} Changes from Last Match"
    else:
        message = None

    return LineupDiff(
        total_changes=total_changes,
        spine_changes=spine_changes,
        new_spine=new_spine,
        message=message,
    )
