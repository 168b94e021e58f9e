"""Lineup assignment: slot identity, state transitions, the store and diffs."""

from bootroom.core.lineup.diff import LineupDiff, compare_lineups
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.slots import FreeformAllocator, SlotId
from bootroom.core.lineup.state import LineupState
from bootroom.core.lineup.store import AssignmentStore

__all__ = [
    "AssignmentStore",
    "FreeformAllocator",
    "LineupDiff",
    "LineupEntry",
    "LineupState",
    "SlotId",
    "compare_lineups",
]
