"""Event types for lineup editing."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from bootroom.core.lineup.state import LineupState


@dataclass
class LineupEvent:
    """Base class for all lineup events."""

    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class PointerMovedEvent(LineupEvent):
    """Global pointer movement, in screen coordinates."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class PointerReleasedEvent(LineupEvent):
    """Global pointer release, in screen coordinates."""

    x: float = 0.0
    y: float = 0.0


@dataclass
class LineupChangedEvent(LineupEvent):
    """Fired after each committed assignment transition."""

    operation: str = ""  # "assign", "freeform", "bench", "roster", "formation", ...
    player_id: Optional[int] = None
    state: Optional["LineupState"] = None
