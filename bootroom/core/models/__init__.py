"""Reference data the lineup engine reads: players and saved match lineups."""

from bootroom.core.models.match import MatchLineup, find_previous_match
from bootroom.core.models.player import PlayerDirectory, PlayerRef

__all__ = [
    "MatchLineup",
    "PlayerDirectory",
    "PlayerRef",
    "find_previous_match",
]
