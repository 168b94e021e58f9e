"""Read-only player reference data supplied by the roster."""

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Optional


@dataclass(frozen=True)
class PlayerRef:
    """A squad member as the lineup engine sees them."""

    id: int
    jersey_number: int
    name: str
    role_tag: Optional[str] = None  # Default role, overridable per match

    @property
    def display_name(self) -> str:
        """Jersey number and name, e.g. '9 Kane'."""
        return f"{self.jersey_number} {self.name}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlayerRef":
        """Create from the stored shape (camelCase keys)."""
        return cls(
            id=int(data["id"]),
            jersey_number=int(data.get("jerseyNumber", 0)),
            name=str(data.get("name", "")),
            role_tag=data.get("roleTag") or None,
        )


class PlayerDirectory:
    """
    Ordered, read-only lookup of the squad.

    Used for display and to tell whether a player id is still live.
    """

    def __init__(self, players: Iterable[PlayerRef] = ()) -> None:
        self._players: dict[int, PlayerRef] = {player.id: player for player in players}

    def __iter__(self) -> Iterator[PlayerRef]:
        return iter(self._players.values())

    def __len__(self) -> int:
        return len(self._players)

    def __contains__(self, player_id: object) -> bool:
        return player_id in self._players

    def get(self, player_id: int) -> Optional[PlayerRef]:
        """Get a player by id, or None if they are no longer on the roster."""
        return self._players.get(player_id)

    def search(self, text: str) -> list[PlayerRef]:
        """
        Filter by name (case-insensitive) or jersey number.

        An empty query returns everyone.
        """
        query = text.strip().lower()
        if not query:
            return list(self)
        return [
            player
            for player in self
            if query in player.name.lower() or query in str(player.jersey_number)
        ]
