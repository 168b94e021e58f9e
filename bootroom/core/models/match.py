"""Saved match lineups, as handed over by the persistence layer."""

import datetime
from dataclasses import dataclass
from typing import Any, Iterable, Optional

from bootroom.core.lineup.entries import LineupEntry


@dataclass(frozen=True)
class MatchLineup:
    """The lineup-relevant part of a stored match."""

    id: int
    date: datetime.date
    lineup: tuple[LineupEntry, ...] = ()
    bench: tuple[int, ...] = ()
    formation: Optional[str] = None  # Detected label or template id

    @property
    def has_lineup(self) -> bool:
        return len(self.lineup) > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date.isoformat(),
            "lineup": [entry.to_dict() for entry in self.lineup],
            "bench": list(self.bench),
            "formation": self.formation,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MatchLineup":
        raw_date = data["date"]
        return cls(
            id=int(data["id"]),
            date=raw_date if isinstance(raw_date, datetime.date) else datetime.date.fromisoformat(str(raw_date)[:10]),
            lineup=tuple(LineupEntry.from_dict(entry) for entry in data.get("lineup") or []),
            bench=tuple(int(pid) for pid in data.get("bench") or []),
            formation=data.get("formation"),
        )


def find_previous_match(matches: Iterable[MatchLineup], current: MatchLineup) -> Optional[MatchLineup]:
    """
    Most recent match before `current` that has a lineup.

    Matches on the same day as `current` are not considered earlier.
    """
    earlier = [
        match
        for match in matches
        if match.id != current.id and match.has_lineup and match.date < current.date
    ]
    if not earlier:
        return None
    return max(earlier, key=lambda match: match.date)
