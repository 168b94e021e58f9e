"""Persisted lineup entries."""

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class LineupEntry:
    """
    The persisted unit of assignment.

    x/y/label are present only for freeform slots, or for native slots
    whose default position or label has been overridden.
    """

    slot_id: str
    player_id: int
    role_tag: Optional[str] = None
    x: Optional[float] = None
    y: Optional[float] = None
    label: Optional[str] = None

    @property
    def has_position(self) -> bool:
        """Whether the entry carries explicit coordinates."""
        return self.x is not None and self.y is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the stored shape, omitting absent optional fields."""
        data: dict[str, Any] = {"slotId": self.slot_id, "playerId": self.player_id}
        if self.role_tag:
            data["roleTag"] = self.role_tag
        if self.has_position:
            data["x"] = self.x
            data["y"] = self.y
        if self.label:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineupEntry":
        """Create from the stored shape."""
        return cls(
            slot_id=str(data["slotId"]),
            player_id=int(data["playerId"]),
            role_tag=data.get("roleTag") or None,
            x=data.get("x"),
            y=data.get("y"),
            label=data.get("label") or None,
        )
