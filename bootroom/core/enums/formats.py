"""Game formats (players per side)."""

from enum import Enum


class GameFormat(Enum):
    """Small-sided and full-sided game formats."""

    ELEVEN = "11v11"
    NINE = "9v9"
    SEVEN = "7v7"
    FIVE = "5v5"

    @property
    def slot_count(self) -> int:
        """Number of on-field positions, goalkeeper included."""
        return int(self.value.split("v")[0])

    @property
    def detection_threshold(self) -> int:
        """
        Filled positions needed before a formation label is derived.

        One unfilled slot (typically a missing keeper) does not block detection.
        """
        return self.slot_count - 1

    @classmethod
    def parse(cls, value: "str | GameFormat") -> "GameFormat":
        """Accept either the enum or its '11v11'-style value."""
        if isinstance(value, cls):
            return value
        return cls(value)
