"""
Slot identity and freeform slot allocation.

Native slots are identified by their template id ("LCB", "RW"). Freeform
slots get a synthetic id made of a reserved prefix and an integer handed
out by a per-session allocator.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Union


@dataclass(frozen=True, order=True)
class SlotId:
    """Identity of a position on the tactical diagram."""

    value: str

    def __post_init__(self):
        if not self.value:
            raise ValueError("Slot id must not be empty")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def of(cls, value: "SlotIdLike") -> "SlotId":
        """Coerce a string or SlotId into a SlotId."""
        if isinstance(value, SlotId):
            return value
        return cls(str(value))

    def has_prefix(self, prefix: str) -> bool:
        """Whether this id carries the freeform prefix."""
        return self.value.startswith(prefix)

    def freeform_index(self, prefix: str) -> Optional[int]:
        """
        Numeric suffix of a freeform id.

        Returns None when the id does not carry the prefix or the
        remainder is not an integer.
        """
        if not self.has_prefix(prefix):
            return None
        suffix = self.value[len(prefix):]
        if not (suffix.isascii() and suffix.isdigit()):
            return None
        return int(suffix)


SlotIdLike = Union[SlotId, str]


@dataclass(frozen=True)
class FreeformAllocator:
    """
    Arena-style allocator for freeform slot ids.

    Immutable: allocate() returns the id together with the advanced
    allocator, so allocation is part of the same state transition as the
    assignment that uses the id.
    """

    prefix: str
    next_index: int = 1

    def __post_init__(self):
        if not self.prefix:
            raise ValueError("Freeform prefix must not be empty")
        if self.next_index < 1:
            raise ValueError(f"next_index must be >= 1, got {self.next_index}")

    def allocate(self) -> tuple[SlotId, "FreeformAllocator"]:
        """Hand out the next id."""
        slot_id = SlotId(f"{self.prefix}{self.next_index}")
        return slot_id, FreeformAllocator(self.prefix, self.next_index + 1)

    def owns(self, slot_id: SlotIdLike) -> bool:
        """Whether an id has the shape of one this allocator hands out."""
        return SlotId.of(slot_id).freeform_index(self.prefix) is not None

    @classmethod
    def reseeded(cls, prefix: str, slot_ids: Iterable[SlotIdLike]) -> "FreeformAllocator":
        """
        Create an allocator that cannot collide with existing ids.

        Only ids matching the prefix are considered; the next index is one
        past the highest suffix found.
        """
        highest = 0
        for slot_id in slot_ids:
            index = SlotId.of(slot_id).freeform_index(prefix)
            if index is not None and index > highest:
                highest = index
        return cls(prefix, highest + 1)
