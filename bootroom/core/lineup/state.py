"""
Lineup assignment state and its transitions.

LineupState is a single immutable aggregate: slot assignments, bench,
freeform coordinates, label overrides, role tags and the freeform id
allocator all live in one object. Every operation in this module is a pure
function from one whole state to the next, so derived views (slot
resolution, formation detection) never observe a half-applied update.

Invariants, after every transition:
    - A player id appears at most once across assignments and the bench.
    - Every key of positions, labels and role_tags is an assigned slot.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Optional

from bootroom.core.formations.catalog import FormationTemplate, get_formation, get_formation_or_blank
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.slots import FreeformAllocator, SlotId, SlotIdLike

logger = logging.getLogger(__name__)

COORD_MIN = 0.0
COORD_MAX = 100.0


@dataclass(frozen=True)
class LineupState:
    """
    Everything one editing session knows about who stands where.

    Attributes:
        formation_id: Selected template (may not resolve; see `formation`)
        allocator: Source of freeform slot ids for this session
        assignments: Slot -> player id, in placement order
        bench: Benched player ids, in benching order
        positions: Slot -> (x, y) for freeform or repositioned slots
        labels: Slot -> display label for freeform or relabelled slots
        role_tags: Slot -> per-match role override
    """

    formation_id: str
    allocator: FreeformAllocator
    assignments: Mapping[SlotId, int] = field(default_factory=dict)
    bench: tuple[int, ...] = ()
    positions: Mapping[SlotId, tuple[float, float]] = field(default_factory=dict)
    labels: Mapping[SlotId, str] = field(default_factory=dict)
    role_tags: Mapping[SlotId, str] = field(default_factory=dict)

    @classmethod
    def empty(cls, formation_id: str, freeform_prefix: str) -> "LineupState":
        """A new lineup with nobody placed."""
        return cls(formation_id=formation_id, allocator=FreeformAllocator(freeform_prefix))

    @property
    def formation(self) -> FormationTemplate:
        """The selected template, or the blank template if it no longer exists."""
        return get_formation_or_blank(self.formation_id)

    def slot_of(self, player_id: int) -> Optional[SlotId]:
        """Slot currently held by a player, or None."""
        for slot_id, occupant in self.assignments.items():
            if occupant == player_id:
                return slot_id
        return None

    def occupant(self, slot_id: SlotIdLike) -> Optional[int]:
        """Player in a slot, or None."""
        return self.assignments.get(SlotId.of(slot_id))

    def is_benched(self, player_id: int) -> bool:
        return player_id in self.bench

    def is_native(self, slot_id: SlotIdLike) -> bool:
        """Whether a slot belongs to the selected template."""
        return self.formation.has_slot(str(slot_id))

    def is_freeform(self, slot_id: SlotIdLike) -> bool:
        return not self.is_native(slot_id)

    @property
    def placed_player_ids(self) -> list[int]:
        return list(self.assignments.values())

    def invariant_violations(self) -> list[str]:
        """Describe every broken invariant (empty when the state is sound)."""
        problems = []
        seen: set[int] = set()
        for player_id in [*self.assignments.values(), *self.bench]:
            if player_id in seen:
                problems.append(f"player {player_id} appears more than once")
            seen.add(player_id)
        for name, metadata in (
            ("positions", self.positions),
            ("labels", self.labels),
            ("role_tags", self.role_tags),
        ):
            for slot_id in metadata:
                if slot_id not in self.assignments:
                    problems.append(f"{name} has orphaned slot {slot_id}")
        return problems


class _Draft:
    """Mutable working copy used to build the next state in one step."""

    def __init__(self, state: LineupState):
        self.formation_id = state.formation_id
        self.allocator = state.allocator
        self.assignments = dict(state.assignments)
        self.bench = list(state.bench)
        self.positions = dict(state.positions)
        self.labels = dict(state.labels)
        self.role_tags = dict(state.role_tags)

    def vacate(self, slot_id: SlotId) -> None:
        """Empty a slot and drop everything recorded against it."""
        self.assignments.pop(slot_id, None)
        self.positions.pop(slot_id, None)
        self.labels.pop(slot_id, None)
        self.role_tags.pop(slot_id, None)

    def unplace(self, player_id: int) -> Optional[SlotId]:
        """Take a player off the field, returning the slot they left."""
        for slot_id, occupant in list(self.assignments.items()):
            if occupant == player_id:
                self.vacate(slot_id)
                return slot_id
        return None

    def unbench(self, player_id: int) -> None:
        self.bench = [pid for pid in self.bench if pid != player_id]

    def allocate(self) -> SlotId:
        slot_id, self.allocator = self.allocator.allocate()
        return slot_id

    def set_tag(self, slot_id: SlotId, role_tag: Optional[str]) -> None:
        if role_tag:
            self.role_tags[slot_id] = role_tag
        else:
            self.role_tags.pop(slot_id, None)

    def freeze(self) -> LineupState:
        """Build the next state, pruning metadata for slots nobody holds."""
        assigned = self.assignments.keys()
        return LineupState(
            formation_id=self.formation_id,
            allocator=self.allocator,
            assignments=self.assignments,
            bench=tuple(self.bench),
            positions={k: v for k, v in self.positions.items() if k in assigned},
            labels={k: v for k, v in self.labels.items() if k in assigned},
            role_tags={k: v for k, v in self.role_tags.items() if k in assigned},
        )


def _clamp(value: float) -> float:
    return max(COORD_MIN, min(COORD_MAX, float(value)))


# =============================================================================
# Transitions
# =============================================================================


def assign(state: LineupState, player_id: int, slot_id: SlotIdLike, swap: bool = False) -> LineupState:
    """
    Put a player into a slot.

    The player's previous slot is vacated and they leave the bench. A
    different player already in the target becomes available (neither
    placed nor benched), unless `swap` is set and the mover came from
    another slot: then the displaced player takes the mover's origin slot
    and both slots stay filled. Role tags travel with their players.

    The target must be a native slot of the selected template or a slot
    that is currently assigned; anything else is ignored.
    """
    target = SlotId.of(slot_id)
    if not state.is_native(target) and target not in state.assignments:
        logger.warning(f"Ignoring assignment of player {player_id} to unknown slot {target}")
        return state

    origin = state.slot_of(player_id)
    if origin == target:
        return state

    draft = _Draft(state)
    displaced = state.occupant(target)
    mover_tag = state.role_tags.get(origin) if origin is not None else None
    displaced_tag = state.role_tags.get(target)

    if origin is not None and swap and displaced is not None:
        # Origin keeps its geometry; only the occupant changes
        draft.assignments[origin] = displaced
        draft.set_tag(origin, displaced_tag)
    elif origin is not None:
        draft.vacate(origin)
    draft.unbench(player_id)

    draft.assignments[target] = player_id
    draft.set_tag(target, mover_tag)

    logger.debug(
        f"Assigned player {player_id} to {target}"
        + (f" (from {origin})" if origin is not None else "")
        + (f", displaced {displaced}" if displaced is not None else "")
    )
    return draft.freeze()


def move_to_freeform(
    state: LineupState,
    player_id: int,
    x: float,
    y: float,
    carry_label: Optional[str] = None,
) -> tuple[LineupState, SlotId]:
    """
    Place a player at an arbitrary point on the field.

    A new freeform slot id is allocated; the player's previous slot (and its
    freeform metadata) is dropped. Coordinates are clamped to the data space.

    Returns:
        The next state and the newly allocated slot id
    """
    draft = _Draft(state)
    origin = state.slot_of(player_id)
    role_tag = state.role_tags.get(origin) if origin is not None else None

    draft.unplace(player_id)
    draft.unbench(player_id)

    new_slot = draft.allocate()
    draft.assignments[new_slot] = player_id
    draft.positions[new_slot] = (_clamp(x), _clamp(y))
    if carry_label:
        draft.labels[new_slot] = carry_label
    draft.set_tag(new_slot, role_tag)

    logger.debug(f"Moved player {player_id} to freeform {new_slot} at ({x:.1f}, {y:.1f})")
    return draft.freeze(), new_slot


def move_to_bench(state: LineupState, player_id: int) -> LineupState:
    """Take a player off the field (if placed) and put them on the bench."""
    if state.slot_of(player_id) is None and state.is_benched(player_id):
        return state
    draft = _Draft(state)
    draft.unplace(player_id)
    if player_id not in draft.bench:
        draft.bench.append(player_id)
    logger.debug(f"Benched player {player_id}")
    return draft.freeze()


def move_to_roster(state: LineupState, player_id: int) -> LineupState:
    """Return a player to the available roster: neither placed nor benched."""
    if state.slot_of(player_id) is None and not state.is_benched(player_id):
        return state
    draft = _Draft(state)
    draft.unplace(player_id)
    draft.unbench(player_id)
    logger.debug(f"Returned player {player_id} to roster")
    return draft.freeze()


def change_formation(state: LineupState, formation_id: str) -> LineupState:
    """
    Switch templates without losing anybody.

    Slots native to the new template keep their id, as do slots that were
    already freeform. A native slot of the old template with no counterpart
    in the new one becomes a freshly allocated freeform slot at the old
    coordinates with the old label, keeping its role tag.
    """
    new_formation = get_formation(formation_id)
    if new_formation is None:
        logger.warning(f"Unknown formation {formation_id}, keeping {state.formation_id}")
        return state
    if new_formation.id == state.formation_id:
        return state

    old_formation = state.formation
    draft = _Draft(state)
    draft.formation_id = new_formation.id
    draft.assignments = {}

    for slot_id, player_id in state.assignments.items():
        old_slot = old_formation.get_slot(str(slot_id))
        if new_formation.has_slot(str(slot_id)) or old_slot is None:
            draft.assignments[slot_id] = player_id
            continue

        new_slot = draft.allocate()
        draft.assignments[new_slot] = player_id
        draft.positions[new_slot] = state.positions.get(slot_id, (old_slot.x, old_slot.y))
        draft.labels[new_slot] = state.labels.get(slot_id, old_slot.label)
        draft.set_tag(new_slot, state.role_tags.get(slot_id))
        logger.debug(f"Slot {slot_id} has no place in {new_formation.id}, moved to {new_slot}")

    logger.debug(f"Changed formation {state.formation_id} -> {new_formation.id}")
    return draft.freeze()


def set_role_tag(state: LineupState, slot_id: SlotIdLike, role_tag: Optional[str]) -> LineupState:
    """Set or clear the per-match role of an assigned slot."""
    slot = SlotId.of(slot_id)
    if slot not in state.assignments or state.role_tags.get(slot) == (role_tag or None):
        return state
    draft = _Draft(state)
    draft.set_tag(slot, role_tag)
    return draft.freeze()


def set_label(state: LineupState, slot_id: SlotIdLike, label: Optional[str]) -> LineupState:
    """Override (or restore) the display label of an assigned slot."""
    slot = SlotId.of(slot_id)
    if slot not in state.assignments or state.labels.get(slot) == (label or None):
        return state
    draft = _Draft(state)
    if label:
        draft.labels[slot] = label
    else:
        draft.labels.pop(slot, None)
    return draft.freeze()


# =============================================================================
# Persistence
# =============================================================================


def hydrate(
    entries: Iterable[LineupEntry],
    bench: Iterable[int],
    formation_id: str,
    freeform_prefix: str,
) -> LineupState:
    """
    Rebuild state from persisted entries.

    Persisted data is trusted only as far as the invariants allow: a player
    or slot that appears twice keeps its first occurrence, and bench ids
    already placed on the field are dropped. The freeform allocator is
    reseeded above the highest freeform suffix found.
    """
    draft = _Draft(LineupState.empty(formation_id, freeform_prefix))
    seen: set[int] = set()

    for entry in entries:
        slot_id = SlotId.of(entry.slot_id)
        if slot_id in draft.assignments or entry.player_id in seen:
            logger.warning(f"Dropping duplicate lineup entry {entry.slot_id} -> {entry.player_id}")
            continue
        seen.add(entry.player_id)
        draft.assignments[slot_id] = entry.player_id
        if entry.has_position:
            draft.positions[slot_id] = (_clamp(entry.x), _clamp(entry.y))
        if entry.label:
            draft.labels[slot_id] = entry.label
        draft.set_tag(slot_id, entry.role_tag)

    for player_id in bench:
        if player_id in seen:
            logger.warning(f"Dropping benched player {player_id} who is already placed")
            continue
        seen.add(player_id)
        draft.bench.append(player_id)

    draft.allocator = FreeformAllocator.reseeded(freeform_prefix, draft.assignments)
    return draft.freeze()


def serialize(state: LineupState) -> list[LineupEntry]:
    """Snapshot assignments as persisted entries, in placement order."""
    entries = []
    for slot_id, player_id in state.assignments.items():
        x, y = state.positions.get(slot_id, (None, None))
        entries.append(
            LineupEntry(
                slot_id=str(slot_id),
                player_id=player_id,
                role_tag=state.role_tags.get(slot_id),
                x=x,
                y=y,
                label=state.labels.get(slot_id),
            )
        )
    return entries
