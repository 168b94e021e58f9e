"""
Slot resolution.

Turns a set of occupied slot ids into concrete geometry: for each slot,
a freeform/override entry wins, otherwise the template's native slot is
used. Slots with neither are omitted; the renderer must tolerate gaps.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from bootroom.core.enums import Tier
from bootroom.core.formations.catalog import FormationTemplate
from bootroom.core.lineup.slots import SlotId, SlotIdLike

if TYPE_CHECKING:
    from bootroom.core.lineup.state import LineupState
    from bootroom.core.models.player import PlayerDirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedSlot:
    """An occupied position with everything needed to draw and classify it."""

    slot_id: SlotId
    player_id: int
    x: float
    y: float
    label: str
    tier: Tier
    is_freeform: bool
    role_tag: Optional[str] = None


def resolve_positions(
    active_slot_ids: Iterable[SlotIdLike],
    formation: FormationTemplate,
    overrides: Mapping[SlotId, tuple[float, float]],
) -> dict[SlotId, tuple[float, float]]:
    """Resolve (x, y) for every active slot that has geometry."""
    positions = {}
    for raw_id in active_slot_ids:
        slot_id = SlotId.of(raw_id)
        if slot_id in overrides:
            positions[slot_id] = overrides[slot_id]
            continue
        native = formation.get_slot(str(slot_id))
        if native is not None:
            positions[slot_id] = (native.x, native.y)
        else:
            logger.warning(f"Slot {slot_id} has no geometry in {formation.id}")
    return positions


def resolve_labels(
    active_slot_ids: Iterable[SlotIdLike],
    formation: FormationTemplate,
    label_overrides: Mapping[SlotId, str],
) -> dict[SlotId, str]:
    """Resolve the display label for every active slot that has one."""
    labels = {}
    for raw_id in active_slot_ids:
        slot_id = SlotId.of(raw_id)
        if slot_id in label_overrides:
            labels[slot_id] = label_overrides[slot_id]
            continue
        native = formation.get_slot(str(slot_id))
        if native is not None:
            labels[slot_id] = native.label
    return labels


def resolve_tiers(
    active_slot_ids: Iterable[SlotIdLike],
    formation: FormationTemplate,
    overrides: Mapping[SlotId, tuple[float, float]],
) -> dict[SlotId, Tier]:
    """Native tier for template slots; freeform slots are tiered by depth."""
    tiers = {}
    for raw_id in active_slot_ids:
        slot_id = SlotId.of(raw_id)
        native = formation.get_slot(str(slot_id))
        if native is not None:
            tiers[slot_id] = native.tier
        elif slot_id in overrides:
            tiers[slot_id] = Tier.from_y(overrides[slot_id][1])
    return tiers


def resolve_lineup(
    state: "LineupState",
    directory: Optional["PlayerDirectory"] = None,
) -> list[ResolvedSlot]:
    """
    Resolve every placed player into a drawable position.

    Args:
        state: Current lineup state
        directory: If given, players missing from it are filtered out and
                   their default role tag fills in when no override is set

    Returns:
        Resolved slots in placement order
    """
    formation = state.formation
    slot_ids = list(state.assignments)
    positions = resolve_positions(slot_ids, formation, state.positions)
    labels = resolve_labels(slot_ids, formation, state.labels)
    tiers = resolve_tiers(slot_ids, formation, state.positions)

    resolved = []
    for slot_id, player_id in state.assignments.items():
        if slot_id not in positions:
            continue
        role_tag = state.role_tags.get(slot_id)
        if directory is not None:
            player = directory.get(player_id)
            if player is None:
                logger.warning(f"Player {player_id} in {slot_id} is no longer on the roster")
                continue
            role_tag = role_tag or player.role_tag
        x, y = positions[slot_id]
        resolved.append(
            ResolvedSlot(
                slot_id=slot_id,
                player_id=player_id,
                x=x,
                y=y,
                label=labels.get(slot_id, str(slot_id)),
                tier=tiers[slot_id],
                is_freeform=not formation.has_slot(str(slot_id)),
                role_tag=role_tag,
            )
        )
    return resolved
