"""
Formation detection.

Derives a canonical "N-N-N" label purely from the tiers of the positions
that are currently filled, whether those are native template slots or
freeform positions.
"""

from collections import Counter
from typing import Iterable, Optional, Protocol

from bootroom.core.enums import TIER_ORDER, Tier


class HasTier(Protocol):
    """Anything that occupies a depth tier (a slot or a resolved position)."""

    tier: Tier


DIAMOND_LABEL = "4-4-2 Diamond"

# Exact outfield composition that is reported as a diamond rather than "4-1-2-1-2"
DIAMOND_COUNTS: dict[Tier, int] = {
    Tier.DEF: 4,
    Tier.DMID: 1,
    Tier.MID: 2,
    Tier.AMID: 1,
    Tier.FWD: 2,
}


def count_tiers(tiers: Iterable[Tier]) -> Counter:
    """Tally outfield positions per tier (goalkeepers are not counted)."""
    return Counter(tier for tier in tiers if tier is not Tier.GK)


def label_for_tiers(tiers: Iterable[Tier]) -> str:
    """Formation label for a bare list of filled tiers."""
    counts = count_tiers(tiers)

    if counts == Counter(DIAMOND_COUNTS):
        return DIAMOND_LABEL

    parts = [str(counts[tier]) for tier in TIER_ORDER if tier is not Tier.GK and counts[tier] > 0]
    return "-".join(parts)


def detect_formation(filled_slots: Iterable[HasTier]) -> str:
    """
    Derive the formation label for a set of filled positions.

    Tiers with nobody in them are omitted rather than zero-padded, so a
    back four with a single holding midfielder, two central midfielders and
    a front three reads "4-1-2-3".

    Args:
        filled_slots: Positions that currently hold a player

    Returns:
        Label such as "4-2-3-1", "4-4-2 Diamond", or "" when nothing is filled
    """
    return label_for_tiers(slot.tier for slot in filled_slots)


def detect_if_ready(filled_slots: Iterable[HasTier], threshold: int) -> Optional[str]:
    """
    Detect the formation only once enough positions are filled.

    Returns None below the threshold.
    """
    filled = list(filled_slots)
    if len(filled) < threshold:
        return None
    return detect_formation(filled)
