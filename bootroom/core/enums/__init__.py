"""Lineup enumerations."""

from bootroom.core.enums.formats import GameFormat
from bootroom.core.enums.tiers import SPINE_TIERS, TIER_ORDER, Tier

__all__ = [
    "GameFormat",
    "SPINE_TIERS",
    "TIER_ORDER",
    "Tier",
]
