"""Pitch depth tiers used for layout grouping, formation labels and diffs."""

from enum import Enum


class Tier(Enum):
    """
    Depth category of a position on the pitch.

    Ordered from the team's own goal outward. The order is significant:
    formation labels are built by walking tiers in this order.
    """

    GK = "GK"  # Goalkeeper
    DEF = "DEF"  # Back line, including wing backs
    DMID = "DMID"  # Holding / defensive midfield
    MID = "MID"  # Central and wide midfield
    AMID = "AMID"  # Attacking midfield and wide attackers behind the striker
    FWD = "FWD"  # Forwards

    @property
    def depth(self) -> int:
        """Position of this tier in the own-goal-outward order."""
        return TIER_ORDER.index(self)

    @property
    def is_spine(self) -> bool:
        """Whether this tier is part of the tactical spine."""
        return self in SPINE_TIERS

    @classmethod
    def from_y(cls, y: float) -> "Tier":
        """
        Classify a vertical data coordinate into a tier band.

        Freeform positions carry no declared tier, so they are placed by
        how far up the pitch they stand (0 = own goal, 100 = opponent goal).
        Every native catalog slot falls in the band of its own tier.
        """
        for upper, tier in _TIER_BANDS:
            if y < upper:
                return tier
        return cls.FWD


TIER_ORDER: tuple[Tier, ...] = (
    Tier.GK,
    Tier.DEF,
    Tier.DMID,
    Tier.MID,
    Tier.AMID,
    Tier.FWD,
)

# GK/DEF/DMID/FWD; wide and attacking midfielders are considered fluid
SPINE_TIERS: frozenset[Tier] = frozenset({Tier.GK, Tier.DEF, Tier.DMID, Tier.FWD})

# Exclusive upper bound of each band
_TIER_BANDS: tuple[tuple[float, Tier], ...] = (
    (12.0, Tier.GK),
    (34.0, Tier.DEF),
    (42.0, Tier.DMID),
    (55.0, Tier.MID),
    (70.0, Tier.AMID),
)
