"""
Formation Catalog.

Static library of formation templates, grouped by game format. Each
template is a named set of position slots with a tier and normalized
coordinates in a 0-100 data space where y=0 is the team's own goal and
y=100 is the opponent's goal.

Template ids are unique across every format so that a lineup saved under
one format can still be resolved after the team switches format.
"""

from dataclasses import dataclass
from typing import Optional

from bootroom.core.enums import GameFormat, Tier


@dataclass(frozen=True)
class PositionSlot:
    """
    A single position on the tactical diagram.

    Attributes:
        id: Stable identifier within a template (e.g., "LCB", "RW")
        label: Display label (several slots may share "CB")
        tier: Depth category used for detection and diffs
        x: 0-100, left to right
        y: 0-100, 0 = own goal, 100 = opponent goal
    """
    id: str
    label: str
    tier: Tier
    x: float
    y: float

    def __post_init__(self):
        if not (0 <= self.x <= 100 and 0 <= self.y <= 100):
            raise ValueError(f"Slot {self.id} coordinates must be 0-100, got ({self.x}, {self.y})")


@dataclass(frozen=True)
class FormationTemplate:
    """A named formation: an ordered set of native position slots."""

    id: str
    name: str
    slots: tuple[PositionSlot, ...]
    game_format: Optional[GameFormat] = None

    @property
    def slot_ids(self) -> frozenset[str]:
        """Ids of every native slot."""
        return frozenset(slot.id for slot in self.slots)

    def get_slot(self, slot_id: str) -> Optional[PositionSlot]:
        """Get a native slot by id, or None."""
        for slot in self.slots:
            if slot.id == slot_id:
                return slot
        return None

    def has_slot(self, slot_id: str) -> bool:
        """Check whether a slot id is native to this template."""
        return self.get_slot(str(slot_id)) is not None


def _formation(
    formation_id: str,
    name: str,
    game_format: GameFormat,
    *slots: PositionSlot,
) -> FormationTemplate:
    return FormationTemplate(id=formation_id, name=name, slots=(GK, *slots), game_format=game_format)


# =============================================================================
# Shared Slot Groups
# =============================================================================

# Goalkeeper baseline shared by every formation
GK = PositionSlot("GK", "GK", Tier.GK, 50, 5)

BACK4 = (
    PositionSlot("LB", "LB", Tier.DEF, 15, 25),
    PositionSlot("LCB", "CB", Tier.DEF, 38, 22),
    PositionSlot("RCB", "CB", Tier.DEF, 62, 22),
    PositionSlot("RB", "RB", Tier.DEF, 85, 25),
)

# 3 CB + 2 wing backs
BACK5 = (
    PositionSlot("LWB", "LWB", Tier.DEF, 10, 28),
    PositionSlot("LCB", "CB", Tier.DEF, 30, 22),
    PositionSlot("CB", "CB", Tier.DEF, 50, 20),
    PositionSlot("RCB", "CB", Tier.DEF, 70, 22),
    PositionSlot("RWB", "RWB", Tier.DEF, 90, 28),
)

BACK3 = (
    PositionSlot("LCB", "CB", Tier.DEF, 25, 22),
    PositionSlot("CB", "CB", Tier.DEF, 50, 20),
    PositionSlot("RCB", "CB", Tier.DEF, 75, 22),
)

BACK2 = (
    PositionSlot("LCB", "CB", Tier.DEF, 35, 22),
    PositionSlot("RCB", "CB", Tier.DEF, 65, 22),
)

DOUBLE_PIVOT = (
    PositionSlot("LCDM", "CDM", Tier.DMID, 38, 40),
    PositionSlot("RCDM", "CDM", Tier.DMID, 62, 40),
)

SINGLE_PIVOT = (
    PositionSlot("CDM", "CDM", Tier.DMID, 50, 38),
)

# Central pair used by the single-pivot shapes
CM_PAIR = (
    PositionSlot("LCM", "CM", Tier.MID, 30, 50),
    PositionSlot("RCM", "CM", Tier.MID, 70, 50),
)

FLAT_MID4 = (
    PositionSlot("LM", "LM", Tier.MID, 15, 48),
    PositionSlot("LCM", "CM", Tier.MID, 38, 45),
    PositionSlot("RCM", "CM", Tier.MID, 62, 45),
    PositionSlot("RM", "RM", Tier.MID, 85, 48),
)

FRONT3 = (
    PositionSlot("LW", "LW", Tier.FWD, 20, 75),
    PositionSlot("ST", "ST", Tier.FWD, 50, 80),
    PositionSlot("RW", "RW", Tier.FWD, 80, 75),
)

STRIKE_PAIR = (
    PositionSlot("LST", "ST", Tier.FWD, 38, 80),
    PositionSlot("RST", "ST", Tier.FWD, 62, 80),
)

LONE_STRIKER = PositionSlot("ST", "ST", Tier.FWD, 50, 82)


# =============================================================================
# 11v11
# =============================================================================

ELEVEN_A_SIDE: tuple[FormationTemplate, ...] = (
    # DEF=4, DMID=2, AMID=3, FWD=1 -> "4-2-3-1"
    _formation(
        "4-2-3-1", "4-2-3-1 DM AM Wide", GameFormat.ELEVEN,
        *BACK4, *DOUBLE_PIVOT,
        PositionSlot("LW", "LW", Tier.AMID, 20, 62),
        PositionSlot("CAM", "CAM", Tier.AMID, 50, 60),
        PositionSlot("RW", "RW", Tier.AMID, 80, 62),
        LONE_STRIKER,
    ),
    # DEF=4, DMID=1, MID=2, FWD=3 -> "4-1-2-3"
    _formation(
        "4-3-3-dm", "4-3-3 DM Wide", GameFormat.ELEVEN,
        *BACK4, *SINGLE_PIVOT, *CM_PAIR, *FRONT3,
    ),
    # DEF=4, DMID=1, MID=2, AMID=2, FWD=1 -> "4-1-2-2-1"
    _formation(
        "4-3-2-1", "4-3-2-1 DM AM Narrow", GameFormat.ELEVEN,
        *BACK4, *SINGLE_PIVOT, *CM_PAIR,
        PositionSlot("LAM", "AM", Tier.AMID, 35, 65),
        PositionSlot("RAM", "AM", Tier.AMID, 65, 65),
        LONE_STRIKER,
    ),
    # DEF=5, DMID=2, AMID=2, FWD=1 -> "5-2-2-1"
    _formation(
        "5-2-2-1", "5-2-2-1 DM AM", GameFormat.ELEVEN,
        *BACK5, *DOUBLE_PIVOT,
        PositionSlot("LAM", "AM", Tier.AMID, 35, 62),
        PositionSlot("RAM", "AM", Tier.AMID, 65, 62),
        LONE_STRIKER,
    ),
    # DEF=5, DMID=2, FWD=3 -> "5-2-3"
    _formation(
        "5-2-3", "5-2-3 DM Wide", GameFormat.ELEVEN,
        *BACK5, *DOUBLE_PIVOT, *FRONT3,
    ),
    # DEF=4, MID=4, FWD=2 -> "4-4-2"
    _formation(
        "4-4-2", "4-4-2", GameFormat.ELEVEN,
        *BACK4, *FLAT_MID4,
        PositionSlot("LST", "ST", Tier.FWD, 38, 78),
        PositionSlot("RST", "ST", Tier.FWD, 62, 78),
    ),
    # DEF=4, DMID=2, FWD=4 -> "4-2-4"
    _formation(
        "4-2-4", "4-2-4 DM Wide", GameFormat.ELEVEN,
        *BACK4, *DOUBLE_PIVOT,
        PositionSlot("LW", "LW", Tier.FWD, 15, 75),
        PositionSlot("LCF", "CF", Tier.FWD, 38, 80),
        PositionSlot("RCF", "CF", Tier.FWD, 62, 80),
        PositionSlot("RW", "RW", Tier.FWD, 85, 75),
    ),
    # DEF=5, DMID=2, AMID=1, FWD=2 -> "5-2-1-2"
    _formation(
        "5-2-1-2", "5-2-1-2 DM AM", GameFormat.ELEVEN,
        *BACK5, *DOUBLE_PIVOT,
        PositionSlot("CAM", "CAM", Tier.AMID, 50, 62),
        *STRIKE_PAIR,
    ),
    # DEF=4, DMID=1, MID=2, AMID=1, FWD=2 -> special case "4-4-2 Diamond"
    _formation(
        "4-4-2-diamond", "4-4-2 Diamond Narrow", GameFormat.ELEVEN,
        *BACK4, *SINGLE_PIVOT, *CM_PAIR,
        PositionSlot("CAM", "CAM", Tier.AMID, 50, 62),
        *STRIKE_PAIR,
    ),
    # DEF=4, DMID=2, AMID=2, FWD=2 -> "4-2-2-2"
    _formation(
        "4-2-2-2", "4-2-2-2 DM AM Narrow", GameFormat.ELEVEN,
        *BACK4, *DOUBLE_PIVOT,
        PositionSlot("LAM", "AM", Tier.AMID, 35, 62),
        PositionSlot("RAM", "AM", Tier.AMID, 65, 62),
        *STRIKE_PAIR,
    ),
    # DEF=5, DMID=1, MID=2, FWD=2 -> "5-1-2-2"
    _formation(
        "5-3-2-dm", "5-3-2 DM WB", GameFormat.ELEVEN,
        *BACK5, *SINGLE_PIVOT, *CM_PAIR,
        PositionSlot("LST", "ST", Tier.FWD, 38, 78),
        PositionSlot("RST", "ST", Tier.FWD, 62, 78),
    ),
    # DEF=3, MID=4, FWD=3 -> "3-4-3"
    _formation(
        "3-4-3", "3-4-3", GameFormat.ELEVEN,
        *BACK3, *FLAT_MID4, *FRONT3,
    ),
)


# =============================================================================
# 9v9
# =============================================================================

NINE_A_SIDE: tuple[FormationTemplate, ...] = (
    _formation(
        "9v9-3-2-3", "3-2-3", GameFormat.NINE,
        *BACK3,
        PositionSlot("LCM", "CM", Tier.MID, 35, 48),
        PositionSlot("RCM", "CM", Tier.MID, 65, 48),
        *FRONT3,
    ),
    _formation(
        "9v9-3-3-2", "3-3-2", GameFormat.NINE,
        *BACK3,
        PositionSlot("LM", "LM", Tier.MID, 15, 48),
        PositionSlot("CM", "CM", Tier.MID, 50, 45),
        PositionSlot("RM", "RM", Tier.MID, 85, 48),
        PositionSlot("LST", "ST", Tier.FWD, 38, 78),
        PositionSlot("RST", "ST", Tier.FWD, 62, 78),
    ),
    _formation(
        "9v9-4-3-1", "4-3-1", GameFormat.NINE,
        *BACK4,
        PositionSlot("LCM", "CM", Tier.MID, 30, 50),
        PositionSlot("CM", "CM", Tier.MID, 50, 45),
        PositionSlot("RCM", "CM", Tier.MID, 70, 50),
        LONE_STRIKER,
    ),
)


# =============================================================================
# 7v7
# =============================================================================

SEVEN_A_SIDE: tuple[FormationTemplate, ...] = (
    _formation(
        "7v7-2-3-1", "2-3-1", GameFormat.SEVEN,
        *BACK2,
        PositionSlot("LM", "LM", Tier.MID, 20, 48),
        PositionSlot("CM", "CM", Tier.MID, 50, 45),
        PositionSlot("RM", "RM", Tier.MID, 80, 48),
        PositionSlot("ST", "ST", Tier.FWD, 50, 80),
    ),
    _formation(
        "7v7-3-2-1", "3-2-1", GameFormat.SEVEN,
        *BACK3,
        PositionSlot("LCM", "CM", Tier.MID, 35, 48),
        PositionSlot("RCM", "CM", Tier.MID, 65, 48),
        PositionSlot("ST", "ST", Tier.FWD, 50, 80),
    ),
    _formation(
        "7v7-2-1-2-1", "2-1-2-1 Diamond", GameFormat.SEVEN,
        *BACK2, *SINGLE_PIVOT,
        PositionSlot("LM", "LM", Tier.MID, 20, 50),
        PositionSlot("RM", "RM", Tier.MID, 80, 50),
        PositionSlot("ST", "ST", Tier.FWD, 50, 80),
    ),
)


# =============================================================================
# 5v5
# =============================================================================

FIVE_A_SIDE: tuple[FormationTemplate, ...] = (
    _formation(
        "5v5-2-2", "2-2", GameFormat.FIVE,
        PositionSlot("LCB", "CB", Tier.DEF, 35, 24),
        PositionSlot("RCB", "CB", Tier.DEF, 65, 24),
        PositionSlot("LST", "ST", Tier.FWD, 38, 78),
        PositionSlot("RST", "ST", Tier.FWD, 62, 78),
    ),
    _formation(
        "5v5-1-2-1", "1-2-1 Diamond", GameFormat.FIVE,
        PositionSlot("CB", "CB", Tier.DEF, 50, 22),
        PositionSlot("LM", "LM", Tier.MID, 20, 50),
        PositionSlot("RM", "RM", Tier.MID, 80, 50),
        PositionSlot("ST", "ST", Tier.FWD, 50, 78),
    ),
    _formation(
        "5v5-2-1-1", "2-1-1", GameFormat.FIVE,
        PositionSlot("LCB", "CB", Tier.DEF, 35, 24),
        PositionSlot("RCB", "CB", Tier.DEF, 65, 24),
        PositionSlot("CM", "CM", Tier.MID, 50, 48),
        PositionSlot("ST", "ST", Tier.FWD, 50, 78),
    ),
)


# =============================================================================
# Lookup
# =============================================================================

FORMATIONS_BY_FORMAT: dict[GameFormat, tuple[FormationTemplate, ...]] = {
    GameFormat.ELEVEN: ELEVEN_A_SIDE,
    GameFormat.NINE: NINE_A_SIDE,
    GameFormat.SEVEN: SEVEN_A_SIDE,
    GameFormat.FIVE: FIVE_A_SIDE,
}

DEFAULT_FORMATION_FOR_FORMAT: dict[GameFormat, str] = {
    GameFormat.ELEVEN: "4-2-3-1",
    GameFormat.NINE: "9v9-3-2-3",
    GameFormat.SEVEN: "7v7-2-3-1",
    GameFormat.FIVE: "5v5-2-2",
}

# Neutral template used when a stored formation id no longer resolves
BLANK_FORMATION = FormationTemplate(id="blank", name="Blank", slots=())

_BY_ID: dict[str, FormationTemplate] = {
    formation.id: formation
    for formations in FORMATIONS_BY_FORMAT.values()
    for formation in formations
}


def all_formations() -> list[FormationTemplate]:
    """Every template across every format."""
    return list(_BY_ID.values())


def get_formations_for_format(game_format: "GameFormat | str") -> list[FormationTemplate]:
    """Templates available for one game format."""
    return list(FORMATIONS_BY_FORMAT[GameFormat.parse(game_format)])


def get_formation(formation_id: Optional[str]) -> Optional[FormationTemplate]:
    """Look up a template by id across all formats."""
    if formation_id is None:
        return None
    return _BY_ID.get(formation_id)


def get_formation_or_blank(formation_id: Optional[str]) -> FormationTemplate:
    """Look up a template by id, falling back to the blank template."""
    return get_formation(formation_id) or BLANK_FORMATION


def get_default_formation(game_format: "GameFormat | str") -> FormationTemplate:
    """The starting template for a game format."""
    return _BY_ID[DEFAULT_FORMATION_FOR_FORMAT[GameFormat.parse(game_format)]]
