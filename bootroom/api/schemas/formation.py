"""Pydantic schemas for formations and formation detection."""

from enum import Enum

from pydantic import BaseModel, Field


class TierSchema(str, Enum):
    """Tier enum for API."""
    GK = "GK"
    DEF = "DEF"
    DMID = "DMID"
    MID = "MID"
    AMID = "AMID"
    FWD = "FWD"


class GameFormatSchema(str, Enum):
    """Game format enum for API."""
    ELEVEN = "11v11"
    NINE = "9v9"
    SEVEN = "7v7"
    FIVE = "5v5"


class PositionSlotSchema(BaseModel):
    """A native slot of a formation template."""

    id: str
    label: str
    tier: TierSchema
    x: float
    y: float

    @classmethod
    def from_model(cls, slot) -> "PositionSlotSchema":
        """Create from PositionSlot."""
        return cls(id=slot.id, label=slot.label, tier=slot.tier.value, x=slot.x, y=slot.y)


class FormationSchema(BaseModel):
    """A formation template."""

    id: str
    name: str
    game_format: GameFormatSchema | None = None
    slots: list[PositionSlotSchema]

    @classmethod
    def from_model(cls, formation) -> "FormationSchema":
        """Create from FormationTemplate."""
        return cls(
            id=formation.id,
            name=formation.name,
            game_format=formation.game_format.value if formation.game_format else None,
            slots=[PositionSlotSchema.from_model(slot) for slot in formation.slots],
        )


class DetectFormationRequest(BaseModel):
    """Tiers of the filled positions."""

    tiers: list[TierSchema] = Field(..., description="One entry per filled position")


class DetectFormationResponse(BaseModel):
    formation: str
