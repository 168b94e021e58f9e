"""Pydantic schemas for API request/response models."""

from bootroom.api.schemas.formation import (
    DetectFormationRequest,
    DetectFormationResponse,
    FormationSchema,
    GameFormatSchema,
    PositionSlotSchema,
    TierSchema,
)
from bootroom.api.schemas.lineup import (
    AssignRequest,
    CompareLineupsRequest,
    CreateSessionRequest,
    FormationChangeRequest,
    FreeformRequest,
    LineupDiffSchema,
    LineupEntrySchema,
    LineupSessionSchema,
    LineupSnapshotSchema,
    MatchLineupSchema,
    PlayerRequest,
    PlayerSchema,
    ResolvedSlotSchema,
    RoleTagRequest,
    SessionDiffRequest,
    SlotRequest,
)

__all__ = [
    "AssignRequest",
    "CompareLineupsRequest",
    "CreateSessionRequest",
    "DetectFormationRequest",
    "DetectFormationResponse",
    "FormationChangeRequest",
    "FormationSchema",
    "FreeformRequest",
    "GameFormatSchema",
    "LineupDiffSchema",
    "LineupEntrySchema",
    "LineupSessionSchema",
    "LineupSnapshotSchema",
    "MatchLineupSchema",
    "PlayerRequest",
    "PlayerSchema",
    "PositionSlotSchema",
    "ResolvedSlotSchema",
    "RoleTagRequest",
    "SessionDiffRequest",
    "SlotRequest",
    "TierSchema",
]
