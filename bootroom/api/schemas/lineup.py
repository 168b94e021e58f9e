"""Pydantic schemas for lineup sessions, snapshots and diffs."""

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from bootroom.api.schemas.formation import GameFormatSchema, TierSchema
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.models.match import MatchLineup
from bootroom.core.models.player import PlayerRef


# === Reference data ===

class PlayerSchema(BaseModel):
    """Squad member."""

    id: int
    jersey_number: int
    name: str
    role_tag: Optional[str] = None

    def to_model(self) -> PlayerRef:
        return PlayerRef(
            id=self.id,
            jersey_number=self.jersey_number,
            name=self.name,
            role_tag=self.role_tag,
        )


class LineupEntrySchema(BaseModel):
    """Persisted slot assignment."""

    slot_id: str
    player_id: int
    role_tag: Optional[str] = None
    x: Optional[float] = Field(default=None, ge=0, le=100)
    y: Optional[float] = Field(default=None, ge=0, le=100)
    label: Optional[str] = None

    @classmethod
    def from_model(cls, entry: LineupEntry) -> "LineupEntrySchema":
        return cls(
            slot_id=entry.slot_id,
            player_id=entry.player_id,
            role_tag=entry.role_tag,
            x=entry.x,
            y=entry.y,
            label=entry.label,
        )

    def to_model(self) -> LineupEntry:
        return LineupEntry(
            slot_id=self.slot_id,
            player_id=self.player_id,
            role_tag=self.role_tag,
            x=self.x,
            y=self.y,
            label=self.label,
        )


class MatchLineupSchema(BaseModel):
    """A saved match lineup."""

    id: int
    date: datetime.date
    lineup: list[LineupEntrySchema] = []
    bench: list[int] = []
    formation: Optional[str] = None

    def to_model(self) -> MatchLineup:
        return MatchLineup(
            id=self.id,
            date=self.date,
            lineup=tuple(entry.to_model() for entry in self.lineup),
            bench=tuple(self.bench),
            formation=self.formation,
        )


# === Sessions ===

class CreateSessionRequest(BaseModel):
    """Start editing a lineup."""

    game_format: GameFormatSchema = GameFormatSchema.ELEVEN
    players: list[PlayerSchema]
    match: Optional[MatchLineupSchema] = None


class AssignRequest(BaseModel):
    player_id: int
    slot_id: str
    swap: bool = False


class FreeformRequest(BaseModel):
    player_id: int
    x: float = Field(..., ge=0, le=100)
    y: float = Field(..., ge=0, le=100)
    label: Optional[str] = None


class PlayerRequest(BaseModel):
    player_id: int


class SlotRequest(BaseModel):
    slot_id: str


class FormationChangeRequest(BaseModel):
    formation_id: str


class RoleTagRequest(BaseModel):
    slot_id: str
    role_tag: Optional[str] = None


class ResolvedSlotSchema(BaseModel):
    """A placed player with resolved geometry."""

    slot_id: str
    player_id: int
    x: float
    y: float
    label: str
    tier: TierSchema
    is_freeform: bool
    role_tag: Optional[str] = None

    @classmethod
    def from_model(cls, slot) -> "ResolvedSlotSchema":
        """Create from ResolvedSlot."""
        return cls(
            slot_id=str(slot.slot_id),
            player_id=slot.player_id,
            x=slot.x,
            y=slot.y,
            label=slot.label,
            tier=slot.tier.value,
            is_freeform=slot.is_freeform,
            role_tag=slot.role_tag,
        )


class LineupSessionSchema(BaseModel):
    """Full view of an editing session."""

    session_id: str
    game_format: GameFormatSchema
    match_id: Optional[int] = None
    formation_id: str
    detected_formation: Optional[str] = None
    slots: list[ResolvedSlotSchema]
    bench: list[int]
    available: list[int]
    pending_player_id: Optional[int] = None
    assigned_count: int
    slot_count: int

    @classmethod
    def from_editor(cls, session_id, editor) -> "LineupSessionSchema":
        """Create from a LineupEditor."""
        return cls(
            session_id=str(session_id),
            game_format=editor.game_format.value,
            match_id=editor.match_id,
            formation_id=editor.store.formation_id,
            detected_formation=editor.detected_formation,
            slots=[ResolvedSlotSchema.from_model(slot) for slot in editor.resolved_slots()],
            bench=editor.store.bench,
            available=[player.id for player in editor.available_players()],
            pending_player_id=editor.clicks.pending_player_id,
            assigned_count=editor.assigned_count,
            slot_count=editor.slot_count,
        )


class LineupSnapshotSchema(BaseModel):
    """Save payload."""

    lineup: list[LineupEntrySchema]
    bench: list[int]
    formation: str

    @classmethod
    def from_model(cls, snapshot) -> "LineupSnapshotSchema":
        """Create from LineupSnapshot."""
        return cls(
            lineup=[LineupEntrySchema.from_model(entry) for entry in snapshot.lineup],
            bench=list(snapshot.bench),
            formation=snapshot.formation,
        )


# === Diffs ===

class LineupDiffSchema(BaseModel):
    total_changes: int
    spine_changes: int
    new_spine: bool
    message: Optional[str] = None

    @classmethod
    def from_model(cls, diff) -> "LineupDiffSchema":
        """Create from LineupDiff."""
        return cls(
            total_changes=diff.total_changes,
            spine_changes=diff.spine_changes,
            new_spine=diff.new_spine,
            message=diff.message,
        )


class CompareLineupsRequest(BaseModel):
    """Two lineups and the templates they were built under."""

    current: list[LineupEntrySchema]
    previous: list[LineupEntrySchema]
    current_formation: str
    previous_formation: Optional[str] = None  # Defaults to current_formation


class SessionDiffRequest(BaseModel):
    """Saved matches to compare the session's lineup against."""

    matches: list[MatchLineupSchema]
