"""Lineups API router - editing sessions, snapshots and lineup diffs."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, HTTPException, status

from bootroom.api.schemas.lineup import (
    AssignRequest,
    CompareLineupsRequest,
    CreateSessionRequest,
    FormationChangeRequest,
    FreeformRequest,
    LineupDiffSchema,
    LineupSessionSchema,
    LineupSnapshotSchema,
    PlayerRequest,
    RoleTagRequest,
    SessionDiffRequest,
    SlotRequest,
)
from bootroom.api.services.session_service import lineup_session_manager
from bootroom.core.enums import GameFormat
from bootroom.core.formations import get_formation
from bootroom.core.lineup import compare_lineups
from bootroom.editor import LineupEditor

router = APIRouter(prefix="/lineups", tags=["lineups"])


def _get_editor(session_id: UUID) -> LineupEditor:
    editor = lineup_session_manager.get_session(session_id)
    if not editor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Lineup session {session_id} not found",
        )
    return editor


def _require_player(editor: LineupEditor, player_id: int) -> None:
    if player_id not in editor.directory:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Player {player_id} not found",
        )


# =============================================================================
# Stateless
# =============================================================================

@router.post("/compare", response_model=LineupDiffSchema)
async def compare(request: CompareLineupsRequest) -> LineupDiffSchema:
    """Compare two saved lineups without opening a session."""
    current_formation = get_formation(request.current_formation)
    previous_formation = get_formation(request.previous_formation or request.current_formation)
    if not current_formation or not previous_formation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Formation not found",
        )

    diff = compare_lineups(
        [entry.to_model() for entry in request.current],
        [entry.to_model() for entry in request.previous],
        current_formation.slots,
        previous_formation.slots,
    )
    return LineupDiffSchema.from_model(diff)


# =============================================================================
# Sessions
# =============================================================================

@router.post("/sessions", response_model=LineupSessionSchema, status_code=status.HTTP_201_CREATED)
async def create_session(request: CreateSessionRequest) -> LineupSessionSchema:
    """
    Open an editing session.

    With a match the session starts from that match's saved lineup,
    otherwise from an empty lineup in the format's default formation.
    """
    session_id, editor = lineup_session_manager.create_session(
        players=[player.to_model() for player in request.players],
        game_format=GameFormat(request.game_format.value),
        match=request.match.to_model() if request.match else None,
    )
    return LineupSessionSchema.from_editor(session_id, editor)


@router.get("/sessions/{session_id}", response_model=LineupSessionSchema)
async def get_session(session_id: UUID) -> LineupSessionSchema:
    """Get the current state of a session."""
    return LineupSessionSchema.from_editor(session_id, _get_editor(session_id))


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: UUID) -> None:
    """Discard a session."""
    _get_editor(session_id)
    lineup_session_manager.remove_session(session_id)


# =============================================================================
# Edits
# =============================================================================

@router.post("/sessions/{session_id}/assign", response_model=LineupSessionSchema)
async def assign(session_id: UUID, request: AssignRequest) -> LineupSessionSchema:
    """Put a player into a slot. Unknown slots leave the lineup unchanged."""
    editor = _get_editor(session_id)
    _require_player(editor, request.player_id)
    editor.store.assign(request.player_id, request.slot_id, swap=request.swap)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/freeform", response_model=LineupSessionSchema)
async def place_freeform(session_id: UUID, request: FreeformRequest) -> LineupSessionSchema:
    """Place a player at a free point on the field."""
    editor = _get_editor(session_id)
    _require_player(editor, request.player_id)
    editor.store.move_to_freeform(request.player_id, request.x, request.y, request.label)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/bench", response_model=LineupSessionSchema)
async def bench_player(session_id: UUID, request: PlayerRequest) -> LineupSessionSchema:
    editor = _get_editor(session_id)
    _require_player(editor, request.player_id)
    editor.store.move_to_bench(request.player_id)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/roster", response_model=LineupSessionSchema)
async def release_player(session_id: UUID, request: PlayerRequest) -> LineupSessionSchema:
    """Send a player back to the available list."""
    editor = _get_editor(session_id)
    _require_player(editor, request.player_id)
    editor.store.move_to_roster(request.player_id)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/formation", response_model=LineupSessionSchema)
async def change_formation(session_id: UUID, request: FormationChangeRequest) -> LineupSessionSchema:
    """Switch templates; players in slots the new template lacks go freeform."""
    editor = _get_editor(session_id)
    if not get_formation(request.formation_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Formation {request.formation_id} not found",
        )

    editor.change_formation(request.formation_id)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/role", response_model=LineupSessionSchema)
async def set_role(session_id: UUID, request: RoleTagRequest) -> LineupSessionSchema:
    editor = _get_editor(session_id)
    if editor.store.occupant(request.slot_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Slot {request.slot_id} is empty",
        )

    editor.set_role_tag(request.slot_id, request.role_tag)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/click/player", response_model=LineupSessionSchema)
async def click_player(session_id: UUID, request: PlayerRequest) -> LineupSessionSchema:
    """Tap a roster or bench chip (selects, or deselects when tapped again)."""
    editor = _get_editor(session_id)
    _require_player(editor, request.player_id)
    editor.click_player(request.player_id)
    return LineupSessionSchema.from_editor(session_id, editor)


@router.post("/sessions/{session_id}/click/slot", response_model=LineupSessionSchema)
async def click_slot(session_id: UUID, request: SlotRequest) -> LineupSessionSchema:
    """Tap a field position (assigns the selected player, or selects the occupant)."""
    editor = _get_editor(session_id)
    editor.click_slot(request.slot_id)
    return LineupSessionSchema.from_editor(session_id, editor)


# =============================================================================
# Saving and diffs
# =============================================================================

@router.get("/sessions/{session_id}/snapshot", response_model=LineupSnapshotSchema)
async def get_snapshot(session_id: UUID) -> LineupSnapshotSchema:
    """What to persist for this lineup."""
    return LineupSnapshotSchema.from_model(_get_editor(session_id).snapshot())


@router.post("/sessions/{session_id}/diff", response_model=Optional[LineupDiffSchema])
async def session_diff(session_id: UUID, request: SessionDiffRequest) -> Optional[LineupDiffSchema]:
    """
    Compare the session's lineup with the previous match.

    Returns null when there is nothing to compare yet (no saved match, too
    few players placed, or no earlier match with a lineup).
    """
    editor = _get_editor(session_id)
    diff = editor.lineup_diff([match.to_model() for match in request.matches])
    return LineupDiffSchema.from_model(diff) if diff else None
