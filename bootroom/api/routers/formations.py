"""Formations API router - catalog lookup and formation detection."""

from typing import Optional

from fastapi import APIRouter, HTTPException, status

from bootroom.api.schemas.formation import (
    DetectFormationRequest,
    DetectFormationResponse,
    FormationSchema,
    GameFormatSchema,
)
from bootroom.core.enums import Tier
from bootroom.core.formations import all_formations, get_formation, get_formations_for_format, label_for_tiers

router = APIRouter(prefix="/formations", tags=["formations"])


@router.get("", response_model=list[FormationSchema])
async def list_formations(game_format: Optional[GameFormatSchema] = None) -> list[FormationSchema]:
    """List templates, optionally for one game format."""
    formations = get_formations_for_format(game_format.value) if game_format else all_formations()
    return [FormationSchema.from_model(formation) for formation in formations]


@router.post("/detect", response_model=DetectFormationResponse)
async def detect(request: DetectFormationRequest) -> DetectFormationResponse:
    """Derive the formation label for a set of filled tiers."""
    return DetectFormationResponse(formation=label_for_tiers(Tier(tier.value) for tier in request.tiers))


@router.get("/{formation_id}", response_model=FormationSchema)
async def get_formation_by_id(formation_id: str) -> FormationSchema:
    """Get a template by id (searched across all formats)."""
    formation = get_formation(formation_id)
    if not formation:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Formation {formation_id} not found",
        )

    return FormationSchema.from_model(formation)
