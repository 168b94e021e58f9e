"""API routers for different resource types."""

from bootroom.api.routers.formations import router as formations_router
from bootroom.api.routers.lineups import router as lineups_router

__all__ = [
    "formations_router",
    "lineups_router",
]
