"""Services backing the API routers."""

from bootroom.api.services.session_service import LineupSessionManager, lineup_session_manager

__all__ = ["LineupSessionManager", "lineup_session_manager"]
