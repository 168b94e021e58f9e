"""In-memory registry of lineup editing sessions for the API."""

import logging
from typing import Optional
from uuid import UUID, uuid4

from bootroom.core.enums import GameFormat
from bootroom.core.models.match import MatchLineup
from bootroom.core.models.player import PlayerDirectory, PlayerRef
from bootroom.editor.editor import LineupEditor

logger = logging.getLogger(__name__)


class LineupSessionManager:
    """
    Keeps one LineupEditor per editing session.

    Sessions live only as long as the process; saving is the caller's job
    (the snapshot endpoint hands back what to persist).
    """

    def __init__(self) -> None:
        self._sessions: dict[UUID, LineupEditor] = {}

    @property
    def active_sessions(self) -> list[UUID]:
        return list(self._sessions)

    def create_session(
        self,
        players: list[PlayerRef],
        game_format: GameFormat,
        match: Optional[MatchLineup] = None,
    ) -> tuple[UUID, LineupEditor]:
        """Open a session, optionally hydrated from a saved match."""
        session_id = uuid4()
        editor = LineupEditor(PlayerDirectory(players), game_format=game_format)
        if match is not None:
            editor.load_match(match)
        self._sessions[session_id] = editor
        logger.info(f"Opened lineup session {session_id} ({game_format.value}, {len(players)} players)")
        return session_id, editor

    def get_session(self, session_id: UUID) -> Optional[LineupEditor]:
        return self._sessions.get(session_id)

    def remove_session(self, session_id: UUID) -> bool:
        editor = self._sessions.pop(session_id, None)
        if editor is None:
            return False
        editor.event_bus.clear()
        logger.info(f"Closed lineup session {session_id}")
        return True

    def clear(self) -> None:
        for session_id in list(self._sessions):
            self.remove_session(session_id)


# Global session manager instance
lineup_session_manager = LineupSessionManager()
