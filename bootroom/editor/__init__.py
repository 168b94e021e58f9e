"""Lineup editing sessions."""

from bootroom.editor.editor import LineupEditor, LineupSnapshot

__all__ = ["LineupEditor", "LineupSnapshot"]
