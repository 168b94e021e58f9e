"""Pointer and click interaction: hit testing, drag and drop, tap-to-assign."""

from bootroom.interaction.click import ClickAssigner
from bootroom.interaction.drag import DragController, DragOrigin, DragPhase, DropAction, DropResult
from bootroom.interaction.geometry import DropZone, Layout, Rect
from bootroom.interaction.hit_test import (
    FreeformTarget,
    SlotTarget,
    hit_test_drop_zone,
    hit_test_field,
    to_data_space,
)

__all__ = [
    "ClickAssigner",
    "DragController",
    "DragOrigin",
    "DragPhase",
    "DropAction",
    "DropResult",
    "DropZone",
    "FreeformTarget",
    "Layout",
    "Rect",
    "SlotTarget",
    "hit_test_drop_zone",
    "hit_test_field",
    "to_data_space",
]
