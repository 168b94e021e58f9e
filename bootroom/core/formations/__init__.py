"""Formation templates, slot resolution and formation detection."""

from bootroom.core.formations.catalog import (
    BLANK_FORMATION,
    DEFAULT_FORMATION_FOR_FORMAT,
    FORMATIONS_BY_FORMAT,
    FormationTemplate,
    PositionSlot,
    all_formations,
    get_default_formation,
    get_formation,
    get_formation_or_blank,
    get_formations_for_format,
)
from bootroom.core.formations.detection import DIAMOND_LABEL, detect_formation, detect_if_ready, label_for_tiers
from bootroom.core.formations.resolver import (
    ResolvedSlot,
    resolve_labels,
    resolve_lineup,
    resolve_positions,
    resolve_tiers,
)

__all__ = [
    "BLANK_FORMATION",
    "DEFAULT_FORMATION_FOR_FORMAT",
    "DIAMOND_LABEL",
    "FORMATIONS_BY_FORMAT",
    "FormationTemplate",
    "PositionSlot",
    "ResolvedSlot",
    "all_formations",
    "detect_formation",
    "detect_if_ready",
    "get_default_formation",
    "get_formation",
    "get_formation_or_blank",
    "get_formations_for_format",
    "label_for_tiers",
    "resolve_labels",
    "resolve_lineup",
    "resolve_positions",
    "resolve_tiers",
]
