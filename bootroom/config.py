"""
Lineup engine configuration.

Controls interaction thresholds, freeform slot naming and lineup diff
heuristics. All settings can be overridden via environment variables.
"""

import os
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class EngineConfig:
    """Configuration for the lineup assignment and formation engine."""

    # Interaction settings
    drag_threshold_px: float = field(
        default_factory=lambda: float(os.getenv("BOOTROOM_DRAG_THRESHOLD_PX", "8"))
    )
    snap_radius: float = field(
        default_factory=lambda: float(os.getenv("BOOTROOM_SNAP_RADIUS", "8"))
    )

    # Freeform slot ids are prefix + integer
    freeform_prefix: str = field(
        default_factory=lambda: os.getenv("BOOTROOM_FREEFORM_PREFIX", "ff-")
    )

    default_game_format: str = field(
        default_factory=lambda: os.getenv("BOOTROOM_GAME_FORMAT", "11v11")
    )

    # Lineup diff settings
    spine_change_threshold: int = 3  # Spine changes that make a "new spine"
    churn_change_threshold: int = 3  # Total changes before the generic banner
    diff_min_fill_ratio: float = 0.7  # Share of slots filled before diffing

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls()

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        from bootroom.core.formations.catalog import all_formations

        errors = []
        if self.drag_threshold_px < 0:
            errors.append("BOOTROOM_DRAG_THRESHOLD_PX must not be negative")
        if self.snap_radius <= 0:
            errors.append("BOOTROOM_SNAP_RADIUS must be positive")
        if not self.freeform_prefix:
            errors.append("BOOTROOM_FREEFORM_PREFIX is required")
        else:
            clashes = sorted({
                slot.id
                for formation in all_formations()
                for slot in formation.slots
                if slot.id.startswith(self.freeform_prefix)
            })
            if clashes:
                errors.append(
                    f"BOOTROOM_FREEFORM_PREFIX '{self.freeform_prefix}' "
                    f"collides with native slot ids: {', '.join(clashes)}"
                )
        if not 0 < self.diff_min_fill_ratio <= 1:
            errors.append("diff_min_fill_ratio must be in (0, 1]")
        return errors


# Singleton config instance
_config: Optional[EngineConfig] = None


def get_config() -> EngineConfig:
    """Get the global engine configuration."""
    global _config
    if _config is None:
        _config = EngineConfig.from_env()
    return _config


def set_config(config: EngineConfig) -> None:
    """
    Replace the global configuration.

    Useful for testing or runtime tuning.
    """
    global _config
    _config = config


def reset_config() -> None:
    """Drop the cached configuration so the next access re-reads the environment."""
    global _config
    _config = None
