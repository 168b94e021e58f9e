"""Shared pytest fixtures for Bootroom tests."""

import datetime

import pytest

from bootroom.config import EngineConfig, reset_config, set_config
from bootroom.core.lineup.entries import LineupEntry
from bootroom.core.lineup.store import AssignmentStore
from bootroom.core.models.match import MatchLineup
from bootroom.core.models.player import PlayerDirectory, PlayerRef
from bootroom.editor.editor import LineupEditor
from bootroom.events.bus import EventBus
from bootroom.interaction.geometry import Layout, Rect


# =============================================================================
# Configuration
# =============================================================================


@pytest.fixture(autouse=True)
def engine_config():
    """Pin the engine config to its defaults, whatever the environment says."""
    config = EngineConfig(
        drag_threshold_px=8.0,
        snap_radius=8.0,
        freeform_prefix="ff-",
        default_game_format="11v11",
    )
    set_config(config)
    yield config
    reset_config()


# =============================================================================
# Squad Fixtures
# =============================================================================

SQUAD = [
    (1, 1, "Alisson Becker", "Sweeper Keeper"),
    (2, 2, "Trent Alexander", "Inverted FB"),
    (3, 4, "Virgil Dijk", None),
    (4, 5, "Ibrahima Konate", None),
    (5, 26, "Andrew Robertson", "Overlapping FB"),
    (6, 3, "Wataru Endo", "Anchor"),
    (7, 8, "Dominik Szoboszlai", None),
    (8, 10, "Alexis Mac Allister", None),
    (9, 11, "Mohamed Salah", "Inside Forward"),
    (10, 7, "Luis Diaz", None),
    (11, 9, "Darwin Nunez", "Target Man"),
    (12, 18, "Cody Gakpo", None),
    (13, 19, "Harvey Elliott", None),
    (14, 17, "Curtis Jones", None),
    (15, 62, "Caoimhin Kelleher", None),
    (16, 84, "Conor Bradley", None),
]

# 4-2-3-1 slot order, one player each
STARTING_SLOTS = ["GK", "RB", "LCB", "RCB", "LB", "LCDM", "RCDM", "RW", "CAM", "LW", "ST"]


@pytest.fixture
def players() -> list[PlayerRef]:
    """Sixteen-player squad."""
    return [
        PlayerRef(id=pid, jersey_number=number, name=name, role_tag=role)
        for pid, number, name, role in SQUAD
    ]


@pytest.fixture
def directory(players) -> PlayerDirectory:
    return PlayerDirectory(players)


# =============================================================================
# Engine Fixtures
# =============================================================================


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def store(event_bus) -> AssignmentStore:
    """Empty 4-2-3-1 store wired to an event bus."""
    return AssignmentStore("4-2-3-1", event_bus=event_bus)


@pytest.fixture
def full_store(store) -> AssignmentStore:
    """4-2-3-1 with players 1-11 in place and 12-14 on the bench."""
    for player_id, slot_id in enumerate(STARTING_SLOTS, start=1):
        store.assign(player_id, slot_id)
    for player_id in (12, 13, 14):
        store.move_to_bench(player_id)
    return store


@pytest.fixture
def layout() -> Layout:
    """Field at (100, 50) sized 400x600; bench and roster strips to its right."""
    return Layout(
        field=Rect(100, 50, 400, 600),
        bench=Rect(520, 50, 200, 200),
        roster=Rect(520, 300, 200, 350),
    )


@pytest.fixture
def editor(directory, layout) -> LineupEditor:
    return LineupEditor(directory, game_format="11v11", layout=layout)


# =============================================================================
# Match Fixtures
# =============================================================================


@pytest.fixture
def starting_entries() -> list[LineupEntry]:
    return [
        LineupEntry(slot_id=slot_id, player_id=player_id)
        for player_id, slot_id in enumerate(STARTING_SLOTS, start=1)
    ]


@pytest.fixture
def last_match(starting_entries) -> MatchLineup:
    return MatchLineup(
        id=100,
        date=datetime.date(2024, 3, 2),
        lineup=tuple(starting_entries),
        bench=(12, 13),
        formation="4-2-3-1",
    )


@pytest.fixture
def this_match() -> MatchLineup:
    """Upcoming match with nothing picked yet."""
    return MatchLineup(id=101, date=datetime.date(2024, 3, 9), formation="4-2-3-1")
