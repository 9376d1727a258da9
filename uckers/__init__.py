"""
Uckers rules core.
Board topology, token state, move rules and turn order for a 2-4 player
cross-track race-and-capture game.
"""

from uckers.config import Config, GameConstants
from uckers.errors import (
    ConfigError,
    GameOverError,
    InvalidMove,
    InvalidPlayer,
    InvalidPlayerCount,
    InvalidRoll,
    InvalidTokenIndex,
    InvariantViolation,
    TopologyError,
    UckersError,
)
from uckers.game import Game
from uckers.rules import LaneCursor, RulesEngine, advance_lane_cursor
from uckers.state import GameState
from uckers.topology import BoardTopology
from uckers.turns import TurnManager
from uckers.types import (
    ORIENTATIONS,
    PLAYER_ORDER,
    Capture,
    MoveResult,
    Orientation,
    PlayerId,
    TokenMove,
    TokenSnapshot,
    TokenStatus,
    TokenStep,
)

__all__ = [
    "Game",
    "BoardTopology",
    "GameState",
    "RulesEngine",
    "TurnManager",
    "LaneCursor",
    "advance_lane_cursor",
    "PlayerId",
    "Orientation",
    "TokenStatus",
    "TokenSnapshot",
    "TokenStep",
    "TokenMove",
    "Capture",
    "MoveResult",
    "PLAYER_ORDER",
    "ORIENTATIONS",
    "Config",
    "GameConstants",
    "UckersError",
    "ConfigError",
    "InvalidPlayer",
    "InvalidPlayerCount",
    "InvalidTokenIndex",
    "InvalidRoll",
    "InvalidMove",
    "TopologyError",
    "InvariantViolation",
    "GameOverError",
]
