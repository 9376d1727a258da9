import os
from dataclasses import dataclass
from typing import Iterable, Tuple

from dotenv import load_dotenv

from .errors import ConfigError, InvalidPlayer, InvalidPlayerCount
from .types import PlayerId

load_dotenv()


class GameConstants:
    """Fixed rule and geometry constants (not configurable)."""

    # Dice
    DICE_MIN = 1
    DICE_MAX = 6
    EXIT_BASE_ROLL = 6  # roll needed to leave base
    EXTRA_TURN_ROLL = 6  # roll that keeps the turn

    # Special progress values
    BASE_PROGRESS = -1

    # Board geometry (world units)
    BOARD_SIZE = 8.0
    TILE_THICKNESS = 0.05
    STEP_HEIGHT = 0.1
    BASE_OFFSET = 1.2

    # Players allowed by the fixed identity set
    PLAYER_LIMIT = 4


@dataclass(slots=True)
class Config:
    NODES_PER_SIDE: int = int(os.getenv("NODES_PER_SIDE", 10))
    HOME_LANE_STEPS: int = int(os.getenv("HOME_LANE_STEPS", 4))
    TOKENS_PER_PLAYER: int = int(os.getenv("TOKENS_PER_PLAYER", 4))
    MIN_PLAYERS: int = int(os.getenv("MIN_PLAYERS", 2))
    MAX_PLAYERS: int = int(os.getenv("MAX_PLAYERS", 4))

    # Derived (populated in __post_init__ due to slots)
    TRACK_LENGTH: int = 0

    def __post_init__(self):
        if self.NODES_PER_SIDE < 2:
            raise ConfigError("NODES_PER_SIDE must be at least 2")
        if self.HOME_LANE_STEPS < 0:
            raise ConfigError("HOME_LANE_STEPS cannot be negative")
        if self.TOKENS_PER_PLAYER < 1:
            raise ConfigError("TOKENS_PER_PLAYER must be at least 1")
        if not 2 <= self.MIN_PLAYERS <= self.MAX_PLAYERS <= GameConstants.PLAYER_LIMIT:
            raise ConfigError(
                f"Player bounds must satisfy 2 <= MIN_PLAYERS <= MAX_PLAYERS <= "
                f"{GameConstants.PLAYER_LIMIT}, got {self.MIN_PLAYERS}..{self.MAX_PLAYERS}"
            )

        # Square loop: every side contributes all of its nodes except the shared corner
        self.TRACK_LENGTH = 4 * (self.NODES_PER_SIDE - 1)

    def validate_player_count(self, count: int) -> None:
        if count < self.MIN_PLAYERS or count > self.MAX_PLAYERS:
            raise InvalidPlayerCount(
                f"Player count must be between {self.MIN_PLAYERS} and "
                f"{self.MAX_PLAYERS} inclusive, got {count}"
            )

    def validate_player_order(self, player_order: Iterable[PlayerId]) -> Tuple[PlayerId, ...]:
        """Normalise a turn order to distinct PlayerIds within the player bounds."""
        try:
            players = tuple(PlayerId(p) for p in player_order)
        except ValueError as e:
            raise InvalidPlayer(f"Unknown player in order {player_order!r}") from e
        if len(set(players)) != len(players):
            raise InvalidPlayer(
                f"Player order contains duplicates: {[p.name for p in players]}"
            )
        self.validate_player_count(len(players))
        return players


config = Config()
