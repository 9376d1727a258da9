"""Shared setup helpers for engine tests: drive tokens through real moves."""

from __future__ import annotations

from typing import Optional

from uckers.config import Config
from uckers.rules import RulesEngine
from uckers.state import GameState
from uckers.topology import BoardTopology
from uckers.types import PLAYER_ORDER, PlayerId, TokenMove, TokenStatus


def make_config(**overrides) -> Config:
    """Default board regardless of environment variables."""
    values = dict(
        NODES_PER_SIDE=10,
        HOME_LANE_STEPS=4,
        TOKENS_PER_PLAYER=4,
        MIN_PLAYERS=2,
        MAX_PLAYERS=4,
    )
    values.update(overrides)
    return Config(**values)


class Scenario:
    def __init__(self, player_count: int = 2, cfg: Optional[Config] = None):
        self.cfg = cfg if cfg is not None else make_config()
        self.topology = BoardTopology(self.cfg)
        self.players = list(PLAYER_ORDER[:player_count])
        self.state = GameState(self.topology, self.players)
        self.rules = RulesEngine(self.topology)

    @property
    def track_length(self) -> int:
        return self.topology.track_length

    def move(self, player: PlayerId, token_index: int, roll: int) -> TokenMove:
        move = self.rules.move_for_token(self.state, player, token_index, roll)
        if move is None:
            raise AssertionError(f"{player.name}#{token_index} cannot move {roll}")
        return move

    def advance(self, player: PlayerId, token_index: int, roll: int) -> TokenMove:
        move = self.move(player, token_index, roll)
        self.state.apply_move(move)
        return move

    def leave_base(self, player: PlayerId, token_index: int) -> TokenMove:
        return self.advance(player, token_index, 6)

    def advance_by_steps(self, player: PlayerId, token_index: int, steps: int) -> Optional[TokenMove]:
        last = None
        remaining = steps
        while remaining > 0:
            roll = min(6, remaining)
            last = self.advance(player, token_index, roll)
            remaining -= roll
        return last

    def prepare_for_home(self, player: PlayerId, token_index: int) -> None:
        """Leave base and walk to the cell just before the home lane branches off."""
        self.leave_base(player, token_index)
        self.advance_by_steps(player, token_index, self.track_length - 1)

    def enter_home_lane(self, player: PlayerId, token_index: int, home_index: int = 0) -> None:
        self.prepare_for_home(player, token_index)
        self.advance(player, token_index, 1)
        if home_index:
            self.advance(player, token_index, home_index)

    def finish(self, player: PlayerId, token_index: int) -> None:
        self.prepare_for_home(player, token_index)
        self.advance(player, token_index, self.topology.home_lane_length(player))

    def force_position(
        self, player: PlayerId, token_index: int, status: TokenStatus, progress: int
    ) -> None:
        # Bypass apply_move so tests can build positions legal play cannot reach
        record = self.state._records[player][token_index]
        record.status = status
        record.progress = progress
        self.state.validate_invariants()
