from __future__ import annotations

from typing import Iterable, Optional, Tuple

from loguru import logger

from .config import Config, config as default_config
from .errors import InvalidPlayer
from .types import PlayerId


class TurnManager:
    """Round-robin turn order; a maximum roll lets the current player go again."""

    def __init__(self, player_order: Iterable[PlayerId], cfg: Optional[Config] = None):
        cfg = cfg if cfg is not None else default_config
        self._players: Tuple[PlayerId, ...] = cfg.validate_player_order(player_order)
        self._index = 0

    @property
    def players(self) -> Tuple[PlayerId, ...]:
        return self._players

    @property
    def turn_index(self) -> int:
        return self._index

    @property
    def current_player(self) -> PlayerId:
        return self._players[self._index]

    def peek_next_player(self) -> PlayerId:
        return self._players[(self._index + 1) % len(self._players)]

    def advance_turn(self, has_extra_roll: bool) -> PlayerId:
        """Pass the turn on unless the current player earned an extra roll."""
        if not has_extra_roll:
            self._index = (self._index + 1) % len(self._players)
        logger.debug(f"Turn: {self.current_player.name} (extra roll: {has_extra_roll})")
        return self.current_player

    def set_current_player(self, player: PlayerId) -> None:
        if player not in self._players:
            raise InvalidPlayer(f"Player {player!r} is not part of the turn order")
        self._index = self._players.index(player)
