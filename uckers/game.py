from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from loguru import logger

from .config import Config, GameConstants, config as default_config
from .errors import GameOverError, InvalidMove
from .rules import RulesEngine
from .state import GameState
from .topology import BoardTopology
from .turns import TurnManager
from .types import PLAYER_ORDER, MoveResult, PlayerId, TokenMove


@dataclass(slots=True)
class Game:
    """
    One game session: topology, state, rules and turn order wired together.

    The caller supplies every die roll; picking among several legal moves is
    also left to the caller.
    """

    player_order: Iterable[PlayerId] = PLAYER_ORDER[:2]
    cfg: Config = field(default_factory=lambda: default_config)
    topology: BoardTopology = field(init=False)
    state: GameState = field(init=False)
    rules: RulesEngine = field(init=False)
    turns: TurnManager = field(init=False)
    winner: Optional[PlayerId] = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.player_order = self.cfg.validate_player_order(self.player_order)
        self.topology = BoardTopology(self.cfg)
        self.state = GameState(self.topology, self.player_order)
        self.rules = RulesEngine(self.topology)
        self.turns = TurnManager(self.player_order, self.cfg)

    @property
    def current_player(self) -> PlayerId:
        return self.turns.current_player

    @property
    def game_over(self) -> bool:
        return self.winner is not None

    def legal_moves(self, roll: int) -> List[TokenMove]:
        return self.rules.legal_moves(self.state, self.current_player, roll)

    def play(self, roll: int, token_index: Optional[int] = None) -> MoveResult:
        """
        Resolve one roll for the current player.

        Args:
            roll: Die value 1-6
            token_index: Token to move; may be omitted when at most one move is legal

        Returns:
            MoveResult: The applied move (None when the turn had no legal move),
            whether the player keeps the turn and the winner, if any.

        Raises:
            GameOverError: If a player has already won
            InvalidMove: If token_index is missing or names a token that cannot move
        """
        if self.game_over:
            raise GameOverError(f"Game already won by {self.winner.name}")

        player = self.current_player
        moves = self.legal_moves(roll)
        extra_turn = roll == GameConstants.EXTRA_TURN_ROLL

        if not moves:
            logger.debug(f"{player.name} rolled {roll}: no moves")
            self.turns.advance_turn(extra_turn)
            return MoveResult(player=player, roll=roll, move=None, extra_turn=extra_turn)

        move = self._select(moves, token_index)
        self.state.apply_move(move)

        if self.state.has_player_won(player):
            self.winner = player
            logger.info(f"{player.name} wins")
            return MoveResult(
                player=player,
                roll=roll,
                move=move,
                extra_turn=False,
                winner=player,
                captured=list(move.captures),
            )

        self.turns.advance_turn(extra_turn)
        return MoveResult(
            player=player,
            roll=roll,
            move=move,
            extra_turn=extra_turn,
            captured=list(move.captures),
        )

    @staticmethod
    def _select(moves: List[TokenMove], token_index: Optional[int]) -> TokenMove:
        if token_index is None:
            if len(moves) == 1:
                return moves[0]
            raise InvalidMove(
                f"Several moves are legal ({[m.token_index for m in moves]}); pick a token"
            )
        for move in moves:
            if move.token_index == token_index:
                return move
        raise InvalidMove(f"Token {token_index} has no legal move")
