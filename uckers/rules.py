"""
Move enumeration and step simulation.

The engine never mutates a GameState: it reads token snapshots and returns
TokenMove descriptions that the caller applies through GameState.apply_move.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from .config import GameConstants
from .errors import InvalidRoll
from .state import GameState
from .topology import BoardTopology
from .types import Capture, PlayerId, TokenMove, TokenSnapshot, TokenStatus, TokenStep

FORWARD = 1
BACKWARD = -1


@dataclass(frozen=True, slots=True)
class LaneCursor:
    """Position and heading of a token inside its home lane."""

    index: int
    direction: int = FORWARD


def advance_lane_cursor(
    cursor: LaneCursor, lane_length: int, is_last_step: bool
) -> Tuple[LaneCursor, bool]:
    """
    Move one cell along a home lane, bouncing at either end.

    Returns the new cursor and whether the token finished. A token finishes
    only when the roll's last step lands it on the terminal cell while heading
    forward. A lane of length 0 or 1 has nowhere to bounce, so the token is
    finished at once.
    """
    if lane_length <= 1:
        return LaneCursor(max(lane_length - 1, 0), FORWARD), True

    index = min(max(cursor.index + cursor.direction, 0), lane_length - 1)
    if is_last_step and cursor.direction == FORWARD and index == lane_length - 1:
        return LaneCursor(index, FORWARD), True

    direction = cursor.direction
    if index == lane_length - 1:
        direction = BACKWARD
    elif index == 0:
        direction = FORWARD
    return LaneCursor(index, direction), False


class RulesEngine:
    """Stateless legal-move generator for a fixed topology."""

    def __init__(self, topology: BoardTopology):
        self._topology = topology

    @property
    def topology(self) -> BoardTopology:
        return self._topology

    # --- Public API ---
    def legal_moves(self, state: GameState, player: PlayerId, roll: int) -> List[TokenMove]:
        """
        Enumerate every legal move for a player's tokens.

        Args:
            state: Current game state (read only)
            player: Player to move
            roll: Die value 1-6

        Returns:
            List[TokenMove]: One entry per movable token, ordered by token index

        Raises:
            InvalidRoll: If roll is outside 1-6
            InvalidPlayer: If the player is not part of the game
        """
        self._check_roll(roll)
        moves: List[TokenMove] = []
        for token in state.tokens(player):
            move = self._build_move(state, token, roll)
            if move is not None:
                moves.append(move)
        logger.debug(f"{PlayerId(player).name} rolled {roll}: {len(moves)} legal moves")
        return moves

    def move_for_token(
        self, state: GameState, player: PlayerId, token_index: int, roll: int
    ) -> Optional[TokenMove]:
        """The move a single token would make, or None if it cannot move."""
        self._check_roll(roll)
        return self._build_move(state, state.token(player, token_index), roll)

    def has_legal_move(self, state: GameState, player: PlayerId, roll: int) -> bool:
        return bool(self.legal_moves(state, player, roll))

    def simulate_steps(self, token: TokenSnapshot, roll: int) -> Tuple[TokenStep, ...]:
        """Trajectory a token would follow for a roll, ignoring other tokens."""
        self._check_roll(roll)
        if token.status is TokenStatus.BASE:
            return self._leave_base(token.player, roll)
        if token.status is TokenStatus.TRACK:
            return self._move_along_track(token.player, token.progress, roll)
        if token.status is TokenStatus.HOME:
            cursor = LaneCursor(self._topology.to_home_index(token.progress))
            return self._move_along_home(token.player, cursor, 1, roll)
        return ()

    def find_captures(
        self, state: GameState, player: PlayerId, steps: Tuple[TokenStep, ...]
    ) -> Tuple[Capture, ...]:
        """Opponent tokens sitting on the track cell where a trajectory ends."""
        if not steps:
            return ()
        final = steps[-1]
        if final.status is not TokenStatus.TRACK:
            return ()
        return tuple(
            Capture(t.player, t.token_index)
            for t in state.all_tokens()
            if t.player != player
            and t.status is TokenStatus.TRACK
            and t.progress == final.progress
        )

    # --- Internals ---
    @staticmethod
    def _check_roll(roll: int) -> None:
        if isinstance(roll, bool) or not isinstance(roll, int):
            raise InvalidRoll(f"Roll must be an integer, got {roll!r}")
        if not GameConstants.DICE_MIN <= roll <= GameConstants.DICE_MAX:
            raise InvalidRoll(
                f"Roll {roll} outside {GameConstants.DICE_MIN}..{GameConstants.DICE_MAX}"
            )

    def _build_move(
        self, state: GameState, token: TokenSnapshot, roll: int
    ) -> Optional[TokenMove]:
        steps = self.simulate_steps(token, roll)
        if not steps:
            return None
        captures = self.find_captures(state, token.player, steps)
        return TokenMove(token.player, token.token_index, steps, captures)

    def _leave_base(self, player: PlayerId, roll: int) -> Tuple[TokenStep, ...]:
        if roll != GameConstants.EXIT_BASE_ROLL:
            return ()
        return (TokenStep(self._topology.entry_index(player), TokenStatus.TRACK),)

    def _move_along_track(
        self, player: PlayerId, start_index: int, roll: int
    ) -> Tuple[TokenStep, ...]:
        track_length = self._topology.track_length
        home_entry = self._topology.home_entry_index(player)
        steps: List[TokenStep] = []
        index = start_index

        for step_number in range(1, roll + 1):
            if index == home_entry:
                # Branching into the lane consumes this step
                if self._topology.home_lane_length(player) <= 1:
                    steps.append(self._finished_step(player))
                    return tuple(steps)
                cursor = LaneCursor(0, FORWARD)
                steps.append(TokenStep(self._topology.to_home_progress(0), TokenStatus.HOME))
                steps.extend(self._move_along_home(player, cursor, step_number + 1, roll))
                return tuple(steps)

            index = (index + 1) % track_length
            steps.append(TokenStep(index, TokenStatus.TRACK))

        return tuple(steps)

    def _move_along_home(
        self, player: PlayerId, cursor: LaneCursor, first_step: int, roll: int
    ) -> Tuple[TokenStep, ...]:
        lane_length = self._topology.home_lane_length(player)
        steps: List[TokenStep] = []
        for step_number in range(first_step, roll + 1):
            cursor, finished = advance_lane_cursor(cursor, lane_length, step_number == roll)
            if finished:
                steps.append(self._finished_step(player))
                break
            steps.append(
                TokenStep(self._topology.to_home_progress(cursor.index), TokenStatus.HOME)
            )
        return tuple(steps)

    def _finished_step(self, player: PlayerId) -> TokenStep:
        return TokenStep(self._topology.final_home_progress(player), TokenStatus.FINISHED)

