"""
Authoritative token positions for one game, with invariant checking.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np
from loguru import logger

from .config import GameConstants
from .errors import InvalidMove, InvalidPlayer, InvalidTokenIndex, InvariantViolation
from .topology import BoardTopology
from .types import PlayerId, TokenMove, TokenSnapshot, TokenStatus


@dataclass(slots=True)
class TokenRecord:
    """Mutable per-token storage. Never handed out; callers get snapshots."""

    status: TokenStatus = TokenStatus.BASE
    progress: int = GameConstants.BASE_PROGRESS

    def send_to_base(self) -> None:
        self.status = TokenStatus.BASE
        self.progress = GameConstants.BASE_PROGRESS


class GameState:
    """
    Holds every participating player's token records.

    Mutation happens only through :meth:`apply_move`; every mutation is
    followed by a full invariant check.
    """

    def __init__(self, topology: BoardTopology, player_order: Iterable[PlayerId]):
        """
        Create a game with every token at base.

        Args:
            topology: Shared board topology
            player_order: Distinct participating players, in turn order

        Raises:
            InvalidPlayerCount: If the number of players is outside the configured bounds
            InvalidPlayer: If a player is unknown or listed twice
        """
        self._topology = topology
        self._players = topology.config.validate_player_order(player_order)
        self._tokens_per_player = topology.config.TOKENS_PER_PLAYER
        self._records: Dict[PlayerId, List[TokenRecord]] = {
            player: [TokenRecord() for _ in range(self._tokens_per_player)]
            for player in self._players
        }
        self.validate_invariants()

    @property
    def topology(self) -> BoardTopology:
        return self._topology

    @property
    def players(self) -> Tuple[PlayerId, ...]:
        return self._players

    @property
    def tokens_per_player(self) -> int:
        return self._tokens_per_player

    # --- Read accessors ---
    def tokens(self, player: PlayerId) -> List[TokenSnapshot]:
        """Snapshots of all of a player's tokens, ordered by token index."""
        records = self._records_for(player)
        player = PlayerId(player)
        return [
            TokenSnapshot(player, index, record.status, record.progress)
            for index, record in enumerate(records)
        ]

    def token(self, player: PlayerId, token_index: int) -> TokenSnapshot:
        records = self._records_for(player)
        self._check_token_index(token_index)
        record = records[token_index]
        return TokenSnapshot(PlayerId(player), token_index, record.status, record.progress)

    def all_tokens(self) -> Iterator[TokenSnapshot]:
        """Every token of every player, player-major. Each call starts afresh."""
        for player in self._players:
            for index, record in enumerate(self._records[player]):
                yield TokenSnapshot(player, index, record.status, record.progress)

    def tokens_at_track_index(self, track_index: int) -> List[TokenSnapshot]:
        return [
            t
            for t in self.all_tokens()
            if t.status is TokenStatus.TRACK and t.progress == track_index
        ]

    def status_counts(self, player: PlayerId) -> Dict[TokenStatus, int]:
        counts = {status: 0 for status in TokenStatus}
        for record in self._records_for(player):
            counts[record.status] += 1
        return counts

    def has_player_won(self, player: PlayerId) -> bool:
        return all(r.status is TokenStatus.FINISHED for r in self._records_for(player))

    def winner(self) -> Optional[PlayerId]:
        for player in self._players:
            if self.has_player_won(player):
                return player
        return None

    def position_matrix(self) -> np.ndarray:
        """(players, tokens_per_player) int array of progress values, in turn order."""
        return np.asarray(
            [[r.progress for r in self._records[p]] for p in self._players],
            dtype=np.int64,
        ).reshape(len(self._players), self._tokens_per_player)

    # --- Mutation ---
    def apply_move(self, move: TokenMove) -> None:
        """
        Apply a move produced by the rules engine.

        The acting token takes the status/progress of the move's last step and
        every captured token goes back to base.

        Raises:
            InvalidMove: If the move carries no steps
            InvalidPlayer / InvalidTokenIndex: If the move names unknown tokens
            InvariantViolation: If the resulting state is inconsistent
        """
        if not move.steps:
            raise InvalidMove("Move must contain at least one step")

        records = self._records_for(move.player)
        self._check_token_index(move.token_index)
        for capture in move.captures:
            self._records_for(capture.player)
            self._check_token_index(capture.token_index)

        final = move.final_step
        record = records[move.token_index]
        record.status = final.status
        record.progress = final.progress

        for capture in move.captures:
            self._records[capture.player][capture.token_index].send_to_base()
            logger.debug(
                f"{move.player.name} captured {capture.player.name}#{capture.token_index} "
                f"at {final.progress}"
            )

        logger.debug(
            f"Applied {move.player.name}#{move.token_index} -> "
            f"{final.status.value}@{final.progress} ({len(move.steps)} steps)"
        )
        self.validate_invariants()

    # --- Invariants ---
    def validate_invariants(self) -> None:
        """
        Check token conservation and status/progress pairing for every player.

        Raises:
            InvariantViolation: Describing the first broken check
        """
        track_length = self._topology.track_length
        for player in self._players:
            records = self._records[player]
            if len(records) != self._tokens_per_player:
                self._violation(
                    f"Player {player.name} has {len(records)} tokens, "
                    f"expected {self._tokens_per_player}"
                )

            final_progress = self._topology.final_home_progress(player)
            for index, record in enumerate(records):
                label = f"{player.name}#{index}"
                if record.status is TokenStatus.BASE:
                    if record.progress != GameConstants.BASE_PROGRESS:
                        self._violation(f"Base token {label} has progress {record.progress}")
                elif record.status is TokenStatus.TRACK:
                    if not 0 <= record.progress < track_length:
                        self._violation(
                            f"Track token {label} progress {record.progress} "
                            f"outside 0..{track_length - 1}"
                        )
                elif record.status is TokenStatus.HOME:
                    if not self._topology.is_home_progress(record.progress):
                        self._violation(
                            f"Home token {label} progress {record.progress} "
                            f"outside {track_length}..{final_progress}"
                        )
                elif record.status is TokenStatus.FINISHED:
                    if record.progress != final_progress:
                        self._violation(
                            f"Finished token {label} has progress {record.progress}, "
                            f"expected {final_progress}"
                        )
                else:
                    self._violation(f"Token {label} has unknown status {record.status!r}")

            counts = self.status_counts(player)
            for status, count in counts.items():
                if not 0 <= count <= self._tokens_per_player:
                    self._violation(
                        f"Player {player.name} has {count} {status.value} tokens"
                    )
            if sum(counts.values()) != self._tokens_per_player:
                self._violation(f"Token conservation violated for player {player.name}")

    @staticmethod
    def _violation(message: str) -> None:
        logger.error(f"Invariant violation: {message}")
        raise InvariantViolation(message)

    # --- Helpers ---
    def _records_for(self, player: PlayerId) -> List[TokenRecord]:
        try:
            return self._records[player]
        except (KeyError, TypeError) as e:
            raise InvalidPlayer(f"Player {player!r} is not part of this game") from e

    def _check_token_index(self, token_index: int) -> None:
        if not 0 <= token_index < self._tokens_per_player:
            raise InvalidTokenIndex(
                f"Token index {token_index} outside 0..{self._tokens_per_player - 1}"
            )

    def to_dict(self) -> dict:
        """Convert the state to a plain dictionary (debugging / AI consumption)."""
        return {
            "track_length": self._topology.track_length,
            "players": [
                {
                    "player": player.name.lower(),
                    "tokens": [t.to_dict() for t in self.tokens(player)],
                    "has_won": self.has_player_won(player),
                }
                for player in self._players
            ],
        }

    def __str__(self) -> str:
        lines = ["GameState:"]
        for player in self._players:
            tokens = ", ".join(f"{t.status.value}@{t.progress}" for t in self.tokens(player))
            lines.append(f"  {player.name}: {tokens}")
        return "\n".join(lines)

