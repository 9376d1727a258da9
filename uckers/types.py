from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Tuple


class PlayerId(IntEnum):
    RED = 0
    BLUE = 1
    GREEN = 2
    YELLOW = 3


class Orientation(IntEnum):
    """Board side a player sits on. Values follow the track's side order."""

    SOUTH = 0
    EAST = 1
    NORTH = 2
    WEST = 3


class TokenStatus(Enum):
    """Possible states of a token."""

    BASE = "base"  # Token is waiting in its base area
    TRACK = "track"  # Token is on the shared loop
    HOME = "home"  # Token is in its player's home lane
    FINISHED = "finished"  # Token has stopped on the last home-lane cell


PLAYER_ORDER: Tuple[PlayerId, ...] = (
    PlayerId.RED,
    PlayerId.BLUE,
    PlayerId.GREEN,
    PlayerId.YELLOW,
)

ORIENTATIONS: Dict[PlayerId, Orientation] = {
    PlayerId.RED: Orientation.SOUTH,
    PlayerId.BLUE: Orientation.NORTH,
    PlayerId.GREEN: Orientation.WEST,
    PlayerId.YELLOW: Orientation.EAST,
}


@dataclass(frozen=True, slots=True)
class TokenSnapshot:
    player: PlayerId
    token_index: int
    status: TokenStatus
    progress: int

    def to_dict(self) -> dict:
        return {
            "player": self.player.name.lower(),
            "token_index": self.token_index,
            "status": self.status.value,
            "progress": self.progress,
        }


@dataclass(frozen=True, slots=True)
class TokenStep:
    progress: int
    status: TokenStatus


@dataclass(frozen=True, slots=True)
class Capture:
    player: PlayerId
    token_index: int


@dataclass(frozen=True, slots=True)
class TokenMove:
    """One legal move: the acting token, its full trajectory and its captures.

    ``steps`` holds one entry per unit step in the order a presentation layer
    should animate them; the last entry is where the token comes to rest.
    """

    player: PlayerId
    token_index: int
    steps: Tuple[TokenStep, ...]
    captures: Tuple[Capture, ...] = ()

    @property
    def final_step(self) -> TokenStep:
        return self.steps[-1]

    @property
    def final_status(self) -> TokenStatus:
        return self.steps[-1].status

    @property
    def final_progress(self) -> int:
        return self.steps[-1].progress

    @property
    def is_capture(self) -> bool:
        return bool(self.captures)

    @property
    def finishes(self) -> bool:
        return self.final_status is TokenStatus.FINISHED

    def to_dict(self) -> dict:
        return {
            "player": self.player.name.lower(),
            "token_index": self.token_index,
            "steps": [
                {"progress": s.progress, "status": s.status.value} for s in self.steps
            ],
            "captures": [
                {"player": c.player.name.lower(), "token_index": c.token_index}
                for c in self.captures
            ],
        }


@dataclass(slots=True)
class MoveResult:
    player: PlayerId
    roll: int
    move: Optional[TokenMove]
    extra_turn: bool
    winner: Optional[PlayerId] = None
    captured: List[Capture] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        return self.move is None
