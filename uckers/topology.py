"""
Board topology for the Uckers board.
Computes, once, the track/home-lane index model and the board geometry.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional, Tuple

import numpy as np
from loguru import logger

from .config import Config, GameConstants, config as default_config
from .errors import InvalidPlayer, TopologyError
from .types import ORIENTATIONS, PLAYER_ORDER, Orientation, PlayerId


def _readonly(points: np.ndarray) -> np.ndarray:
    points.setflags(write=False)
    return points


class BoardTopology:
    """
    Immutable index geometry shared by every player of a game.

    Progress values encode positions: ``0..L-1`` are track cells and
    ``L..L+K-1`` are home-lane cells, where L is the track length and K the
    home-lane length. The topology knows all four players; which of them take
    part is decided by the game state.
    """

    def __init__(self, cfg: Optional[Config] = None):
        """
        Build the topology.

        Args:
            cfg: Configuration to derive the geometry from. Defaults to the
                module-level config.
        """
        self._config = cfg if cfg is not None else default_config
        self._nodes_per_side = self._config.NODES_PER_SIDE
        self._track_length = self._config.TRACK_LENGTH
        self._home_length = self._config.HOME_LANE_STEPS

        self._spacing = GameConstants.BOARD_SIZE / (self._nodes_per_side - 1)
        self._half = GameConstants.BOARD_SIZE * 0.5

        self._entry_indices: Mapping[PlayerId, int] = MappingProxyType(
            {player: self._compute_entry_index(player) for player in PLAYER_ORDER}
        )
        self._home_entry_indices: Mapping[PlayerId, int] = MappingProxyType(
            {
                player: (entry + self._track_length - 1) % self._track_length
                for player, entry in self._entry_indices.items()
            }
        )

        self._lap_points = _readonly(self._generate_lap())
        self._home_lanes: Mapping[PlayerId, np.ndarray] = MappingProxyType(
            {p: _readonly(self._generate_home_lane(ORIENTATIONS[p])) for p in PLAYER_ORDER}
        )
        self._base_spots: Mapping[PlayerId, np.ndarray] = MappingProxyType(
            {p: _readonly(self._generate_base_spots(ORIENTATIONS[p])) for p in PLAYER_ORDER}
        )

        logger.debug(
            f"Built topology: track={self._track_length} home_lane={self._home_length} "
            f"entries={ {p.name: i for p, i in self._entry_indices.items()} }"
        )

    # --- Index model ---
    @property
    def config(self) -> Config:
        return self._config

    @property
    def players(self) -> Tuple[PlayerId, ...]:
        return PLAYER_ORDER

    @property
    def track_length(self) -> int:
        return self._track_length

    def _check_player(self, player: PlayerId) -> PlayerId:
        try:
            return PlayerId(player)
        except ValueError as e:
            raise InvalidPlayer(f"Unknown player {player!r}") from e

    def orientation(self, player: PlayerId) -> Orientation:
        return ORIENTATIONS[self._check_player(player)]

    def entry_index(self, player: PlayerId) -> int:
        """Track index where the player's tokens appear after leaving base."""
        return self._entry_indices[self._check_player(player)]

    def home_entry_index(self, player: PlayerId) -> int:
        """Track index from which the player's tokens branch into the home lane."""
        return self._home_entry_indices[self._check_player(player)]

    def home_lane_length(self, player: PlayerId) -> int:
        self._check_player(player)
        return self._home_length

    def final_home_progress(self, player: PlayerId) -> int:
        return self._track_length + self.home_lane_length(player) - 1

    def to_home_progress(self, home_index: int) -> int:
        if not 0 <= home_index < self._home_length:
            raise TopologyError(
                f"Home index {home_index} outside 0..{self._home_length - 1}"
            )
        return self._track_length + home_index

    def to_home_index(self, progress: int) -> int:
        home_index = progress - self._track_length
        if not 0 <= home_index < self._home_length:
            raise TopologyError(
                f"Progress {progress} outside home range "
                f"{self._track_length}..{self._track_length + self._home_length - 1}"
            )
        return home_index

    def is_track_progress(self, progress: int) -> bool:
        return 0 <= progress < self._track_length

    def is_home_progress(self, progress: int) -> bool:
        return self._track_length <= progress < self._track_length + self._home_length

    def distance_on_track(self, start: int, end: int) -> int:
        """Forward number of cells from ``start`` to ``end`` around the loop."""
        for index in (start, end):
            if not self.is_track_progress(index):
                raise TopologyError(f"Track index {index} outside 0..{self._track_length - 1}")
        return (end - start + self._track_length) % self._track_length

    def _compute_entry_index(self, player: PlayerId) -> int:
        # Midpoint of the player's side; with an even side length the first of
        # the two middle cells wins, matching a nearest-cell search in track order.
        side = int(ORIENTATIONS[player])
        cells_per_side = self._nodes_per_side - 1
        return side * cells_per_side + cells_per_side // 2

    # --- Geometry ---
    @property
    def lap_points(self) -> np.ndarray:
        """(L, 3) array of track cell centres, in track order."""
        return self._lap_points

    def home_lane_points(self, player: PlayerId) -> np.ndarray:
        """(K, 3) array of home-lane cell centres, from the track towards the centre."""
        return self._home_lanes[self._check_player(player)]

    def base_spots(self, player: PlayerId) -> np.ndarray:
        """(tokens_per_player, 3) array of base parking spots."""
        return self._base_spots[self._check_player(player)]

    def _generate_lap(self) -> np.ndarray:
        n = self._nodes_per_side
        half, spacing = self._half, self._spacing
        y = GameConstants.TILE_THICKNESS * 0.5
        steps = np.arange(n, dtype=np.float64) * spacing

        south = np.column_stack([-half + steps, np.full(n, y), np.full(n, -half)])
        east = np.column_stack([np.full(n, half), np.full(n, y), -half + steps])[1:]
        north = np.column_stack([half - steps, np.full(n, y), np.full(n, half)])[1:]
        west = np.column_stack([np.full(n, -half), np.full(n, y), half - steps])[1:-1]
        return np.vstack([south, east, north, west])

    def _generate_home_lane(self, orientation: Orientation) -> np.ndarray:
        k = self._home_length
        points = np.zeros((k, 3), dtype=np.float64)
        if k == 0:
            return points

        half, spacing = self._half, self._spacing
        t = (np.arange(k, dtype=np.float64) + 1.0) / k
        points[:, 1] = GameConstants.TILE_THICKNESS * 0.5 + GameConstants.STEP_HEIGHT * (
            np.arange(k) + 1
        )
        # Lerp from the first inner cell next to the track towards the centre (0, 0)
        start = {
            Orientation.NORTH: (2, half - spacing),
            Orientation.SOUTH: (2, -half + spacing),
            Orientation.EAST: (0, half - spacing),
            Orientation.WEST: (0, -half + spacing),
        }
        axis, origin = start[orientation]
        points[:, axis] = origin + (0.0 - origin) * t
        return points

    def _generate_base_spots(self, orientation: Orientation) -> np.ndarray:
        half, spacing = self._half, self._spacing
        y = GameConstants.TILE_THICKNESS * 0.5
        edge = half + GameConstants.BASE_OFFSET
        tokens = self._config.TOKENS_PER_PLAYER
        rows = (tokens + 1) // 2

        spots = []
        for column in (-1, 1):
            for row in range(rows):
                if len(spots) == tokens:
                    break
                across = column * spacing * 0.8
                depth = row * spacing * 0.9
                if orientation == Orientation.NORTH:
                    spots.append((across, y, edge - depth))
                elif orientation == Orientation.SOUTH:
                    spots.append((across, y, -edge + depth))
                elif orientation == Orientation.EAST:
                    spots.append((edge - depth, y, across))
                else:
                    spots.append((-edge + depth, y, across))
        return np.asarray(spots, dtype=np.float64).reshape(-1, 3)

    def __repr__(self) -> str:
        return (
            f"BoardTopology(track_length={self._track_length}, "
            f"home_lane_length={self._home_length})"
        )

