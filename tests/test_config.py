import importlib
import os
import unittest
from unittest.mock import patch

from uckers.config import Config, GameConstants
from uckers.errors import ConfigError, InvalidPlayer, InvalidPlayerCount
from uckers.types import PlayerId

config_module = importlib.import_module("uckers.config")


class TestConfig(unittest.TestCase):
    def test_custom_values(self):
        cfg = Config(NODES_PER_SIDE=5, HOME_LANE_STEPS=2, TOKENS_PER_PLAYER=3)
        self.assertEqual(cfg.NODES_PER_SIDE, 5)
        self.assertEqual(cfg.HOME_LANE_STEPS, 2)
        self.assertEqual(cfg.TOKENS_PER_PLAYER, 3)
        self.assertEqual(cfg.TRACK_LENGTH, 16)

    def test_track_length_ignores_argument(self):
        cfg = Config(NODES_PER_SIDE=10, TRACK_LENGTH=7)
        self.assertEqual(cfg.TRACK_LENGTH, 36)

    def test_rejects_bad_board(self):
        with self.assertRaises(ConfigError):
            Config(NODES_PER_SIDE=1)
        with self.assertRaises(ConfigError):
            Config(HOME_LANE_STEPS=-1)
        with self.assertRaises(ConfigError):
            Config(TOKENS_PER_PLAYER=0)

    def test_rejects_bad_player_bounds(self):
        with self.assertRaises(ConfigError):
            Config(MIN_PLAYERS=1, MAX_PLAYERS=4)
        with self.assertRaises(ConfigError):
            Config(MIN_PLAYERS=3, MAX_PLAYERS=2)
        with self.assertRaises(ConfigError):
            Config(MIN_PLAYERS=2, MAX_PLAYERS=5)

    def test_config_error_is_value_error(self):
        with self.assertRaises(ValueError):
            Config(NODES_PER_SIDE=0)

    def test_constants(self):
        self.assertEqual(GameConstants.DICE_MIN, 1)
        self.assertEqual(GameConstants.DICE_MAX, 6)
        self.assertEqual(GameConstants.EXIT_BASE_ROLL, 6)
        self.assertEqual(GameConstants.BASE_PROGRESS, -1)


class TestPlayerOrder(unittest.TestCase):
    def setUp(self):
        self.cfg = Config(MIN_PLAYERS=2, MAX_PLAYERS=4)

    def test_accepts_ints(self):
        self.assertEqual(
            self.cfg.validate_player_order([0, 2]),
            (PlayerId.RED, PlayerId.GREEN),
        )

    def test_unknown_and_duplicate(self):
        with self.assertRaises(InvalidPlayer):
            self.cfg.validate_player_order([PlayerId.RED, 8])
        with self.assertRaises(InvalidPlayer):
            self.cfg.validate_player_order([PlayerId.BLUE, PlayerId.BLUE])

    def test_count_bounds(self):
        with self.assertRaises(InvalidPlayerCount):
            self.cfg.validate_player_order([PlayerId.RED])
        cfg = Config(MIN_PLAYERS=2, MAX_PLAYERS=3)
        with self.assertRaises(InvalidPlayerCount):
            cfg.validate_player_order(list(PlayerId))


class TestEnvironmentOverrides(unittest.TestCase):
    def tearDown(self):
        importlib.reload(config_module)

    def test_env_sets_defaults(self):
        with patch.dict(os.environ, {"NODES_PER_SIDE": "6", "HOME_LANE_STEPS": "3"}):
            reloaded = importlib.reload(config_module)
            cfg = reloaded.Config()
        self.assertEqual(cfg.NODES_PER_SIDE, 6)
        self.assertEqual(cfg.HOME_LANE_STEPS, 3)
        self.assertEqual(cfg.TRACK_LENGTH, 20)


if __name__ == "__main__":
    unittest.main()
