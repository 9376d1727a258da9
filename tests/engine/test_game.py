import unittest

from tests.engine.scenario import make_config
from uckers.errors import GameOverError, InvalidMove, InvalidRoll
from uckers.game import Game
from uckers.types import PlayerId, TokenStatus


class TestGameFlow(unittest.TestCase):
    def setUp(self):
        self.game = Game([PlayerId.RED, PlayerId.BLUE], make_config())

    def test_initial_state(self):
        self.assertEqual(self.game.current_player, PlayerId.RED)
        self.assertFalse(self.game.game_over)
        self.assertEqual(self.game.topology.track_length, 36)

    def test_no_moves_passes_turn(self):
        result = self.game.play(3)
        self.assertTrue(result.skipped)
        self.assertFalse(result.extra_turn)
        self.assertEqual(self.game.current_player, PlayerId.BLUE)

    def test_six_keeps_turn(self):
        result = self.game.play(6, token_index=2)
        self.assertFalse(result.skipped)
        self.assertTrue(result.extra_turn)
        self.assertEqual(self.game.current_player, PlayerId.RED)
        token = self.game.state.token(PlayerId.RED, 2)
        self.assertEqual((token.status, token.progress), (TokenStatus.TRACK, 4))

    def test_ambiguous_choice_rejected(self):
        with self.assertRaises(InvalidMove):
            self.game.play(6)
        with self.assertRaises(InvalidMove):
            self.game.play(6, token_index=7)
        # Nothing was applied and the turn did not move
        self.assertEqual(self.game.current_player, PlayerId.RED)
        self.assertEqual(self.game.state.status_counts(PlayerId.RED)[TokenStatus.BASE], 4)

    def test_single_move_chosen_automatically(self):
        self.game.play(6, token_index=0)
        result = self.game.play(3)
        self.assertEqual(result.move.token_index, 0)
        self.assertEqual(result.move.final_progress, 7)
        self.assertEqual(self.game.current_player, PlayerId.BLUE)

    def test_capture_reported(self):
        self.game.play(6, token_index=0)  # red -> 4
        self.game.play(1)  # red -> 5, blue's turn
        self.game.play(6, token_index=0)  # blue -> 22
        self.game.play(1)  # blue -> 23, red's turn
        # Red needs 18 from 5 to 23, and every six keeps the turn
        self.game.play(6, token_index=0)
        self.game.play(6, token_index=0)
        result = self.game.play(6, token_index=0)
        self.assertEqual(result.move.final_progress, 23)
        self.assertEqual(result.captured[0].player, PlayerId.BLUE)
        self.assertEqual(len(result.captured), 1)
        self.assertEqual(self.game.state.token(PlayerId.BLUE, 0).status, TokenStatus.BASE)

    def test_invalid_roll(self):
        with self.assertRaises(InvalidRoll):
            self.game.play(0)


class TestGameWin(unittest.TestCase):
    def test_win_ends_game(self):
        cfg = make_config(NODES_PER_SIDE=2, HOME_LANE_STEPS=1, TOKENS_PER_PLAYER=1)
        game = Game([PlayerId.RED, PlayerId.BLUE], cfg)
        self.assertEqual(game.topology.track_length, 4)
        self.assertEqual(game.topology.entry_index(PlayerId.RED), 0)

        game.play(6)  # red leaves base onto 0, rolls again
        self.assertEqual(game.current_player, PlayerId.RED)
        game.play(3)  # red walks to 3, the cell before its lane
        self.assertEqual(game.current_player, PlayerId.BLUE)
        game.play(2)  # blue cannot leave base
        result = game.play(1)  # red branches into its one-cell lane

        self.assertEqual(result.winner, PlayerId.RED)
        self.assertTrue(game.game_over)
        self.assertTrue(result.move.finishes)
        self.assertEqual(game.state.winner(), PlayerId.RED)
        with self.assertRaises(GameOverError):
            game.play(4)


if __name__ == "__main__":
    unittest.main()
