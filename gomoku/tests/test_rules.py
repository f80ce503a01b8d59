import unittest
from pydantic import ValidationError
from gomoku.core.board import Board
from gomoku.core.rules import RuleSet, rock_is_under_capture
from gomoku.core.types import Coordinates, Move, Player

class TestRuleSet(unittest.TestCase):
    def test_defaults_are_enabled(self):
        rules = RuleSet()
        self.assertTrue(rules.capture)
        self.assertTrue(rules.game_ending_capture)
        self.assertTrue(rules.no_double_three)

    def test_aliases(self):
        rules = RuleSet(capture_enabled=False, no_double_three_enabled=False)
        self.assertFalse(rules.capture)
        self.assertFalse(rules.no_double_three)
        self.assertEqual(RuleSet.model_validate({"game_ending_capture_enabled": False}),
                         RuleSet(game_ending_capture=False))

    def test_frozen_and_hashable(self):
        rules = RuleSet()
        with self.assertRaises(ValidationError):
            rules.capture = False
        self.assertEqual(hash(rules), hash(RuleSet()))

    def test_normalized(self):
        """
        Scenario: game-ending capture is dropped once captures are off.
        """
        rules = RuleSet(capture=False).normalized()
        self.assertFalse(rules.game_ending_capture)
        self.assertEqual(RuleSet().normalized(), RuleSet())

class TestUnderCapture(unittest.TestCase):
    def setUp(self):
        self.rules = RuleSet()
        self.board = Board()

    def test_pair_next_to_an_opponent(self):
        self.board.set_move(self.rules, Move.at(Player.BLACK, 9, 9))
        self.board.set_move(self.rules, Move.at(Player.BLACK, 10, 9))
        self.assertFalse(rock_is_under_capture(self.board, Coordinates(9, 9), Player.BLACK))
        self.board.set_move(self.rules, Move.at(Player.WHITE, 11, 9))
        self.assertTrue(rock_is_under_capture(self.board, Coordinates(9, 9), Player.BLACK))
        self.assertTrue(rock_is_under_capture(self.board, Coordinates(10, 9), Player.BLACK))

    def test_closed_pair_is_safe(self):
        self.board.set_move(self.rules, Move.at(Player.BLACK, 9, 9))
        self.board.set_move(self.rules, Move.at(Player.BLACK, 10, 9))
        self.board.set_move(self.rules, Move.at(Player.BLACK, 8, 9))
        self.board.set_move(self.rules, Move.at(Player.WHITE, 11, 9))
        self.assertFalse(rock_is_under_capture(self.board, Coordinates(10, 9), Player.BLACK))

    def test_pair_against_the_border_is_safe(self):
        self.board.set_move(self.rules, Move.at(Player.BLACK, 0, 9))
        self.board.set_move(self.rules, Move.at(Player.BLACK, 1, 9))
        self.board.set_move(self.rules, Move.at(Player.WHITE, 2, 9))
        self.assertFalse(rock_is_under_capture(self.board, Coordinates(0, 9), Player.BLACK))
        self.assertFalse(rock_is_under_capture(self.board, Coordinates(1, 9), Player.BLACK))

if __name__ == '__main__':
    unittest.main()
