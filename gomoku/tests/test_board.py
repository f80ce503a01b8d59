import unittest
from gomoku.core import api
from gomoku.core.board import Board
from gomoku.core.constants import WIN_SCORE
from gomoku.core.errors import IllegalMove, IllegalReason, InternalInvariant, Occupied, OutOfBounds
from gomoku.core.rules import RuleSet
from gomoku.core.types import Coordinates, Move, Player, Rock

BLACK, WHITE = Player.BLACK, Player.WHITE

def place(board, rules, player, *points):
    for x, y in points:
        board.set_move(rules, Move.at(player, x, y))

class TestBoard(unittest.TestCase):
    def setUp(self):
        self.rules = RuleSet()
        self.board = Board()

    def test_empty_board_has_only_the_center(self):
        """
        Scenario: nothing played yet, the only candidate is the center.
        """
        moves = self.board.legal_moves(self.rules, BLACK)
        self.assertEqual(len(moves), 1)
        self.assertEqual(moves[0].coordinates, Coordinates(9, 9))
        self.assertEqual(moves[0].player, BLACK)

    def test_open_intersections_one_rock(self):
        """
        Scenario: a single rock at (9,9) opens exactly its 8 neighbors.
        """
        place(self.board, self.rules, BLACK, (9, 9))
        expected = sorted(Coordinates(9 + dx, 9 + dy).index
                          for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0))
        self.assertEqual(self.board.open_intersections(), expected)
        self.assertEqual(len(self.board.legal_moves(self.rules, WHITE)), 8)

    def test_open_intersections_in_a_corner(self):
        place(self.board, self.rules, BLACK, (0, 0))
        self.assertEqual(self.board.open_intersections(),
                         [Coordinates(1, 0).index, Coordinates(0, 1).index, Coordinates(1, 1).index])

    def test_get(self):
        place(self.board, self.rules, WHITE, (3, 4))
        self.assertEqual(self.board.get(3, 4), Rock.WHITE)
        self.assertEqual(self.board.get(4, 3), Rock.EMPTY)
        with self.assertRaises(OutOfBounds):
            self.board.get(19, 0)
        with self.assertRaises(OutOfBounds):
            self.board.get(0, -1)

    def test_set_move_errors(self):
        with self.assertRaises(OutOfBounds) as ctx:
            self.board.set_move(self.rules, Move.at(BLACK, 19, 3))
        self.assertEqual(ctx.exception.coordinates, Coordinates(19, 3))
        place(self.board, self.rules, BLACK, (5, 5))
        with self.assertRaises(Occupied):
            self.board.set_move(self.rules, Move.at(WHITE, 5, 5))
        self.assertFalse(self.board.is_move_legal(self.rules, Move.at(WHITE, 5, 5)))
        self.assertFalse(self.board.is_move_legal(self.rules, Move.at(WHITE, -1, 5)))
        self.assertEqual(len(self.board.history), 1)

    def test_capture(self):
        """
        Scenario: Black closes X O O X horizontally and removes the pair.
        """
        place(self.board, self.rules, BLACK, (4, 5))
        place(self.board, self.rules, WHITE, (5, 5), (6, 5))
        captures = self.board.set_move(self.rules, Move.at(BLACK, 7, 5))

        self.assertEqual(sorted(captures), [Coordinates(5, 5), Coordinates(6, 5)])
        self.assertEqual(self.board.get(5, 5), Rock.EMPTY)
        self.assertEqual(self.board.get(6, 5), Rock.EMPTY)
        self.assertEqual(self.board.black.captures, 1)
        self.assertEqual(self.board.white.rocks, set())
        self.assertEqual(self.board.all_rocks, {Coordinates(4, 5).index, Coordinates(7, 5).index})

    def test_double_capture(self):
        """
        Scenario: one rock closes two pairs on two axes at once.
        """
        place(self.board, self.rules, BLACK, (4, 5), (7, 8))
        place(self.board, self.rules, WHITE, (5, 5), (6, 5), (7, 6), (7, 7))
        captures = self.board.set_move(self.rules, Move.at(BLACK, 7, 5))
        self.assertEqual(len(captures), 4)
        self.assertEqual(self.board.black.captures, 2)

    def test_no_capture_when_disabled(self):
        rules = RuleSet(capture=False)
        place(self.board, rules, BLACK, (4, 5))
        place(self.board, rules, WHITE, (5, 5), (6, 5))
        self.assertEqual(self.board.set_move(rules, Move.at(BLACK, 7, 5)), [])
        self.assertEqual(self.board.get(5, 5), Rock.WHITE)

    def test_no_capture_through_the_border(self):
        place(self.board, self.rules, WHITE, (0, 3), (1, 3))
        self.assertEqual(self.board.set_move(self.rules, Move.at(BLACK, 2, 3)), [])
        self.assertEqual(self.board.white.captures, 0)

    def test_undo_restores_everything(self):
        """
        Scenario: apply a capturing move then undo it, the board is
        back to the exact previous state.
        """
        place(self.board, self.rules, BLACK, (4, 5))
        place(self.board, self.rules, WHITE, (5, 5), (6, 5))
        snapshot = str(self.board)
        black_rocks, white_rocks = set(self.board.black.rocks), set(self.board.white.rocks)
        key = self.board.key()

        self.board.set_move(self.rules, Move.at(BLACK, 7, 5))
        move = self.board.undo_move()

        self.assertEqual(move.coordinates, Coordinates(7, 5))
        self.assertEqual(str(self.board), snapshot)
        self.assertEqual(self.board.black.rocks, black_rocks)
        self.assertEqual(self.board.white.rocks, white_rocks)
        self.assertEqual(self.board.black.captures, 0)
        self.assertEqual(self.board.key(), key)
        self.assertEqual(len(self.board.history), 3)

    def test_undo_on_empty_history(self):
        with self.assertRaises(InternalInvariant):
            self.board.undo_move()

    def test_play_returns_a_new_board(self):
        place(self.board, self.rules, BLACK, (9, 9))
        after = self.board.play(self.rules, Move.at(WHITE, 10, 10))
        self.assertEqual(self.board.get(10, 10), Rock.EMPTY)
        self.assertEqual(after.get(10, 10), Rock.WHITE)
        self.assertEqual(len(self.board.history), 1)
        self.assertEqual(len(after.history), 2)

    def test_zobrist_key_ignores_move_order(self):
        other = Board()
        place(self.board, self.rules, BLACK, (9, 9), (10, 10))
        place(self.board, self.rules, WHITE, (9, 10))
        place(other, self.rules, WHITE, (9, 10))
        place(other, self.rules, BLACK, (10, 10), (9, 9))
        self.assertEqual(self.board.key(), other.key())
        self.assertNotEqual(self.board.key(), Board().key())

    def test_serialization(self):
        place(self.board, self.rules, BLACK, (0, 0), (18, 18))
        place(self.board, self.rules, WHITE, (3, 1))
        text = str(self.board)
        lines = text.splitlines()
        self.assertEqual(len(lines), 19)
        self.assertTrue(all(len(line.split()) == 19 for line in lines))
        self.assertEqual(lines[0].split()[0], "1")
        self.assertEqual(lines[1].split()[3], "2")

        parsed = Board.from_string(text)
        self.assertEqual(parsed.cells, self.board.cells)
        self.assertEqual(parsed.key(), self.board.key())
        with self.assertRaises(ValueError):
            Board.from_string("0 0 0")

    def test_rock_sets_stay_disjoint(self):
        place(self.board, self.rules, BLACK, (4, 5), (7, 8))
        place(self.board, self.rules, WHITE, (5, 5), (6, 5), (7, 6), (7, 7))
        place(self.board, self.rules, BLACK, (7, 5))
        self.assertFalse(self.board.black.rocks & self.board.white.rocks)
        self.assertEqual(self.board.black.rocks | self.board.white.rocks, self.board.all_rocks)
        occupied = {i for i, rock in enumerate(self.board.cells) if rock != Rock.EMPTY}
        self.assertEqual(occupied, self.board.all_rocks)

class TestTerminal(unittest.TestCase):
    def setUp(self):
        self.rules = RuleSet()
        self.board = Board()
        place(self.board, self.rules, BLACK, *[(x, 0) for x in range(5)])

    def test_five_in_a_row_wins(self):
        """
        Scenario: five Black rocks on the top row with default rules.
        """
        self.assertTrue(self.board.has_five_in_a_row(BLACK))
        self.assertTrue(self.board.has_uncaptured_five_in_a_row(self.rules, BLACK))
        self.assertTrue(self.board.is_winning(self.rules, BLACK))
        self.assertFalse(self.board.is_winning(self.rules, WHITE))

    def test_pair_against_the_border_is_safe(self):
        """
        Scenario: a sixth Black rock at (1,1) makes the pair (1,0)-(1,1),
        which only the border closes. No move can capture it, so the five
        wins. The extra White rock at (1,0) is refused since the cell is taken.
        """
        place(self.board, self.rules, BLACK, (1, 1))
        with self.assertRaises(Occupied):
            self.board.set_move(self.rules, Move.at(WHITE, 1, 0))

        self.assertTrue(self.board.has_five_in_a_row(BLACK))
        self.assertTrue(self.board.has_uncaptured_five_in_a_row(self.rules, BLACK))
        self.assertTrue(self.board.is_winning(self.rules, BLACK))

    def test_capturable_five_does_not_win(self):
        """
        Scenario: the same shape away from the border. Black at (1,6) and
        White at (1,7) leave (1,5)-(1,6) open to a capture at (1,4).
        """
        board = Board()
        place(board, self.rules, BLACK, *[(x, 5) for x in range(5)], (1, 6))
        place(board, self.rules, WHITE, (1, 7))

        self.assertTrue(board.has_five_in_a_row(BLACK))
        self.assertFalse(board.has_uncaptured_five_in_a_row(self.rules, BLACK))
        self.assertFalse(board.is_winning(self.rules, BLACK))

        # Without the game-ending capture rule the five stands
        rules = RuleSet(game_ending_capture=False)
        self.assertTrue(board.has_uncaptured_five_in_a_row(rules, BLACK))
        self.assertTrue(board.is_winning(rules, BLACK))

    def test_capturable_five_wins_without_captures(self):
        """
        Scenario: with captures disabled nothing can break the five, even
        when the game-ending capture flag is left on.
        """
        board = Board()
        place(board, self.rules, BLACK, *[(x, 9) for x in range(5, 10)], (7, 10))
        place(board, self.rules, WHITE, (7, 11))
        rules = RuleSet(capture=False)

        self.assertTrue(rules.game_ending_capture)
        self.assertFalse(rules.fives_can_be_broken)
        self.assertTrue(board.has_uncaptured_five_in_a_row(rules, BLACK))
        self.assertTrue(api.is_winning(board, rules, BLACK))
        self.assertGreater(api.score(board, BLACK, rules), WIN_SCORE // 2)
        self.assertFalse(api.is_winning(board, RuleSet(), BLACK))

    def test_four_is_not_a_win(self):
        board = Board()
        place(board, self.rules, BLACK, *[(x, 9) for x in range(5, 9)])
        self.assertFalse(board.has_five_in_a_row(BLACK))
        self.assertFalse(board.is_winning(self.rules, BLACK))

    def test_five_captures_win(self):
        board = Board()
        board.white.captures = 5
        self.assertTrue(board.is_winning(self.rules, WHITE))
        self.assertFalse(board.is_winning(self.rules, BLACK))

    def test_player_can_play(self):
        self.assertTrue(self.board.player_can_play(self.rules, WHITE))
        self.assertTrue(Board().player_can_play(self.rules, BLACK))

class TestLegality(unittest.TestCase):
    def setUp(self):
        self.rules = RuleSet()
        self.board = Board()

    def test_free_three_direct(self):
        """
        Scenario: Black at (1,0),(2,0), then (3,0) makes _ X X X _.
        """
        place(self.board, self.rules, BLACK, (1, 0), (2, 0))
        move = Move.at(BLACK, 3, 0)
        self.assertEqual(self.board.move_create_free_three_direct_pattern(move), 1)
        self.assertEqual(self.board.move_create_free_three_secondary_pattern(move), 0)
        self.assertTrue(self.board.is_move_legal(self.rules, move))

    def test_free_three_secondary(self):
        """
        Scenario: Black at (1,0),(2,0), then (4,0) makes _ X X _ X _.
        """
        place(self.board, self.rules, BLACK, (1, 0), (2, 0))
        move = Move.at(BLACK, 4, 0)
        self.assertEqual(self.board.move_create_free_three_direct_pattern(move), 0)
        self.assertEqual(self.board.move_create_free_three_secondary_pattern(move), 1)

    def test_free_three_center(self):
        place(self.board, self.rules, BLACK, (8, 9), (10, 9))
        move = Move.at(BLACK, 9, 9)
        self.assertEqual(self.board.move_create_free_three_direct_pattern(move), 1)
        self.assertEqual(self.board.move_create_free_three_secondary_pattern(move), 0)

    def test_double_three_is_refused(self):
        """
        Scenario: (9,9) would open a horizontal and a vertical three at once.
        """
        place(self.board, self.rules, BLACK, (10, 9), (11, 9), (9, 10), (9, 11))
        move = Move.at(BLACK, 9, 9)
        self.assertEqual(self.board.illegal_reason(self.rules, move), IllegalReason.DOUBLE_THREE)
        self.assertFalse(self.board.is_move_legal(self.rules, move))
        self.assertNotIn(move, self.board.legal_moves(self.rules, BLACK))
        with self.assertRaises(IllegalMove) as ctx:
            self.board.set_move(self.rules, move)
        self.assertEqual(ctx.exception.reason, IllegalReason.DOUBLE_THREE)
        self.assertEqual(self.board.get(9, 9), Rock.EMPTY)

        free = RuleSet(no_double_three=False)
        self.assertTrue(self.board.is_move_legal(free, move))

    def test_double_three_allowed_when_capturing(self):
        place(self.board, self.rules, BLACK, (10, 9), (11, 9), (9, 10), (9, 11), (6, 6))
        place(self.board, self.rules, WHITE, (8, 8), (7, 7))
        move = Move.at(BLACK, 9, 9)
        self.assertIsNone(self.board.illegal_reason(self.rules, move))
        self.assertEqual(len(self.board.set_move(self.rules, move)), 2)

    def test_recursive_capture_is_refused(self):
        """
        Scenario: White may not complete a pair between two Black rocks.
        """
        place(self.board, self.rules, BLACK, (4, 5), (7, 5))
        place(self.board, self.rules, WHITE, (5, 5))
        move = Move.at(WHITE, 6, 5)
        self.assertEqual(self.board.illegal_reason(self.rules, move), IllegalReason.RECURSIVE_CAPTURE)
        with self.assertRaises(IllegalMove) as ctx:
            self.board.set_move(self.rules, move)
        self.assertEqual(ctx.exception.reason, IllegalReason.RECURSIVE_CAPTURE)
        self.assertTrue(self.board.is_move_legal(RuleSet(capture=False), move))

    def test_recursive_capture_ignores_the_border(self):
        place(self.board, self.rules, WHITE, (1, 0))
        place(self.board, self.rules, BLACK, (2, 0))
        self.assertTrue(self.board.is_move_legal(self.rules, Move.at(WHITE, 0, 0)))

    def test_legality_check_leaves_board_untouched(self):
        place(self.board, self.rules, BLACK, (10, 9), (11, 9), (9, 10), (9, 11))
        snapshot, key = str(self.board), self.board.key()
        self.board.legal_moves(self.rules, BLACK)
        self.board.legal_moves(self.rules, WHITE)
        self.assertEqual(str(self.board), snapshot)
        self.assertEqual(self.board.key(), key)
        self.assertEqual(len(self.board.history), 4)

if __name__ == '__main__':
    unittest.main()
