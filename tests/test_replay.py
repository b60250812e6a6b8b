import random
import unittest

from game import (
    Grid,
    InvalidToken,
    TOKENS,
    apply_move,
    apply_solution,
    inverse_token,
    iter_tokens,
    parse_moves,
    scramble_from_solution,
    SolutionPlayback,
)


def _scramble_with_solution(width, height, start_cursor, n_tokens, seed):
    """Builds a scramble from random tokens and returns (scramble snapshot, solution log, end cursor)."""
    rng = random.Random(seed)
    tokens = [rng.choice(sorted(TOKENS)) for _ in range(n_tokens)]
    g = Grid.new(width, height)
    g.select(start_cursor)
    for t in tokens:
        apply_move(g, t)
    scrambled = g.snapshot()
    solution = [inverse_token(t) for t in reversed(tokens)]
    for t in solution:
        apply_move(g, t)
    assert g.solved()
    return scrambled, ' '.join(solution), g.cursor


class TestReplay(unittest.TestCase):
    def test_given_log_with_whitespace_when_tokenizing_then_separators_skipped(self):
        self.assertEqual(list(iter_tokens(' U d\tL\n r ')), ['U', 'd', 'L', 'r'])
        self.assertEqual(parse_moves('UDLR'), ['U', 'D', 'L', 'R'])
        self.assertEqual(parse_moves('   '), [])

    def test_given_bad_character_when_parsing_then_invalid_token(self):
        with self.assertRaises(InvalidToken) as ctx:
            parse_moves('U D x L')
        self.assertEqual(ctx.exception.token, 'x')

    def test_given_known_solution_when_applying_then_scramble_rebuilt(self):
        # Scramble: identity, U from (0,0) then L from (0,2). Solution: R then D.
        g = Grid.new(3, 3)
        apply_solution(g, 'R D', (0, 0))
        self.assertEqual(g.cells, [4, 2, 3, 7, 5, 6, 8, 9, 1])
        self.assertEqual(g.cursor, (2, 2))

    def test_given_random_solutions_when_replayed_then_exact_scramble_recovered(self):
        for i, (width, height) in enumerate([(2, 2), (3, 3), (4, 3), (2, 6), (5, 5)]):
            start = (i % width, (i * 2) % height)
            scrambled, log, end = _scramble_with_solution(width, height, start, 40, seed=i)
            g = Grid.new(width, height)
            g.scramble(seed=i)
            g.select((width - 1, height - 1))
            apply_solution(g, log, end)
            self.assertEqual(g.snapshot(), scrambled)
            self.assertEqual(g.cursor, start)

    def test_given_empty_log_when_replayed_then_identity_at_end_cursor(self):
        g = Grid(width=2, height=2, cells=[4, 3, 2, 1])
        g.apply_solution('', (1, 0))
        self.assertTrue(g.solved())
        self.assertEqual(g.cursor, (1, 0))

    def test_given_invalid_log_when_replayed_then_error_and_grid_unchanged(self):
        g = Grid(width=3, height=3, cells=[2, 1, 3, 4, 5, 6, 7, 8, 9], cursor=(1, 2))
        before = g.snapshot()
        with self.assertRaises(InvalidToken):
            apply_solution(g, 'U D ? L', (0, 0))
        self.assertEqual(g.snapshot(), before)

    def test_given_solution_when_building_fresh_scramble_then_matches_apply_solution(self):
        scrambled, log, end = _scramble_with_solution(4, 4, (3, 1), 25, seed=99)
        self.assertEqual(scramble_from_solution(4, 4, log, end).snapshot(), scrambled)


class TestSolutionPlayback(unittest.TestCase):
    def test_given_playback_when_stepping_forward_to_end_then_solved(self):
        scrambled, log, end = _scramble_with_solution(3, 4, (1, 1), 30, seed=5)
        pb = SolutionPlayback(3, 4, log, end)
        self.assertEqual(pb.grid.snapshot(), scrambled)
        steps = 0
        while pb.next_move():
            steps += 1
        self.assertEqual(steps, 30)
        self.assertTrue(pb.finished)
        self.assertTrue(pb.grid.solved())
        self.assertEqual(pb.grid.cursor, end)
        self.assertFalse(pb.next_move())

    def test_given_playback_when_stepping_back_then_returns_to_scramble(self):
        scrambled, log, end = _scramble_with_solution(3, 3, (0, 0), 12, seed=11)
        pb = SolutionPlayback(3, 3, log, end)
        self.assertFalse(pb.prev_move())
        pb.seek(7)
        self.assertEqual(pb.offset, 7)
        while pb.prev_move():
            pass
        self.assertEqual(pb.offset, 0)
        self.assertEqual(pb.grid.snapshot(), scrambled)

    def test_given_seek_out_of_range_when_called_then_clamped(self):
        _, log, end = _scramble_with_solution(2, 3, (1, 2), 8, seed=3)
        pb = SolutionPlayback(2, 3, log, end)
        pb.seek(100)
        self.assertEqual(pb.offset, 8)
        self.assertTrue(pb.grid.solved())
        pb.seek(-4)
        self.assertEqual(pb.offset, 0)
        pb.seek(3)
        pb.reset()
        self.assertEqual(pb.offset, 0)

    def test_given_playback_midway_when_reset_then_back_at_scramble(self):
        scrambled, log, end = _scramble_with_solution(4, 3, (2, 1), 10, seed=5)
        pb = SolutionPlayback(4, 3, log, end)
        pb.seek(5)
        pb.reset()
        self.assertEqual(pb.offset, 0)
        self.assertEqual(pb.grid.snapshot(), scrambled)
        pb.seek(len(pb.tokens))
        self.assertTrue(pb.grid.solved())

    def test_given_bad_log_when_creating_playback_then_invalid_token(self):
        with self.assertRaises(InvalidToken):
            SolutionPlayback(3, 3, 'U * D', (0, 0))


if __name__ == '__main__':
    unittest.main(verbosity=2)
