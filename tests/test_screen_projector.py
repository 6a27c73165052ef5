# tests/test_screen_projector.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.machine.entities.reel import Reel
from reel_engine.domain.machine.entities.reel_state import ReelState
from reel_engine.domain.machine.services.screen_projector import ScreenGrid, ScreenProjector


class TestScreenProjector(unittest.TestCase):
    """Test cases for deriving the visible grid."""

    def setUp(self):
        self.reels = [
            Reel(["lv2", "hv2", "lv3", "lv4", "hv1"]),
            Reel(["lv3", "hv2", "lv4", "hv1", "lv2"]),
            Reel(["lv4", "hv2", "hv1", "lv2", "lv3"]),
            Reel(["hv1", "lv1", "lv2", "lv3", "lv4"]),
            Reel(["lv2", "lv1", "lv3", "hv1", "lv4"]),
        ]

    def test_project_all_zero(self):
        state = ReelState([5] * 5)
        grid = ScreenProjector.project(state, self.reels, 3)

        self.assertEqual(grid.num_rows, 3)
        self.assertEqual(grid.num_cols, 5)
        self.assertEqual(grid.row(0), ["lv2", "lv3", "lv4", "hv1", "lv2"])
        self.assertEqual(grid.row(1), ["hv2", "hv2", "hv2", "lv1", "lv1"])
        self.assertEqual(grid.row(2), ["lv3", "lv4", "hv1", "lv2", "lv3"])

    def test_project_wraps_around_strip(self):
        state = ReelState([5] * 5, [4, 3, 0, 0, 0])
        grid = ScreenProjector.project(state, self.reels, 3)

        self.assertEqual(grid.column(0), ["hv1", "lv2", "hv2"])
        self.assertEqual(grid.column(1), ["hv1", "lv2", "lv3"])
        self.assertEqual(grid.symbol_at(2, 0), "hv2")

    def test_single_row_identical_strips(self):
        """One strip repeated on every reel, one visible row."""
        strip = ["A", "A", "A", "B", "B"]
        reels = [Reel(strip) for _ in range(5)]
        grid = ScreenProjector.project(ReelState([5] * 5), reels, 1)
        self.assertEqual(grid.row(0), ["A", "A", "A", "A", "A"])

        grid = ScreenProjector.project(ReelState([5] * 5, [0, 1, 2, 3, 4]), reels, 1)
        self.assertEqual(grid.row(0), ["A", "A", "A", "B", "B"])

    def test_project_is_pure(self):
        state = ReelState([5] * 5, [1, 2, 3, 4, 0])
        first = ScreenProjector.project(state, self.reels, 3)
        second = ScreenProjector.project(state, self.reels, 3)

        self.assertEqual(first, second)
        self.assertEqual(state.current_stops, [1, 2, 3, 4, 0])

    def test_reel_count_mismatch(self):
        with self.assertRaises(ValueError):
            ScreenProjector.project(ReelState([5] * 4), self.reels, 3)

    def test_grid_helpers(self):
        grid = ScreenGrid((("a", "b"), ("c", "d")))
        self.assertEqual(grid.flatten(), ["a", "b", "c", "d"])
        self.assertEqual(str(grid), "a b\nc d")
        self.assertTrue(grid.contains(1, 1))
        self.assertFalse(grid.contains(2, 0))
        self.assertFalse(grid.contains(0, -1))
        self.assertFalse(ScreenGrid(()))


if __name__ == '__main__':
    unittest.main()
