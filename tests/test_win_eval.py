# tests/test_win_eval.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.machine.entities.payline import (
    Payline, DEFAULT_PAYLINES, MIDDLE_ROW, V_SHAPE, TOP_ROW
)
from reel_engine.domain.machine.entities.symbol_catalog import PayoutTable
from reel_engine.domain.machine.services.screen_projector import ScreenGrid
from reel_engine.domain.machine.services.win_evaluation import PaylineEvaluator


def make_grid(*rows):
    return ScreenGrid(tuple(tuple(row.split()) for row in rows))


class TestPaylineEvaluator(unittest.TestCase):
    """Test cases for the payline evaluator."""

    def setUp(self):
        """Set up test fixtures."""
        self.pay_table = PayoutTable({
            "hv1": {3: 50, 4: 100, 5: 200},
            "hv2": {3: 25, 4: 50, 5: 100},
            "lv1": {3: 5, 4: 10, 5: 20},
            "lv4": {3: 4, 4: 8},  # no 5-of-a-kind entry
        })
        self.evaluator = PaylineEvaluator(self.pay_table)

    def test_default_paylines(self):
        self.assertEqual([p.id for p in DEFAULT_PAYLINES], [0, 1, 2, 3, 4, 5, 6])
        self.assertEqual(len(self.evaluator.paylines), 7)
        for payline in DEFAULT_PAYLINES:
            self.assertEqual(payline.columns, [0, 1, 2, 3, 4])

        self.assertEqual(DEFAULT_PAYLINES[3].coordinates, ((0, 0), (0, 1), (1, 2), (2, 3), (2, 4)))
        self.assertEqual(DEFAULT_PAYLINES[4].coordinates, ((2, 0), (2, 1), (1, 2), (0, 3), (0, 4)))
        self.assertEqual(DEFAULT_PAYLINES[5].coordinates, ((0, 0), (1, 1), (2, 2), (1, 3), (0, 4)))
        self.assertEqual(DEFAULT_PAYLINES[6].coordinates, ((2, 0), (1, 1), (0, 2), (1, 3), (2, 4)))

    def test_middle_row_three_of_a_kind(self):
        """Middle row hv2 hv2 hv2 lv1 lv1 pays the 3-run only."""
        grid = make_grid(
            "lv2 lv3 lv4 hv1 lv2",
            "hv2 hv2 hv2 lv1 lv1",
            "lv3 lv4 hv1 lv2 lv3",
        )
        result = self.evaluator.evaluate_all(grid)

        self.assertTrue(result.is_win)
        self.assertEqual(result.payout, 25)
        self.assertEqual(result.payline_ids, (MIDDLE_ROW.id,))
        self.assertEqual(result.symbols, ("hv2",))
        self.assertEqual(result.coordinates, ((1, 0), (1, 1), (1, 2)))

        line = result.line_wins[0]
        self.assertEqual(line.run_length, 3)
        self.assertEqual(line.matched_symbol, "hv2")

    def test_no_win(self):
        grid = make_grid(
            "hv1 lv1 hv2 lv2 hv3",
            "lv3 hv4 lv4 hv1 lv1",
            "hv2 lv2 hv3 lv3 hv4",
        )
        result = self.evaluator.evaluate_all(grid)

        self.assertFalse(result.is_win)
        self.assertEqual(result.payout, 0)
        self.assertEqual(result.coordinates, ())
        self.assertEqual(result.payline_ids, ())
        self.assertEqual(result.symbols, ())

    def test_two_lines_sharing_a_cell(self):
        """Middle row and V both win; the shared cell is listed twice."""
        grid = make_grid(
            "hv1 lv2 lv3 lv4 lv2",
            "hv1 hv1 hv1 lv2 lv3",
            "lv4 lv3 hv1 lv4 lv2",
        )
        result = self.evaluator.evaluate_all(grid)

        self.assertTrue(result.is_win)
        self.assertEqual(result.payline_ids, (MIDDLE_ROW.id, V_SHAPE.id))
        self.assertEqual(result.symbols, ("hv1", "hv1"))
        self.assertEqual(result.payout, 50 + 50)
        self.assertEqual(result.coordinates,
                         ((1, 0), (1, 1), (1, 2), (0, 0), (1, 1), (2, 2)))
        self.assertEqual(result.coordinates.count((1, 1)), 2)
        self.assertEqual(result.symbols_label, "hv1 & hv1")
        self.assertEqual(result.paylines_label, "1, 5")

    def test_run_longer_than_table_pays_zero(self):
        """A 5-run with no 5-entry is still a win, paying 0."""
        grid = make_grid(
            "lv4 lv4 lv4 lv4 lv4",
            "hv1 lv2 hv3 lv1 hv2",
            "lv3 hv4 lv2 hv3 lv1",
        )
        result = self.evaluator.evaluate_all(grid)

        self.assertTrue(result.is_win)
        self.assertEqual(result.payline_ids, (TOP_ROW.id,))
        self.assertEqual(result.line_wins[0].run_length, 5)
        self.assertEqual(result.payout, 0)

    def test_symbol_missing_from_table_pays_zero(self):
        grid = make_grid(
            "zz zz zz lv1 hv1",
            "hv1 lv2 hv3 lv1 hv2",
            "lv3 hv4 lv2 hv3 lv1",
        )
        line = self.evaluator.evaluate_line(grid, TOP_ROW)
        self.assertTrue(line.is_win)
        self.assertEqual(line.matched_symbol, "zz")
        self.assertEqual(line.payout, 0)

    def test_run_is_left_anchored(self):
        """Matching symbols later in the line do not count."""
        grid = make_grid(
            "hv1 hv1 lv2 hv1 hv1",
            "lv1 hv2 hv2 hv2 hv2",
            "lv3 hv4 lv2 hv3 lv1",
        )
        top = self.evaluator.evaluate_line(grid, TOP_ROW)
        middle = self.evaluator.evaluate_line(grid, MIDDLE_ROW)

        self.assertFalse(top.is_win)
        self.assertFalse(middle.is_win)
        self.assertEqual(middle.payout, 0)

    def test_four_of_a_kind(self):
        grid = make_grid(
            "lv1 lv1 lv1 lv1 hv1",
            "hv1 lv2 hv3 lv1 hv2",
            "lv3 hv4 lv2 hv3 lv1",
        )
        line = self.evaluator.evaluate_line(grid, TOP_ROW)
        self.assertEqual(line.run_length, 4)
        self.assertEqual(line.payout, 10)
        self.assertEqual(line.coordinates, ((0, 0), (0, 1), (0, 2), (0, 3)))

    def test_evaluation_is_idempotent(self):
        grid = make_grid(
            "hv1 lv2 lv3 lv4 lv2",
            "hv1 hv1 hv1 lv2 lv3",
            "lv4 lv3 hv1 lv4 lv2",
        )
        self.assertEqual(self.evaluator.evaluate_all(grid), self.evaluator.evaluate_all(grid))

    def test_custom_layout(self):
        """Any layout works when paylines and table are passed in."""
        grid = make_grid("A A A", "B A B", "A B B")
        paylines = [
            Payline(10, ((0, 0), (0, 1), (0, 2)), "top"),
            Payline(11, ((2, 0), (1, 1), (0, 2)), "up"),
            Payline(12, ((1, 0), (1, 1), (1, 2)), "middle"),
        ]
        table = PayoutTable({"A": {3: 7}})

        result = self.evaluator.evaluate_all(grid, paylines, table)
        self.assertEqual(result.payline_ids, (10, 11))
        self.assertEqual(result.payout, 14)

    def test_empty_grid(self):
        with self.assertRaises(ValueError):
            self.evaluator.evaluate_all(ScreenGrid(()))

    def test_payline_outside_grid(self):
        grid = make_grid("A A A", "B A B")
        with self.assertRaises(ValueError):
            self.evaluator.evaluate_line(grid, Payline(0, ((2, 0), (1, 1), (0, 2))))

    def test_to_dict(self):
        grid = make_grid(
            "lv2 lv3 lv4 hv1 lv2",
            "hv2 hv2 hv2 lv1 lv1",
            "lv3 lv4 hv1 lv2 lv3",
        )
        data = self.evaluator.evaluate_all(grid).to_dict()
        self.assertEqual(data["payout"], 25)
        self.assertEqual(data["coordinates"], [[1, 0], [1, 1], [1, 2]])
        self.assertEqual(data["line_wins"][0]["payline_id"], 1)


if __name__ == '__main__':
    unittest.main()
