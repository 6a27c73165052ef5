# tests/test_symbol_catalog.py
import unittest
import sys
import os

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.domain.machine.entities.symbol_catalog import (
    PayoutTable, SymbolCatalog, HIGH_TIER, LOW_TIER
)


class TestPayoutTable(unittest.TestCase):
    """Test cases for payout lookups."""

    def test_from_list_config(self):
        """payouts[i] pays a run of 3 + i."""
        table = PayoutTable.from_config([{"symbol": "hv2", "payouts": [25, 50, 100]}])

        self.assertEqual(table.lookup("hv2", 3), 25)
        self.assertEqual(table.lookup("hv2", 4), 50)
        self.assertEqual(table.lookup("hv2", 5), 100)
        self.assertEqual(table.max_run_length("hv2"), 5)

    def test_from_mapping_config(self):
        table = PayoutTable.from_config({"lv1": {3: 5, 4: 10}})
        self.assertEqual(table.lookup("lv1", 3), 5)
        self.assertEqual(table.lookup("lv1", 4), 10)

    def test_missing_entries_pay_zero(self):
        table = PayoutTable({"lv1": {3: 5, 4: 10}})

        self.assertEqual(table.lookup("lv1", 5), 0)
        self.assertEqual(table.lookup("hv1", 3), 0)
        self.assertFalse(table.has_entry("lv1", 5))
        self.assertTrue(table.has_entry("lv1", 4))
        self.assertEqual(table.max_run_length("hv1"), 0)

    def test_invalid_entries(self):
        with self.assertRaises(ValueError):
            PayoutTable({"lv1": {2: 5}})
        with self.assertRaises(ValueError):
            PayoutTable({"lv1": {3: -1}})


class TestSymbolCatalog(unittest.TestCase):
    """Test cases for the symbol catalog."""

    def setUp(self):
        self.catalog = SymbolCatalog.from_config(
            {"high": ["hv1", "hv2"], "low": ["lv1"]},
            [
                {"symbol": "hv1", "payouts": [50, 100, 200]},
                {"symbol": "hv2", "payouts": [25, 50, 100]},
                {"symbol": "lv1", "payouts": [5, 10, 20]},
                {"symbol": "lv9", "payouts": [1, 2, 3]},
            ],
        )

    def test_tiers(self):
        self.assertEqual(self.catalog.tier_of("hv1"), HIGH_TIER)
        self.assertEqual(self.catalog.tier_of("lv1"), LOW_TIER)
        # Only present in the pay table
        self.assertEqual(self.catalog.tier_of("lv9"), LOW_TIER)
        self.assertIsNone(self.catalog.tier_of("zz"))
        self.assertEqual(len(self.catalog), 4)
        self.assertIn("hv2", self.catalog)

    def test_missing_payouts(self):
        strips = [["hv1", "lv1", "hv2"], ["hv1", "wild", "lv2"]]
        self.assertEqual(self.catalog.missing_payouts(strips), ["lv2", "wild"])
        self.assertEqual(self.catalog.missing_payouts([["hv1", "hv2"]]), [])


if __name__ == '__main__':
    unittest.main()
