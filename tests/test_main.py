# tests/test_main.py
import unittest
import sys
import os
import io
import shutil
import tempfile
from contextlib import redirect_stderr, redirect_stdout

import yaml

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from reel_engine.main import main, parse_arguments
from reel_engine.infrastructure.logging.log_manager import log_manager


class TestMain(unittest.TestCase):
    """Test cases for the headless command line entry point."""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        log_manager.reset()
        shutil.rmtree(self.temp_dir)

    def run_main(self, argv):
        output = io.StringIO()
        with redirect_stdout(output):
            code = main(argv)
        return code, output.getvalue()

    def test_scripted_spins(self):
        code, output = self.run_main(["--scripted", "middle_hv2", "-n", "2"])

        self.assertEqual(code, 0)
        self.assertIn("Machine masks_5x3: 5 reels, 7 paylines, balance 1000", output)
        self.assertIn("YOU WON 25 CREDITS!", output)
        self.assertIn("Balance: 1030  Winnings: 50", output)

    def test_explicit_outcome(self):
        code, output = self.run_main(["--outcome", "5,4,0,10,0"])

        self.assertEqual(code, 0)
        self.assertIn("stops=[5, 4, 0, 10, 0]", output)
        self.assertIn("Payline(s): 0", output)

    def test_seeded_random_spins(self):
        code, first = self.run_main(["--seed", "7", "-n", "3"])
        log_manager.reset()
        _, second = self.run_main(["--seed", "7", "-n", "3"])

        self.assertEqual(code, 0)
        stops = [line for line in first.splitlines() if line.startswith("Spin ")]
        self.assertEqual(len(stops), 3)
        self.assertEqual(stops, [line for line in second.splitlines() if line.startswith("Spin ")])

    def test_missing_config(self):
        code, output = self.run_main(["-c", os.path.join(self.temp_dir, "missing.yaml")])
        self.assertEqual(code, 1)
        self.assertIn("Error loading configuration", output)

    def test_missing_machine(self):
        path = os.path.join(self.temp_dir, "game.yaml")
        with open(path, 'w') as f:
            yaml.safe_dump({"machine": "nowhere.yaml", "logging": {"console": False}}, f)

        code, _ = self.run_main(["-c", path])
        self.assertEqual(code, 1)

    def test_unknown_scripted_outcome(self):
        code, _ = self.run_main(["--scripted", "jackpot"])
        self.assertEqual(code, 1)

    def test_parse_arguments(self):
        args = parse_arguments(["--outcome", "1,2,3,4,5", "--strategy", "numpy", "-v"])
        self.assertEqual(args.outcome, [1, 2, 3, 4, 5])
        self.assertEqual(args.strategy, "numpy")
        self.assertTrue(args.verbose)
        self.assertEqual(args.spins, 1)

    def test_outcome_and_scripted_exclusive(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            parse_arguments(["--outcome", "1,2,3,4,5", "--scripted", "middle_hv2"])

    def test_bad_outcome_text(self):
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit):
            parse_arguments(["--outcome", "1,x,3"])


if __name__ == '__main__':
    unittest.main()
