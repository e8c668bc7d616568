# tests/test_main.py
import unittest
import sys
import os
import io
import tempfile
from contextlib import redirect_stdout, redirect_stderr

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sizzling_slots.main import main, parse_arguments


class TestCommandLine(unittest.TestCase):
    """Run the CLI end to end against the bundled configuration."""

    def _run(self, argv):
        out, err = io.StringIO(), io.StringIO()
        with redirect_stdout(out), redirect_stderr(err):
            code = main(argv)
        return code, out.getvalue(), err.getvalue()

    def test_parse_arguments(self):
        args = parse_arguments(["--seed", "5", "spin", "-n", "3", "--bet", "25"])
        self.assertEqual(args.command, "spin")
        self.assertEqual(args.seed, 5)
        self.assertEqual(args.spins, 3)
        self.assertEqual(args.bet, 25.0)

    def test_rules(self):
        code, out, _ = self._run(["rules"])
        self.assertEqual(code, 0)
        self.assertIn("PAYOUTS", out)
        self.assertIn("star is a scatter", out)

    def test_spin(self):
        code, out, _ = self._run(["--seed", "1", "spin", "-n", "2", "--bet", "10"])
        self.assertEqual(code, 0)
        self.assertEqual(out.count("Balance:"), 2)
        self.assertIn("Spins: 2", out)

    def test_seeded_spins_repeat(self):
        _, first, _ = self._run(["--seed", "8", "spin", "-n", "3"])
        _, second, _ = self._run(["--seed", "8", "spin", "-n", "3"])
        self.assertEqual(first, second)

    def test_rejected_bet(self):
        code, out, _ = self._run(["--seed", "1", "spin", "--bet", "7"])
        self.assertEqual(code, 1)
        self.assertIn("not allowed", out)

    def test_simulate(self):
        code, out, _ = self._run(["--seed", "3", "simulate", "-n", "200", "--batches", "2", "--no-concurrency"])
        self.assertEqual(code, 0)
        self.assertIn("RTP:", out)
        self.assertIn("Seed:           3", out)

    def test_missing_config(self):
        with tempfile.TemporaryDirectory() as tmp:
            code, _, err = self._run(["--config", os.path.join(tmp, "game.yaml"), "rules"])
        self.assertEqual(code, 1)
        self.assertIn("Error loading configuration", err)

    def test_broken_machine(self):
        with tempfile.TemporaryDirectory() as tmp:
            machine_path = os.path.join(tmp, "machine.yaml")
            with open(machine_path, 'w', encoding='utf-8') as f:
                f.write("symbols: []\npaylines: []\n")
            code, _, err = self._run(["--machine", machine_path, "rules"])
        self.assertEqual(code, 1)
        self.assertIn("Failed to load machine", err)


if __name__ == "__main__":
    unittest.main()
