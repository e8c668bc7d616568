# tests/test_win_eval.py
import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from sizzling_slots.domain.machine.entities.grid import Grid
from sizzling_slots.domain.machine.entities.symbol import Symbol, SymbolCatalog
from sizzling_slots.domain.machine.errors import InvalidInput
from sizzling_slots.domain.machine.services.win_evaluation import WinEvaluator, evaluate
from sizzling_slots.domain.session.entities.spin_result import SCATTER_LINE

from slot_fixtures import build_catalog, build_paylines, grid_ids, PAYLINE_ROWS

NO_WIN_GRID = ("LPSSL", "PGLPS", "GLPGP")


class TestWinEvaluator(unittest.TestCase):
    """Test cases for the WinEvaluator service."""

    def setUp(self):
        """Set up test fixtures."""
        self.catalog = build_catalog()
        self.paylines = build_paylines()
        self.evaluator = WinEvaluator(self.catalog, 3, 5)

    def _evaluate(self, rows, bet):
        grid = Grid.from_ids(self.catalog, grid_ids(*rows), 3, 5)
        return self.evaluator.evaluate(grid, self.paylines, bet)

    def test_no_win(self):
        result = self._evaluate(NO_WIN_GRID, 10)
        self.assertEqual(result.total_payout, 0)
        self.assertEqual(result.winning_lines, ())
        self.assertFalse(result.is_win)

    def test_single_symbol_five_of_a_kind(self):
        catalog = SymbolCatalog([Symbol("A", 1, (2, 4, 8))])
        grid = Grid.from_ids(catalog, ["A"] * 15, 3, 5)
        result = WinEvaluator(catalog, 3, 5).evaluate(grid, [[1, 1, 1, 1, 1]], 10)

        self.assertEqual(result.total_payout, 80)
        self.assertEqual(len(result.winning_lines), 1)
        line = result.winning_lines[0]
        self.assertEqual(line.line_index, 0)
        self.assertEqual(line.symbol, "A")
        self.assertEqual(line.match_count, 5)
        self.assertEqual(line.multiplier, 8)
        self.assertEqual(line.positions, (5, 6, 7, 8, 9))

    def test_four_scatters_across_rows(self):
        result = self._evaluate(("TLPSG", "LTGPS", "PGTLT"), 5)

        self.assertEqual(result.total_payout, 50)
        self.assertEqual(len(result.winning_lines), 1)
        scatter = result.winning_lines[0]
        self.assertTrue(scatter.is_scatter)
        self.assertEqual(scatter.line_index, SCATTER_LINE)
        self.assertEqual(scatter.symbol, "star")
        self.assertEqual(scatter.match_count, 4)
        self.assertEqual(scatter.positions, (0, 6, 12, 14))
        self.assertIs(result.scatter_line, scatter)
        self.assertEqual(result.line_wins, [])

    def test_scatter_pays_once_per_spin(self):
        # Three stars on the middle row lie on three paylines but pay once
        result = self._evaluate(("LPGSL", "TTTPG", "GLPGP"), 2)

        self.assertEqual(result.total_payout, 10)
        self.assertEqual(len(result.winning_lines), 1)
        self.assertEqual(result.winning_lines[0].match_count, 3)

    def test_scatter_in_first_column_starts_no_run(self):
        result = self._evaluate(("LPGSL", "TTTPG", "GLPGP"), 2)
        self.assertEqual(result.line_wins, [])

    def test_more_than_five_scatters_pay_top_tier(self):
        result = self._evaluate(("TLTPT", "LTGTS", "TGPLG"), 1)

        self.assertEqual(result.total_payout, 25)
        scatter = result.scatter_line
        self.assertEqual(scatter.match_count, 6)
        self.assertEqual(scatter.multiplier, 25)

    def test_partial_match_pays_partial_only(self):
        result = self._evaluate(("LPSSL", "CCLPS", "GLPGP"), 10)

        self.assertEqual(result.total_payout, 10)
        self.assertEqual(len(result.winning_lines), 1)
        line = result.winning_lines[0]
        self.assertEqual(line.symbol, "cherry")
        self.assertEqual(line.match_count, 2)
        self.assertEqual(line.multiplier, 1)
        self.assertEqual(line.positions, (5, 6))

    def test_two_of_a_kind_without_partial_flag_pays_nothing(self):
        result = self._evaluate(("LPSSL", "LLPPS", "GLPGP"), 10)
        self.assertEqual(result.total_payout, 0)

    def test_three_cherries_pay_table_only(self):
        result = self._evaluate(("LPSSL", "CCCPS", "GLPGP"), 10)

        self.assertEqual(result.total_payout, 20)
        self.assertEqual(len(result.winning_lines), 1)
        self.assertEqual(result.winning_lines[0].match_count, 3)
        self.assertEqual(result.winning_lines[0].multiplier, 2)

    def test_four_of_a_kind(self):
        result = self._evaluate(("SSSSL", "PGLPS", "GLPGP"), 1)

        self.assertEqual(result.total_payout, 20)
        line = result.winning_lines[0]
        self.assertEqual(line.line_index, 1)
        self.assertEqual(line.symbol, "seven")
        self.assertEqual(line.match_count, 4)

    def test_run_must_start_at_first_column(self):
        result = self._evaluate(("LPSSL", "LCCCC", "GLPGP"), 10)
        self.assertEqual(result.total_payout, 0)

    def test_every_line_wins(self):
        result = self._evaluate(("CCCCC", "CCCCC", "CCCCC"), 5)

        self.assertEqual(result.total_payout, 200)
        self.assertEqual([line.line_index for line in result.winning_lines], [0, 1, 2, 3, 4])
        for line in result.winning_lines:
            self.assertEqual(line.payout, 40)

    def test_line_wins_precede_scatter(self):
        result = self._evaluate(("CCCTL", "PGLPS", "TLPGT"), 10)

        self.assertEqual(result.total_payout, 70)
        self.assertEqual([line.line_index for line in result.winning_lines], [1, SCATTER_LINE])
        self.assertEqual(result.total_payout, sum(line.payout for line in result.winning_lines))

    def test_fractional_bet(self):
        result = self._evaluate(("CCCCC", "CCCCC", "CCCCC"), 0.5)
        self.assertAlmostEqual(result.total_payout, 20.0)

    def test_flat_symbol_ids(self):
        result = self.evaluator.evaluate(grid_ids("LPSSL", "CCLPS", "GLPGP"), PAYLINE_ROWS, 10)
        self.assertEqual(result.total_payout, 10)
        self.assertIsInstance(result.grid, Grid)

    def test_evaluation_is_pure(self):
        grid = Grid.from_ids(self.catalog, grid_ids("CCCTL", "PGLPS", "TLPGT"), 3, 5)
        first = self.evaluator.evaluate(grid, self.paylines, 10)
        second = self.evaluator.evaluate(grid, self.paylines, 10)
        self.assertEqual(first, second)
        self.assertEqual(grid.symbol_ids(), grid_ids("CCCTL", "PGLPS", "TLPGT"))

    def test_grid_of_wrong_size(self):
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(grid_ids("LPSSL", "PGLPS", "GLPG"), self.paylines, 10)

    def test_grid_with_wrong_dimensions(self):
        grid = Grid.from_ids(self.catalog, grid_ids(*NO_WIN_GRID), 5, 3)
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(grid, self.paylines, 10)

    def test_unknown_symbol(self):
        cells = grid_ids(*NO_WIN_GRID)
        cells[3] = "banana"
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(cells, self.paylines, 10)

    def test_foreign_symbol_in_grid(self):
        stranger = Symbol("x", 1, (1, 2, 3))
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(Grid([stranger] * 15, 3, 5), self.paylines, 10)

    def test_non_positive_bet(self):
        for bet in (0, -5, True, "10", None):
            with self.assertRaises(InvalidInput):
                self._evaluate(NO_WIN_GRID, bet)

    def test_malformed_payline(self):
        grid = grid_ids(*NO_WIN_GRID)
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(grid, [[1, 1, 1, 1]], 10)
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(grid, [[1, 1, 3, 1, 1]], 10)

    def test_boolean_payline_row(self):
        grid = grid_ids(*NO_WIN_GRID)
        with self.assertRaises(InvalidInput):
            self.evaluator.evaluate(grid, [[1, True, 1, 1, 1]], 10)

    def test_catalog_without_scatter(self):
        catalog = SymbolCatalog([Symbol("a", 1, (1, 2, 3)), Symbol("b", 1, (1, 2, 3))])
        grid = Grid.from_ids(catalog, ["a", "b", "a", "b", "a"] * 3, 3, 5)
        result = WinEvaluator(catalog, 3, 5).evaluate(grid, PAYLINE_ROWS, 1)
        self.assertIsNone(result.scatter_line)
        self.assertEqual(result.total_payout, 0)


class TestEvaluateFunction(unittest.TestCase):
    """Test cases for the functional evaluate() wrapper."""

    def setUp(self):
        self.catalog = build_catalog()

    def test_dimensions_from_payline_table(self):
        result = evaluate(self.catalog, grid_ids("SSSSL", "PGLPS", "GLPGP"), build_paylines(), 2)
        self.assertEqual(result.total_payout, 40)

    def test_dimensions_from_grid(self):
        grid = Grid.from_ids(self.catalog, grid_ids("SSSSL", "PGLPS", "GLPGP"), 3, 5)
        result = evaluate(self.catalog, grid, PAYLINE_ROWS, 2)
        self.assertEqual(result.total_payout, 40)

    def test_flat_grid_needs_dimensions(self):
        with self.assertRaises(InvalidInput):
            evaluate(self.catalog, grid_ids(*NO_WIN_GRID), PAYLINE_ROWS, 2)
        result = evaluate(self.catalog, grid_ids(*NO_WIN_GRID), PAYLINE_ROWS, 2, rows=3, columns=5)
        self.assertEqual(result.total_payout, 0)

    def test_to_dict(self):
        result = evaluate(self.catalog, grid_ids("LPSSL", "CCLPS", "GLPGP"), build_paylines(), 10)
        data = result.to_dict()
        self.assertEqual(data["total_payout"], 10)
        self.assertEqual(data["rows"], 3)
        self.assertEqual(data["winning_lines"][0]["positions"], [5, 6])


if __name__ == "__main__":
    unittest.main()
