# sizzling_slots/domain/machine/services/win_evaluation.py
import logging
import numbers
from typing import List, Optional, Sequence, Tuple, Union

from ..entities.grid import Grid
from ..entities.payline import Payline, PaylineTable
from ..entities.symbol import Symbol, SymbolCatalog, MIN_MATCH, MAX_MATCH
from ..errors import InvalidInput
from sizzling_slots.domain.session.entities.spin_result import SpinResult, WinningLine, SCATTER_LINE


PaylinesArg = Union[PaylineTable, Sequence[Union[Payline, Sequence[int]]]]


class WinEvaluator:
    """
    Service for evaluating payline and scatter wins on a grid.
    Pure: the result depends only on (grid, paylines, bet, catalog).
    """

    def __init__(self, catalog: SymbolCatalog, rows: int, columns: int):
        self._catalog = catalog
        self._rows = rows
        self._columns = columns
        self._scatter_symbol = catalog.scatter_symbol

        self.logger = logging.getLogger("domain.machine.win_evaluator")

    def _is_scatter(self, symbol: Symbol) -> bool:
        return self._scatter_symbol is not None and symbol == self._scatter_symbol

    def _coerce_grid(self, grid) -> Grid:
        if isinstance(grid, Grid):
            if (grid.rows, grid.columns) != (self._rows, self._columns):
                self._invalid(
                    f"Grid is {grid.rows}x{grid.columns}, evaluator expects {self._rows}x{self._columns}"
                )
            for index, cell in enumerate(grid):
                if cell not in self._catalog or self._catalog.get(cell) != cell:
                    self._invalid(f"Symbol {cell!r} at grid position {index} is not in the catalog")
            return grid

        if grid is None or len(grid) != self._rows * self._columns:
            size = None if grid is None else len(grid)
            self._invalid(f"Invalid grid size {size}, expected {self._rows * self._columns}")
        return Grid.from_ids(self._catalog, grid, self._rows, self._columns)

    def _coerce_paylines(self, paylines: PaylinesArg) -> List[Tuple[int, ...]]:
        if paylines is None:
            self._invalid("Paylines are required")

        lines = []
        for i, line in enumerate(paylines):
            rows = tuple(line.rows) if isinstance(line, Payline) else tuple(line)
            if len(rows) != self._columns:
                self._invalid(f"Payline {i} has {len(rows)} entries, expected {self._columns}")
            for row in rows:
                if not isinstance(row, int) or isinstance(row, bool) or row < 0 or row >= self._rows:
                    self._invalid(f"Payline {i} row index {row!r} outside [0, {self._rows})")
            lines.append(rows)
        return lines

    def _invalid(self, message: str):
        self.logger.error(message)
        raise InvalidInput(message)

    def evaluate(self, grid, paylines: PaylinesArg, bet_amount: float) -> SpinResult:
        """
        Score a grid against a payline table.

        Args:
            grid: Grid, or flat row-major sequence of symbols / symbol ids
            paylines: PaylineTable, Paylines, or row-index sequences
            bet_amount: Positive bet; each win pays multiplier * bet_amount

        Returns:
            SpinResult with payline wins in table order followed by the scatter win

        Raises:
            InvalidInput: On a non-positive bet, wrong grid size or malformed payline
        """
        if isinstance(bet_amount, bool) or not isinstance(bet_amount, numbers.Real) or bet_amount <= 0:
            self._invalid(f"Invalid bet amount: {bet_amount!r}")

        checked_grid = self._coerce_grid(grid)
        lines = self._coerce_paylines(paylines)

        winning_lines = []
        for line_idx, rows in enumerate(lines):
            line_win = self._evaluate_line(checked_grid, rows, line_idx, bet_amount)
            if line_win is not None:
                winning_lines.append(line_win)

        # Scatter pays once per spin, independent of paylines
        scatter_win = self._evaluate_scatter(checked_grid, bet_amount)
        if scatter_win is not None:
            winning_lines.append(scatter_win)

        total_payout = sum(line.payout for line in winning_lines)

        self.logger.debug(
            f"Evaluated grid {checked_grid.symbol_ids()} bet={bet_amount}: "
            f"{len(winning_lines)} wins, total={total_payout}"
        )

        return SpinResult(
            grid=checked_grid,
            bet=bet_amount,
            winning_lines=tuple(winning_lines),
            total_payout=total_payout,
        )

    def _evaluate_scatter(self, grid: Grid, bet: float) -> Optional[WinningLine]:
        if self._scatter_symbol is None:
            return None

        positions = grid.positions_of(self._scatter_symbol)
        scatter_count = len(positions)
        if scatter_count < MIN_MATCH:
            return None

        # More than five scatters still pay the top tier
        multiplier = self._catalog.payout_for(self._scatter_symbol, min(scatter_count, MAX_MATCH))
        return WinningLine(
            line_index=SCATTER_LINE,
            symbol=self._scatter_symbol.id,
            match_count=scatter_count,
            multiplier=multiplier,
            payout=multiplier * bet,
            positions=tuple(positions),
        )

    def _evaluate_line(self, grid: Grid, rows: Tuple[int, ...], line_idx: int, bet: float) -> Optional[WinningLine]:
        positions = [row * self._columns + col for col, row in enumerate(rows)]
        first_symbol = grid[positions[0]]

        # Scatter never starts a line run
        if self._is_scatter(first_symbol):
            return None

        match_count = 1
        for pos in positions[1:]:
            if grid[pos] != first_symbol:
                break
            match_count += 1

        if match_count >= MIN_MATCH:
            multiplier = self._catalog.payout_for(first_symbol, min(match_count, MAX_MATCH))
        elif match_count == 2 and first_symbol.pays_on_partial_match:
            multiplier = first_symbol.partial_payout
        else:
            return None

        return WinningLine(
            line_index=line_idx,
            symbol=first_symbol.id,
            match_count=match_count,
            multiplier=multiplier,
            payout=multiplier * bet,
            positions=tuple(positions[:match_count]),
        )


def evaluate(catalog: SymbolCatalog, grid, paylines: PaylinesArg, bet_amount: float,
             rows: Optional[int] = None, columns: Optional[int] = None) -> SpinResult:
    """
    Functional wrapper around WinEvaluator.

    Grid dimensions come from a Grid or PaylineTable argument unless given explicitly.
    """
    if rows is None or columns is None:
        if isinstance(grid, Grid):
            rows, columns = grid.rows, grid.columns
        elif isinstance(paylines, PaylineTable):
            rows, columns = paylines.rows, paylines.columns
        else:
            raise InvalidInput("Grid dimensions are required for a flat grid without a PaylineTable")
    return WinEvaluator(catalog, rows, columns).evaluate(grid, paylines, bet_amount)
