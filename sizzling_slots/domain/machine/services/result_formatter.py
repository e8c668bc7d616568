# sizzling_slots/domain/machine/services/result_formatter.py
from typing import List, Optional

from ..entities.grid import Grid
from ..entities.symbol import SymbolCatalog
from sizzling_slots.domain.session.entities.spin_result import SpinResult, WinningLine

NO_WIN_MESSAGE = "Better luck next time!"


def _amount(value) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return f"{value}"


class ResultFormatter:
    """Turns spin results into chat-friendly text."""

    def __init__(self, catalog: Optional[SymbolCatalog] = None, currency: str = "coins"):
        self._catalog = catalog
        self._currency = currency

    def _symbol_name(self, symbol_id: str) -> str:
        if self._catalog is not None and symbol_id in self._catalog:
            symbol = self._catalog.get(symbol_id)
            return f"{symbol.label} {symbol.id}" if symbol.label else symbol.id
        return symbol_id

    def describe_line(self, line: WinningLine) -> str:
        where = "anywhere" if line.is_scatter else f"on line {line.line_index + 1}"
        return f"{line.match_count}x {self._symbol_name(line.symbol)} {where}"

    def format_message(self, spin_result: SpinResult) -> str:
        if spin_result.total_payout <= 0:
            return NO_WIN_MESSAGE

        message = f"You won {_amount(spin_result.total_payout)} {self._currency}!"
        if spin_result.winning_lines:
            details = ", ".join(self.describe_line(line) for line in spin_result.winning_lines)
            message += f" Winning lines: {details}"
        return message

    def render_grid(self, grid: Grid, separator: str = " | ") -> str:
        lines: List[str] = []
        for row in range(grid.rows):
            lines.append(separator.join(symbol.display for symbol in grid.row(row)))
        return "\n".join(lines)


def format_message(spin_result: SpinResult) -> str:
    return ResultFormatter().format_message(spin_result)
