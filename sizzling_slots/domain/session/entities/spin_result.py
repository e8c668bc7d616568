# sizzling_slots/domain/session/entities/spin_result.py
from typing import Dict, List, Any, Tuple
from dataclasses import dataclass, field

from sizzling_slots.domain.machine.entities.grid import Grid

SCATTER_LINE = -1


@dataclass(frozen=True)
class WinningLine:
    """
    A single scored combination: one payline run or the spin's scatter win.
    """
    line_index: int             # SCATTER_LINE for scatter wins
    symbol: str
    match_count: int
    multiplier: float
    payout: float
    positions: Tuple[int, ...] = ()

    @property
    def is_scatter(self) -> bool:
        return self.line_index == SCATTER_LINE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "line_index": self.line_index,
            "symbol": self.symbol,
            "match_count": self.match_count,
            "multiplier": self.multiplier,
            "payout": self.payout,
            "positions": list(self.positions),
        }


@dataclass(frozen=True)
class SpinResult:
    """Outcome of one spin: the grid, its winning lines and the total payout."""
    grid: Grid
    bet: float
    winning_lines: Tuple[WinningLine, ...] = field(default_factory=tuple)
    total_payout: float = 0

    @property
    def is_win(self) -> bool:
        return self.total_payout > 0

    @property
    def scatter_line(self):
        for line in self.winning_lines:
            if line.is_scatter:
                return line
        return None

    @property
    def line_wins(self) -> List[WinningLine]:
        return [line for line in self.winning_lines if not line.is_scatter]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "grid": self.grid.symbol_ids(),
            "rows": self.grid.rows,
            "columns": self.grid.columns,
            "bet": self.bet,
            "winning_lines": [line.to_dict() for line in self.winning_lines],
            "total_payout": self.total_payout,
        }
