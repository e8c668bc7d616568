# sizzling_slots/domain/machine/entities/slot_machine.py
import logging
from typing import Dict, List, Any, Optional, Sequence

from .grid import Grid
from .payline import PaylineTable
from .symbol import SymbolCatalog
from ..errors import InvalidInput
from ..services.grid_generator import GridGenerator
from ..services.result_formatter import ResultFormatter
from ..services.win_evaluation import WinEvaluator
from sizzling_slots.domain.session.entities.spin_result import SpinResult


class SlotMachine:
    """
    A configured slot machine: catalog, payline table and an injected RNG.
    Core entity in the machine domain; holds no per-spin state.
    """
    def __init__(self, machine_id: str, catalog: SymbolCatalog, paylines: PaylineTable,
                 rng_strategy=None, bet_options: Optional[Sequence[float]] = None,
                 default_balance: float = 0, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the slot machine.

        Args:
            machine_id: Unique identifier for this machine
            catalog: Validated symbol catalog
            paylines: Validated payline table; defines the grid dimensions
            rng_strategy: Random source (optional, may be set later)
            bet_options: Allowed bet amounts
            default_balance: Starting balance for new players
            config: Original configuration, kept for creating fresh instances
        """
        self.id = machine_id
        self.logger = logging.getLogger(f"domain.machine.{machine_id}")

        self.catalog = catalog
        self.paylines = paylines
        self.rows = paylines.rows
        self.columns = paylines.columns
        self.rng = rng_strategy
        self.bet_options = sorted(set(bet_options or []))
        self.default_balance = default_balance
        self.config = config or {}

        self._generator = GridGenerator(catalog)
        self._evaluator = WinEvaluator(catalog, self.rows, self.columns)
        self._formatter = ResultFormatter(catalog)

        self.logger.info(
            f"Slot machine {machine_id} initialized: {len(catalog)} symbols, "
            f"{len(paylines)} paylines, {self.rows}x{self.columns} grid"
        )

    def set_rng(self, rng_strategy):
        self.rng = rng_strategy
        self.logger.debug(f"Updated RNG strategy: {type(rng_strategy).__name__}")

    def generate_grid(self) -> Grid:
        if self.rng is None:
            self.logger.error("No RNG strategy set, cannot spin")
            raise InvalidInput("No RNG strategy set for slot machine")
        return self._generator.generate_grid(self.rows, self.columns, self.rng)

    def evaluate(self, grid, bet: float) -> SpinResult:
        return self._evaluator.evaluate(grid, self.paylines, bet)

    def spin(self, bet: float) -> SpinResult:
        """
        Generate a grid and score it.

        Args:
            bet: Positive bet amount

        Returns:
            SpinResult for this spin
        """
        grid = self.generate_grid()
        result = self.evaluate(grid, bet)
        self.logger.debug(f"Spin result: {grid.symbol_ids()}, payout={result.total_payout}")
        return result

    def format_result(self, spin_result: SpinResult) -> str:
        return self._formatter.format_message(spin_result)

    def render_grid(self, grid: Grid) -> str:
        return self._formatter.render_grid(grid)

    @property
    def evaluator(self) -> WinEvaluator:
        return self._evaluator

    def is_valid_bet(self, bet: float) -> bool:
        return not self.bet_options or bet in self.bet_options

    def get_info(self) -> Dict[str, Any]:
        scatter = self.catalog.scatter_symbol
        return {
            'id': self.id,
            'rows': self.rows,
            'columns': self.columns,
            'symbols': [s.id for s in self.catalog],
            'total_weight': self.catalog.total_weight,
            'scatter_symbol': scatter.id if scatter else None,
            'num_paylines': len(self.paylines),
            'paylines': self.paylines.to_dict(),
            'bet_options': list(self.bet_options),
            'default_balance': self.default_balance,
        }

    def pay_table(self) -> List[Dict[str, Any]]:
        """Rows for a rules screen: one entry per symbol."""
        table = []
        for symbol in self.catalog:
            table.append({
                'symbol': symbol.id,
                'label': symbol.label,
                'payouts': list(symbol.payouts[:3]),
                'scatter': symbol.scatter,
                'partial_payout': symbol.partial_payout if symbol.pays_on_partial_match else None,
                'probability': self.catalog.probability_of(symbol),
            })
        return table
