# sizzling_slots/domain/machine/services/grid_generator.py
import logging

from ..entities.grid import Grid
from ..entities.symbol import Symbol, SymbolCatalog
from ..errors import InvalidCatalog, InvalidInput


class GridGenerator:
    """
    Produces grids by independent weighted draws, one per cell.
    Holds no random state of its own: the random source is passed per call.
    """

    def __init__(self, catalog: SymbolCatalog):
        self._catalog = catalog
        self.logger = logging.getLogger("domain.machine.grid_generator")

    def draw_symbol(self, rng) -> Symbol:
        """
        Draw one symbol with probability proportional to its weight.

        Args:
            rng: Random source exposing random() -> float in [0, 1)

        Raises:
            InvalidCatalog: If the catalog's total weight is not positive
        """
        symbols = self._catalog.list_symbols()
        total_weight = sum(s.weight for s in symbols)
        if total_weight <= 0:
            error_msg = f"Cannot draw from catalog with total weight {total_weight}"
            self.logger.error(error_msg)
            raise InvalidCatalog(error_msg)

        remainder = rng.random() * total_weight
        for symbol in symbols:
            remainder -= symbol.weight
            if remainder <= 0:
                return symbol

        # float rounding can leave a sliver above zero
        return symbols[-1]

    def generate_grid(self, rows: int, columns: int, rng) -> Grid:
        """
        Generate a fresh rows x columns grid.

        Args:
            rows: Number of rows
            columns: Number of columns
            rng: Random source exposing random() -> float in [0, 1)

        Returns:
            New immutable Grid
        """
        if rng is None:
            self.logger.error("No random source given, cannot generate grid")
            raise InvalidInput("A random source is required to generate a grid")
        if rows <= 0 or columns <= 0:
            raise InvalidInput(f"Grid dimensions must be positive, got {rows}x{columns}")

        cells = [self.draw_symbol(rng) for _ in range(rows * columns)]
        return Grid(cells, rows, columns)


def generate_grid(catalog: SymbolCatalog, rows: int, columns: int, rng) -> Grid:
    return GridGenerator(catalog).generate_grid(rows, columns, rng)
