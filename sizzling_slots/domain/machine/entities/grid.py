# sizzling_slots/domain/machine/entities/grid.py
from typing import List, Sequence, Tuple

from .symbol import Symbol, SymbolCatalog, SymbolRef
from ..errors import InvalidInput


class Grid:
    """
    Immutable rows x columns window of symbols, stored row-major.
    Cell (row, col) lives at index row * columns + col.
    """
    __slots__ = ("_cells", "rows", "columns")

    def __init__(self, cells: Sequence[Symbol], rows: int, columns: int):
        """
        Args:
            cells: Flat row-major sequence of symbols
            rows: Number of rows
            columns: Number of columns

        Raises:
            InvalidInput: If the cell count does not equal rows * columns
        """
        if rows <= 0 or columns <= 0:
            raise InvalidInput(f"Grid dimensions must be positive, got {rows}x{columns}")
        if len(cells) != rows * columns:
            raise InvalidInput(
                f"Grid has {len(cells)} cells, expected {rows * columns} ({rows}x{columns})"
            )
        self._cells: Tuple[Symbol, ...] = tuple(cells)
        self.rows = rows
        self.columns = columns

    @classmethod
    def from_ids(cls, catalog: SymbolCatalog, cells: Sequence[SymbolRef], rows: int, columns: int) -> "Grid":
        """
        Build a grid from symbol ids (or symbols) resolved against a catalog.

        Raises:
            InvalidInput: If a cell is not a catalog symbol or the size is wrong
        """
        resolved = []
        for index, cell in enumerate(cells):
            if cell not in catalog:
                raise InvalidInput(f"Unknown symbol {cell!r} at grid position {index}")
            resolved.append(catalog.get(cell))
        return cls(resolved, rows, columns)

    def at(self, row: int, col: int) -> Symbol:
        return self._cells[row * self.columns + col]

    def row(self, row: int) -> List[Symbol]:
        start = row * self.columns
        return list(self._cells[start:start + self.columns])

    def count(self, symbol: Symbol) -> int:
        return self._cells.count(symbol)

    def positions_of(self, symbol: Symbol) -> List[int]:
        return [i for i, cell in enumerate(self._cells) if cell == symbol]

    def symbol_ids(self) -> List[str]:
        return [cell.id for cell in self._cells]

    @property
    def cells(self) -> Tuple[Symbol, ...]:
        return self._cells

    def __len__(self) -> int:
        return len(self._cells)

    def __getitem__(self, index: int) -> Symbol:
        return self._cells[index]

    def __iter__(self):
        return iter(self._cells)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return (self.rows, self.columns, self._cells) == (other.rows, other.columns, other._cells)

    def __hash__(self) -> int:
        return hash((self.rows, self.columns, self._cells))

    def __repr__(self) -> str:
        return f"Grid({self.rows}x{self.columns}, {self.symbol_ids()})"
