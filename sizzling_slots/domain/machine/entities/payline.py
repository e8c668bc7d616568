# sizzling_slots/domain/machine/entities/payline.py
import logging
from dataclasses import dataclass
from typing import Dict, List, Any, Sequence, Tuple

from ..errors import InvalidPayline


@dataclass(frozen=True)
class Payline:
    """One path through the grid: a row index for every column."""
    rows: Tuple[int, ...]
    name: str = ""

    def __len__(self) -> int:
        return len(self.rows)

    def positions(self, columns: int) -> List[int]:
        """Flat grid indices covered by this line (row * columns + col)."""
        return [row * columns + col for col, row in enumerate(self.rows)]


class PaylineTable:
    """
    Fixed, read-only set of paylines for a rows x columns grid.
    Validated once at load time.
    """
    def __init__(self, paylines: Sequence[Payline], rows: int, columns: int):
        """
        Args:
            paylines: Paylines in evaluation order
            rows: Number of grid rows
            columns: Number of grid columns (reels)

        Raises:
            InvalidPayline: If a payline has the wrong length or an out-of-range row
        """
        self.logger = logging.getLogger("domain.machine.paylines")
        self.rows = rows
        self.columns = columns
        self._paylines: Tuple[Payline, ...] = tuple(paylines)

        for i, line in enumerate(self._paylines):
            if len(line) != columns:
                self._fail(f"Payline {i} has {len(line)} entries, expected {columns}", i)
            for row in line.rows:
                if not isinstance(row, int) or isinstance(row, bool) or row < 0 or row >= rows:
                    self._fail(f"Payline {i} row index {row!r} outside [0, {rows})", i)

        self.logger.debug(f"Loaded {len(self._paylines)} paylines for {rows}x{columns} grid")

    def _fail(self, message: str, line_index: int):
        self.logger.error(message)
        raise InvalidPayline(message, line_index)

    @classmethod
    def from_config(cls, paylines_config: List[Any], rows: int, columns: int) -> "PaylineTable":
        """
        Build the table from config entries.

        Entries are either plain row lists or dicts with `rows` and optional `name`.
        """
        paylines = []
        for i, entry in enumerate(paylines_config or []):
            if isinstance(entry, dict):
                line_rows = entry.get("rows")
                name = entry.get("name", f"line{i + 1}")
            else:
                line_rows = entry
                name = f"line{i + 1}"

            if not isinstance(line_rows, (list, tuple)):
                raise InvalidPayline(f"Invalid payline entry at index {i}: {entry!r}", i)

            paylines.append(Payline(tuple(line_rows), name))

        return cls(paylines, rows, columns)

    def list_paylines(self) -> Tuple[Payline, ...]:
        return self._paylines

    def positions(self, line_index: int) -> List[int]:
        return self._paylines[line_index].positions(self.columns)

    def __len__(self) -> int:
        return len(self._paylines)

    def __iter__(self):
        return iter(self._paylines)

    def __getitem__(self, index: int) -> Payline:
        return self._paylines[index]

    def to_dict(self) -> List[Dict[str, Any]]:
        return [{"name": p.name, "rows": list(p.rows)} for p in self._paylines]
