# sizzling_slots/domain/machine/entities/symbol.py
import logging
import math
import numbers
from dataclasses import dataclass
from typing import Dict, List, Any, Optional, Sequence, Tuple, Union

from ..errors import InvalidCatalog, InvalidInput, InvalidMatchCount

MIN_MATCH = 3
MAX_MATCH = 5


@dataclass(frozen=True)
class Symbol:
    """
    A reel symbol with its selection weight and pay table.

    payouts[0..2] are the multipliers for 3, 4 and 5 of a kind.
    """
    id: str
    weight: int
    payouts: Tuple[float, ...]
    scatter: bool = False
    pays_on_partial_match: bool = False
    partial_payout: float = 0
    label: str = ""

    @property
    def display(self) -> str:
        return self.label or self.id

    def __str__(self) -> str:
        return self.id


SymbolRef = Union[Symbol, str]


def _is_amount(value) -> bool:
    """Finite real number; bools are rejected."""
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


class SymbolCatalog:
    """
    Immutable registry of the symbols a machine can show.
    Validated once on construction; order is preserved for weighted draws.
    """
    def __init__(self, symbols: Sequence[Symbol]):
        """
        Build and validate the catalog.

        Args:
            symbols: Symbols in draw order

        Raises:
            InvalidCatalog: If weights, pay tables or scatter flags are inconsistent
        """
        self.logger = logging.getLogger("domain.machine.catalog")
        self._symbols: Tuple[Symbol, ...] = tuple(symbols)
        self._by_id: Dict[str, Symbol] = {}
        self._validate()
        self._total_weight = sum(s.weight for s in self._symbols)
        scatters = [s for s in self._symbols if s.scatter]
        self._scatter = scatters[0] if scatters else None

    def _validate(self):
        if not self._symbols:
            self._fail("Symbol catalog is empty")

        scatter_ids = []
        for symbol in self._symbols:
            if symbol.id in self._by_id:
                self._fail(f"Duplicate symbol id '{symbol.id}'", symbol.id)
            self._by_id[symbol.id] = symbol

            if not isinstance(symbol.weight, int) or isinstance(symbol.weight, bool) or symbol.weight <= 0:
                self._fail(f"Symbol '{symbol.id}' has non-positive weight {symbol.weight!r}", symbol.id)

            if len(symbol.payouts) < MAX_MATCH - MIN_MATCH + 1:
                self._fail(f"Symbol '{symbol.id}' needs 3 payout entries, got {list(symbol.payouts)}", symbol.id)
            if not all(_is_amount(p) for p in symbol.payouts):
                self._fail(f"Symbol '{symbol.id}' has a non-numeric payout: {list(symbol.payouts)}", symbol.id)
            if any(p < 0 for p in symbol.payouts):
                self._fail(f"Symbol '{symbol.id}' has a negative payout: {list(symbol.payouts)}", symbol.id)

            if symbol.pays_on_partial_match:
                if not _is_amount(symbol.partial_payout):
                    self._fail(
                        f"Symbol '{symbol.id}' has a non-numeric partial payout {symbol.partial_payout!r}", symbol.id
                    )
                if symbol.partial_payout <= 0:
                    self._fail(f"Symbol '{symbol.id}' pays on partial match but has no partial payout", symbol.id)

            if symbol.scatter:
                scatter_ids.append(symbol.id)

        if len(scatter_ids) > 1:
            self._fail(f"At most one scatter symbol allowed, got {scatter_ids}")

    def _fail(self, message: str, symbol_id: Optional[str] = None):
        self.logger.error(message)
        raise InvalidCatalog(message, symbol_id)

    @classmethod
    def from_config(cls, symbols_config: List[Dict[str, Any]]) -> "SymbolCatalog":
        """
        Create a catalog from the `symbols` section of a machine config.

        Args:
            symbols_config: List of dicts with id, weight, payouts and optional flags

        Returns:
            Validated SymbolCatalog
        """
        symbols = []
        for i, entry in enumerate(symbols_config or []):
            if not isinstance(entry, dict) or "id" not in entry:
                raise InvalidCatalog(f"Invalid symbol entry at index {i}: {entry!r}")
            payouts = entry.get("payouts", ())
            if not isinstance(payouts, (list, tuple)):
                raise InvalidCatalog(
                    f"Symbol '{entry['id']}' payouts must be a list, got {payouts!r}", str(entry["id"])
                )
            symbols.append(Symbol(
                id=str(entry["id"]),
                weight=entry.get("weight", 0),
                payouts=tuple(payouts),
                scatter=bool(entry.get("scatter", False)),
                pays_on_partial_match=bool(entry.get("pays_on_partial_match", False)),
                partial_payout=entry.get("partial_payout", 0),
                label=entry.get("label", ""),
            ))
        return cls(symbols)

    def list_symbols(self) -> Tuple[Symbol, ...]:
        return self._symbols

    def get(self, symbol: SymbolRef) -> Symbol:
        """
        Resolve a symbol or symbol id to the catalog's Symbol.

        Raises:
            KeyError: If the symbol is not part of this catalog
        """
        symbol_id = symbol.id if isinstance(symbol, Symbol) else symbol
        return self._by_id[symbol_id]

    def __contains__(self, symbol: SymbolRef) -> bool:
        symbol_id = symbol.id if isinstance(symbol, Symbol) else symbol
        return symbol_id in self._by_id

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self):
        return iter(self._symbols)

    @property
    def total_weight(self) -> int:
        return self._total_weight

    @property
    def scatter_symbol(self) -> Optional[Symbol]:
        return self._scatter

    def weight_of(self, symbol: SymbolRef) -> int:
        return self.get(symbol).weight

    def payout_for(self, symbol: SymbolRef, match_count: int) -> float:
        """
        Get the pay table multiplier for a match.

        Args:
            symbol: Symbol or symbol id
            match_count: Number of matching symbols (3, 4 or 5)

        Returns:
            Non-negative multiplier of the bet

        Raises:
            InvalidInput: If the symbol is not part of this catalog
            InvalidMatchCount: If match_count is not an integer in 3..5
        """
        if symbol not in self:
            self.logger.error(f"Pay table lookup for unknown symbol {symbol!r}")
            raise InvalidInput(f"Unknown symbol {symbol!r}")
        resolved = self.get(symbol)
        if (not isinstance(match_count, numbers.Integral) or isinstance(match_count, bool)
                or match_count < MIN_MATCH or match_count > MAX_MATCH):
            raise InvalidMatchCount(resolved.id, match_count)
        return resolved.payouts[match_count - MIN_MATCH]

    def probability_of(self, symbol: SymbolRef) -> float:
        return self.weight_of(symbol) / self._total_weight

    def __repr__(self) -> str:
        return f"SymbolCatalog(symbols={[s.id for s in self._symbols]})"
