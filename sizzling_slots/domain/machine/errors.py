# sizzling_slots/domain/machine/errors.py


class SlotEngineError(ValueError):
    """Base class for rule-engine errors. These signal configuration or caller bugs."""
    pass


class InvalidCatalog(SlotEngineError):
    """Symbol catalog is malformed (weights, pay tables, scatter count)."""
    def __init__(self, message, symbol_id=None):
        self.symbol_id = symbol_id
        self.message = message
        super().__init__(message)


class InvalidPayline(SlotEngineError):
    """Payline length or row index does not fit the configured grid."""
    def __init__(self, message, line_index=None):
        self.line_index = line_index
        self.message = message
        super().__init__(message)


class InvalidInput(SlotEngineError):
    """Grid size mismatch, unknown symbol or non-positive bet handed to the evaluator."""
    pass


class InvalidMatchCount(SlotEngineError):
    """Pay table lookup with a match count that is not an integer in 3..5."""
    def __init__(self, symbol_id, match_count):
        self.symbol_id = symbol_id
        self.match_count = match_count
        self.message = f"Match count {match_count!r} for symbol '{symbol_id}' must be an integer in 3..5"
        super().__init__(self.message)
