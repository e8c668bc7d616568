# sizzling_slots/infrastructure/rng/strategies/rng_strategy.py
from typing import Optional, Protocol


class RNGStrategy(Protocol):
    """Protocol defining the interface for random number generators."""

    def random(self) -> float:
        """
        Get a uniform random float in [0, 1).

        This is the only draw the grid generator needs.
        """
        ...

    def seed(self, seed_value: Optional[int]) -> None:
        """
        Restart the sequence; None seeds from system entropy.
        """
        ...
