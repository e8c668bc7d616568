# sizzling_slots/infrastructure/rng/rng_provider.py
import logging
from typing import Dict, Any, Optional

from .strategies.mersenne_rng import MersenneTwisterRNG
from .strategies.numpy_rng import NumpyRNG
from .strategies.rng_strategy import RNGStrategy

# Name accepted in config -> strategy class
STRATEGIES = {
    "mersenne": MersenneTwisterRNG,
    "numpy": NumpyRNG,
}


class RNGProvider:
    """
    Hands out random sources for slot machines.

    Unseeded sources are shared per strategy; a seeded request always gets a
    fresh instance so replaying a seed replays the same grids.
    """
    def __init__(self):
        self.logger = logging.getLogger("infrastructure.rng")
        self._shared: Dict[str, RNGStrategy] = {}

    def get_rng(self, strategy_name: str, seed: Optional[int] = None) -> RNGStrategy:
        """
        Args:
            strategy_name: Key of STRATEGIES, case-insensitive
            seed: Optional seed

        Raises:
            ValueError: If the strategy name is unknown
        """
        name = strategy_name.lower()
        if name not in STRATEGIES:
            self.logger.error(f"Unknown RNG strategy: {strategy_name}")
            raise ValueError(f"Unknown RNG strategy: {strategy_name}, expected one of {sorted(STRATEGIES)}")

        if seed is not None:
            self.logger.debug(f"Creating {name} RNG with seed {seed}")
            return STRATEGIES[name](seed)

        if name not in self._shared:
            self.logger.debug(f"Creating shared unseeded {name} RNG")
            self._shared[name] = STRATEGIES[name]()
        return self._shared[name]

    def create_from_config(self, config: Optional[Dict[str, Any]]) -> RNGStrategy:
        """Build a source from the `rng` config section, e.g. {"strategy": "numpy", "seed": 12345}."""
        config = config or {}
        return self.get_rng(config.get("strategy", "mersenne"), config.get("seed"))