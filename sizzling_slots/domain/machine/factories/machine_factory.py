# sizzling_slots/domain/machine/factories/machine_factory.py
import logging
import os
from typing import Dict, Any, Optional

from ..entities.payline import PaylineTable
from ..entities.slot_machine import SlotMachine
from ..entities.symbol import SymbolCatalog

DEFAULT_ROWS = 3
DEFAULT_COLUMNS = 5


class MachineFactory:
    """
    Factory for creating SlotMachine instances from configuration.
    """
    def __init__(self, rng_provider=None):
        """
        Args:
            rng_provider: Optional RNG provider for creating RNG strategies
        """
        self.logger = logging.getLogger("domain.machine.factory")
        self.rng_provider = rng_provider

    def create_machine(self, machine_id: str, config: Dict[str, Any],
                       rng_strategy_name: str = "mersenne", seed: Optional[int] = None,
                       rng_strategy=None) -> SlotMachine:
        """
        Create a new slot machine instance.

        Args:
            machine_id: Unique identifier for the machine
            config: Machine configuration dictionary
            rng_strategy_name: Name of RNG strategy to use with the provider
            seed: Seed override; falls back to config["rng_seed"]
            rng_strategy: Explicit random source, bypassing the provider

        Returns:
            Initialized SlotMachine instance

        Raises:
            InvalidCatalog, InvalidPayline: If the configuration is inconsistent
        """
        self.logger.info(f"Creating slot machine: {machine_id}")

        rows = config.get("rows", DEFAULT_ROWS)
        columns = config.get("columns", DEFAULT_COLUMNS)

        catalog = SymbolCatalog.from_config(config.get("symbols", []))
        paylines = PaylineTable.from_config(config.get("paylines", []), rows, columns)

        if rng_strategy is None and self.rng_provider:
            rng_seed = seed if seed is not None else config.get("rng_seed", None)
            rng_strategy = self.rng_provider.get_rng(rng_strategy_name, rng_seed)
            self.logger.debug(f"Using RNG strategy: {rng_strategy_name}, seed: {rng_seed}")
        elif rng_strategy is None:
            self.logger.warning("No RNG provider available, machine will need RNG set later")

        return SlotMachine(
            machine_id,
            catalog,
            paylines,
            rng_strategy=rng_strategy,
            bet_options=config.get("bet_options", []),
            default_balance=config.get("default_balance", 0),
            config=config,
        )

    def create_machine_from_file(self, config_loader, file_path: str,
                                 machine_id: Optional[str] = None, schema_path: Optional[str] = None,
                                 **kwargs) -> SlotMachine:
        """
        Create a machine from a configuration file.

        Args:
            config_loader: Configuration loader instance
            file_path: Path to configuration file
            machine_id: Optional explicit machine ID (overrides ID in config)
            schema_path: Optional JSON schema to validate the file against
        """
        self.logger.info(f"Creating machine from file: {file_path}")

        config = config_loader.load_file(file_path, schema_path)

        if machine_id is None:
            machine_id = config.get("machine_id") or os.path.splitext(os.path.basename(str(file_path)))[0]

        return self.create_machine(machine_id, config, **kwargs)
