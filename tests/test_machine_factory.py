# tests/test_machine_factory.py
import unittest
import sys
import os
import copy
from unittest import mock

import yaml

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sizzling_slots.infrastructure.config.loaders.yaml_loader import (
    YamlConfigLoader, DEFAULT_MACHINE_CONFIG, MACHINE_SCHEMA
)
from sizzling_slots.infrastructure.config.validators.schema_validator import SchemaValidator
from sizzling_slots.infrastructure.rng.rng_provider import RNGProvider
from sizzling_slots.infrastructure.rng.strategies.numpy_rng import NumpyRNG
from sizzling_slots.domain.machine.errors import InvalidCatalog, InvalidPayline
from sizzling_slots.domain.machine.factories.machine_factory import MachineFactory


class TestMachineFactory(unittest.TestCase):
    """Test building machines from the bundled configuration."""

    def setUp(self):
        """Set up test environment."""
        self.config_loader = YamlConfigLoader(SchemaValidator())
        self.rng_provider = RNGProvider()
        self.machine_factory = MachineFactory(self.rng_provider)

        with open(DEFAULT_MACHINE_CONFIG, 'r', encoding='utf-8') as f:
            self.config = yaml.safe_load(f)

    def test_bundled_machine(self):
        machine = self.machine_factory.create_machine_from_file(
            self.config_loader, DEFAULT_MACHINE_CONFIG, schema_path=MACHINE_SCHEMA, seed=1
        )

        self.assertEqual(machine.id, "sizzling_hot")
        self.assertEqual((machine.rows, machine.columns), (3, 5))
        self.assertEqual(len(machine.catalog), 8)
        self.assertEqual(machine.catalog.scatter_symbol.id, "star")
        self.assertEqual([p.name for p in machine.paylines],
                         ["middle", "top", "bottom", "v", "inverted_v"])
        self.assertEqual(machine.bet_options, [5, 10, 25, 50, 100])
        self.assertEqual(machine.default_balance, 1000)
        self.assertTrue(machine.catalog.get("cherry").pays_on_partial_match)

    def test_seeded_machines_repeat(self):
        first = self.machine_factory.create_machine("a", self.config, seed=42)
        second = self.machine_factory.create_machine("b", self.config, seed=42)
        for _ in range(10):
            self.assertEqual(first.spin(10), second.spin(10))

    def test_strategy_name(self):
        machine = self.machine_factory.create_machine("m", self.config, rng_strategy_name="numpy", seed=3)
        self.assertIsInstance(machine.rng, NumpyRNG)

    def test_explicit_rng_wins(self):
        rng = NumpyRNG(seed_value=1)
        machine = self.machine_factory.create_machine("m", self.config, rng_strategy=rng)
        self.assertIs(machine.rng, rng)

    def test_config_seed(self):
        config = dict(self.config, rng_seed=9)
        first = self.machine_factory.create_machine("m", config)
        second = self.machine_factory.create_machine("m", config)
        self.assertEqual(first.spin(5), second.spin(5))

    def test_without_provider(self):
        machine = MachineFactory().create_machine("m", self.config)
        self.assertIsNone(machine.rng)

    def test_machine_id_from_file_name(self):
        config = dict(self.config)
        del config["machine_id"]
        loader = mock.Mock()
        loader.load_file.return_value = config
        machine = self.machine_factory.create_machine_from_file(loader, "/tmp/lucky_fruits.yaml")
        self.assertEqual(machine.id, "lucky_fruits")

    def test_two_scatters_rejected(self):
        config = copy.deepcopy(self.config)
        config["symbols"][0]["scatter"] = True
        with self.assertRaises(InvalidCatalog):
            self.machine_factory.create_machine("m", config)

    def test_payline_outside_grid_rejected(self):
        config = copy.deepcopy(self.config)
        config["paylines"].append({"name": "too_low", "rows": [3, 3, 3, 3, 3]})
        with self.assertRaises(InvalidPayline) as ctx:
            self.machine_factory.create_machine("m", config)
        self.assertEqual(ctx.exception.line_index, 5)


if __name__ == "__main__":
    unittest.main()
