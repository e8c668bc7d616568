# sizzling_slots/infrastructure/config/loaders/yaml_loader.py
import os
import yaml
import json
import logging
from pathlib import Path
from typing import Dict, Any

# Bundled configuration shipped inside the package
CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config"
DEFAULT_GAME_CONFIG = CONFIG_ROOT / "game.yaml"
DEFAULT_MACHINE_CONFIG = CONFIG_ROOT / "machines" / "sizzling_hot.yaml"
MACHINE_SCHEMA = CONFIG_ROOT / "schemas" / "machine_schema.json"


class ConfigError(Exception):
    """Configuration could not be loaded or failed validation."""
    def __init__(self, message):
        self.message = message
        super().__init__(message)


class FileNotFoundConfigError(ConfigError):
    def __init__(self, path, message=None):
        self.path = path
        super().__init__(message or f"Configuration file not found: {path}")


class YamlParseError(ConfigError):
    def __init__(self, file_path, yaml_error):
        self.file_path = file_path
        self.yaml_error = yaml_error
        super().__init__(f"Error parsing YAML file {file_path}: {yaml_error}")


class SchemaValidationError(ConfigError):
    def __init__(self, file_path, errors):
        self.file_path = file_path
        self.errors = list(errors)
        details = "".join(f"\n  - {e}" for e in self.errors)
        super().__init__(f"Configuration validation failed for {file_path}:{details}")


class YamlConfigLoader:
    """
    Reads machine and game YAML files, optionally checking them against a JSON schema.
    Every problem surfaces as a ConfigError.
    """
    def __init__(self, schema_validator=None):
        self.logger = logging.getLogger("infrastructure.config")
        self.schema_validator = schema_validator

    def load_file(self, file_path, schema_path=None) -> Dict[str, Any]:
        """
        Load one YAML file.

        Args:
            file_path: Path to the YAML file
            schema_path: Optional JSON schema to validate against

        Returns:
            Parsed configuration, with schema defaults filled in when a schema
            is given; an empty file yields {}

        Raises:
            FileNotFoundConfigError: Missing file
            YamlParseError: Invalid YAML
            SchemaValidationError: Schema violation
        """
        file_path = str(file_path)
        if not os.path.isfile(file_path):
            error = FileNotFoundConfigError(file_path)
            self.logger.error(error.message)
            raise error

        try:
            with open(file_path, 'r', encoding='utf-8') as file:
                config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            error = YamlParseError(file_path, e)
            self.logger.error(error.message)
            raise error from e

        if config is None:
            self.logger.warning(f"Empty configuration file: {file_path}")
            config = {}

        if schema_path and self.schema_validator:
            config = self._validate(file_path, config, str(schema_path))

        self.logger.debug(f"Loaded configuration from {file_path}")
        return config

    def _validate(self, file_path: str, config: Dict[str, Any], schema_path: str) -> Dict[str, Any]:
        is_valid, errors, updated = self.schema_validator.validate_with_defaults(
            config, self._load_schema(schema_path)
        )
        if not is_valid:
            raise SchemaValidationError(file_path, errors)
        return updated

    def _load_schema(self, schema_path: str) -> Dict[str, Any]:
        if not os.path.isfile(schema_path):
            self.logger.error(f"Schema file not found: {schema_path}")
            raise FileNotFoundConfigError(schema_path, f"Schema file not found: {schema_path}")

        try:
            with open(schema_path, 'r', encoding='utf-8') as file:
                return json.load(file)
        except json.JSONDecodeError as e:
            self.logger.error(f"Invalid JSON schema {schema_path}: {e}")
            raise ConfigError(f"Error parsing schema file {schema_path}: {e}") from e
