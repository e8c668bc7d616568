# sizzling_slots/infrastructure/logging/log_manager.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Dict, Any, Union

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

DEFAULT_LOG_CONFIG = {
    'level': 'INFO',
    'console': True,
    'console_level': 'INFO',
    'file': {
        'enabled': False,
        'path': 'logs/sizzling_slots.log',
        'level': 'DEBUG',
        'max_bytes': 10 * 1024 * 1024,  # 10 MB
        'backup_count': 5
    },
    'loggers': {
        'domain.machine': {'level': 'INFO'},
        'domain.ledger': {'level': 'INFO'},
        'application': {'level': 'INFO'},
        'infrastructure': {'level': 'WARNING'}
    }
}


class LogManager:
    """
    Configures the root logger from the `logging` section of game.yaml.

    Modules log through logging.getLogger("<layer>.<area>"), so the
    per-logger levels below can quiet or open up a whole layer at once.
    """
    def __init__(self):
        self.root_logger = logging.getLogger()
        self.loggers = {}   # name -> logger
        self.handlers = {}  # "console" / "file" -> handler
        self.initialized = False

    def initialize(self, config: Dict[str, Any], force: bool = False):
        """
        Replace the root handlers according to config.

        Args:
            config: Logging configuration dictionary
            force: Reconfigure even if already initialized
        """
        if self.initialized and not force:
            return

        level = self._get_log_level(config.get('level', 'INFO'))
        formatter = logging.Formatter(config.get('format', LOG_FORMAT), config.get('date_format', DATE_FORMAT))

        self._remove_handlers()
        self.root_logger.setLevel(level)

        if config.get('console', True):
            # stdout carries game output, so logs go to stderr
            handler = logging.StreamHandler(sys.stderr)
            self._add_handler('console', handler, config.get('console_level', level), formatter)

        file_config = config.get('file') or {}
        if file_config.get('enabled', False):
            self._add_handler('file', self._file_handler(file_config), file_config.get('level', level), formatter)

        self._configure_loggers(config.get('loggers') or {}, level)

        self.root_logger.debug("Logging system initialized")
        self.initialized = True

    def _remove_handlers(self):
        for handler in list(self.root_logger.handlers):
            self.root_logger.removeHandler(handler)
            handler.close()
        self.handlers.clear()

    def _add_handler(self, name: str, handler: logging.Handler, level, formatter: logging.Formatter):
        handler.setLevel(self._get_log_level(level))
        handler.setFormatter(formatter)
        self.root_logger.addHandler(handler)
        self.handlers[name] = handler

    @staticmethod
    def _file_handler(file_config: Dict[str, Any]) -> RotatingFileHandler:
        file_path = file_config.get('path', 'logs/sizzling_slots.log')
        log_dir = os.path.dirname(file_path)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        return RotatingFileHandler(
            file_path,
            maxBytes=file_config.get('max_bytes', 10 * 1024 * 1024),
            backupCount=file_config.get('backup_count', 5),
            encoding='utf-8'
        )

    def _configure_loggers(self, loggers_config: Dict[str, Any], default_level: int):
        # Parents first so children can override them
        for name in sorted(loggers_config, key=lambda n: n.count('.')):
            logger_config = loggers_config[name] or {}
            logger = logging.getLogger(name)
            logger.setLevel(self._get_log_level(logger_config.get('level', default_level)))
            logger.propagate = logger_config.get('propagate', True)
            self.loggers[name] = logger

            self.root_logger.debug(
                f"Logger '{name}': level={logging.getLevelName(logger.level)}, propagate={logger.propagate}"
            )

    def get_logger(self, name: str) -> logging.Logger:
        return logging.getLogger(name)

    @staticmethod
    def _get_log_level(level_name: Union[str, int]) -> int:
        """Level name or number to a number. Unknown names map to INFO."""
        if isinstance(level_name, int):
            return level_name
        level = logging.getLevelName(str(level_name).upper())
        return level if isinstance(level, int) else logging.INFO


# Process-wide instance used by the CLI entry point
log_manager = LogManager()


def initialize_logging(config: Dict[str, Any] = None, force: bool = False) -> LogManager:
    """
    Initialize the logging system from a config section, falling back to defaults.

    Args:
        config: Logging configuration (the `logging` section of game.yaml)
        force: Reconfigure even if logging was already set up
    """
    log_manager.initialize(config if config is not None else DEFAULT_LOG_CONFIG, force=force)
    return log_manager
