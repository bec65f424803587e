"""Logging setup for the documentation build: coloured console output, optional log file."""

import logging
import logging.handlers
import time
from typing import Any, Dict, List, Optional

import colorlog

LOGGER_NAME = 'jsdoc_markdown'

LEVEL_NAMES = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

LOG_COLORS = {
    'DEBUG': 'cyan',
    'INFO': 'green',
    'WARNING': 'yellow',
    'ERROR': 'red',
    'CRITICAL': 'red,bg_white',
}

LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 5


def resolve_level(verbosity: int = 0, level: Optional[str] = None) -> int:
    """
    Pick the effective log level.

    An explicit level name wins over the ``-v`` count; without either the
    build only reports warnings and errors.

    Raises:
        ValueError: If ``level`` is not a known level name
    """
    if level:
        name = level.upper()
        if name not in LEVEL_NAMES:
            raise ValueError(f"Invalid log level '{level}'. Must be one of: {', '.join(LEVEL_NAMES)}")
        return getattr(logging, name)

    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(
    verbosity: int = 0,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    date_format: Optional[str] = None,
    level: Optional[str] = None
) -> logging.Logger:
    """
    Configure the ``jsdoc_markdown`` logger hierarchy.

    Calling this again replaces the handlers installed by a previous call,
    so the CLI can reconfigure once the configuration file has been read.

    Args:
        verbosity: -v count (0=WARNING, 1=INFO, 2+=DEBUG)
        log_file: Optional path of a rotating log file
        log_format: Optional format string for both handlers
        date_format: Optional date format string
        level: Optional explicit level name, overriding ``verbosity``

    Returns:
        The configured package logger
    """
    log_level = resolve_level(verbosity, level)
    log_format = log_format or DEFAULT_LOG_FORMAT
    date_format = date_format or DEFAULT_DATE_FORMAT

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_level)
    logger.propagate = False
    logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(colorlog.ColoredFormatter(
        fmt='%(log_color)s' + log_format,
        datefmt=date_format,
        log_colors=LOG_COLORS
    ))
    logger.addHandler(console_handler)

    if log_file:
        _add_file_handler(logger, log_file, log_level, log_format, date_format)

    logger.debug(f"Log level: {logging.getLevelName(log_level)}")
    return logger


def _add_file_handler(logger: logging.Logger, log_file: str, log_level: int,
                      log_format: str, date_format: str) -> None:
    try:
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding='utf-8'
        )
    except OSError as e:
        logger.warning(f"Cannot write log file {log_file}: {e}")
        return

    file_handler.setLevel(log_level)
    file_handler.setFormatter(logging.Formatter(fmt=log_format, datefmt=date_format))
    logger.addHandler(file_handler)
    logger.info(f"Logging to file: {log_file}")


class ProgressTracker:
    """Context manager counting documents through a build phase and logging the outcome."""

    def __init__(self, total_items: int, item_type: str = "documents"):
        self.total_items = total_items
        self.item_type = item_type
        self.succeeded: List[str] = []
        self.failed: List[str] = []
        self.start_time: Optional[float] = None
        self.logger = logging.getLogger(LOGGER_NAME)

    def __enter__(self) -> 'ProgressTracker':
        self.start_time = time.time()
        self.logger.debug(f"Processing {self.total_items} {self.item_type}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time is None:
            return

        elapsed = time.time() - self.start_time
        summary = (
            f"{self.item_type.capitalize()}: {len(self.succeeded)}/{self.total_items} done "
            f"in {elapsed:.2f}s"
        )

        if exc_type is not None or self.failed:
            self.logger.error(f"{summary}; stopped at {', '.join(self.failed) or 'an error'}")
        else:
            self.logger.info(summary)

    def increment(self, name: str, success: bool = True) -> None:
        """
        Record one processed item.

        Args:
            name: Item label used in the summary (a document key)
            success: Whether the item was processed successfully
        """
        (self.succeeded if success else self.failed).append(name)
        done = len(self.succeeded) + len(self.failed)
        self.logger.debug(
            f"{done}/{self.total_items} {self.item_type}: '{name}' {'ok' if success else 'failed'}"
        )


def log_section(title: str) -> None:
    """Log a banner marking the start of a build phase."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.info("=" * 60)
    logger.info(f"  {title.upper()}")
    logger.info("=" * 60)


def log_config(config: Dict[str, Any]) -> None:
    """
    Log the effective build configuration.

    Args:
        config: Merged configuration dictionary
    """
    logger = logging.getLogger(LOGGER_NAME)

    log_section("Configuration")

    repository = config.get('repository', {})
    for name in ('base_url', 'modules_path', 'top_namespace'):
        logger.info(f"repository.{name}: {repository.get(name, 'Not Set')}")

    build = config.get('build', {})
    logger.info(f"Project root: {build.get('root', '.')}")
    if build.get('dry_run'):
        logger.info("Dry run: nothing will be written")

    for entry in config.get('documents', []):
        logger.info(f"  {entry.get('key')}: {entry.get('source')} -> {entry.get('output')}")


__all__ = [
    'LOGGER_NAME',
    'ProgressTracker',
    'log_config',
    'log_section',
    'resolve_level',
    'setup_logging'
]
