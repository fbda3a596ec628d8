"""Centralized logging configuration for the club FTP engine."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER = 'clubftp'

# Loggers that narrate TOTW assembly: slot resolution, per-player fetches,
# fetch failures and the final summary line.
TOTW_LOGGERS = ('totw', 'formation', 'data_fetcher')


def totw_levels(quiet: bool = False, verbose: bool = False) -> dict[str, int]:
    """
    Per-module levels for the TOTW command-line flags.

    ``--verbose`` traces formation parsing and every per-player fetch;
    ``--quiet`` keeps only fetch failures and other warnings. Neither flag
    leaves the assembly loggers at the root level.
    """
    if verbose:
        return {name: logging.DEBUG for name in TOTW_LOGGERS}
    if quiet:
        return {name: logging.WARNING for name in TOTW_LOGGERS}
    return {}


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = True,
    log_to_console: bool = True,
    module_levels: Optional[dict[str, int]] = None,
) -> logging.Logger:
    """
    Configure the ``clubftp`` logger tree for the command-line tools.

    Library modules only create named loggers under ``clubftp``; handlers
    are attached here, once, by whoever runs the engine. Handlers pass the
    most verbose level asked for anywhere, so a DEBUG override on one
    module is not filtered out by an INFO root.

    Args:
        log_dir: Directory for log files (default: ./logs)
        level: Level of the ``clubftp`` logger (default: INFO)
        log_to_file: Whether to log to file (default: True)
        log_to_console: Whether to log to stderr (default: True)
        module_levels: Overrides keyed by module name under ``clubftp``,
            e.g. ``{'totw': logging.DEBUG}``; see ``totw_levels``

    Returns:
        Configured ``clubftp`` logger

    Example:
        from clubftp.logging_config import setup_logging, totw_levels
        logger = setup_logging(log_to_file=False, module_levels=totw_levels(verbose=True))
        logger.info("Computing season TOTW")
    """
    module_levels = module_levels or {}

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    for name in TOTW_LOGGERS:
        logging.getLogger(f'{ROOT_LOGGER}.{name}').setLevel(logging.NOTSET)
    for name, module_level in module_levels.items():
        logging.getLogger(f'{ROOT_LOGGER}.{name}').setLevel(module_level)

    handler_level = min([level, *module_levels.values()])

    if log_to_file:
        if log_dir is None:
            log_dir = Path('logs')
        log_dir.mkdir(parents=True, exist_ok=True)

        log_file = log_dir / f'clubftp_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(handler_level)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S',
        ))
        logger.addHandler(file_handler)

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(handler_level)
        console_handler.setFormatter(logging.Formatter('%(levelname)s [%(name)s]: %(message)s'))
        logger.addHandler(console_handler)

    return logger
