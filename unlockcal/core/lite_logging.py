"""
Central logging configuration for unlockcal.

Sets package logger levels while keeping parse diagnostics (skipped tokens,
discarded blocks) visible.
"""

import logging
import os
from typing import Optional

_PACKAGE_LOGGERS = [
    "unlockcal",
    "unlockcal.calendar.ics_parser",
    "unlockcal.calendar.datetime_utils",
    "unlockcal.calendar.parser_telemetry",
    "unlockcal.domain",
    "unlockcal.core",
]

_LEVEL_NAMES = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def configure_lite_logging(
    debug_mode: bool = False,
    force_debug: Optional[bool] = None,
    level_name: Optional[str] = None,
) -> None:
    """
    Configure logging levels for unlockcal modules.

    Args:
        debug_mode: Whether to enable debug logging for unlockcal modules
        force_debug: Override debug mode setting (None to use env var detection)
        level_name: Level used when debug is off, e.g. the configured log_level
            (defaults to INFO)

    Environment Variables:
        UNLOCKCAL_DEBUG: Set to '1', 'true', 'yes' to force debug logging
        UNLOCKCAL_LOG_LEVEL: Override level_name (DEBUG, INFO, WARNING, ERROR)
    """
    env_debug = os.getenv("UNLOCKCAL_DEBUG", "").lower() in ("1", "true", "yes")
    env_log_level = os.getenv("UNLOCKCAL_LOG_LEVEL", "").upper()

    if force_debug is not None:
        final_debug = force_debug
    elif env_debug:
        final_debug = True
    else:
        final_debug = debug_mode

    if env_log_level in _LEVEL_NAMES:
        level_name = env_log_level

    base_level = logging.INFO
    if level_name and level_name.upper() in _LEVEL_NAMES:
        base_level = getattr(logging, level_name.upper())

    package_level = logging.DEBUG if final_debug else base_level

    root_logger = logging.getLogger()
    root_logger.setLevel(package_level)

    for module in _PACKAGE_LOGGERS:
        logging.getLogger(module).setLevel(package_level)

    if final_debug:
        root_logger.debug("Debug logging enabled for unlockcal modules")


def get_logging_status() -> dict[str, str]:
    """
    Get current logging configuration status.

    Returns:
        Dictionary mapping logger names to their current levels
    """
    status = {"root": logging.getLevelName(logging.getLogger().level)}
    for logger_name in _PACKAGE_LOGGERS:
        status[logger_name] = logging.getLevelName(logging.getLogger(logger_name).level)
    return status
