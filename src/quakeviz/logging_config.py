"""
Logging Configuration
=====================
Console and optional file logging for the 'quakeviz' package.

The console shows records at the level picked with `--log-level`. A file given
with `--log-file` always records DEBUG and up, including the per-event render
skips that the console hides at INFO.

Exports:
    LOGGER_NAME: Name of the package logger.
    parse_level: Turns a `--log-level` value into a logging level.
    setup_logging: Installs the handlers.
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "quakeviz"

CONSOLE_FORMAT = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s', datefmt='%H:%M:%S')
FILE_FORMAT = logging.Formatter(
    '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)


def parse_level(value: Union[str, int]) -> int:
    """
    Accept a level name ("debug", "INFO") or number.

    Raises:
        ValueError: For an unknown level name.
    """
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level '{value}'")
    return level


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """
    Configure the 'quakeviz' logger.

    Calling it again replaces the previous handlers.

    Args:
        level: Console level (e.g. logging.DEBUG, logging.INFO).
        log_file: Optional path of a log file, overwritten on start.

    Returns:
        The package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(min(level, logging.DEBUG) if log_file else level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(CONSOLE_FORMAT)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FILE_FORMAT)
        logger.addHandler(file_handler)

    logger.info(f"Logging initialized (console {logging.getLevelName(level)}"
                f"{f', file {log_file}' if log_file else ''}).")
    return logger
