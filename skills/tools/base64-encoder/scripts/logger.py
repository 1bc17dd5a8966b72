#!/usr/bin/env python3
"""
Base64 Encoder/Decoder - Logger Module
Logging setup shared by the engine and the command line
"""

import logging
import sys
from pathlib import Path
from typing import Optional

try:
    from .exceptions import Base64Error
except ImportError:
    from exceptions import Base64Error


LOGGER_NAME = "baze64"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Hints shown to the user next to the raw error message
USER_FRIENDLY_MESSAGES = {
    "InvalidCharacterError": "The input contains a symbol outside the selected alphabet.\n"
                             "  - check that --alphabet matches the one used to encode\n"
                             "  - remove whitespace or line breaks inside the text",
    "InvalidLengthError": "The input ends with a single dangling symbol; it was probably truncated.",
    "MalformedPaddingError": "The '=' padding is misplaced or does not match the data length.",
    "ConfigurationError": "Check the command line arguments, see --help.",
}


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the tool logger, or a child of it."""
    if not name or name == LOGGER_NAME:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """Configure the tool logger

    Calling it again replaces the previous handlers.

    Args:
        level: log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: optional file to append log records to

    Returns:
        the configured logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    logger = get_logger()
    logger.setLevel(log_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(str(log_path), encoding="utf-8", mode="a")
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            # console only
            logger.warning(f"Cannot create log file {log_file}: {e}")

    return logger


def get_user_friendly_message(error: Exception) -> str:
    """Combine an error's message with a hint for the user."""
    message = error.message if isinstance(error, Base64Error) else str(error)
    hint = USER_FRIENDLY_MESSAGES.get(type(error).__name__)
    if hint:
        return f"{message}\n{hint}"
    return message
