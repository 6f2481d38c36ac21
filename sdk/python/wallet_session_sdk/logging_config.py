"""
Logging configuration for the wallet session SDK.

Applications embedding the SDK usually configure logging themselves; this
module gives scripts and tests a single call that does it the same way
every time.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from .config import SessionSettings

LOGGER_NAME = "wallet_session_sdk"


def setup_logging(settings: Optional[SessionSettings] = None) -> logging.Logger:
    """Configure the SDK logger from settings and return it."""
    settings = settings or SessionSettings()
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    simple_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s'
    )
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(module)s:%(funcName)s:%(lineno)d - %(message)s'
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=5*1024*1024,  # 5MB
            backupCount=3
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    logger.setLevel(log_level)
    logger.debug(f"Logging configured with level: {settings.log_level}")
    return logger
