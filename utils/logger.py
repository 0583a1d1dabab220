"""
Logging configuration utility.
"""

import logging
import sys
from typing import Any, Dict

DEFAULT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

# Chatty third-party loggers kept at WARNING unless running verbose
NOISY_LOGGERS = ('urllib3', 'requests')


def setup_logging(
    level: str = 'INFO',
    format_str: str = None,
    log_file: str = None
) -> logging.Logger:
    """
    Configure logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_str: Log message format
        log_file: Optional file to write logs to

    Returns:
        Configured root logger
    """
    if format_str is None:
        format_str = DEFAULT_FORMAT

    numeric_level = getattr(logging, str(level).upper(), logging.INFO)
    formatter = logging.Formatter(format_str)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    if numeric_level > logging.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    return root_logger


def setup_logging_from_settings(settings: Dict[str, Any], verbose: bool = False) -> logging.Logger:
    """Configure logging from the ``logging`` section of the settings."""
    log_settings = settings.get('logging', {})
    level = 'DEBUG' if verbose else log_settings.get('level', 'INFO')
    return setup_logging(
        level=level,
        format_str=log_settings.get('format'),
        log_file=log_settings.get('file')
    )
