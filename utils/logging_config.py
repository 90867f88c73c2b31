"""
Logging configuration for the audio tag sorter.

Status lines go to stdout through the status reporter; diagnostic log
records go to stderr so the two never interleave in redirected output.
"""

import logging
import sys

APP_LOGGER_NAME = 'audio-tag-sorter'
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(
    level: str = "WARNING",
    log_format: str = DEFAULT_LOG_FORMAT,
    console_output: bool = True
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        level: Logging level ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
        log_format: Format string for log records
        console_output: Whether to output logs to stderr

    Returns:
        Configured application logger
    """
    # Clear any existing handlers
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f'Invalid log level: {level}')

    root_logger.setLevel(numeric_level)

    formatter = logging.Formatter(fmt=log_format, datefmt='%Y-%m-%d %H:%M:%S')

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

    configure_library_logging()

    app_logger = logging.getLogger(APP_LOGGER_NAME)
    app_logger.setLevel(numeric_level)
    app_logger.debug(f"Logging initialized - Level: {level}")

    return app_logger


def configure_library_logging():
    """Configure logging for external libraries to reduce noise."""
    for lib_name in ('mutagen',):
        logging.getLogger(lib_name).setLevel(logging.WARNING)
