"""
Centralized logging configuration for the Blog Builder.

This module sets up consistent logging across every component with:
- Detailed formatting including line numbers and function names
- Console output, plus an optional rotating log file
- A single place to choose the verbosity of a build
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d:%(funcName)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

def configure_logging(
    log_level: str = "INFO",
    log_file: Optional[Union[str, Path]] = None
) -> None:
    """
    Configure application-wide logging settings.

    Args:
        log_level: Root logger level (default: "INFO")
        log_file: Optional path of a rotating log file; console only when omitted
    """
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    # Clear any existing handlers to avoid duplicates on reconfiguration
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=1024 * 1024,  # 1MB per file
            backupCount=10,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    logging.debug(f"Logging initialized: level={log_level}, log_file={log_file}")

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the standardized configuration.

    Args:
        name: Name for the logger, typically __name__ from the calling module

    Returns:
        A configured logger instance
    """
    return logging.getLogger(name)
