"""
Logging configuration for composectl

Console logging goes to stderr so that stdout only carries inventory
output and the forwarded command's own output. File logging is optional.
"""

import logging
import logging.handlers
import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional


def setup_logging(
    log_dir: Optional[str] = None,
    verbose: bool = False,
    log_level: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for composectl operations.

    Args:
        log_dir: Directory for log files; file logging is disabled when None
        verbose: Enable verbose console output
        log_level: Override log level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured logger instance
    """
    # Determine log level
    if log_level:
        level = getattr(logging, log_level.upper(), logging.WARNING)
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.WARNING

    formatter = logging.Formatter(
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_path / f"composectl_{timestamp}.log"

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=10 * 1024 * 1024,
            backupCount=5,  # 10MB files, 5 backups
        )
        file_handler.setLevel(logging.DEBUG)  # Always debug level for files
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)
        root_logger.setLevel(logging.DEBUG)

    logger = logging.getLogger("composectl")
    logger.debug(f"Logging initialized - Level: {logging.getLevelName(level)}")
    if log_dir:
        logger.debug(f"Log directory: {Path(log_dir).absolute()}")

    return logger


def mask_sensitive_data(message: str) -> str:
    """
    Mask sensitive information in log messages.

    Args:
        message: Log message that may contain sensitive data

    Returns:
        Message with sensitive information masked
    """
    # Mask credentials in URLs
    message = re.sub(
        r"([a-z][a-z0-9+.-]*://[^:/\s]+):([^@\s]+)@",
        r"\1:***@",
        message,
    )

    # Mask KEY=VALUE assignments for secret-looking keys
    message = re.sub(
        r"\b([A-Za-z_]*(?:PASSWORD|SECRET|TOKEN)[A-Za-z_]*)=\S+",
        r"\1=***",
        message,
        flags=re.IGNORECASE,
    )

    return message
