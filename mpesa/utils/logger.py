"""
Logging Configuration
Centralized logging setup for the M-Pesa client
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
CONSOLE_FORMAT = '%(levelname)s - %(name)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with a console handler attached

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)

    # Only configure if not already configured
    if not logger.handlers:
        logger.setLevel(logging.INFO)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
        logger.addHandler(console_handler)

    return logger


def configure_logging(level: int = logging.INFO, log_dir: Optional[str] = None) -> logging.Logger:
    """
    Configure the ``mpesa`` package logger

    Args:
        level: Logging level for the package
        log_dir: Directory for a rotating ``mpesa-client.log``; created if missing

    Returns:
        The package logger
    """
    logger = get_logger('mpesa')
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        log_path = os.path.abspath(os.path.join(log_dir, 'mpesa-client.log'))

        already_attached = any(
            isinstance(h, RotatingFileHandler) and h.baseFilename == log_path
            for h in logger.handlers
        )
        if not already_attached:
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=10485760,  # 10MB
                backupCount=10
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
            logger.addHandler(file_handler)

    return logger


def mask_secret(value: Optional[str], visible: int = 4) -> str:
    """Keep the first few characters of a token or secret for log lines"""
    if not value:
        return ''
    return f'{value[:visible]}...'
