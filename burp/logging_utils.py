#!/usr/bin/env python3
"""
Logging utilities for burp.
Provides an optional rotating file logger with console output.
"""

import os
import sys
import logging
from logging.handlers import RotatingFileHandler
from typing import Optional


def setup_logging(
    log_folder: Optional[str] = None,
    log_basename: str = "burp",
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 10,
    verbose: bool = False,
):
    """
    Configure a rotating file logger with console output.

    Args:
        log_folder: Folder where log files will be stored (no file logging if None)
        log_basename: Base name for log files (default: 'burp')
        max_bytes: Maximum size of the log file before rotation in bytes (default: 5MB)
        backup_count: Number of backup files to keep (default: 10)
        verbose: Whether to show debug output on the console

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Clear existing handlers to avoid duplication
    logger.handlers = []

    if log_folder:
        os.makedirs(log_folder, exist_ok=True)
        log_file = os.path.join(log_folder, f"{log_basename}.log")
        file_handler = RotatingFileHandler(
            log_file,
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        logger.addHandler(file_handler)

    # Console output is for diagnostics; results are printed by the CLI itself.
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s' if verbose else '%(message)s'))
    logger.addHandler(console_handler)

    return logger


def get_logger(name):
    """
    Get a named logger.

    Args:
        name: The name for the logger

    Returns:
        A named logger
    """
    return logging.getLogger(name)
