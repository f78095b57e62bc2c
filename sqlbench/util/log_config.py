"""
Logging configuration for the benchmark harness.

Provides centralized logging setup with clean, concise terminal output.
"""
import logging
import os
import sys
from typing import Optional

LOG_LEVEL_ENV = "SQLBENCH_LOG_LEVEL"


def default_level() -> int:
    """Resolve the console level from SQLBENCH_LOG_LEVEL, falling back to INFO."""
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    level = logging.getLevelName(name) if name else logging.INFO
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Configure and return a logger with consistent formatting.
    
    Args:
        name: Logger name (typically __name__)
        level: Logging level (default: SQLBENCH_LOG_LEVEL or INFO)
        
    Returns:
        Configured logger instance
    """
    if level is None:
        level = default_level()

    logger = logging.getLogger(name)
    logger.setLevel(level)
    
    # Remove existing handlers to avoid duplicates
    logger.handlers.clear()
    
    # Clean format: [LEVEL] message
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(fmt='[%(levelname)s] %(message)s'))
    logger.addHandler(console_handler)
    
    # Prevent propagation to root logger
    logger.propagate = False
    
    return logger
