"""
SecureAuth Lab Utilities Module
Provides logging setup and small formatting helpers.
"""

import logging
import sys
from pathlib import Path


def setup_logging(
    log_file: Path | None = None,
    level: int = logging.INFO,
    console: bool = True,
) -> logging.Logger:
    """
    Configure logging for SecureAuth Lab.

    Args:
        log_file: Path to log file (optional)
        level: Logging level (default: INFO)
        console: Whether to also log to console (default: True)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("secureauthlab")
    logger.setLevel(level)
    logger.handlers.clear()

    # Log format
    formatter = logging.Formatter(
        fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Console handler
    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler
    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def format_duration(ms: int | float) -> str:
    """Format a millisecond duration the way the results screen shows it."""
    return f"{ms / 1000:.2f}s"


def attempts_per_second(attempts: int, elapsed_ms: int | float) -> float:
    """Average attempt rate over a run; 0.0 for a zero-length run."""
    if elapsed_ms <= 0:
        return 0.0
    return attempts / (elapsed_ms / 1000)


def print_banner():
    """Print SecureAuth Lab ASCII banner."""
    banner = r"""
    ____                           _         _   _       _          _
   / ___|  ___  ___ _   _ _ __ ___/ \  _   _| |_| |__   | |    __ _| |__
   \___ \ / _ \/ __| | | | '__/ _ \ _ \| | | | __| '_ \  | |   / _` | '_ \
    ___) |  __/ (__| |_| | | |  __/ ___ \ |_| | |_| | | | | |__| (_| | |_) |
   |____/ \___|\___|\__,_|_|  \___/_/  \_\__,_|\__|_| |_| |_____\__,_|_.__/

   Credential Attack Simulator - Educational Use Only
    """
    print(banner)
