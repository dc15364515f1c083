"""Logging configuration for the Brand DNA engine."""
import logging
from pathlib import Path
from datetime import datetime
from typing import Optional

from branddna.app.config import get_settings

LOG_FILE: Optional[Path] = None


def setup_logger(name: str = "branddna", level: Optional[int] = None) -> logging.Logger:
    """Set up a logger with file and console handlers."""
    global LOG_FILE
    settings = get_settings()
    if level is None:
        level = logging.getLevelName(settings.log_level)
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if settings.log_to_file else level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    # File handler - detailed logs
    if settings.log_to_file:
        logs_dir = Path(settings.log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        LOG_FILE = logs_dir / f"branddna_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
        file_handler = logging.FileHandler(LOG_FILE, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)

    # Console handler - simpler format
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(console_formatter)
    logger.addHandler(console_handler)

    return logger


# Create default logger instance
logger = setup_logger()
