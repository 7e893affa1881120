"""Logging configuration for the analysis app."""
import logging
import sys
from pathlib import Path
from typing import Optional

from config.settings import Settings
from core.exceptions import ConfigurationError

_VALID_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def configure_logging(
    settings: Settings,
    level: Optional[str] = None,
    log_file: Optional[str] = None
) -> None:
    """
    Configure root logging sinks.

    Args:
        settings: Application settings
        level: Console level override (defaults to settings.log_level)
        log_file: File path override (defaults to settings.log_file)

    Raises:
        ConfigurationError: If the configured level is not a logging level
    """
    level = (level or settings.log_level).upper()
    if level not in _VALID_LEVELS:
        raise ConfigurationError(
            f"Invalid log level: {level}",
            missing_keys=["LOG_LEVEL"]
        )

    logging.captureWarnings(True)
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    root.addHandler(handler)

    file_path = log_file or settings.log_file
    if file_path:
        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
        file_handler.setLevel(settings.logging.file_level)
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))
        root.addHandler(file_handler)
