"""Logging configuration using loguru."""

import sys
from pathlib import Path

from loguru import logger
from loguru._logger import Logger as LoguruLogger

from intent_bot.config import settings

_CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{extra[name]}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
_FILE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | "
    "{extra[name]}:{function}:{line} - {message}"
)

_configured_for: tuple[str, str] | None = None


def _configure_sinks() -> None:
    global _configured_for

    target = (str(settings.log_dir), str(settings.log_level))
    if _configured_for == target:
        return

    # Remove default logger to avoid duplicates
    logger.remove()

    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)

    logger.configure(extra={"name": "intent_bot"})

    logger.add(
        sys.stderr,
        format=_CONSOLE_FORMAT,
        level=settings.log_level,
        colorize=True,
    )

    # File handler for all logs
    logger.add(
        log_dir / "app.log",
        format=_FILE_FORMAT,
        level="DEBUG",
        rotation="10 MB",
        retention="7 days",
        compression="zip",
    )

    # Error file handler
    logger.add(
        log_dir / "errors.log",
        format=_FILE_FORMAT,
        level="ERROR",
        rotation="10 MB",
        retention="30 days",
        compression="zip",
    )

    _configured_for = target


def get_logger(name: str) -> LoguruLogger:
    """
    Get a configured logger instance.

    Sinks are installed once per (log_dir, log_level) pair, so every module
    can call this at import time without duplicating handlers.

    Args:
        name: Logger name (typically __name__ of the calling module)

    Returns:
        Logger bound to ``name``
    """
    _configure_sinks()
    return logger.bind(name=name)  # type: ignore[return-value]


def reset_logging() -> None:
    """Drop every sink so the next get_logger call reconfigures from settings."""
    global _configured_for
    logger.remove()
    _configured_for = None
