"""
Centralized logging configuration for the Security Alert Classifier.

Usage:
    from utils.logger import logger, init_logging

    init_logging("scheduler")
    logger.info("Your message")

Classification degrade paths log with ``logger.bind(degraded=True)``; those
records are also written to a dedicated ``{app_name}_degraded.log`` file so
silent accuracy loss (keyword-only classification) stays diagnosable.
"""
import sys
from pathlib import Path
from typing import Optional

from loguru import logger

# Remove default handler
logger.remove()

_configured = False

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function} - {message}"


def is_degraded(record) -> bool:
    """Loguru filter: records emitted from a fallback path."""
    return bool(record["extra"].get("degraded"))


def setup_logging(log_dir: Optional[Path] = None, log_level: str = "INFO", app_name: str = "app"):
    """
    Configure console and file sinks.

    Args:
        log_dir: Directory for log files. If None, file logging is disabled.
        log_level: Minimum console level (DEBUG, INFO, WARNING, ERROR)
        app_name: Name prefix for log files (e.g., "scheduler")
    """
    global _configured

    if _configured:
        return

    logger.add(sys.stderr, level=log_level, format=CONSOLE_FORMAT)

    if log_dir:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_dir / f"{app_name}_{{time:YYYY-MM-DD}}.log",
            level="INFO",
            format=FILE_FORMAT,
            rotation="00:00",
            retention="14 days",
            compression="gz",
            encoding="utf-8",
        )

        logger.add(
            log_dir / f"{app_name}_degraded.log",
            level="WARNING",
            format=FILE_FORMAT,
            filter=is_degraded,
            rotation="5 MB",
            retention=5,
            encoding="utf-8",
        )

        logger.info(f"Logging configured. Log directory: {log_dir}")

    _configured = True


def init_logging(app_name: str = "app"):
    """
    Initialize logging from ``config.settings``. Call once at startup.
    """
    from config import settings, ensure_directories

    ensure_directories()
    setup_logging(log_dir=settings.LOG_DIR, log_level=settings.LOG_LEVEL, app_name=app_name)


__all__ = ["logger", "setup_logging", "init_logging", "is_degraded"]
