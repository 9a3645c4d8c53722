"""
Logging Configuration
=====================
Centralized logging setup using loguru for structured logging.

Features:
- Structured JSON logging for production
- Human-readable logs for development
- Standard library logs (uvicorn, botocore) routed through loguru
"""

import sys
import logging
from pathlib import Path
from typing import Optional

from loguru import logger

from image_storage.core.config import settings


# Standard library loggers captured by InterceptHandler
INTERCEPTED_LOGGERS = (
    "uvicorn",
    "uvicorn.access",
    "uvicorn.error",
    "fastapi",
    "botocore",
    "aiobotocore",
)


class InterceptHandler(logging.Handler):
    """
    Intercept standard logging messages and redirect to loguru.

    This allows us to capture logs from third-party libraries
    (uvicorn, botocore, etc.) and format them consistently.
    """

    def emit(self, record: logging.LogRecord) -> None:
        """
        Emit a log record through loguru

        Args:
            record: Standard library log record
        """
        # Get corresponding Loguru level if it exists
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Find caller from where the logged message originated
        frame, depth = logging.currentframe(), 2
        while frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def setup_logging() -> None:
    """
    Configure application-wide logging

    Sets up:
    - Console logging (stdout)
    - File logging with rotation (development only)
    - JSON formatting for production
    - Intercepts standard library logging
    """
    # Remove default loguru handler
    logger.remove()

    # ========================================================================
    # CONSOLE LOGGING (stdout)
    # ========================================================================

    if settings.is_development:
        log_format = (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
            "<level>{message}</level>"
        )
        logger.add(
            sys.stdout,
            format=log_format,
            level="DEBUG" if settings.DEBUG else "INFO",
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    else:
        # Production: JSON format for log aggregation
        logger.add(
            sys.stdout,
            format="{message}",
            level="INFO",
            serialize=True,
            backtrace=False,
            diagnose=False,
        )

    # ========================================================================
    # FILE LOGGING (development only)
    # ========================================================================

    if settings.is_development:
        log_dir = Path("logs")
        log_dir.mkdir(exist_ok=True)

        logger.add(
            log_dir / "app_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="7 days",
            compression="zip",
            level="DEBUG",
            format=(
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message}"
            ),
        )

    # ========================================================================
    # INTERCEPT STANDARD LIBRARY LOGGING
    # ========================================================================

    for name in INTERCEPTED_LOGGERS:
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    # botocore is very chatty at DEBUG (wire dumps, credential lookups)
    logging.getLogger("botocore").setLevel(logging.WARNING)
    logging.getLogger("aiobotocore").setLevel(logging.WARNING)

    logger.info(f"Logging configured for {settings.ENVIRONMENT} environment")


def get_logger(name: Optional[str] = None) -> logger:
    """
    Get a logger instance

    Args:
        name: Optional logger name for context

    Returns:
        logger: Configured loguru logger
    """
    if name:
        return logger.bind(logger_name=name)
    return logger
