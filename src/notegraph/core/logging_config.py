"""Centralized logging configuration for notegraph."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from logging.handlers import RotatingFileHandler

from rich.console import Console
from rich.logging import RichHandler


# Third-party loggers that are excessively noisy at INFO level.
_NOISY_LOGGERS: tuple[str, ...] = (
    "httpx",
    "httpcore",
    "uvicorn.access",
)


@dataclass
class LogConfig:
    """Logging configuration."""

    level: str = "INFO"
    file_enabled: bool = False
    file_path: str = "~/.notegraph/logs/notegraph.log"
    file_max_bytes: int = 10485760  # 10MB
    file_backup_count: int = 5
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    use_rich_console: bool = True
    quiet_third_party: bool = True


def setup_logging(config: LogConfig) -> None:
    """
    Configure logging with file rotation and optional Rich console output.

    Args:
        config: Logging configuration
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.level.upper(), logging.INFO))

    # Remove existing handlers
    root_logger.handlers.clear()

    formatter = logging.Formatter(config.format)

    if config.file_enabled:
        log_path = Path(config.file_path).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    # Console output goes to stderr so JSON written to stdout stays clean.
    if config.use_rich_console:
        console_handler: logging.Handler = RichHandler(
            console=Console(stderr=True), rich_tracebacks=True, show_path=False
        )
        console_handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)

    root_logger.addHandler(console_handler)

    if config.quiet_third_party:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
