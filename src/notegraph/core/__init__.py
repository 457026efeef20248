"""Core infrastructure shared by the CLI and the HTTP adapter."""
from __future__ import annotations

from notegraph.core.logging_config import LogConfig, get_logger, setup_logging

__all__ = [
    "LogConfig",
    "setup_logging",
    "get_logger",
]
