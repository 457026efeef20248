"""Shared dependencies for FastAPI routes.

The engine is stateless, so the only shared objects are the loaded config
and a FusionEngine preconfigured with the default strategy.
"""
from __future__ import annotations

import logging
from threading import Lock

from notegraph.config import Config
from notegraph.knowledge_graph.fusion import FusionEngine

logger = logging.getLogger(__name__)


_config: Config | None = None
_fusion_engine: FusionEngine | None = None

_service_lock = Lock()


def get_config() -> Config:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        with _service_lock:
            if _config is None:
                _config = Config.load()
    return _config


def get_fusion_engine() -> FusionEngine:
    global _fusion_engine
    if _fusion_engine is None:
        config = get_config()
        with _service_lock:
            if _fusion_engine is None:
                _fusion_engine = FusionEngine(default_strategy=config.fusion.default_strategy)
                logger.info("fusion engine ready (default strategy=%s)", config.fusion.default_strategy)
    return _fusion_engine


def reset_services() -> None:
    """Drop cached singletons so the next request reloads config."""
    global _config, _fusion_engine
    with _service_lock:
        _config = None
        _fusion_engine = None
