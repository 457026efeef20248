"""Configuration management."""
from notegraph.config.settings import (
    AnalysisConfig,
    Config,
    FusionConfig,
    ServerConfig,
)
from notegraph.config.constants import *

__all__ = [
    "Config",
    "AnalysisConfig",
    "FusionConfig",
    "ServerConfig",
]
