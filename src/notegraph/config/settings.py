"""
Configuration management with environment variable and .env support.

Configuration precedence (highest to lowest):
1. Environment variables (NOTEGRAPH_*)
2. User config file (~/.notegraph/config/settings.toml)
3. Hardcoded constants (constants.py)
"""

from __future__ import annotations

import os
from typing import overload
from dataclasses import dataclass, field
from pathlib import Path
import tomli
from dotenv import load_dotenv

from ..core.logging_config import LogConfig
from .constants import (
    DEFAULT_DATA_DIR,
    DEFAULT_CONFIG_SUBDIR,
    SETTINGS_FILE,
    ENV_FILE,
    # Defaults
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_CORS_ORIGINS,
    DEFAULT_ANALYSIS_MIN_RELATION,
    DEFAULT_MAX_LEVEL,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_FUSION_STRATEGY,
    DEFAULT_FUSION_MIN_RELATION,
    # Environment variable names
    ENV_DATA_DIR,
    ENV_HOST,
    ENV_PORT,
    ENV_CORS_ORIGINS,
    ENV_ANALYSIS_MIN_RELATION,
    ENV_MAX_LEVEL,
    ENV_CANVAS_WIDTH,
    ENV_CANVAS_HEIGHT,
    ENV_LAYOUT_SEED,
    ENV_FUSION_STRATEGY,
    ENV_FUSION_MIN_RELATION,
    ENV_LOG_LEVEL,
    ERROR_NO_CONFIG,
)


# Load .env file at module import time
# Search order: ./.env, ~/.notegraph/.env, ~/.notegraph/config/.env
def _load_env_files():
    """Load .env files from standard locations."""
    env_locations = [
        Path.cwd() / ENV_FILE,  # Project root
        DEFAULT_DATA_DIR / ENV_FILE,  # Data directory
        DEFAULT_DATA_DIR / DEFAULT_CONFIG_SUBDIR / ENV_FILE,  # Config directory
    ]

    for env_path in env_locations:
        if env_path.exists():
            load_dotenv(env_path, override=False)  # Don't override already-set vars


_load_env_files()


@overload
def _get_env_str(key: str, default: str) -> str: ...


@overload
def _get_env_str(key: str, default: None = None) -> str | None: ...


def _get_env_str(key: str, default: str | None = None) -> str | None:
    """Get string value from environment variable. Empty strings are treated as missing."""
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_float(key: str, default: float) -> float:
    """Get float value from environment variable."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_env_optional_int(key: str, default: int | None) -> int | None:
    value = _get_env_str(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class AnalysisConfig:
    min_relation: float
    max_level: int
    canvas_width: float
    canvas_height: float
    layout_seed: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisConfig":
        """Create AnalysisConfig from dict with environment variable overrides."""
        return cls(
            min_relation=_get_env_float(
                ENV_ANALYSIS_MIN_RELATION,
                float(data.get("min_relation", DEFAULT_ANALYSIS_MIN_RELATION)),
            ),
            max_level=_get_env_int(
                ENV_MAX_LEVEL,
                int(data.get("max_level", DEFAULT_MAX_LEVEL)),
            ),
            canvas_width=_get_env_float(
                ENV_CANVAS_WIDTH,
                float(data.get("canvas_width", DEFAULT_CANVAS_WIDTH)),
            ),
            canvas_height=_get_env_float(
                ENV_CANVAS_HEIGHT,
                float(data.get("canvas_height", DEFAULT_CANVAS_HEIGHT)),
            ),
            layout_seed=_get_env_optional_int(
                ENV_LAYOUT_SEED,
                data.get("layout_seed"),
            ),
        )


@dataclass
class FusionConfig:
    default_strategy: str
    min_relation: float

    @classmethod
    def from_dict(cls, data: dict) -> "FusionConfig":
        """Create FusionConfig from dict with environment variable overrides."""
        return cls(
            default_strategy=_get_env_str(
                ENV_FUSION_STRATEGY,
                data.get("default_strategy", DEFAULT_FUSION_STRATEGY),
            ) or DEFAULT_FUSION_STRATEGY,
            min_relation=_get_env_float(
                ENV_FUSION_MIN_RELATION,
                float(data.get("min_relation", DEFAULT_FUSION_MIN_RELATION)),
            ),
        )


@dataclass
class ServerConfig:
    host: str
    port: int
    cors_origins: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ServerConfig":
        env_origins = _get_env_str(ENV_CORS_ORIGINS, None)
        if env_origins:
            origins = [o.strip() for o in env_origins.split(",") if o.strip()]
        else:
            origins = data.get("cors_origins", list(DEFAULT_CORS_ORIGINS))
        return cls(
            host=_get_env_str(ENV_HOST, data.get("host", DEFAULT_HOST)) or DEFAULT_HOST,
            port=_get_env_int(ENV_PORT, int(data.get("port", DEFAULT_PORT))),
            cors_origins=origins,
        )


def _log_config_from_dict(data: dict) -> LogConfig:
    log_config = LogConfig(**data)
    log_config.level = _get_env_str(ENV_LOG_LEVEL, log_config.level) or log_config.level
    return log_config


@dataclass
class Config:
    analysis: AnalysisConfig
    fusion: FusionConfig
    server: ServerConfig
    logging: LogConfig

    @classmethod
    def load(cls, config_path: Path | None = None) -> "Config":
        """
        Load configuration with proper precedence.

        Precedence (highest to lowest):
        1. Environment variables (NOTEGRAPH_*)
        2. User config (~/.notegraph/config/settings.toml)
        3. Hardcoded constants

        Args:
            config_path: Optional explicit config file path

        Returns:
            Loaded Config object

        Raises:
            FileNotFoundError: If an explicit config path does not exist
        """
        if config_path is not None:
            config_files = [config_path]
        else:
            base_data_dir = Path(os.getenv(ENV_DATA_DIR, str(DEFAULT_DATA_DIR))).expanduser()
            config_files = [base_data_dir / DEFAULT_CONFIG_SUBDIR / SETTINGS_FILE]

        data = None
        for config_file in config_files:
            if config_file.exists():
                with open(config_file, "rb") as f:
                    data = tomli.load(f)
                break

        if data is None:
            # Only raise error if an explicit config path was provided
            if config_path is not None:
                raise FileNotFoundError(
                    ERROR_NO_CONFIG.format(
                        path=config_path,
                        config_dir=DEFAULT_DATA_DIR / DEFAULT_CONFIG_SUBDIR,
                        settings_file=SETTINGS_FILE,
                    )
                )
            data = {}

        return cls(
            analysis=AnalysisConfig.from_dict(data.get("analysis", {})),
            fusion=FusionConfig.from_dict(data.get("fusion", {})),
            server=ServerConfig.from_dict(data.get("server", {})),
            logging=_log_config_from_dict(data.get("logging", {})),
        )
