"""
Constants and default values for Notegraph.

Centralizes magic numbers and strings to improve maintainability.
"""

from pathlib import Path

# ============================================================================
# Application Metadata
# ============================================================================

CONFIG_DIR_NAME = ".notegraph"

# ============================================================================
# Path Defaults
# ============================================================================

DEFAULT_DATA_DIR = Path.home() / CONFIG_DIR_NAME
DEFAULT_CONFIG_SUBDIR = "config"

# Config file names
SETTINGS_FILE = "settings.toml"
ENV_FILE = ".env"

# ============================================================================
# Web Server Defaults
# ============================================================================

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]

# ============================================================================
# Knowledge Map Analysis Defaults
# ============================================================================

DEFAULT_ANALYSIS_MIN_RELATION = 0.3
DEFAULT_MAX_LEVEL = 3

# Layout canvas for generated node positions (pixels)
DEFAULT_CANVAS_WIDTH = 800.0
DEFAULT_CANVAS_HEIGHT = 600.0

# ============================================================================
# Fusion Defaults
# ============================================================================

DEFAULT_FUSION_STRATEGY = "smart"
DEFAULT_FUSION_MIN_RELATION = 0.3

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_DATA_DIR = "NOTEGRAPH_DATA_DIR"

ENV_PORT = "NOTEGRAPH_PORT"
ENV_HOST = "NOTEGRAPH_HOST"
ENV_CORS_ORIGINS = "NOTEGRAPH_CORS_ORIGINS"

ENV_ANALYSIS_MIN_RELATION = "NOTEGRAPH_ANALYSIS_MIN_RELATION"
ENV_MAX_LEVEL = "NOTEGRAPH_MAX_LEVEL"
ENV_CANVAS_WIDTH = "NOTEGRAPH_CANVAS_WIDTH"
ENV_CANVAS_HEIGHT = "NOTEGRAPH_CANVAS_HEIGHT"
ENV_LAYOUT_SEED = "NOTEGRAPH_LAYOUT_SEED"

ENV_FUSION_STRATEGY = "NOTEGRAPH_FUSION_STRATEGY"
ENV_FUSION_MIN_RELATION = "NOTEGRAPH_FUSION_MIN_RELATION"

ENV_LOG_LEVEL = "NOTEGRAPH_LOG_LEVEL"

# ============================================================================
# Error Messages
# ============================================================================

ERROR_NO_CONFIG = """
Configuration file not found: {path}

Create {config_dir}/{settings_file} or unset the explicit path to use
built-in defaults.
"""

ERROR_INVALID_PORT = "Invalid port '{port}': must be an integer between 1 and 65535"
