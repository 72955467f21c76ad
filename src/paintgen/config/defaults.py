"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Generation service
DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-4o"
DEFAULT_MAX_TOKENS = 2000
DEFAULT_TEMPERATURE = 0.7
DEFAULT_HTTP_REFERER = "http://localhost:3000"
DEFAULT_APP_TITLE = "Paintings Generator"
DEFAULT_TIMEOUT = 60.0
DEFAULT_LANGUAGE = "English"

# Cache
DEFAULT_CACHE_MAX_SIZE = 50
DEFAULT_CACHE_TTL_SECONDS = 60 * 60

# Image normalization
DEFAULT_MAX_WIDTH = 1920
DEFAULT_MAX_HEIGHT = 1920
DEFAULT_MAX_OUTPUT_KB = 500
DEFAULT_START_QUALITY = 85
DEFAULT_MIN_QUALITY = 10
DEFAULT_QUALITY_STEP = 10

# Dispatcher
DEFAULT_MAX_RETRIES = 3
DEFAULT_BACKOFF_UNIT = 1.0

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "base_url": DEFAULT_BASE_URL,
        "model": DEFAULT_MODEL,
        "http_referer": DEFAULT_HTTP_REFERER,
        "timeout": DEFAULT_TIMEOUT,
        "language": DEFAULT_LANGUAGE,
        "cache_max_size": DEFAULT_CACHE_MAX_SIZE,
        "cache_ttl_seconds": DEFAULT_CACHE_TTL_SECONDS,
        "max_width": DEFAULT_MAX_WIDTH,
        "max_height": DEFAULT_MAX_HEIGHT,
        "max_output_kb": DEFAULT_MAX_OUTPUT_KB,
        "start_quality": DEFAULT_START_QUALITY,
        "min_quality": DEFAULT_MIN_QUALITY,
        "quality_step": DEFAULT_QUALITY_STEP,
        "max_retries": DEFAULT_MAX_RETRIES,
        "backoff_unit": DEFAULT_BACKOFF_UNIT,
        "log_level": DEFAULT_LOG_LEVEL,
    }
