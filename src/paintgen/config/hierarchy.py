"""Configuration hierarchy: merges sources in priority order.

Precedence (later overrides earlier):
  1. Package defaults
  2. Global config   (~/.paintgen/config.yaml)
  3. Project config   (./paintgen.yaml, searched upward)
  4. Environment variables (AI_API_KEY, AI_MODEL, PAINTGEN_*)
  5. Runtime arguments
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from paintgen.config.defaults import get_defaults

logger = logging.getLogger(__name__)

_GLOBAL_CONFIG_PATH = Path.home() / ".paintgen" / "config.yaml"
_PROJECT_CONFIG_NAME = "paintgen.yaml"

# Map of environment variables to config keys
_ENV_MAP: dict[str, str] = {
    "AI_API_KEY": "api_key",
    "AI_MODEL": "model",
    "AI_BASE_URL": "base_url",
    "HTTP_REFERER": "http_referer",
    "PAINTGEN_LANGUAGE": "language",
    "PAINTGEN_TIMEOUT": "timeout",
    "PAINTGEN_CACHE_MAX_SIZE": "cache_max_size",
    "PAINTGEN_CACHE_TTL_SECONDS": "cache_ttl_seconds",
    "PAINTGEN_MAX_WIDTH": "max_width",
    "PAINTGEN_MAX_HEIGHT": "max_height",
    "PAINTGEN_MAX_OUTPUT_KB": "max_output_kb",
    "PAINTGEN_MAX_RETRIES": "max_retries",
    "PAINTGEN_BACKOFF_UNIT": "backoff_unit",
    "PAINTGEN_LOG_LEVEL": "log_level",
}

# Keys that should be parsed as specific types
_TYPE_MAP: dict[str, type] = {
    "timeout": float,
    "cache_max_size": int,
    "cache_ttl_seconds": float,
    "max_width": int,
    "max_height": int,
    "max_output_kb": int,
    "start_quality": int,
    "min_quality": int,
    "quality_step": int,
    "max_retries": int,
    "backoff_unit": float,
}


def load_config_hierarchy(**runtime_overrides: Any) -> dict[str, Any]:
    """Load and merge configuration from all sources.

    Returns a merged dict with the final resolved values.
    """
    config = get_defaults()

    global_cfg = _load_yaml_config(_GLOBAL_CONFIG_PATH)
    if global_cfg:
        config.update(global_cfg)

    project_path = _find_project_config()
    if project_path:
        project_cfg = _load_yaml_config(project_path)
        if project_cfg:
            config.update(project_cfg)

    config.update(_load_env_vars())

    # Only override when explicitly set
    for key, value in runtime_overrides.items():
        if value is not None:
            config[key] = value

    return config


def _load_yaml_config(path: Path) -> dict[str, Any] | None:
    """Load a YAML config file if it exists."""
    if not path.exists() or not path.is_file():
        return None
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
        if isinstance(data, dict):
            return data
        logger.warning("Config file %s is not a mapping, ignoring", path)
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Failed to load config %s: %s", path, e)
    return None


def _find_project_config() -> Path | None:
    """Search for paintgen.yaml from cwd upward."""
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        candidate = parent / _PROJECT_CONFIG_NAME
        if candidate.exists():
            return candidate
    return None


def _load_env_vars() -> dict[str, Any]:
    result: dict[str, Any] = {}
    for env_key, config_key in _ENV_MAP.items():
        value = os.environ.get(env_key)
        if value is None:
            continue
        result[config_key] = _coerce_env_value(config_key, value)
    return result


def _coerce_env_value(key: str, value: str) -> Any:
    """Coerce an environment variable string to the appropriate type."""
    target_type = _TYPE_MAP.get(key)
    if target_type:
        try:
            return target_type(value)
        except (ValueError, TypeError):
            logger.warning(
                "Cannot convert env var for '%s' to %s: %s", key, target_type.__name__, value
            )
            return value

    return value
