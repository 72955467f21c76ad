"""Validated settings built from the merged config dict."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from paintgen.config import defaults
from paintgen.errors.exceptions import ConfigError
from paintgen.types import ImageConstraints

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class PaintgenSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    api_key: str | None = None
    base_url: str = defaults.DEFAULT_BASE_URL
    model: str = defaults.DEFAULT_MODEL
    http_referer: str = defaults.DEFAULT_HTTP_REFERER
    timeout: float = Field(default=defaults.DEFAULT_TIMEOUT, gt=0)
    language: str = defaults.DEFAULT_LANGUAGE

    cache_max_size: int = Field(default=defaults.DEFAULT_CACHE_MAX_SIZE, ge=1)
    cache_ttl_seconds: float = Field(default=defaults.DEFAULT_CACHE_TTL_SECONDS, gt=0)

    max_width: int = Field(default=defaults.DEFAULT_MAX_WIDTH, gt=0)
    max_height: int = Field(default=defaults.DEFAULT_MAX_HEIGHT, gt=0)
    max_output_kb: int = Field(default=defaults.DEFAULT_MAX_OUTPUT_KB, gt=0)
    start_quality: int = Field(default=defaults.DEFAULT_START_QUALITY, ge=1, le=95)
    min_quality: int = Field(default=defaults.DEFAULT_MIN_QUALITY, ge=1, le=95)
    quality_step: int = Field(default=defaults.DEFAULT_QUALITY_STEP, ge=1)

    max_retries: int = Field(default=defaults.DEFAULT_MAX_RETRIES, ge=0)
    backoff_unit: float = Field(default=defaults.DEFAULT_BACKOFF_UNIT, ge=0)

    log_level: str = defaults.DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            allowed = ", ".join(sorted(_LOG_LEVELS))
            raise ValueError(f"log_level must be one of {allowed}, got {value!r}")
        return level

    @model_validator(mode="after")
    def _check_quality_range(self) -> PaintgenSettings:
        if self.min_quality > self.start_quality:
            raise ValueError(
                f"min_quality ({self.min_quality}) must not exceed "
                f"start_quality ({self.start_quality})"
            )
        return self

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> PaintgenSettings:
        """Validate a merged config dict. Raises ConfigError on bad values."""
        try:
            return cls(**config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {_describe(e)}") from e

    @property
    def log_level_number(self) -> int:
        return logging.getLevelName(self.log_level)

    def image_constraints(self) -> ImageConstraints:
        try:
            return ImageConstraints(
                max_width=self.max_width,
                max_height=self.max_height,
                max_output_bytes=self.max_output_kb * 1024,
                start_quality=self.start_quality,
                min_quality=self.min_quality,
                quality_step=self.quality_step,
            )
        except ValidationError as e:
            raise ConfigError(f"Invalid image settings: {_describe(e)}") from e

    def masked(self) -> dict[str, Any]:
        """Settings as a dict with the API key hidden."""
        data = self.model_dump()
        if self.api_key:
            data["api_key"] = f"{self.api_key[:9]}…({len(self.api_key)} chars)"
        return data


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        field = ".".join(str(loc) for loc in item["loc"]) or "settings"
        parts.append(f"{field}: {item['msg']}")
    return "; ".join(parts)
