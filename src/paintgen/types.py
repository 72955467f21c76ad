"""Shared Pydantic models for paintgen."""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

CANONICAL_MIME_TYPE = "image/jpeg"

# ── Enums ──


class Role(StrEnum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ArtifactKind(StrEnum):
    DESCRIPTION = "description"
    EXHIBITION = "exhibition"
    POSTER = "poster"


# ── Image models ──


class ImageFile(BaseModel):
    """An uploaded image: raw bytes plus what the uploader declared about it."""

    name: str
    data: bytes
    mime_type: str
    width: int | None = None
    height: int | None = None

    @property
    def size_bytes(self) -> int:
        return len(self.data)


class NormalizedImage(ImageFile):
    quality: int | None = None
    within_budget: bool = True


class ImageConstraints(BaseModel):
    """Bounds applied by the image normalizer.

    Qualities use Pillow's JPEG scale (1-95).
    """

    max_width: int = Field(default=1920, gt=0)
    max_height: int = Field(default=1920, gt=0)
    max_output_bytes: int = Field(default=500 * 1024, gt=0)
    start_quality: int = Field(default=85, ge=1, le=95)
    min_quality: int = Field(default=10, ge=1, le=95)
    quality_step: int = Field(default=10, ge=1)

    @model_validator(mode="after")
    def _check_quality_range(self) -> ImageConstraints:
        if self.min_quality > self.start_quality:
            raise ValueError(
                f"min_quality ({self.min_quality}) must not exceed "
                f"start_quality ({self.start_quality})"
            )
        return self

    @property
    def max_iterations(self) -> int:
        """Upper bound on re-encodes after the first encode."""
        span = self.start_quality - self.min_quality
        return -(-span // self.quality_step)


# ── Generation service models ──


class ImageURL(BaseModel):
    url: str


class ContentPart(BaseModel):
    type: Literal["text", "image_url"]
    text: str | None = None
    image_url: ImageURL | None = None


class Message(BaseModel):
    role: Role
    content: str | list[ContentPart]


class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class GenerationResponse(BaseModel):
    content: str
    model: str
    token_usage: TokenUsage = Field(default_factory=TokenUsage)
    finish_reason: str | None = None


# ── Artifacts ──


class PaintingDescription(BaseModel):
    image_name: str
    description: str
    error: str | None = None


class ExhibitionOption(BaseModel):
    id: int
    title: str


class PosterResult(BaseModel):
    poster: str
    description: str
