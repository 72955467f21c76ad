"""Image normalization: bounded dimensions and byte budget."""

from paintgen.images.normalizer import (
    ImageNormalizer,
    calculate_dimensions,
    compress_to_budget,
    normalize_image,
)

__all__ = [
    "ImageNormalizer",
    "calculate_dimensions",
    "compress_to_budget",
    "normalize_image",
]
