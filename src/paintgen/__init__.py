"""paintgen: AI-generated descriptions, exhibition titles and posters for paintings."""

from paintgen.cache.store import CacheStore
from paintgen.concurrency.dispatcher import RequestDispatcher
from paintgen.core import PaintingStudio
from paintgen.images.normalizer import ImageNormalizer
from paintgen.types import ImageConstraints, ImageFile

__version__ = "0.1.0"

__all__ = [
    "CacheStore",
    "ImageConstraints",
    "ImageFile",
    "ImageNormalizer",
    "PaintingStudio",
    "RequestDispatcher",
]
