"""Shrink uploaded images to bounded dimensions and byte size."""

from __future__ import annotations

import asyncio
import io
import logging

from PIL import Image, ImageOps, UnidentifiedImageError

from paintgen.errors.exceptions import DecodeError
from paintgen.types import CANONICAL_MIME_TYPE, ImageConstraints, ImageFile, NormalizedImage

logger = logging.getLogger(__name__)

_BACKGROUND = (255, 255, 255)


def calculate_dimensions(
    width: int,
    height: int,
    max_width: int,
    max_height: int,
) -> tuple[int, int]:
    """Fit (width, height) inside the bounds, keeping aspect ratio.

    Never upscales.
    """
    if width <= max_width and height <= max_height:
        return width, height

    ratio = min(max_width / width, max_height / height)
    return max(1, round(width * ratio)), max(1, round(height * ratio))


def compress_to_budget(
    img: Image.Image,
    constraints: ImageConstraints,
) -> tuple[bytes, int]:
    """Encode as JPEG, lowering quality until the byte budget or the floor.

    Returns (encoded_bytes, final_quality). The result may still exceed the
    budget once ``min_quality`` is reached.
    """
    quality = constraints.start_quality
    encoded = _encode_jpeg(img, quality)

    while len(encoded) > constraints.max_output_bytes and quality > constraints.min_quality:
        quality = max(constraints.min_quality, quality - constraints.quality_step)
        encoded = _encode_jpeg(img, quality)
        logger.debug("Re-encoded at quality %d: %d bytes", quality, len(encoded))

    return encoded, quality


def normalize_image(
    file: ImageFile,
    constraints: ImageConstraints | None = None,
) -> NormalizedImage:
    """Decode, downscale and re-encode one image (blocking)."""
    constraints = constraints or ImageConstraints()

    if file.size_bytes <= constraints.max_output_bytes and file.mime_type == CANONICAL_MIME_TYPE:
        source = file.model_dump(include=set(ImageFile.model_fields))
        return NormalizedImage(**source, quality=None, within_budget=True)

    img = _decode(file)
    try:
        width, height = calculate_dimensions(
            img.width, img.height, constraints.max_width, constraints.max_height
        )
        if (width, height) != img.size:
            resized = img.resize((width, height), Image.Resampling.LANCZOS)
            img.close()
            img = resized

        rgb = _to_rgb(img)
        try:
            encoded, quality = compress_to_budget(rgb, constraints)
        finally:
            if rgb is not img:
                rgb.close()
    finally:
        img.close()

    within_budget = len(encoded) <= constraints.max_output_bytes
    if not within_budget:
        logger.warning(
            "%s: %d bytes at quality floor %d exceeds budget of %d bytes",
            file.name,
            len(encoded),
            quality,
            constraints.max_output_bytes,
        )
    logger.info(
        "Normalized %s: %d -> %d bytes, %dx%d, quality %d",
        file.name,
        file.size_bytes,
        len(encoded),
        width,
        height,
        quality,
    )
    return NormalizedImage(
        name=file.name,
        data=encoded,
        mime_type=CANONICAL_MIME_TYPE,
        width=width,
        height=height,
        quality=quality,
        within_budget=within_budget,
    )


class ImageNormalizer:
    """Async front end over ``normalize_image``.

    Pillow work runs in a worker thread; batches are processed one image at a
    time to bound peak memory.
    """

    def __init__(self, constraints: ImageConstraints | None = None) -> None:
        self._constraints = constraints or ImageConstraints()

    @property
    def constraints(self) -> ImageConstraints:
        return self._constraints

    async def normalize(self, file: ImageFile) -> NormalizedImage:
        return await asyncio.to_thread(normalize_image, file, self._constraints)

    async def normalize_batch(self, files: list[ImageFile]) -> list[ImageFile]:
        """Normalize files in order; a failing file is kept as-is."""
        results: list[ImageFile] = []
        for file in files:
            try:
                results.append(await self.normalize(file))
            except Exception as e:
                logger.warning("Could not optimize %s, using original: %s", file.name, e)
                results.append(file)
        return results


def _decode(file: ImageFile) -> Image.Image:
    try:
        img = Image.open(io.BytesIO(file.data))
        img.load()
    except (UnidentifiedImageError, OSError, ValueError) as e:
        raise DecodeError(f"Cannot decode {file.name}: {e}", image_name=file.name) from e
    transposed = ImageOps.exif_transpose(img)
    if transposed is not img:
        img.close()
    return transposed


def _to_rgb(img: Image.Image) -> Image.Image:
    """JPEG has no alpha; flatten transparency onto white."""
    if img.mode == "RGB":
        return img
    if img.mode == "P" and "transparency" in img.info:
        img = img.convert("RGBA")
    if img.mode in ("RGBA", "LA"):
        background = Image.new("RGB", img.size, _BACKGROUND)
        background.paste(img, mask=img.getchannel("A"))
        return background
    return img.convert("RGB")


def _encode_jpeg(img: Image.Image, quality: int) -> bytes:
    buf = io.BytesIO()
    img.save(buf, format="JPEG", quality=quality, optimize=True)
    return buf.getvalue()
