"""Image loading, encoding and upload validation utilities."""

from __future__ import annotations

import base64
import mimetypes
from pathlib import Path

from paintgen.types import ImageFile

_SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".gif"}
_ALLOWED_MIME_TYPES = {"image/jpeg", "image/jpg", "image/png", "image/webp", "image/gif"}
_MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024  # 10 MB
_MAX_FILES = 10


def load_image(path: str | Path) -> ImageFile:
    """Read an image file from disk."""
    path = Path(path)
    _validate_path(path)
    mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    return ImageFile(name=path.name, data=path.read_bytes(), mime_type=mime_type)


def image_to_base64(image_bytes: bytes) -> str:
    """Encode raw image bytes to a base64 string."""
    return base64.b64encode(image_bytes).decode("ascii")


def validate_images(
    files: list[ImageFile],
    max_files: int = _MAX_FILES,
    max_file_size: int = _MAX_IMAGE_SIZE_BYTES,
) -> tuple[list[ImageFile], list[str]]:
    """Split uploads into accepted files and human-readable errors.

    Too many files rejects the whole upload.
    """
    valid: list[ImageFile] = []
    errors: list[str] = []

    if len(files) > max_files:
        errors.append(f"Too many files: {len(files)} selected, maximum is {max_files}")
        return valid, errors

    for file in files:
        if file.mime_type not in _ALLOWED_MIME_TYPES:
            errors.append(
                f'File "{file.name}" has an unsupported format. '
                "Allowed: JPEG, PNG, WebP, GIF"
            )
            continue
        if file.size_bytes > max_file_size:
            errors.append(
                f'File "{file.name}" is too large '
                f"({file.size_bytes / 1024 / 1024:.2f} MB). "
                f"Maximum: {max_file_size / 1024 / 1024:g} MB"
            )
            continue
        valid.append(file)

    return valid, errors


def _validate_path(path: Path) -> None:
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if path.is_symlink():
        raise ValueError(f"Symlinks not allowed: {path}")
    if path.suffix.lower() not in _SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported file type: {path.suffix}")
