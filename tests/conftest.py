import io

import pytest
from PIL import Image

from paintgen.types import ImageFile


class FakeClock:
    """Manually advanced time source for cache tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_image_bytes():
    """Minimal valid PNG for testing (1x1 white pixel)."""
    import base64
    return base64.b64decode(
        "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4"
        "nGP4z8BQDwAEgAF/pooBPQAAAABJRU5ErkJggg=="
    )


@pytest.fixture
def make_image():
    """Build an ImageFile of the given size and format with Pillow."""

    def _make(
        width: int = 64,
        height: int = 48,
        fmt: str = "PNG",
        mode: str = "RGB",
        noisy: bool = False,
        name: str | None = None,
    ) -> ImageFile:
        if noisy:
            img = Image.effect_noise((width, height), 100).convert(mode)
        else:
            color = (200, 120, 40, 128) if mode == "RGBA" else (200, 120, 40)
            img = Image.new("RGB" if mode == "P" else mode, (width, height), color)
            if mode == "P":
                img = img.convert("P")
        buf = io.BytesIO()
        img.save(buf, format=fmt)
        mime = "image/jpeg" if fmt == "JPEG" else f"image/{fmt.lower()}"
        ext = "jpg" if fmt == "JPEG" else fmt.lower()
        return ImageFile(
            name=name or f"painting.{ext}",
            data=buf.getvalue(),
            mime_type=mime,
            width=width,
            height=height,
        )

    return _make
