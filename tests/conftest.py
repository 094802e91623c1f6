import io
import os

# Must be set before any Qt module creates the application
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PIL import Image

from hologen.controller.session import Session
from hologen.model.image import ImageHandle, ImageSubmission


def make_png(width: int = 100, height: int = 100, color=(200, 40, 10, 255)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buf, format="PNG")
    return buf.getvalue()


def make_handle(name: str = "opaque.png", width: int = 100, height: int = 100, color=(200, 40, 10, 255)) -> ImageHandle:
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:] = color
    return ImageHandle(name=name, pixels=pixels)


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def image_submission(png_bytes) -> ImageSubmission:
    return ImageSubmission(name="photo.png", mime_type="image/png", data=png_bytes)


@pytest.fixture
def opaque_image() -> ImageHandle:
    return make_handle()


@pytest.fixture
def session(qapp):
    s = Session(stage_interval_ms=5)
    yield s
    s.close()
