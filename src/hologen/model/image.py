"""
Image Data Model
================
Defines the objects that travel from the file picker to the renderer.

Classes:
    ImageSubmission: What the user handed over (name, MIME type, raw bytes).
    ImageHandle: A decoded RGBA pixel buffer ready to be used as a texture.
"""
from __future__ import annotations

import functools
import io
import logging
import mimetypes
import os
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np
from PIL import Image, UnidentifiedImageError

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)

IMAGE_MIME_PREFIX = "image/"


class ImageDecodeError(ValueError):
    """Raised when submitted bytes cannot be turned into a texture."""


def is_image_mime(mime_type: str | None) -> bool:
    """True for any MIME type in the image/* family."""
    return bool(mime_type) and mime_type.lower().startswith(IMAGE_MIME_PREFIX)


@dataclass(frozen=True)
class ImageSubmission:
    name: str
    mime_type: str
    data: bytes = field(repr=False)

    @property
    def is_image(self) -> bool:
        return is_image_mime(self.mime_type)

    @classmethod
    def from_path(cls, path: str) -> ImageSubmission:
        """
        Reads a file from disk and guesses its MIME type from the extension.

        Raises:
            OSError: If the file cannot be read.
        """
        mime_type, _ = mimetypes.guess_type(path)
        with open(path, "rb") as f:
            data = f.read()
        logger.debug(f"Read {len(data)} bytes from {path} ({mime_type}).")
        return cls(
            name=os.path.basename(path),
            mime_type=mime_type or "application/octet-stream",
            data=data,
        )


@dataclass(frozen=True, eq=False)
class ImageHandle:
    """
    Decoded image as an (H, W, 4) uint8 RGBA array.

    Row 0 of `pixels` is the top row of the picture. Handles compare by
    identity: two decodes of the same file are two different textures.
    """
    name: str
    pixels: npt.NDArray[np.uint8] = field(repr=False)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1]) if self.pixels.ndim == 3 else 0

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0]) if self.pixels.ndim == 3 else 0

    @property
    def is_valid(self) -> bool:
        return (
            self.pixels.ndim == 3
            and self.pixels.shape[2] == 4
            and self.width > 0
            and self.height > 0
        )

    @classmethod
    def from_pil(cls, name: str, img: Image.Image) -> ImageHandle:
        rgba = np.asarray(img.convert("RGBA"), dtype=np.uint8)
        # Detach from PIL's buffer so the handle can be shared between threads
        return cls(name=name, pixels=np.ascontiguousarray(rgba).copy())


def decode_image(data: bytes, name: str = "image") -> ImageHandle:
    """
    Decodes encoded image bytes (PNG, JPEG, ...) into an RGBA handle.

    Raises:
        ImageDecodeError: If Pillow cannot identify or read the data.
    """
    if not data:
        raise ImageDecodeError(f"'{name}' is empty.")

    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            handle = ImageHandle.from_pil(name, img)
    except (UnidentifiedImageError, OSError, ValueError, Image.DecompressionBombError) as e:
        raise ImageDecodeError(f"Cannot decode '{name}': {e}") from e

    if not handle.is_valid:
        raise ImageDecodeError(f"'{name}' decoded to an empty image.")

    logger.info(f"Decoded '{name}' ({handle.width}x{handle.height}).")
    return handle


@functools.lru_cache(maxsize=1)
def placeholder_image() -> ImageHandle:
    """The neutral 1x1 fully transparent texture."""
    return ImageHandle(name="placeholder", pixels=np.zeros((1, 1, 4), dtype=np.uint8))
