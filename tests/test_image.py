import io

import numpy as np
import pytest
from PIL import Image

from hologen.model.image import (
    ImageDecodeError, ImageHandle, ImageSubmission, decode_image, is_image_mime, placeholder_image,
)


@pytest.mark.parametrize("mime, expected", [
    ("image/png", True),
    ("image/jpeg", True),
    ("IMAGE/WEBP", True),
    ("text/plain", False),
    ("application/octet-stream", False),
    ("", False),
    (None, False),
])
def test_image_mime_gate(mime, expected):
    assert is_image_mime(mime) is expected


def test_decode_png_to_rgba(png_bytes):
    handle = decode_image(png_bytes, name="photo.png")
    assert handle.name == "photo.png"
    assert (handle.width, handle.height) == (100, 100)
    assert handle.pixels.shape == (100, 100, 4)
    assert handle.pixels.dtype == np.uint8
    assert tuple(handle.pixels[0, 0]) == (200, 40, 10, 255)
    assert handle.is_valid


def test_decode_rgb_gets_opaque_alpha():
    buf = io.BytesIO()
    Image.new("RGB", (8, 4), (1, 2, 3)).save(buf, format="JPEG", quality=100)
    handle = decode_image(buf.getvalue())
    assert handle.pixels.shape == (4, 8, 4)
    assert np.all(handle.pixels[..., 3] == 255)


@pytest.mark.parametrize("data", [b"", b"definitely not a picture", b"\x89PNG\r\n\x1a\n broken"])
def test_undecodable_data_raises(data):
    with pytest.raises(ImageDecodeError):
        decode_image(data, name="bad.png")


def test_decode_error_is_a_value_error():
    assert issubclass(ImageDecodeError, ValueError)


def test_placeholder_is_single_transparent_pixel():
    placeholder = placeholder_image()
    assert (placeholder.width, placeholder.height) == (1, 1)
    assert placeholder.pixels[0, 0, 3] == 0
    assert placeholder.is_valid
    assert placeholder_image() is placeholder


def test_empty_handle_is_invalid():
    handle = ImageHandle(name="empty", pixels=np.zeros((0, 0, 4), dtype=np.uint8))
    assert not handle.is_valid


def test_handles_compare_by_identity(png_bytes):
    a = decode_image(png_bytes)
    b = decode_image(png_bytes)
    assert a == a
    assert a != b


def test_submission_from_path(tmp_path, png_bytes):
    path = tmp_path / "photo.png"
    path.write_bytes(png_bytes)

    submission = ImageSubmission.from_path(str(path))

    assert submission.name == "photo.png"
    assert submission.mime_type == "image/png"
    assert submission.is_image
    assert submission.data == png_bytes


def test_submission_from_path_unknown_type(tmp_path):
    path = tmp_path / "notes.xyz123"
    path.write_bytes(b"hello")

    submission = ImageSubmission.from_path(str(path))

    assert submission.mime_type == "application/octet-stream"
    assert not submission.is_image


def test_submission_from_missing_path(tmp_path):
    with pytest.raises(OSError):
        ImageSubmission.from_path(str(tmp_path / "missing.png"))
