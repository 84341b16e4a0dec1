"""
Tests for slicing.encoder

Test Coverage:
- encode_band(): Exact band extraction, format, errors
- encode_image(): Mode conversion for JPEG
- jpeg_quality(): Quality mapping
"""
import io

import pytest
from PIL import Image

from slicestream.core.errors import EncodeError
from slicestream.core.models import OutputFormat
from slicestream.slicing.encoder import encode_band, encode_image, jpeg_quality


@pytest.fixture
def striped():
    """60x30 image: rows 0-9 red, 10-19 green, 20-29 blue."""
    img = Image.new("RGB", (60, 30), (255, 0, 0))
    img.paste((0, 255, 0), (0, 10, 60, 20))
    img.paste((0, 0, 255), (0, 20, 60, 30))
    return img


def _decode(data: bytes) -> Image.Image:
    img = Image.open(io.BytesIO(data))
    img.load()
    return img


def test_encode_band_when_png_then_pixels_exact(striped):
    """PNG bands reproduce the composite rows exactly."""
    data = encode_band(striped, 10, 10, OutputFormat.PNG)

    decoded = _decode(data)
    assert decoded.format == "PNG"
    assert decoded.size == (60, 10)
    assert decoded.convert("RGB").tobytes() == striped.crop((0, 10, 60, 20)).tobytes()


def test_encode_band_when_spanning_stripes_then_full_width(striped):
    decoded = _decode(encode_band(striped, 5, 20, OutputFormat.PNG)).convert("RGB")

    assert decoded.size == (60, 20)
    assert decoded.getpixel((30, 0)) == (255, 0, 0)
    assert decoded.getpixel((30, 19)) == (0, 0, 255)


def test_encode_band_when_jpeg_then_jpeg_of_band_size(striped):
    data = encode_band(striped, 0, 30, OutputFormat.JPEG, quality=0.8)

    decoded = _decode(data)
    assert decoded.format == "JPEG"
    assert decoded.size == (60, 30)


def test_encode_band_when_lower_quality_then_smaller_output():
    img = Image.effect_noise((128, 128), 64).convert("RGB")

    high = encode_band(img, 0, 128, OutputFormat.JPEG, quality=0.95)
    low = encode_band(img, 0, 128, OutputFormat.JPEG, quality=0.1)

    assert len(low) < len(high)


@pytest.mark.parametrize("height", [0, -5])
def test_encode_band_when_empty_then_raises_error(striped, height):
    with pytest.raises(EncodeError, match="Cannot encode band"):
        encode_band(striped, 0, height, OutputFormat.PNG)


def test_encode_band_when_outside_image_then_raises_error(striped):
    with pytest.raises(EncodeError, match="outside image"):
        encode_band(striped, 25, 10, OutputFormat.PNG)


def test_encode_image_when_rgba_jpeg_then_converted():
    """JPEG has no alpha channel; RGBA input is converted first."""
    img = Image.new("RGBA", (10, 10), (10, 20, 30, 255))

    decoded = _decode(encode_image(img, OutputFormat.JPEG))

    assert decoded.mode == "RGB"


def test_encode_image_when_png_then_lossless():
    img = Image.new("RGB", (9, 4), (1, 2, 3))
    assert _decode(encode_image(img, OutputFormat.PNG)).getpixel((0, 0)) == (1, 2, 3)


@pytest.mark.parametrize(
    "quality,expected",
    [(0.0, 1), (0.005, 1), (0.5, 50), (0.92, 92), (0.955, 95), (1.0, 95)],
)
def test_jpeg_quality_when_fraction_then_clamped_percent(quality, expected):
    assert jpeg_quality(quality) == expected
