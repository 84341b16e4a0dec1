import itertools
import sys
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import slicestream
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from slicestream.core.models import CropSpec, SourceImage  # noqa: E402


# Common test fixtures
@pytest.fixture
def make_source():
    """Factory for solid-colour SourceImages."""
    counter = itertools.count(1)

    def _create(
        width: int,
        height: int,
        color="red",
        *,
        crop: CropSpec | None = None,
        mode: str = "RGB",
        name: str | None = None,
    ) -> SourceImage:
        n = next(counter)
        img = Image.new(mode, (width, height), color)
        return SourceImage.from_image(
            img,
            image_id=f"img{n}",
            name=name or f"shot_{n}",
            crop=crop,
        )

    return _create


@pytest.fixture
def scenario_images(make_source):
    """Three images: 100x50, 200x80, 150x60."""
    return [
        make_source(100, 50, "red"),
        make_source(200, 80, "green"),
        make_source(150, 60, "blue"),
    ]


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image on disk."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path
