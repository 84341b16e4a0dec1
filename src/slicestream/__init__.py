"""Top-level package for SliceStream.

Provides subpackages:
- slicestream.core – data models (crop specs, images, slice policies) and errors
- slicestream.stitching – loading, crop/pad, resampling and vertical stitching
- slicestream.slicing – partitioning, band encoding and filename templating
- slicestream.output – export helpers for generated slices
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import version as pkg_version, PackageNotFoundError

    try:
        return pkg_version("slicestream")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

from .core.errors import (  # noqa: E402
    SliceStreamError,
    InvalidCropError,
    EmptyInputError,
    RasterContextError,
    EncodeError,
    InvalidPolicyError,
    ImageLoadError,
)
from .core.models import (  # noqa: E402
    CropSpec,
    SourceImage,
    Composite,
    ImagePlacement,
    SliceMode,
    OutputFormat,
    SlicePolicy,
    Band,
    GeneratedSlice,
    SliceFailure,
    SliceBatch,
    Preset,
)
from .config import StitchConfig  # noqa: E402
from .stitching import load_source_image, stitch_images  # noqa: E402
from .slicing import (  # noqa: E402
    EncodeFailurePolicy,
    partition_heights,
    expand_filename,
    slice_composite,
)
from .pipeline import build_composite, run_pipeline, PipelineResult  # noqa: E402
from .session import StitchSession  # noqa: E402

__all__: list[str] = [
    "__version__",
    # Errors
    "SliceStreamError",
    "InvalidCropError",
    "EmptyInputError",
    "RasterContextError",
    "EncodeError",
    "InvalidPolicyError",
    "ImageLoadError",
    # Models
    "CropSpec",
    "SourceImage",
    "Composite",
    "ImagePlacement",
    "SliceMode",
    "OutputFormat",
    "SlicePolicy",
    "Band",
    "GeneratedSlice",
    "SliceFailure",
    "SliceBatch",
    "Preset",
    # Config
    "StitchConfig",
    # Functions
    "load_source_image",
    "stitch_images",
    "partition_heights",
    "expand_filename",
    "slice_composite",
    "EncodeFailurePolicy",
    "build_composite",
    "run_pipeline",
    "PipelineResult",
    "StitchSession",
]
