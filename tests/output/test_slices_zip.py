"""
Tests for output.zip_writer
"""
import io
import zipfile

from slicestream.core.models import GeneratedSlice, OutputFormat
from slicestream.output import write_slices_zip


def _slice(index: int, filename: str, data: bytes = b"x") -> GeneratedSlice:
    return GeneratedSlice(
        index=index,
        top=(index - 1) * 10,
        width=40,
        height=10,
        filename=filename,
        data=data,
        format=OutputFormat.PNG,
    )


def _open(data: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(data))


def test_write_slices_zip_when_slices_then_names_in_order():
    slices = [_slice(1, "slice_01.png", b"one"), _slice(2, "slice_02.png", b"two")]

    with _open(write_slices_zip(slices)) as zf:
        assert zf.namelist() == ["slice_01.png", "slice_02.png"]
        assert zf.read("slice_02.png") == b"two"
        assert all(info.compress_type == zipfile.ZIP_STORED for info in zf.infolist())


def test_write_slices_zip_when_duplicate_names_then_suffixed():
    """A template like "fixed" with a repeated name must not lose data."""
    slices = [_slice(1, "shot.jpg"), _slice(2, "shot.jpg"), _slice(3, "shot.jpg")]

    with _open(write_slices_zip(slices)) as zf:
        assert zf.namelist() == ["shot.jpg", "shot (1).jpg", "shot (2).jpg"]


def test_write_slices_zip_when_manifest_then_one_line_per_slice():
    slices = [_slice(1, "a.png", b"abc"), _slice(2, "b.png", b"de")]

    with _open(write_slices_zip(slices, include_manifest=True)) as zf:
        manifest = zf.read("manifest.txt").decode().splitlines()

    assert manifest == [
        "1\ta.png\t40x10\ty=0\t3 bytes",
        "2\tb.png\t40x10\ty=10\t2 bytes",
    ]


def test_write_slices_zip_when_empty_then_valid_archive():
    with _open(write_slices_zip([])) as zf:
        assert zf.namelist() == []
