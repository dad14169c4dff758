"""Shared fixtures for building synthetic thumbnail containers."""

import struct

import pytest

from thumbnail_extractor import ExtractionSettings, ThumbnailExtractor


def pixel_pattern(width, height):
    """Deterministic, position-dependent BGR bytes."""
    return bytes((i * 7 + i // 3) % 256 for i in range(width * height * 3))


def make_record(width, height, pixels=None, marker=b"Image8", delimiter=b"\n"):
    if pixels is None:
        pixels = pixel_pattern(width, height)
    return marker + delimiter + struct.pack("<ii", width, height) + pixels


def decode_bmp(data):
    """Minimal bottom-up 24-bit BMP reader returning top-down BGR bytes."""
    width, height = struct.unpack_from("<ii", data, 18)
    offset = struct.unpack_from("<I", data, 10)[0]
    row_size = width * 3
    stride = row_size + (4 - row_size % 4) % 4
    rows = [
        data[offset + i * stride : offset + i * stride + row_size]
        for i in range(height)
    ]
    return width, height, b"".join(reversed(rows))


@pytest.fixture
def pattern():
    return pixel_pattern


@pytest.fixture
def input_file(tmp_path):
    """Write a blob to an input file and return its path."""

    def _write(blob, name="camera.bin"):
        path = tmp_path / name
        path.write_bytes(blob)
        return path

    return _write


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "out"


@pytest.fixture
def extractor(out_dir):
    return ThumbnailExtractor(ExtractionSettings(output_directory=out_dir))
