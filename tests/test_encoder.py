import io
import struct

import pytest
from PIL import Image

from conftest import decode_bmp
from thumbnail_extractor.encoder import (
    bmp_file_size,
    encode_bmp,
    encode_image,
    encode_png,
    row_padding,
)
from thumbnail_extractor.payload import PixelBuffer, swap_red_blue


@pytest.mark.parametrize(
    "width,padding", [(1, 1), (2, 2), (3, 3), (4, 0), (5, 1), (8, 0)]
)
def test_row_padding(width, padding):
    assert row_padding(width) == padding
    assert (width * 3 + padding) % 4 == 0


def test_headers(pattern):
    pixels = PixelBuffer(pattern(5, 3), 5, 3)
    data = encode_bmp(pixels)

    assert data[:2] == b"BM"
    assert struct.unpack_from("<I", data, 2)[0] == 54 + 3 * (15 + 1) == len(data)
    assert data[6:10] == b"\x00" * 4
    assert struct.unpack_from("<I", data, 10)[0] == 54

    assert struct.unpack_from("<I", data, 14)[0] == 40
    assert struct.unpack_from("<ii", data, 18) == (5, 3)
    assert struct.unpack_from("<HH", data, 26) == (1, 24)
    assert data[30:54] == b"\x00" * 24


def test_file_size_without_padding():
    assert bmp_file_size(4, 2) == 54 + 2 * 12
    assert len(encode_bmp(PixelBuffer(b"\x00" * 24, 4, 2))) == 54 + 24


def test_rows_written_bottom_up_with_zero_padding():
    top = bytes([1, 2, 3])
    bottom = bytes([4, 5, 6])
    data = encode_bmp(PixelBuffer(top + bottom, 1, 2))

    assert data[54:58] == bottom + b"\x00"
    assert data[58:62] == top + b"\x00"


def test_bgr_written_unchanged(pattern):
    source = pattern(7, 5)
    width, height, decoded = decode_bmp(encode_bmp(PixelBuffer(source, 7, 5)))

    assert (width, height) == (7, 5)
    assert decoded == source


def test_rgb_source_is_swapped_for_bmp():
    pixels = bytes([10, 20, 30, 0, 0, 0, 0, 0, 0, 0, 0, 0])
    data = encode_bmp(PixelBuffer(pixels, 4, 1, "rgb"))
    assert data[54:57] == bytes([30, 20, 10])


def test_bmp_readable_by_pillow(pattern):
    source = pattern(6, 4)
    image = Image.open(io.BytesIO(encode_bmp(PixelBuffer(source, 6, 4))))

    assert image.size == (6, 4)
    assert image.convert("RGB").tobytes() == swap_red_blue(source)


def test_png_is_rgb(pattern):
    source = pattern(3, 2)
    image = Image.open(io.BytesIO(encode_png(PixelBuffer(source, 3, 2))))

    assert image.format == "PNG"
    assert image.size == (3, 2)
    assert image.convert("RGB").tobytes() == swap_red_blue(source)


def test_encode_image_rejects_unknown_format():
    with pytest.raises(ValueError):
        encode_image(PixelBuffer(b"\x00" * 3, 1, 1), "gif")


def test_encoding_is_deterministic(pattern):
    pixels = PixelBuffer(pattern(9, 9), 9, 9)
    assert encode_bmp(pixels) == encode_bmp(pixels)
    assert encode_png(pixels) == encode_png(pixels)
