import io

import pytest

from thumbnail_extractor.dimensions import Dimensions
from thumbnail_extractor.errors import Skip, SkipReason
from thumbnail_extractor.payload import PixelBuffer, extract_payload, swap_red_blue
from thumbnail_extractor.stream import ByteStream


def test_reads_exact_payload():
    data = bytes(range(2 * 2 * 3)) + b"after"
    stream = ByteStream(io.BytesIO(data))
    pixels = extract_payload(stream, Dimensions(2, 2))

    assert isinstance(pixels, PixelBuffer)
    assert pixels.data == data[:12]
    assert pixels.row(1) == data[6:12]
    assert stream.read(5) == b"after"


@pytest.mark.parametrize(
    "width,height,reason",
    [
        (2001, 100, SkipReason.OVERSIZE_IMAGE),
        (100, 2001, SkipReason.OVERSIZE_IMAGE),
        (0, 10, SkipReason.INVALID_DIMENSION),
        (10, -1, SkipReason.INVALID_DIMENSION),
    ],
)
def test_rejected_dimensions_read_nothing(width, height, reason):
    stream = ByteStream(io.BytesIO(b"\x00" * 64))
    result = extract_payload(stream, Dimensions(width, height))

    assert isinstance(result, Skip)
    assert result.reason is reason
    assert stream.position == 0


def test_ceiling_is_inclusive():
    stream = ByteStream(io.BytesIO(b"\x01" * 6))
    result = extract_payload(stream, Dimensions(2, 1), max_width=2, max_height=1)
    assert isinstance(result, PixelBuffer)


def test_truncated_payload():
    stream = ByteStream(io.BytesIO(b"\x00" * 10))
    result = extract_payload(stream, Dimensions(2, 2))

    assert result.reason is SkipReason.TRUNCATED_STREAM
    assert "expected 12" in result.message


def test_channel_conversion_returns_copy():
    original = bytes([1, 2, 3, 4, 5, 6])
    pixels = PixelBuffer(original, 2, 1)
    rgb = pixels.to_rgb()

    assert rgb.data == bytes([3, 2, 1, 6, 5, 4])
    assert rgb.channel_order == "rgb"
    assert pixels.data == original
    assert pixels.to_bgr() is pixels
    assert rgb.to_bgr().data == original


def test_swap_red_blue_is_an_involution():
    data = bytes(range(30))
    assert swap_red_blue(swap_red_blue(data)) == data


def test_pixel_buffer_checks_length():
    with pytest.raises(ValueError):
        PixelBuffer(b"\x00" * 5, 1, 2)
    with pytest.raises(ValueError):
        PixelBuffer(b"\x00" * 3, 1, 1, channel_order="rgba")
