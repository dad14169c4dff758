"""BMP and PNG encoding of extracted pixel buffers."""

import io
import struct

from PIL import Image

from .payload import PixelBuffer

FILE_HEADER_SIZE = 14
INFO_HEADER_SIZE = 40
PIXEL_DATA_OFFSET = FILE_HEADER_SIZE + INFO_HEADER_SIZE
BITS_PER_PIXEL = 24

FILE_EXTENSIONS = {"bmp": ".bmp", "png": ".png"}


def row_padding(width: int) -> int:
    """Zero bytes appended to each 24-bit row to reach a multiple of 4."""
    return (4 - (width * 3) % 4) % 4


def bmp_file_size(width: int, height: int) -> int:
    return PIXEL_DATA_OFFSET + height * (width * 3 + row_padding(width))


def bmp_headers(width: int, height: int) -> bytes:
    """BITMAPFILEHEADER followed by BITMAPINFOHEADER for a bottom-up 24-bit image."""
    file_header = struct.pack(
        "<2sIHHI", b"BM", bmp_file_size(width, height), 0, 0, PIXEL_DATA_OFFSET
    )
    # Compression, image size, resolution and palette fields stay zero
    info_header = struct.pack(
        "<IiiHHIIiiII",
        INFO_HEADER_SIZE,
        width,
        height,
        1,
        BITS_PER_PIXEL,
        0,
        0,
        0,
        0,
        0,
        0,
    )
    return file_header + info_header


def encode_bmp(pixels: PixelBuffer) -> bytes:
    """
    Serialize pixels as an uncompressed 24-bit BMP.

    Rows are written bottom to top with zero padding. BGR input is written
    as-is; RGB input is converted first.

    Args:
        pixels: Pixel buffer to encode

    Returns:
        Complete BMP file contents
    """
    bgr = pixels.to_bgr()
    padding = b"\x00" * row_padding(bgr.width)

    parts = [bmp_headers(bgr.width, bgr.height)]
    for index in range(bgr.height - 1, -1, -1):
        parts.append(bgr.row(index))
        parts.append(padding)
    return b"".join(parts)


def encode_png(pixels: PixelBuffer) -> bytes:
    """Convert pixels to RGB and encode them as PNG with Pillow."""
    rgb = pixels.to_rgb()
    image = Image.frombytes("RGB", (rgb.width, rgb.height), rgb.data)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def encode_image(pixels: PixelBuffer, output_format: str) -> bytes:
    """Encode pixels in the named output format."""
    if output_format == "bmp":
        return encode_bmp(pixels)
    if output_format == "png":
        return encode_png(pixels)
    raise ValueError(f"Unsupported output format: {output_format}")
