"""Pixel payload extraction with a dimension ceiling."""

from dataclasses import dataclass
from typing import Optional, Union

from .dimensions import BYTES_PER_PIXEL, Dimensions
from .errors import Skip, SkipReason
from .stream import ByteStream

CHANNEL_ORDERS = ("bgr", "rgb")


def swap_red_blue(data: bytes) -> bytes:
    """Copy of packed 3-byte pixels with the first and third channel swapped."""
    swapped = bytearray(data)
    swapped[0::3], swapped[2::3] = data[2::3], data[0::3]
    return bytes(swapped)


@dataclass(frozen=True)
class PixelBuffer:
    """Packed row-major pixels, top row first, 3 bytes per pixel."""

    data: bytes
    width: int
    height: int
    channel_order: str = "bgr"

    def __post_init__(self) -> None:
        if self.channel_order not in CHANNEL_ORDERS:
            raise ValueError(f"channel_order must be one of {CHANNEL_ORDERS}")
        if len(self.data) != self.width * self.height * BYTES_PER_PIXEL:
            raise ValueError(
                f"Pixel data is {len(self.data)} bytes, "
                f"expected {self.width * self.height * BYTES_PER_PIXEL} "
                f"for {self.width}x{self.height}"
            )

    @property
    def stride(self) -> int:
        return self.width * BYTES_PER_PIXEL

    def row(self, index: int) -> bytes:
        """Bytes of source row index (0 is the top row)."""
        start = index * self.stride
        return self.data[start : start + self.stride]

    def to_bgr(self) -> "PixelBuffer":
        """Buffer in BGR order; self when no conversion is needed."""
        if self.channel_order == "bgr":
            return self
        return PixelBuffer(swap_red_blue(self.data), self.width, self.height, "bgr")

    def to_rgb(self) -> "PixelBuffer":
        """Buffer in RGB order; self when no conversion is needed."""
        if self.channel_order == "rgb":
            return self
        return PixelBuffer(swap_red_blue(self.data), self.width, self.height, "rgb")


def check_dimensions(
    dimensions: Dimensions, max_width: int, max_height: int, offset: int = -1
) -> Optional[Skip]:
    """
    Check dimensions against the positive range and the ceiling.

    Returns:
        None if extraction may proceed, otherwise the skip outcome
    """
    if dimensions.width <= 0 or dimensions.height <= 0:
        return Skip(
            SkipReason.INVALID_DIMENSION,
            f"non-positive dimensions {dimensions}",
            offset,
        )
    if dimensions.width > max_width or dimensions.height > max_height:
        return Skip(
            SkipReason.OVERSIZE_IMAGE,
            f"dimensions {dimensions} exceed ceiling {max_width}x{max_height}",
            offset,
        )
    return None


def extract_payload(
    stream: ByteStream,
    dimensions: Dimensions,
    max_width: int = 2000,
    max_height: int = 2000,
    channel_order: str = "bgr",
) -> Union[PixelBuffer, Skip]:
    """
    Read the pixel payload for a record.

    Nothing is read when the dimensions are rejected.

    Args:
        stream: Stream positioned at the first pixel byte
        dimensions: Decoded record dimensions
        max_width: Width ceiling
        max_height: Height ceiling
        channel_order: Channel order the payload is declared to have

    Returns:
        The pixel buffer, or the reason it could not be read
    """
    offset = stream.position
    rejected = check_dimensions(dimensions, max_width, max_height, offset)
    if rejected is not None:
        return rejected

    size = dimensions.payload_size
    data = stream.read(size)
    if len(data) < size:
        return Skip(
            SkipReason.TRUNCATED_STREAM,
            f"expected {size} pixel bytes for {dimensions}, got {len(data)}",
            offset,
        )

    return PixelBuffer(data, dimensions.width, dimensions.height, channel_order)
