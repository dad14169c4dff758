"""Decoding of the width/height pair that follows a marker."""

import struct
from dataclasses import dataclass
from typing import Union

from .errors import Skip, SkipReason
from .stream import ByteStream

DIMENSION_FORMAT = "<ii"
DIMENSION_SIZE = struct.calcsize(DIMENSION_FORMAT)
BYTES_PER_PIXEL = 3


@dataclass(frozen=True)
class Dimensions:
    """Image size in pixels, as stored in the record header."""

    width: int
    height: int

    @classmethod
    def from_bytes(cls, data: bytes) -> "Dimensions":
        """Decode two little-endian signed 32-bit integers."""
        width, height = struct.unpack(DIMENSION_FORMAT, data)
        return cls(width=width, height=height)

    @property
    def payload_size(self) -> int:
        """Number of pixel bytes the record carries."""
        return self.width * self.height * BYTES_PER_PIXEL

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


def read_dimensions(stream: ByteStream) -> Union[Dimensions, Skip]:
    """
    Read width then height from the current stream position.

    Values are not range checked here.

    Args:
        stream: Stream positioned at the dimension fields

    Returns:
        Decoded dimensions, or a truncated-stream skip
    """
    offset = stream.position
    data = stream.read(DIMENSION_SIZE)
    if len(data) < DIMENSION_SIZE:
        return Skip(
            SkipReason.TRUNCATED_STREAM,
            f"expected {DIMENSION_SIZE} dimension bytes, got {len(data)}",
            offset,
        )
    return Dimensions.from_bytes(data)
