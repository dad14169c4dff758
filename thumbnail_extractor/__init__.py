"""
Thumbnail Extractor - recovery of raw thumbnails embedded in binary files.

Scans a file for "Image8" records (marker, delimiter byte, 32-bit
little-endian width and height, raw BGR pixels) and re-encodes every
record as a standalone BMP or PNG file.
"""

__version__ = "1.0.0"

from .config import ExtractionSettings
from .dimensions import Dimensions, read_dimensions
from .encoder import encode_bmp, encode_png
from .errors import InputFileError, Skip, SkipReason, ThumbnailExtractorError
from .extractor import ExtractedImage, ThumbnailExtractor
from .file_manager import FileManager
from .payload import PixelBuffer, extract_payload
from .scanner import MarkerMatch, MarkerScanner
from .stream import ByteStream

__all__ = [
    "ByteStream",
    "Dimensions",
    "ExtractedImage",
    "ExtractionSettings",
    "FileManager",
    "InputFileError",
    "MarkerMatch",
    "MarkerScanner",
    "PixelBuffer",
    "Skip",
    "SkipReason",
    "ThumbnailExtractor",
    "ThumbnailExtractorError",
    "encode_bmp",
    "encode_png",
    "extract_payload",
    "read_dimensions",
]
