"""Error types and per-record outcomes."""

from dataclasses import dataclass
from enum import Enum


class ThumbnailExtractorError(Exception):
    """Base class for fatal extractor errors."""

    pass


class InputFileError(ThumbnailExtractorError):
    """The input file could not be opened or read."""

    pass


class SkipReason(Enum):
    """Why a record was abandoned. Every reason is local to one record."""

    TRUNCATED_STREAM = "truncated_stream"
    OVERSIZE_IMAGE = "oversize_image"
    INVALID_DIMENSION = "invalid_dimension"
    IO_ERROR = "io_error"


@dataclass(frozen=True)
class Skip:
    """Outcome of a step that could not produce its value."""

    reason: SkipReason
    message: str
    offset: int = -1

    def __str__(self) -> str:
        return f"{self.reason.value} at offset {self.offset}: {self.message}"
