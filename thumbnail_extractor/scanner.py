"""Marker search over a forward-only byte stream."""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from .stream import ByteStream

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MarkerMatch:
    """A marker occurrence found in the input."""

    marker: bytes
    offset: int

    @property
    def end(self) -> int:
        return self.offset + len(self.marker)


class MarkerScanner:
    """Finds the next occurrence of any configured marker."""

    def __init__(self, markers: Sequence[bytes]) -> None:
        """
        Initialize marker scanner.

        Args:
            markers: Byte strings to search for, in priority order
        """
        if not markers:
            raise ValueError("At least one marker is required")
        if any(not marker for marker in markers):
            raise ValueError("Markers must not be empty")

        self.markers: List[bytes] = [bytes(marker) for marker in markers]
        self.window = max(len(marker) for marker in self.markers)

    def _earliest_match(self, data: bytes) -> Optional[MarkerMatch]:
        """Match completing first in data; ties go to the first marker."""
        best: Optional[MarkerMatch] = None
        for marker in self.markers:
            index = data.find(marker)
            if index == -1:
                continue
            candidate = MarkerMatch(marker=marker, offset=index)
            if best is None or candidate.end < best.end:
                best = candidate
        return best

    def find_next(self, stream: ByteStream) -> Optional[MarkerMatch]:
        """
        Advance stream to just past the next marker.

        The search window starts empty at the current cursor, so a marker
        never matches across bytes consumed before this call.

        Args:
            stream: Stream to consume

        Returns:
            The match with its absolute offset, or None once the stream is
            exhausted without a match
        """
        while True:
            data = stream.buffered()
            match = self._earliest_match(data)
            if match is not None:
                absolute = stream.position + match.offset
                stream.skip(match.end)
                logger.debug(f"Marker {match.marker!r} found at offset {absolute}")
                return MarkerMatch(marker=match.marker, offset=absolute)

            # Keep only a partial-marker tail for the next chunk
            keep = self.window - 1
            if len(data) > keep:
                stream.skip(len(data) - keep)

            if not stream.fill():
                stream.skip(stream.available)
                return None
