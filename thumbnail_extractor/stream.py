"""Forward-only buffered reader over a binary file object."""

from typing import BinaryIO


class ByteStream:
    """Forward-only view of a binary file with an absolute read cursor.

    Data is pulled from the underlying file in chunks, but callers only ever
    observe a single cursor that moves forward. Bytes behind the cursor are
    discarded and cannot be re-read.
    """

    def __init__(self, raw: BinaryIO, chunk_size: int = 65536) -> None:
        """
        Initialize byte stream.

        Args:
            raw: Binary file object opened for reading
            chunk_size: Number of bytes requested from the file per read
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        self._raw = raw
        self._chunk_size = chunk_size
        self._buffer = b""
        self._start = 0
        self._position = 0
        self._eof = False

    @property
    def position(self) -> int:
        """Absolute offset of the next unread byte."""
        return self._position

    @property
    def exhausted(self) -> bool:
        """True once every byte of the file has been consumed."""
        return self._eof and self.available == 0

    @property
    def available(self) -> int:
        """Number of bytes buffered ahead of the cursor."""
        return len(self._buffer) - self._start

    def buffered(self) -> bytes:
        """Return the buffered bytes ahead of the cursor without consuming them."""
        if self._start:
            self._buffer = self._buffer[self._start :]
            self._start = 0
        return self._buffer

    def fill(self) -> bool:
        """
        Pull one more chunk from the file into the buffer.

        Returns:
            False if the file had no more data
        """
        if self._eof:
            return False

        chunk = self._raw.read(self._chunk_size)
        if not chunk:
            self._eof = True
            return False

        self._buffer = self.buffered() + chunk
        return True

    def read(self, size: int) -> bytes:
        """
        Read up to size bytes; fewer are returned only at end of file.

        Args:
            size: Number of bytes wanted

        Returns:
            The bytes read
        """
        end = min(self._start + size, len(self._buffer))
        parts = [self._buffer[self._start : end]]
        self._start = end
        missing = size - len(parts[0])

        # Buffer is drained here; read the rest straight from the file
        while missing > 0 and not self._eof:
            chunk = self._raw.read(max(missing, self._chunk_size))
            if not chunk:
                self._eof = True
                break
            parts.append(chunk[:missing])
            self._buffer = chunk[missing:]
            self._start = 0
            missing -= len(parts[-1])

        data = b"".join(parts)
        self._position += len(data)
        return data

    def skip(self, size: int) -> int:
        """
        Advance the cursor by up to size bytes.

        Returns:
            Number of bytes actually skipped
        """
        skipped = 0
        while skipped < size:
            if self.available == 0 and not self.fill():
                break
            step = min(size - skipped, self.available)
            self._start += step
            skipped += step

        self._position += skipped
        return skipped
