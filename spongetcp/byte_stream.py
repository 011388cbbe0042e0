"""A flow-controlled in-memory byte stream."""

from __future__ import annotations

from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


class ByteStream:
    """An in-order byte stream with a fixed capacity.

    Bytes are written on the input side and read from the output side; the
    writer can end the input.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._buffer = bytearray()
        self._bytes_read = 0
        self._bytes_written = 0
        self._input_ended = False
        self._error = False

    def write(self, data: BytesLike) -> int:
        """Write as many bytes as fit and return how many were accepted."""
        accepted = bytes(data[: self.remaining_capacity()])
        self._buffer += accepted
        self._bytes_written += len(accepted)
        return len(accepted)

    def remaining_capacity(self) -> int:
        """Return how many more bytes the stream has room for."""
        return self._capacity - len(self._buffer)

    def end_input(self) -> None:
        """Signal that no more bytes will be written."""
        self._input_ended = True

    def set_error(self) -> None:
        """Mark the stream as having suffered an error."""
        self._error = True

    def peek_output(self, length: int) -> bytes:
        """Return up to ``length`` bytes from the output side without removing them."""
        return bytes(self._buffer[:length])

    def pop_output(self, length: int) -> None:
        """Remove up to ``length`` bytes from the output side."""
        count = min(length, len(self._buffer))
        del self._buffer[:count]
        self._bytes_read += count

    def read(self, length: int) -> bytes:
        """Remove and return up to ``length`` bytes."""
        if self._bytes_written <= self._bytes_read:
            return b""
        result = self.peek_output(length)
        self.pop_output(length)
        return result

    def input_ended(self) -> bool:
        """Return whether the writer has ended the input."""
        return self._input_ended

    def error(self) -> bool:
        """Return whether the stream has suffered an error."""
        return self._error

    def buffer_size(self) -> int:
        """Return how many bytes can currently be read."""
        return len(self._buffer)

    def buffer_empty(self) -> bool:
        """Return whether the buffer holds no bytes."""
        return not self._buffer

    def eof(self) -> bool:
        """Return whether input has ended and every byte has been read."""
        return self._input_ended and self.buffer_empty()

    def bytes_written(self) -> int:
        """Total number of bytes accepted by ``write``."""
        return self._bytes_written

    def bytes_read(self) -> int:
        """Total number of bytes popped from the output side."""
        return self._bytes_read