"""Reassembly of possibly out-of-order, overlapping substrings into a byte stream."""

from __future__ import annotations

from typing import Union

from spongetcp.byte_stream import ByteStream

BytesLike = Union[bytes, bytearray, memoryview]

_U64 = (1 << 64) - 1


class StreamReassembler:
    """Collects substrings of a stream by index and writes contiguous bytes in order.

    Bytes that cannot yet be written are held by index until the gap before
    them is filled.
    """

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._pending: dict[int, int] = {}
        self._unassembled = 0
        self._next_index = 0
        self._eof_seen = False
        self._output = ByteStream(capacity)

    def push_substring(self, data: BytesLike, index: int, eof: bool) -> None:
        """Accept ``data`` starting at stream position ``index``.

        ``eof`` marks the last byte of ``data`` as the last byte of the stream;
        the output is ended once nothing remains unassembled.
        """
        index &= _U64
        for offset, byte in enumerate(bytes(data)):
            position = (index + offset) & _U64
            if self._next_index > position:
                continue
            if position not in self._pending:
                self._unassembled += 1
            self._pending[position] = byte

        self._try_reassemble(index)

        if eof:
            self._eof_seen = True
        if self._eof_seen and self.empty():
            self._output.end_input()

    def _try_reassemble(self, index: int) -> None:
        if index > self._next_index:
            return
        room = self._output.remaining_capacity()
        assembled = bytearray()
        position = self._next_index
        while room > 0 and position in self._pending:
            assembled.append(self._pending.pop(position))
            position += 1
            room -= 1
        written = self._output.write(assembled)
        self._next_index += written
        self._unassembled -= written

    def stream_out(self) -> ByteStream:
        """Return the reassembled in-order byte stream."""
        return self._output

    def unassembled_bytes(self) -> int:
        """Number of distinct bytes stored but not yet reassembled."""
        return self._unassembled

    def ackno(self) -> int:
        """Index of the next byte expected, i.e. how many bytes were reassembled."""
        return self._next_index

    def empty(self) -> bool:
        """Return whether no bytes are waiting to be assembled."""
        return self._unassembled == 0