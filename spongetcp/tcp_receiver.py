"""The receiving half of a TCP endpoint."""

from __future__ import annotations

from enum import Enum

from spongetcp.byte_stream import ByteStream
from spongetcp.stream_reassembler import StreamReassembler
from spongetcp.tcp_segment import TCPSegment
from spongetcp.wrapping_integers import WrappingInt32, unwrap, wrap


class _Phase(Enum):
    LISTEN = 0
    SYN_RECEIVED = 1
    FIN_RECEIVED = 2


class TCPReceiver:
    """Reassembles inbound segments and computes the ackno and window to advertise."""

    def __init__(self, capacity: int) -> None:
        self._capacity = capacity
        self._reassembler = StreamReassembler(capacity)
        self._isn: WrappingInt32 | None = None
        self._checkpoint = 0
        self._phase = _Phase.LISTEN

    def segment_received(self, seg: TCPSegment) -> None:
        """Handle an inbound segment; segments before the first SYN are ignored."""
        header = seg.header
        if self._isn is None and not header.syn:
            return

        if self._phase is _Phase.LISTEN and header.syn:
            self._phase = _Phase.SYN_RECEIVED
            self._isn = header.seqno
            self._checkpoint = 0
        if self._phase is _Phase.SYN_RECEIVED and header.fin:
            self._phase = _Phase.FIN_RECEIVED

        assert self._isn is not None
        absolute = unwrap(header.seqno, self._isn, self._checkpoint)
        self._checkpoint += seg.length_in_sequence_space()
        stream_index = absolute + int(header.syn) - 1
        self._reassembler.push_substring(seg.payload.copy(), stream_index, header.fin)

    def ackno(self) -> WrappingInt32 | None:
        """Sequence number of the first byte not yet received, or None before SYN."""
        if self._phase is _Phase.LISTEN or self._isn is None:
            return None
        absolute = self._reassembler.ackno() + 1
        if self.stream_out().input_ended():
            absolute += 1
        return wrap(absolute, self._isn)

    def window_size(self) -> int:
        """Capacity minus the bytes reassembled but not yet read."""
        return self._capacity - self.stream_out().buffer_size()

    def unassembled_bytes(self) -> int:
        """Number of bytes stored but not yet reassembled."""
        return self._reassembler.unassembled_bytes()

    def stream_out(self) -> ByteStream:
        """Return the reassembled inbound byte stream."""
        return self._reassembler.stream_out()