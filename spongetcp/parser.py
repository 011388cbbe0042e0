"""Network-byte-order field parsing and serialization."""

from __future__ import annotations

from enum import Enum
from typing import Union

from spongetcp.buffer import Buffer

BytesLike = Union[bytes, bytearray, memoryview]


class ParseResult(Enum):
    """Outcome of parsing a datagram, segment, frame or message."""

    NO_ERROR = 0
    BAD_CHECKSUM = 1
    PACKET_TOO_SHORT = 2
    WRONG_IP_VERSION = 3
    HEADER_TOO_SHORT = 4
    TRUNCATED_PACKET = 5
    UNSUPPORTED = 6

    def __str__(self) -> str:
        return _NAMES[self]


_NAMES = {
    ParseResult.NO_ERROR: "NoError",
    ParseResult.BAD_CHECKSUM: "BadChecksum",
    ParseResult.PACKET_TOO_SHORT: "PacketTooShort",
    ParseResult.WRONG_IP_VERSION: "WrongIPVersion",
    ParseResult.HEADER_TOO_SHORT: "HeaderTooShort",
    ParseResult.TRUNCATED_PACKET: "TruncatedPacket",
    ParseResult.UNSUPPORTED: "Unsupported",
}


class ParseError(Exception):
    """Raised when parsing fails; ``result`` says why."""

    def __init__(self, result: ParseResult) -> None:
        super().__init__(str(result))
        self.result = result


class NetParser:
    """Reads big-endian integers from a Buffer, recording the first failure.

    Once ``error`` is set, every read returns 0 and consumes nothing.
    """

    def __init__(self, buffer: Buffer | BytesLike) -> None:
        self._buffer = Buffer(buffer)
        self.error = ParseResult.NO_ERROR

    def buffer(self) -> Buffer:
        """Return a copy of the unparsed remainder."""
        return Buffer(self._buffer)

    def failed(self) -> bool:
        """Return whether an error has been recorded."""
        return self.error is not ParseResult.NO_ERROR

    def _check_size(self, size: int) -> None:
        if size > len(self._buffer):
            self.error = ParseResult.PACKET_TOO_SHORT

    def _parse_int(self, width: int) -> int:
        self._check_size(width)
        if self.failed():
            return 0
        value = int.from_bytes(self._buffer.view()[:width], "big")
        self._buffer.remove_prefix(width)
        return value

    def u8(self) -> int:
        """Parse an 8-bit integer."""
        return self._parse_int(1)

    def u16(self) -> int:
        """Parse a 16-bit integer in network byte order."""
        return self._parse_int(2)

    def u32(self) -> int:
        """Parse a 32-bit integer in network byte order."""
        return self._parse_int(4)

    def remove_prefix(self, n: int) -> None:
        """Skip ``n`` bytes."""
        self._check_size(n)
        if self.failed():
            return
        self._buffer.remove_prefix(n)


def _pack(value: int, width: int) -> bytes:
    return (value & ((1 << (8 * width)) - 1)).to_bytes(width, "big")


def pack_u8(value: int) -> bytes:
    """Serialize the low 8 bits of ``value``."""
    return _pack(value, 1)


def pack_u16(value: int) -> bytes:
    """Serialize the low 16 bits of ``value`` in network byte order."""
    return _pack(value, 2)


def pack_u32(value: int) -> bytes:
    """Serialize the low 32 bits of ``value`` in network byte order."""
    return _pack(value, 4)