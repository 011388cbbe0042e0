"""Internet checksum, hex dumps of byte sequences, and a program clock."""

from __future__ import annotations

import sys
import time
from typing import TextIO, Union

BytesLike = Union[bytes, bytearray, memoryview]

_PROGRAM_START = time.monotonic()


def timestamp_ms() -> int:
    """Return the number of milliseconds since the program started."""
    return int((time.monotonic() - _PROGRAM_START) * 1000)


class InternetChecksum:
    """Incremental Internet (one's complement) checksum.

    Evaluating the checksum over data that already holds a correct checksum
    yields zero. To compute a checksum, zero the checksum field first, add the
    data, then store ``value()`` in the field.
    """

    def __init__(self, initial_sum: int = 0) -> None:
        self._sum = initial_sum & 0xFFFFFFFF
        self._odd = False

    def add(self, data: BytesLike) -> None:
        """Add bytes to the running sum; byte parity carries across calls."""
        total = self._sum
        odd = self._odd
        for byte in bytes(data):
            total += byte if odd else byte << 8
            odd = not odd
        self._sum = total & 0xFFFFFFFF
        self._odd = odd

    def value(self) -> int:
        """Return the checksum in host byte order."""
        total = self._sum
        while total > 0xFFFF:
            total = (total >> 16) + (total & 0xFFFF)
        return ~total & 0xFFFF


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def format_hexdump(data: BytesLike, indent: int = 0) -> str:
    """Render bytes as a hex dump, 16 bytes per line with a character column."""
    data = bytes(data)
    pad = " " * indent
    out: list[str] = []
    chars: list[str] = []
    for printed, byte in enumerate(data):
        if printed % 16 == 0:
            if printed:
                out.append("    " + "".join(chars) + "\n")
                chars = []
            out.append(f"{pad}{printed:08x}:    ")
        elif printed % 2 == 0:
            out.append(" ")
        out.append(f"{byte:02x}")
        chars.append(_printable(byte))
    remainder = (16 - len(data) % 16) % 16
    out.append(" " * (2 * remainder + remainder // 2 + 4))
    out.append("".join(chars) or " ")
    out.append("\n\n")
    return "".join(out)


def hexdump(data: BytesLike, indent: int = 0, file: TextIO | None = None) -> None:
    """Write a hex dump of ``data`` to ``file`` (standard output by default)."""
    stream = sys.stdout if file is None else file
    stream.write(format_hexdump(data, indent))
    stream.flush()