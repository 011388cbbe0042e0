"""TCP segment header parsing and serialization (options are skipped)."""

from __future__ import annotations

from dataclasses import dataclass, field

from spongetcp.parser import NetParser, ParseError, ParseResult, pack_u8, pack_u16, pack_u32
from spongetcp.wrapping_integers import WrappingInt32

HEADER_LENGTH = 20

_URG = 0b0010_0000
_ACK = 0b0001_0000
_PSH = 0b0000_1000
_RST = 0b0000_0100
_SYN = 0b0000_0010
_FIN = 0b0000_0001

_FLAG_NAMES = ("urg", "ack", "psh", "rst", "syn", "fin")


@dataclass(eq=False)
class TCPHeader:
    """The fixed fields of a TCP header."""

    sport: int = 0
    dport: int = 0
    seqno: WrappingInt32 = field(default_factory=lambda: WrappingInt32(0))
    ackno: WrappingInt32 = field(default_factory=lambda: WrappingInt32(0))
    doff: int = HEADER_LENGTH // 4
    urg: bool = False
    ack: bool = False
    psh: bool = False
    rst: bool = False
    syn: bool = False
    fin: bool = False
    win: int = 0
    cksum: int = 0
    uptr: int = 0

    @classmethod
    def parse(cls, parser: NetParser) -> TCPHeader:
        """Read a header from ``parser``, skipping any options; raise ParseError on failure."""
        header = cls()
        header.sport = parser.u16()
        header.dport = parser.u16()
        header.seqno = WrappingInt32(parser.u32())
        header.ackno = WrappingInt32(parser.u32())
        header.doff = parser.u8() >> 4

        flags = parser.u8()
        header.urg = bool(flags & _URG)
        header.ack = bool(flags & _ACK)
        header.psh = bool(flags & _PSH)
        header.rst = bool(flags & _RST)
        header.syn = bool(flags & _SYN)
        header.fin = bool(flags & _FIN)

        header.win = parser.u16()
        header.cksum = parser.u16()
        header.uptr = parser.u16()

        if header.doff < 5:
            raise ParseError(ParseResult.HEADER_TOO_SHORT)

        parser.remove_prefix(header.doff * 4 - HEADER_LENGTH)
        if parser.failed():
            raise ParseError(parser.error)
        return header

    def _flags_byte(self) -> int:
        return (
            (_URG if self.urg else 0)
            | (_ACK if self.ack else 0)
            | (_PSH if self.psh else 0)
            | (_RST if self.rst else 0)
            | (_SYN if self.syn else 0)
            | (_FIN if self.fin else 0)
        )

    def serialize(self) -> bytes:
        """Return the wire form, padded to ``4 * doff`` bytes; the checksum is not recomputed."""
        if self.doff < 5:
            raise ValueError("TCP header too short")
        raw = b"".join(
            (
                pack_u16(self.sport),
                pack_u16(self.dport),
                pack_u32(self.seqno.raw_value),
                pack_u32(self.ackno.raw_value),
                pack_u8(self.doff << 4),
                pack_u8(self._flags_byte()),
                pack_u16(self.win),
                pack_u16(self.cksum),
                pack_u16(self.uptr),
            )
        )
        return raw.ljust(4 * self.doff, b"\x00")[: 4 * self.doff]

    def __str__(self) -> str:
        flags = " ".join(f"{name}: {str(getattr(self, name)).lower()}" for name in _FLAG_NAMES)
        return (
            f"TCP source port: {self.sport:x}\n"
            f"TCP dest port: {self.dport:x}\n"
            f"TCP seqno: {self.seqno.raw_value:x}\n"
            f"TCP ackno: {self.ackno.raw_value:x}\n"
            f"TCP doff: {self.doff:x}\n"
            f"Flags: {flags}\n"
            f"TCP winsize: {self.win:x}\n"
            f"TCP cksum: {self.cksum:x}\n"
            f"TCP uptr: {self.uptr:x}\n"
        )

    def summary(self) -> str:
        """Return a one-line summary: flags, seqno, ackno and window."""
        flags = (
            ("S" if self.syn else "")
            + ("A" if self.ack else "")
            + ("R" if self.rst else "")
            + ("F" if self.fin else "")
        )
        return f"Header(flags={flags},seqno={self.seqno},ack={self.ackno},win={self.win})"

    def __eq__(self, other: object) -> bool:
        """Compare every field except ports and checksum."""
        if not isinstance(other, TCPHeader):
            return NotImplemented
        return (
            self.seqno == other.seqno
            and self.ackno == other.ackno
            and self.doff == other.doff
            and self.urg == other.urg
            and self.ack == other.ack
            and self.psh == other.psh
            and self.rst == other.rst
            and self.syn == other.syn
            and self.fin == other.fin
            and self.win == other.win
            and self.uptr == other.uptr
        )

    __hash__ = None  # type: ignore[assignment]