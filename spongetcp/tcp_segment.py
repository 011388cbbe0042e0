"""A TCP segment: header plus payload, with checksum handling."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Union

from spongetcp.buffer import Buffer, BufferList
from spongetcp.parser import NetParser, ParseError, ParseResult
from spongetcp.tcp_header import TCPHeader
from spongetcp.util import InternetChecksum

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass
class TCPSegment:
    """A TCP header together with its payload."""

    header: TCPHeader = field(default_factory=TCPHeader)
    payload: Buffer = field(default_factory=Buffer)

    def __post_init__(self) -> None:
        if not isinstance(self.payload, Buffer):
            self.payload = Buffer(self.payload)

    @classmethod
    def parse(cls, data: Buffer | BytesLike, datagram_layer_checksum: int = 0) -> TCPSegment:
        """Verify the checksum and parse a segment; raise ParseError on failure."""
        check = InternetChecksum(datagram_layer_checksum)
        check.add(bytes(data))
        if check.value():
            raise ParseError(ParseResult.BAD_CHECKSUM)

        parser = NetParser(data)
        try:
            header = TCPHeader.parse(parser)
        except ParseError:
            if parser.failed():
                raise ParseError(parser.error) from None
            raise
        return cls(header, parser.buffer())

    def serialize(self, datagram_layer_checksum: int = 0) -> BufferList:
        """Return header and payload with a freshly computed checksum."""
        header_out = dataclasses.replace(self.header, cksum=0)
        check = InternetChecksum(datagram_layer_checksum)
        check.add(header_out.serialize())
        check.add(bytes(self.payload))
        header_out.cksum = check.value()

        out = BufferList(header_out.serialize())
        out.append(self.payload)
        return out

    def length_in_sequence_space(self) -> int:
        """Payload length plus one for SYN and one for FIN."""
        return len(self.payload) + int(self.header.syn) + int(self.header.fin)