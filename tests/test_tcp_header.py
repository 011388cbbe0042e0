import random

import pytest

from spongetcp.parser import NetParser, ParseError, ParseResult
from spongetcp.tcp_header import TCPHeader
from spongetcp.util import InternetChecksum
from spongetcp.wrapping_integers import WrappingInt32


def _inet_cksum(data):
    check = InternetChecksum()
    check.add(bytes(data))
    return check.value()


def _random_header(rng):
    header = bytearray(rng.getrandbits(8) for _ in range(20))
    header[12] = 0x50
    header[16] = header[17] = 0
    checksum = _inet_cksum(header)
    header[16] = checksum >> 8
    header[17] = checksum & 0xFF
    return header, checksum


def test_parse_random_headers():
    rng = random.Random(3)
    for _ in range(32):
        raw, checksum = _random_header(rng)
        h = TCPHeader.parse(NetParser(bytes(raw)))
        assert h.sport == (raw[0] << 8) | raw[1]
        assert h.dport == (raw[2] << 8) | raw[3]
        assert h.seqno.raw_value == int.from_bytes(raw[4:8], "big")
        assert h.ackno.raw_value == int.from_bytes(raw[8:12], "big")
        flags = (
            (0x20 if h.urg else 0) | (0x10 if h.ack else 0) | (0x08 if h.psh else 0)
            | (0x04 if h.rst else 0) | (0x02 if h.syn else 0) | (0x01 if h.fin else 0)
        )
        assert flags == raw[13] & 0x3F
        assert h.win == (raw[14] << 8) | raw[15]
        assert h.cksum == checksum
        assert h.uptr == (raw[18] << 8) | raw[19]


def test_bad_doff_is_header_too_short():
    rng = random.Random(4)
    for _ in range(32):
        raw, _ = _random_header(rng)
        raw[12] = 0x40
        raw[16] = raw[17] = 0
        new_cksum = _inet_cksum(raw)
        raw[16] = new_cksum >> 8
        raw[17] = new_cksum & 0xFF
        with pytest.raises(ParseError) as info:
            TCPHeader.parse(NetParser(bytes(raw)))
        assert info.value.result is ParseResult.HEADER_TOO_SHORT


def test_doff_longer_than_data_is_packet_too_short():
    rng = random.Random(5)
    for _ in range(32):
        raw, _ = _random_header(rng)
        raw[12] = 0x60
        with pytest.raises(ParseError) as info:
            TCPHeader.parse(NetParser(bytes(raw)))
        assert info.value.result is ParseResult.PACKET_TOO_SHORT


def test_truncated_header_is_packet_too_short():
    rng = random.Random(6)
    for _ in range(32):
        raw, _ = _random_header(rng)
        with pytest.raises(ParseError) as info:
            TCPHeader.parse(NetParser(bytes(raw[:16])))
        assert info.value.result is ParseResult.PACKET_TOO_SHORT


def test_serialize_matches_wire_bytes():
    rng = random.Random(8)
    for _ in range(32):
        raw, _ = _random_header(rng)
        h = TCPHeader.parse(NetParser(bytes(raw)))
        expected = bytearray(raw)
        expected[13] &= 0x3F
        assert h.serialize() == bytes(expected)


def test_reparse_after_serialize_keeps_all_fields():
    h = TCPHeader(sport=1, dport=2, seqno=WrappingInt32(3), ackno=WrappingInt32(4),
                  ack=True, psh=True, win=500, cksum=77, uptr=9)
    again = TCPHeader.parse(NetParser(h.serialize()))
    assert again == h
    assert (again.sport, again.dport, again.cksum) == (1, 2, 77)


def test_options_are_padded_and_skipped():
    h = TCPHeader(doff=6, syn=True)
    wire = h.serialize()
    assert len(wire) == 24
    assert wire[20:] == b"\x00\x00\x00\x00"
    parser = NetParser(wire + b"data")
    parsed = TCPHeader.parse(parser)
    assert parsed.doff == 6
    assert bytes(parser.buffer()) == b"data"


def test_serialize_rejects_short_doff():
    with pytest.raises(ValueError):
        TCPHeader(doff=4).serialize()


def test_summary():
    h = TCPHeader(syn=True, ack=True, seqno=WrappingInt32(5), ackno=WrappingInt32(6), win=100)
    assert h.summary() == "Header(flags=SA,seqno=5,ack=6,win=100)"


def test_str_is_hex_and_boolalpha():
    text = str(TCPHeader(sport=255, syn=True))
    lines = text.splitlines()
    assert lines[0] == "TCP source port: ff"
    assert lines[5] == "Flags: urg: false ack: false psh: false rst: false syn: true fin: false"


def test_equality_ignores_ports_and_checksum():
    assert TCPHeader(sport=1, dport=2, cksum=3) == TCPHeader()
    assert TCPHeader(win=1) != TCPHeader()