import pytest

from spongetcp.buffer import Buffer
from spongetcp.parser import (
    NetParser,
    ParseError,
    ParseResult,
    pack_u8,
    pack_u16,
    pack_u32,
)


def test_round_trip_all_widths():
    data = pack_u8(0xAB) + pack_u16(0xBEEF) + pack_u32(0xDEADBEEF)
    parser = NetParser(data)
    assert parser.u8() == 0xAB
    assert parser.u16() == 0xBEEF
    assert parser.u32() == 0xDEADBEEF
    assert not parser.failed()
    assert len(parser.buffer()) == 0


def test_pack_is_big_endian():
    assert pack_u16(0x1234) == b"\x12\x34"
    assert pack_u32(0x01020304) == b"\x01\x02\x03\x04"


def test_pack_truncates_to_width():
    assert pack_u8(0x1FF) == b"\xff"
    assert pack_u16(0x12345) == b"\x23\x45"
    assert len(pack_u32(1 << 40)) == 4


def test_short_read_sets_sticky_error():
    parser = NetParser(b"\x01\x02\x03")
    assert parser.u32() == 0
    assert parser.error is ParseResult.PACKET_TOO_SHORT
    assert parser.failed()
    assert len(parser.buffer()) == 3
    assert parser.u8() == 0
    assert len(parser.buffer()) == 3


def test_remove_prefix():
    parser = NetParser(b"abcdef")
    parser.remove_prefix(2)
    assert parser.u8() == ord("c")
    parser.remove_prefix(10)
    assert parser.error is ParseResult.PACKET_TOO_SHORT
    assert bytes(parser.buffer()) == b"def"


def test_preset_error_blocks_reads():
    parser = NetParser(b"\x05")
    parser.error = ParseResult.BAD_CHECKSUM
    assert parser.u8() == 0
    assert bytes(parser.buffer()) == b"\x05"
    assert parser.error is ParseResult.BAD_CHECKSUM


def test_parser_does_not_consume_callers_buffer():
    buf = Buffer(b"\x00\x01\x02")
    parser = NetParser(buf)
    parser.u16()
    assert bytes(buf) == b"\x00\x01\x02"
    assert bytes(parser.buffer()) == b"\x02"


@pytest.mark.parametrize(
    "result, name",
    [
        (ParseResult.NO_ERROR, "NoError"),
        (ParseResult.BAD_CHECKSUM, "BadChecksum"),
        (ParseResult.PACKET_TOO_SHORT, "PacketTooShort"),
        (ParseResult.WRONG_IP_VERSION, "WrongIPVersion"),
        (ParseResult.HEADER_TOO_SHORT, "HeaderTooShort"),
        (ParseResult.TRUNCATED_PACKET, "TruncatedPacket"),
    ],
)
def test_result_names(result, name):
    assert str(result) == name


def test_parse_error_carries_result():
    err = ParseError(ParseResult.HEADER_TOO_SHORT)
    assert err.result is ParseResult.HEADER_TOO_SHORT
    assert str(err) == "HeaderTooShort"
    with pytest.raises(ParseError) as info:
        raise err
    assert info.value.result is ParseResult.HEADER_TOO_SHORT