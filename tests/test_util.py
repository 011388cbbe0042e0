import io

import pytest

from spongetcp.util import InternetChecksum, format_hexdump, hexdump, timestamp_ms


def _checksum(data, initial=0):
    check = InternetChecksum(initial)
    check.add(data)
    return check.value()


def test_empty_checksum_is_all_ones():
    assert InternetChecksum().value() == 0xFFFF


def test_ipv4_header_worked_example():
    header = bytes.fromhex("450000730000400040110000c0a80001c0a800c7")
    assert _checksum(header) == 0xB861


@pytest.mark.parametrize(
    "payload",
    [b"", b"a", b"hello world", bytes(range(256)), b"\xff" * 33],
)
def test_inserted_checksum_verifies_to_zero(payload):
    segment = bytearray(b"\x00\x00" + payload)
    value = _checksum(segment)
    segment[0] = value >> 8
    segment[1] = value & 0xFF
    assert _checksum(segment) == 0


@pytest.mark.parametrize("split", [0, 1, 2, 3, 7, 13])
def test_split_adds_match_single_add(split):
    data = b"the quick brown fox"
    check = InternetChecksum()
    check.add(data[:split])
    check.add(data[split:])
    assert check.value() == _checksum(data)


def test_initial_sum_acts_as_leading_word():
    assert InternetChecksum(0x0102).value() == _checksum(b"\x01\x02")


def test_carry_is_folded():
    assert InternetChecksum(0x10000).value() == InternetChecksum(1).value()


def test_add_accepts_memoryview():
    data = b"abcdef"
    assert _checksum(memoryview(data)) == _checksum(data)


def test_hexdump_short_line():
    text = format_hexdump(b"AB")
    assert text.startswith("00000000:    4142")
    assert text.endswith(" AB\n\n")


def test_hexdump_second_line_and_dots():
    lines = format_hexdump(bytes(range(17))).split("\n")
    assert lines[0].endswith("." * 16)
    assert lines[1].startswith("00000010:    10")
    assert lines[2:] == ["", ""]


def test_hexdump_lines_are_aligned():
    lines = format_hexdump(b"x" * 33).split("\n")
    assert len({line.index("x") for line in lines if line}) == 1


def test_hexdump_indent():
    lines = [line for line in format_hexdump(bytes(40), indent=3).split("\n") if line]
    assert len(lines) == 3
    assert all(line.startswith("   0000") for line in lines)


def test_hexdump_empty_data_is_blank():
    assert format_hexdump(b"").strip() == ""


def test_hexdump_writes_to_file():
    stream = io.StringIO()
    hexdump(b"packet data", 2, stream)
    assert stream.getvalue() == format_hexdump(b"packet data", 2)


def test_timestamp_is_monotonic():
    first = timestamp_ms()
    second = timestamp_ms()
    assert 0 <= first <= second