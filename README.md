# spongetcp

The receiving side of a TCP implementation and the helpers around it, written
in plain Python with no third-party dependencies.

## What is included

- `spongetcp.byte_stream.ByteStream`: an in-order byte stream with a fixed
  capacity. `write` accepts as many bytes as fit and returns the count;
  `peek_output`, `pop_output` and `read` take bytes from the other side.
  `end_input`, `eof`, `bytes_written`, `bytes_read` and `set_error` /
  `error` track its state.
- `spongetcp.stream_reassembler.StreamReassembler`: accepts substrings by
  stream index with `push_substring(data, index, eof)`, possibly out of order
  or overlapping, and writes the contiguous bytes into its `ByteStream`
  (`stream_out()`). `unassembled_bytes()`, `ackno()` and `empty()` report
  what is still waiting.
- `spongetcp.tcp_receiver.TCPReceiver`: feeds received `TCPSegment`s into a
  reassembler. Segments that arrive before the first SYN are ignored.
  `ackno()` returns the `WrappingInt32` to acknowledge (or `None` before SYN)
  and `window_size()` the capacity minus the bytes not yet read.
- `spongetcp.tcp_state`: `state_summary(receiver)` describes a receiver's
  state with one of the strings in `TCPReceiverStateSummary`.
- `spongetcp.wrapping_integers`: `WrappingInt32`, a 32-bit sequence number
  that wraps on overflow, plus `wrap(n, isn)` and `unwrap(n, isn, checkpoint)`
  to convert between 32-bit sequence numbers and 64-bit absolute positions.
  Subtracting two `WrappingInt32`s gives a signed offset.
- `spongetcp.tcp_header.TCPHeader` and `spongetcp.tcp_segment.TCPSegment`:
  parse and serialize TCP headers and segments. Options are skipped when
  parsing. `TCPSegment.parse` checks the Internet checksum, and
  `TCPSegment.serialize` computes it. Parse failures raise
  `spongetcp.parser.ParseError`, whose `result` is a `ParseResult`.
- `spongetcp.parser`: `NetParser`, which reads big-endian integers from a
  buffer and records the first failure in its `error` attribute, along with
  `ParseResult`, `ParseError` and `pack_u8` / `pack_u16` / `pack_u32`.
- `spongetcp.buffer`: `Buffer`, `BufferList` and `BufferViewList`, byte
  containers that can drop bytes from the front without copying.
- `spongetcp.util`: `InternetChecksum`, `format_hexdump`, `hexdump` and
  `timestamp_ms`.
- POSIX helpers:
  - `spongetcp.file_descriptor.FileDescriptor`: a descriptor handle that
    counts reads and writes and can be used as a context manager.
  - `spongetcp.eventloop.EventLoop`: a `poll`-based loop that runs callbacks
    for rules added with `add_rule`. It uses the `Direction` and
    `EventLoopResult` enums.
  - `spongetcp.address.Address`: IPv4 addresses built with `resolve`,
    `from_ip_port`, `from_sockaddr` and `from_ipv4_numeric`.
  - `spongetcp.socket_wrappers`: `UDPSocket`, `TCPSocket` and
    `LocalStreamSocket`.

## What it does not do

There is no sending side: no retransmission timer and no congestion or window
handling for outgoing data. Nothing joins a sender and a receiver into a full
connection, so the package cannot open or serve TCP connections on its own.
It provides no command-line program.

## Installation

```
pip install .
```

## Example

```python
from spongetcp.byte_stream import ByteStream
from spongetcp.wrapping_integers import WrappingInt32, wrap, unwrap

stream = ByteStream(15)
stream.write(b"hello")
assert stream.read(5) == b"hello"

isn = WrappingInt32(2**32 - 2)
seqno = wrap(10, isn)
assert seqno == WrappingInt32(8)
assert unwrap(seqno, isn, 0) == 10
```

## Tests

```
pip install .[test]
pytest
```