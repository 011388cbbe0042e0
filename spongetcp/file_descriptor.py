"""Reference-counted handles to kernel file descriptors."""

from __future__ import annotations

import os
from typing import Union

from spongetcp.buffer import Buffer, BufferList, BufferViewList

BytesLike = Union[bytes, bytearray, memoryview]

_MAX_READ = 1024 * 1024


class _FDWrapper:
    """The kernel descriptor itself, shared by every duplicate of a FileDescriptor."""

    __slots__ = ("fd", "eof", "closed", "read_count", "write_count")

    def __init__(self, fd: int) -> None:
        if fd < 0:
            raise ValueError(f"invalid fd number:{fd}")
        self.fd = fd
        self.eof = False
        self.closed = False
        self.read_count = 0
        self.write_count = 0

    def close(self) -> None:
        os.close(self.fd)
        self.eof = True
        self.closed = True

    def __del__(self) -> None:
        if getattr(self, "closed", True):
            return
        try:
            self.close()
        except OSError:
            pass


class FileDescriptor:
    """A handle to a file descriptor that tracks EOF and counts reads and writes.

    Duplicates made with ``duplicate()`` share the descriptor, its flags and its
    counters; the descriptor is closed when the last handle goes away.
    """

    def __init__(self, fd: int) -> None:
        self._internal = _FDWrapper(fd)

    def _register_read(self) -> None:
        self._internal.read_count += 1

    def _register_write(self) -> None:
        self._internal.write_count += 1

    def read(self, limit: int | None = None) -> bytes:
        """Read up to ``limit`` bytes (at most 1 MiB per call); fewer may be returned."""
        size = _MAX_READ if limit is None else min(_MAX_READ, limit)
        data = os.read(self.fd_num(), size)
        if size > 0 and not data:
            self._internal.eof = True
        if len(data) > size:
            raise RuntimeError("read() read more than requested")
        self._register_read()
        return data

    def write(
        self,
        data: BufferViewList | BufferList | Buffer | BytesLike,
        write_all: bool = True,
    ) -> int:
        """Write ``data``, looping until all is written if ``write_all``; return the byte count."""
        pending = data if isinstance(data, BufferViewList) else BufferViewList(data)
        total = 0
        while True:
            written = os.writev(self.fd_num(), pending.as_views())
            if written == 0 and len(pending) != 0:
                raise RuntimeError("write returned 0 given non-empty input buffer")
            if written > len(pending):
                raise RuntimeError("write wrote more than length of input buffer")
            self._register_write()
            pending.remove_prefix(written)
            total += written
            if not (write_all and len(pending)):
                return total

    def close(self) -> None:
        """Close the underlying descriptor."""
        self._internal.close()

    def duplicate(self) -> FileDescriptor:
        """Return another handle sharing this descriptor."""
        dup = FileDescriptor.__new__(FileDescriptor)
        dup._internal = self._internal
        return dup

    def set_blocking(self, blocking_state: bool) -> None:
        """Make the descriptor blocking (True) or non-blocking (False)."""
        os.set_blocking(self.fd_num(), blocking_state)

    def fd_num(self) -> int:
        """Return the underlying descriptor number."""
        return self._internal.fd

    def eof(self) -> bool:
        """Return whether a read has hit end of file."""
        return self._internal.eof

    def closed(self) -> bool:
        """Return whether the descriptor has been closed."""
        return self._internal.closed

    def read_count(self) -> int:
        """Number of reads performed on the descriptor."""
        return self._internal.read_count

    def write_count(self) -> int:
        """Number of writes performed on the descriptor."""
        return self._internal.write_count

    def __enter__(self) -> FileDescriptor:
        return self

    def __exit__(self, *args: object) -> None:
        if not self.closed():
            self.close()