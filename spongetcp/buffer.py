"""Shared read-only byte buffers that can discard bytes from the front."""

from __future__ import annotations

from collections import deque
from typing import Iterable, Union

BytesLike = Union[bytes, bytearray, memoryview]


def _check_count(n: int) -> None:
    if n < 0:
        raise ValueError("cannot remove a negative number of bytes")


class Buffer:
    """A read-only byte string whose prefix can be dropped without copying.

    Copies made with ``Buffer(other)`` share storage but keep their own offset.
    """

    __slots__ = ("_storage", "_offset")

    def __init__(self, data: Buffer | BytesLike = b"") -> None:
        if isinstance(data, Buffer):
            self._storage: bytes | None = data._storage
            self._offset = data._offset
        else:
            self._storage = bytes(data)
            self._offset = 0

    def view(self) -> memoryview:
        """Return a memoryview of the remaining bytes."""
        if self._storage is None:
            return memoryview(b"")
        return memoryview(self._storage)[self._offset:]

    def __bytes__(self) -> bytes:
        if self._storage is None:
            return b""
        return self._storage[self._offset:]

    def __len__(self) -> int:
        if self._storage is None:
            return 0
        return len(self._storage) - self._offset

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Buffer):
            return bytes(self) == bytes(other)
        if isinstance(other, (bytes, bytearray, memoryview)):
            return bytes(self) == bytes(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Buffer({bytes(self)!r})"

    def at(self, n: int) -> int:
        """Return the byte at position ``n``."""
        if not 0 <= n < len(self):
            raise IndexError("Buffer.at: index out of range")
        return self._storage[self._offset + n]  # type: ignore[index]

    def copy(self) -> bytes:
        """Return the remaining bytes as a new ``bytes`` object."""
        return bytes(self)

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes."""
        _check_count(n)
        if n > len(self):
            raise IndexError("Buffer.remove_prefix")
        self._offset += n
        if self._storage is not None and self._offset == len(self._storage):
            self._storage = None
            self._offset = 0


class BufferList:
    """A discontiguous byte string made of a queue of Buffers."""

    def __init__(self, data: BufferList | Buffer | BytesLike | None = None) -> None:
        self._buffers: deque[Buffer] = deque()
        if data is not None:
            self.append(data)

    def buffers(self) -> tuple[Buffer, ...]:
        """Return copies of the underlying Buffers, in order."""
        return tuple(Buffer(buf) for buf in self._buffers)

    def append(self, other: BufferList | Buffer | BytesLike) -> None:
        """Append another BufferList, a Buffer, or raw bytes."""
        if isinstance(other, BufferList):
            self._buffers.extend(Buffer(buf) for buf in other._buffers)
        else:
            self._buffers.append(Buffer(other))

    def to_buffer(self) -> Buffer:
        """Return the contents as one Buffer; fails if there is more than one piece."""
        if not self._buffers:
            return Buffer()
        if len(self._buffers) == 1:
            return Buffer(self._buffers[0])
        raise ValueError(
            "BufferList: use concatenate() to combine a multi-Buffer BufferList into one Buffer"
        )

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes, dropping Buffers that become empty."""
        _check_count(n)
        while n > 0:
            if not self._buffers:
                raise IndexError("BufferList.remove_prefix")
            front = self._buffers[0]
            if n < len(front):
                front.remove_prefix(n)
                n = 0
            else:
                n -= len(front)
                self._buffers.popleft()

    def __len__(self) -> int:
        return sum(len(buf) for buf in self._buffers)

    def concatenate(self) -> bytes:
        """Return all bytes joined into one ``bytes`` object."""
        return b"".join(bytes(buf) for buf in self._buffers)

    def __repr__(self) -> str:
        return f"BufferList({[bytes(buf) for buf in self._buffers]!r})"


class BufferViewList:
    """A non-owning list of views over a discontiguous byte string."""

    def __init__(self, data: BufferList | Buffer | BytesLike) -> None:
        sources: Iterable[memoryview]
        if isinstance(data, BufferList):
            sources = (buf.view() for buf in data._buffers)
        elif isinstance(data, Buffer):
            sources = (data.view(),)
        else:
            sources = (memoryview(data).cast("B"),)
        self._views: deque[memoryview] = deque(sources)

    def remove_prefix(self, n: int) -> None:
        """Discard the first ``n`` bytes of the viewed data."""
        _check_count(n)
        while n > 0:
            if not self._views:
                raise IndexError("BufferViewList.remove_prefix")
            front = self._views[0]
            if n < len(front):
                self._views[0] = front[n:]
                n = 0
            else:
                n -= len(front)
                self._views.popleft()

    def __len__(self) -> int:
        return sum(len(view) for view in self._views)

    def as_views(self) -> list[memoryview]:
        """Return the views in order, suitable for scatter/gather writes."""
        return list(self._views)