"""Network sockets built on FileDescriptor: TCP, UDP and Unix-domain stream sockets."""

from __future__ import annotations

import socket
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Union

from spongetcp.address import Address
from spongetcp.buffer import Buffer, BufferList, BufferViewList
from spongetcp.file_descriptor import FileDescriptor

BytesLike = Union[bytes, bytearray, memoryview]
Payload = Union[BufferViewList, BufferList, Buffer, BytesLike]


class Socket(FileDescriptor):
    """Base class for network sockets; usually used through a subclass."""

    def __init__(self, family: int, kind: int) -> None:
        sock = socket.socket(family, kind)
        super().__init__(sock.detach())

    def _init_from_fd(self, fd: FileDescriptor, family: int, kind: int) -> None:
        """Take over ``fd`` and check that it is a socket of the given family and type."""
        self._internal = fd._internal
        with self._borrowed() as sock:
            actual_family = sock.family
            actual_kind = sock.type
        if actual_family != family:
            raise RuntimeError("socket domain mismatch")
        if actual_kind != kind:
            raise RuntimeError("socket type mismatch")

    @contextmanager
    def _borrowed(self) -> Iterator[socket.socket]:
        sock = socket.socket(fileno=self.fd_num())
        try:
            yield sock
        finally:
            sock.detach()

    def bind(self, address: Address) -> None:
        """Bind the socket to a local address."""
        with self._borrowed() as sock:
            sock.bind(address.sockaddr)

    def connect(self, address: Address) -> None:
        """Connect the socket to a peer address."""
        with self._borrowed() as sock:
            sock.connect(address.sockaddr)

    def shutdown(self, how: int) -> None:
        """Shut down reading, writing or both (SHUT_RD, SHUT_WR, SHUT_RDWR)."""
        with self._borrowed() as sock:
            sock.shutdown(how)
        if how == socket.SHUT_RD:
            self._register_read()
        elif how == socket.SHUT_WR:
            self._register_write()
        elif how == socket.SHUT_RDWR:
            self._register_read()
            self._register_write()
        else:
            raise ValueError("Socket.shutdown() called with invalid `how`")

    def local_address(self) -> Address:
        """Return the local address of the socket."""
        with self._borrowed() as sock:
            return Address.from_sockaddr(sock.family, sock.getsockname())

    def peer_address(self) -> Address:
        """Return the address of the connected peer."""
        with self._borrowed() as sock:
            return Address.from_sockaddr(sock.family, sock.getpeername())

    def set_reuseaddr(self) -> None:
        """Allow the local address to be reused sooner (SO_REUSEADDR)."""
        with self._borrowed() as sock:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)


@dataclass
class ReceivedDatagram:
    """A received UDP datagram and the address it came from."""

    source_address: Address
    payload: bytes


def _views(payload: Payload) -> BufferViewList:
    return payload if isinstance(payload, BufferViewList) else BufferViewList(payload)


class UDPSocket(Socket):
    """An IPv4 UDP socket."""

    def __init__(self) -> None:
        super().__init__(socket.AF_INET, socket.SOCK_DGRAM)

    def recv(self, mtu: int = 65536) -> ReceivedDatagram:
        """Receive one datagram; raise RuntimeError if it is larger than ``mtu``."""
        storage = bytearray(mtu)
        with self._borrowed() as sock:
            received, source = sock.recvfrom_into(storage, 0, socket.MSG_TRUNC)
            family = sock.family
        if received > mtu:
            raise RuntimeError("recvfrom (oversized datagram)")
        self._register_read()
        return ReceivedDatagram(Address.from_sockaddr(family, source), bytes(storage[:received]))

    def _sendmsg(self, payload: Payload, destination: Address | None) -> None:
        views = _views(payload)
        with self._borrowed() as sock:
            if destination is None:
                sent = sock.sendmsg(views.as_views())
            else:
                sent = sock.sendmsg(views.as_views(), [], 0, destination.sockaddr)
        if sent != len(views):
            raise RuntimeError("datagram payload too big for sendmsg()")

    def sendto(self, destination: Address, payload: Payload) -> None:
        """Send a datagram to ``destination``."""
        self._sendmsg(payload, destination)
        self._register_write()

    def send(self, payload: Payload) -> None:
        """Send a datagram to the connected address."""
        self._sendmsg(payload, None)
        self._register_write()


class TCPSocket(Socket):
    """An IPv4 TCP socket."""

    def __init__(self) -> None:
        super().__init__(socket.AF_INET, socket.SOCK_STREAM)

    def listen(self, backlog: int = 16) -> None:
        """Mark the socket as accepting incoming connections."""
        with self._borrowed() as sock:
            sock.listen(backlog)

    def accept(self) -> TCPSocket:
        """Block until a connection arrives and return a socket connected to the peer."""
        self._register_read()
        with self._borrowed() as sock:
            conn, _ = sock.accept()
        accepted = TCPSocket.__new__(TCPSocket)
        accepted._init_from_fd(FileDescriptor(conn.detach()), socket.AF_INET, socket.SOCK_STREAM)
        return accepted


class LocalStreamSocket(Socket):
    """A Unix-domain stream socket wrapping an existing descriptor."""

    def __init__(self, fd: FileDescriptor) -> None:
        self._init_from_fd(fd, socket.AF_UNIX, socket.SOCK_STREAM)