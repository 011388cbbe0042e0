"""Socket addresses, with numeric and DNS construction."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass
from typing import Any, Union

SockAddr = Union[tuple, str, bytes]


def _getaddrinfo(node: str, service: str, flags: int) -> tuple[int, Any]:
    try:
        results = socket.getaddrinfo(node, service, socket.AF_INET, 0, 0, flags)
    except socket.gaierror as exc:
        raise socket.gaierror(
            exc.errno, f"getaddrinfo({node}, {service}): {exc.strerror}"
        ) from exc
    if not results:
        raise RuntimeError("getaddrinfo returned successfully but with no results")
    family, _kind, _proto, _canon, sockaddr = results[0]
    return family, sockaddr


@dataclass(frozen=True)
class Address:
    """An IPv4 (or other) socket address: an address family and its sockaddr value."""

    family: int
    sockaddr: SockAddr

    def __post_init__(self) -> None:
        if isinstance(self.sockaddr, list):
            object.__setattr__(self, "sockaddr", tuple(self.sockaddr))

    @classmethod
    def resolve(cls, hostname: str, service: str) -> Address:
        """Resolve a hostname and a service name (or numeric port) to an IPv4 address."""
        family, sockaddr = _getaddrinfo(hostname, service, socket.AI_ALL)
        return cls(family, sockaddr)

    @classmethod
    def from_ip_port(cls, ip: str, port: int = 0) -> Address:
        """Build from a dotted-quad string and a numeric port, without any lookup."""
        family, sockaddr = _getaddrinfo(
            ip, str(port), socket.AI_NUMERICHOST | socket.AI_NUMERICSERV
        )
        return cls(family, sockaddr)

    @classmethod
    def from_sockaddr(cls, family: int, sockaddr: SockAddr) -> Address:
        """Build from an address family and a sockaddr as the socket module reports it."""
        return cls(family, sockaddr)

    @classmethod
    def from_ipv4_numeric(cls, ip_address: int) -> Address:
        """Build an IPv4 address (port 0) from a 32-bit number in host byte order."""
        return cls(socket.AF_INET, (str(ipaddress.IPv4Address(ip_address)), 0))

    def ip_port(self) -> tuple[str, int]:
        """Return the numeric IP address string and the port."""
        if not isinstance(self.sockaddr, tuple):
            raise ValueError("ip_port called on an address without host and port")
        try:
            host, port = socket.getnameinfo(
                self.sockaddr, socket.NI_NUMERICHOST | socket.NI_NUMERICSERV
            )
        except socket.gaierror as exc:
            raise socket.gaierror(exc.errno, f"getnameinfo: {exc.strerror}") from exc
        return host, int(port)

    def ip(self) -> str:
        """Return the numeric IP address string."""
        return self.ip_port()[0]

    def port(self) -> int:
        """Return the port number."""
        return self.ip_port()[1]

    def ipv4_numeric(self) -> int:
        """Return the IPv4 address as a 32-bit number in host byte order."""
        if self.family != socket.AF_INET or not isinstance(self.sockaddr, tuple):
            raise ValueError("ipv4_numeric called on non-IPV4 address")
        return int(ipaddress.IPv4Address(self.sockaddr[0]))

    def __str__(self) -> str:
        ip, port = self.ip_port()
        return f"{ip}:{port}"