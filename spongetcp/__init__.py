"""Building blocks of a user-space TCP: byte streams, reassembly, a receiver, segment parsing and POSIX helpers."""

__version__ = "0.1.0"