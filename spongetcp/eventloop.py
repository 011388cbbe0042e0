"""A poll-based loop that runs callbacks when file descriptors become ready."""

from __future__ import annotations

import select
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from spongetcp.file_descriptor import FileDescriptor


class Direction(Enum):
    """Whether a rule waits for its descriptor to be readable or writable."""

    IN = select.POLLIN
    OUT = select.POLLOUT


class EventLoopResult(Enum):
    """Outcome of one call to ``EventLoop.wait_next_event``."""

    SUCCESS = 0
    TIMEOUT = 1
    EXIT = 2


@dataclass(eq=False)
class _Rule:
    fd: FileDescriptor
    direction: Direction
    callback: Callable[[], None]
    interest: Optional[Callable[[], bool]]
    cancel: Optional[Callable[[], None]]

    def service_count(self) -> int:
        if self.direction is Direction.IN:
            return self.fd.read_count()
        return self.fd.write_count()

    def interested(self) -> bool:
        return self.interest is None or self.interest()


class EventLoop:
    """Waits for events on file descriptors and runs the matching callbacks.

    Every callback must read from or write to its descriptor, or its interest
    must turn false; otherwise the loop reports a busy wait.
    """

    def __init__(self) -> None:
        self._rules: list[_Rule] = []

    def add_rule(
        self,
        fd: FileDescriptor,
        direction: Direction,
        callback: Callable[[], None],
        interest: Optional[Callable[[], bool]] = None,
        cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        """Run ``callback`` whenever ``fd`` is ready in ``direction`` and ``interest()`` holds.

        Without ``interest`` the rule is always interested; ``cancel`` runs when the rule is dropped.
        """
        self._rules.append(_Rule(fd.duplicate(), direction, callback, interest, cancel))

    def _cancel(self, rule: _Rule) -> None:
        if rule.cancel is not None:
            rule.cancel()
        self._rules.remove(rule)

    def wait_next_event(self, timeout_ms: int) -> EventLoopResult:
        """Poll once and run the callbacks of ready rules."""
        polled: list[tuple[_Rule, int]] = []
        masks: dict[int, int] = {}
        something_to_poll = False

        for rule in list(self._rules):
            if rule.direction is Direction.IN and rule.fd.eof():
                self._cancel(rule)
                continue
            if rule.fd.closed():
                self._cancel(rule)
                continue
            if rule.interested():
                events = rule.direction.value
                something_to_poll = True
            else:
                events = 0  # still registered so errors are reported
            fd_num = rule.fd.fd_num()
            masks[fd_num] = masks.get(fd_num, 0) | events
            polled.append((rule, events))

        if not something_to_poll:
            return EventLoopResult.EXIT

        poller = select.poll()
        for fd_num, mask in masks.items():
            poller.register(fd_num, mask)

        try:
            ready = poller.poll(timeout_ms)
            if not ready:
                return EventLoopResult.TIMEOUT
            revents_by_fd = dict(ready)
        except InterruptedError:
            return EventLoopResult.EXIT
        except OSError:
            revents_by_fd = {}

        for rule, events in polled:
            revents = revents_by_fd.get(rule.fd.fd_num(), 0)
            if revents & (select.POLLERR | select.POLLNVAL):
                raise RuntimeError("EventLoop: error on polled file descriptor")

            poll_ready = bool(revents & events)
            poll_hup = bool(revents & select.POLLHUP)
            if poll_hup and events and not poll_ready:
                self._cancel(rule)
                continue

            if poll_ready:
                count_before = rule.service_count()
                rule.callback()
                if count_before == rule.service_count() and rule.interested():
                    raise RuntimeError(
                        "EventLoop: busy wait detected: callback did not read/write fd "
                        "and is still interested"
                    )

        return EventLoopResult.SUCCESS