"""Summaries of a TCP receiver's state, as named in the TCP specification."""

from __future__ import annotations

from spongetcp.tcp_receiver import TCPReceiver


class TCPReceiverStateSummary:
    """Descriptions of the states a TCP receiver can be in."""

    ERROR = "error (connection was reset)"
    LISTEN = "waiting for SYN: ackno is empty"
    SYN_RECV = "SYN received (ackno exists), and input to stream hasn't ended"
    FIN_RECV = "input to stream has ended"


def state_summary(receiver: TCPReceiver) -> str:
    """Summarize the state of ``receiver`` as one of TCPReceiverStateSummary."""
    stream = receiver.stream_out()
    if stream.error():
        return TCPReceiverStateSummary.ERROR
    if receiver.ackno() is None:
        return TCPReceiverStateSummary.LISTEN
    if stream.input_ended():
        return TCPReceiverStateSummary.FIN_RECV
    return TCPReceiverStateSummary.SYN_RECV