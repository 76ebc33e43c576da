"""
The connect / linger / close sequence and its timestamped progress output.

Progress lines go to stdout as plain text, each prefixed by a UTC timestamp.
Failures of the underlying system calls surface as StepError; the caller
decides how to report them.
"""

import logging
import socket
import struct
import sys
import time
import typing

from trio import socket as tsocket

from tcpconnclose.addr import Destination


class StepError(Exception):
    """A required step failed and the run cannot continue"""

    def __init__(self, step: str, message: str) -> None:
        self.step = step
        super().__init__(message)

    @classmethod
    def from_oserror(cls, step: str, err: OSError) -> "StepError":
        return cls(step, f"{step}: {err.strerror or err}")


def log_time(out: typing.TextIO) -> None:
    """
    Write a timestamp with no newline, as a prelude to a status message.
    """
    stamp = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
    print(f"{stamp}: ", end="", file=out)


def status(out: typing.TextIO, msg: str) -> None:
    log_time(out)
    print(msg, file=out, flush=True)


def resolve_protocol() -> int:
    log = logging.getLogger("tcpconnclose.connect")
    try:
        proto = socket.getprotobyname("tcp")
    except OSError:
        raise StepError("getprotobyname", 'protocol not found: "tcp"')
    log.debug("protocol tcp is %d", proto)
    return proto


def open_socket(proto: int) -> tsocket.SocketType:
    try:
        return tsocket.socket(
            tsocket.AF_INET, tsocket.SOCK_STREAM, proto
        )
    except OSError as e:
        raise StepError.from_oserror("socket", e)


async def connect(
    sock: tsocket.SocketType, dest: Destination, out: typing.TextIO
) -> None:
    log = logging.getLogger("tcpconnclose.connect")
    # one blocking attempt, no timeout beyond the kernel's own
    try:
        await sock.connect(tuple(dest))
    except OSError as e:
        raise StepError.from_oserror("connect", e)
    log.debug("local end is %s:%d", *sock.getsockname())
    status(out, "connected")


def abortive_close(sock: tsocket.SocketType, out: typing.TextIO) -> None:
    log = logging.getLogger("tcpconnclose.linger")
    nolinger = struct.pack("ii", 1, 0)
    try:
        sock.setsockopt(tsocket.SOL_SOCKET, tsocket.SO_LINGER, nolinger)
    except OSError as e:
        raise StepError.from_oserror("setsockopt", e)
    log.debug("SO_LINGER set to %s", nolinger.hex())
    status(out, "teardown")
    # with linger {on, 0} the kernel answers close() with a RST
    sock.close()


async def run(
    dest: Destination, out: typing.Optional[typing.TextIO] = None
) -> None:
    if out is None:
        out = sys.stdout
    proto = resolve_protocol()
    status(out, f"connecting to {dest.address} port {dest.port}")
    with open_socket(proto) as sock:
        await connect(sock, dest, out)
        abortive_close(sock, out)
