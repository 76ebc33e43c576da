"""
tcpconnclose: test how a remote host behaves when a client connects and
immediately closes the connection with SO_LINGER = 0.

usage: tcpconnclose [-v] IPV4_ADDRESS PORT
"""

import argparse
import logging
import os
import sys
import typing

import trio

from tcpconnclose import conn
from tcpconnclose.addr import UsageError, parse_destination


class UsageParser(argparse.ArgumentParser):
    """argparse, but bad arguments raise instead of exiting"""

    def error(self, message: str) -> typing.NoReturn:
        raise UsageError(message)


def make_parser(prog: str) -> UsageParser:
    parser = UsageParser(
        prog=prog,
        usage="%(prog)s IPV4_ADDRESS PORT",
        description="Connect to a TCP endpoint and reset the connection.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("address", metavar="IPV4_ADDRESS")
    parser.add_argument("port", metavar="PORT")
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="debug logging to stderr"
    )
    return parser


def setup_logging(prog: str) -> logging.Logger:
    log = logging.getLogger("tcpconnclose")
    log.setLevel(logging.WARNING)
    log.propagate = False
    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(logging.DEBUG)
    formatter = logging.Formatter(prog.replace("%", "%%") + ": %(message)s")
    sh.setFormatter(formatter)
    # main() may run more than once per process
    for h in list(log.handlers):
        log.removeHandler(h)
    log.addHandler(sh)
    return log


def main(
    argv: typing.Optional[typing.List[str]] = None,
    prog: typing.Optional[str] = None,
) -> int:
    if prog is None:
        prog = os.path.basename(sys.argv[0])
    log = setup_logging(prog)
    parser = make_parser(prog)

    try:
        args = parser.parse_args(argv)
        dest = parse_destination(args.address, args.port)
    except UsageError as e:
        log.error("%s", e)
        print(parser.format_usage(), end="", flush=True)
        return 2

    if args.verbose:
        log.setLevel(logging.DEBUG)

    try:
        trio.run(conn.run, dest)
    except conn.StepError as e:
        log.error("%s", e)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0
