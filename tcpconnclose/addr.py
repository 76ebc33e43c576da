import re
import socket
import typing


class UsageError(Exception): pass


class Destination(typing.NamedTuple):
    """An IPv4 socket address, usable directly as a (host, port) tuple"""

    address: str
    port: int


_digits = re.compile("[0-9]+")


def parse_ipv4(text: str) -> str:
    # inet_pton is stricter than inet_aton: no short forms like "1.2.3"
    try:
        socket.inet_pton(socket.AF_INET, text)
    except (OSError, ValueError):
        raise UsageError(f"failed to parse IP address: {text}")
    return text


def parse_port(text: str) -> int:
    if _digits.fullmatch(text) is None:
        raise UsageError(f'invalid port: "{text}"')
    port = int(text)
    if port >= 65536:
        raise UsageError(f'invalid port: "{text}"')
    return port


def parse_destination(address: str, port: str) -> Destination:
    return Destination(parse_ipv4(address), parse_port(port))
