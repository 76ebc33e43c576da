import socket

import pytest


@pytest.fixture
def listener():
    """A listening socket on loopback; connections queue without accept()."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as l:
        l.bind(("127.0.0.1", 0))
        l.listen(8)
        l.settimeout(5)
        yield l


@pytest.fixture
def closed_port():
    """A loopback port that is bound but not listening, so connect is refused"""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        yield s.getsockname()[1]
