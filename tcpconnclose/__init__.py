"""
tcpconnclose: connect to an IPv4 TCP endpoint and immediately tear the
connection down with SO_LINGER = {on, 0}, so the peer sees a RST instead of a
FIN handshake.
"""

__version__ = "1.0.0"
