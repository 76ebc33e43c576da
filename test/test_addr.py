import pytest

from tcpconnclose.addr import (
    Destination,
    UsageError,
    parse_destination,
    parse_ipv4,
    parse_port,
)


@pytest.mark.parametrize(
    "text", ["127.0.0.1", "0.0.0.0", "255.255.255.255", "10.1.2.3"]
)
def test_good_ipv4(text):
    assert parse_ipv4(text) == text


@pytest.mark.parametrize(
    "text",
    [
        "999.1.1.1",
        "not-an-ip",
        "1.2.3",
        "1.2.3.4.5",
        "",
        "::1",
        " 1.2.3.4",
        "1.2.3.4\x00",
    ],
)
def test_bad_ipv4(text):
    with pytest.raises(UsageError) as e:
        parse_ipv4(text)
    assert str(e.value) == f"failed to parse IP address: {text}"


@pytest.mark.parametrize(
    "text,port", [("0", 0), ("80", 80), ("0080", 80), ("65535", 65535)]
)
def test_good_port(text, port):
    assert parse_port(text) == port


@pytest.mark.parametrize(
    "text",
    ["80x", "x80", "", "65536", "99999999999999999999", "-1", "+80", " 80", "8 0", "٨٠"],
)
def test_bad_port(text):
    with pytest.raises(UsageError) as e:
        parse_port(text)
    assert str(e.value) == f'invalid port: "{text}"'


def test_destination_is_a_socket_address():
    dest = parse_destination("192.168.0.1", "443")
    assert dest == Destination("192.168.0.1", 443)
    assert dest == ("192.168.0.1", 443)
    assert dest.address == "192.168.0.1"
    assert dest.port == 443
