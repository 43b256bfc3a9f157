import pytest

from earth_geo.addresses import is_private, strip_port


@pytest.mark.parametrize(
    "address, expected",
    [
        ("192.168.1.5", True),
        ("172.15.0.1", False),
        ("172.16.0.1", True),
        ("172.31.255.255", True),
        ("172.32.0.0", False),
        ("8.8.8.8", False),
        ("[::1]:1234", True),
        ("fe80::1", True),
        ("::1", True),
        ("127.0.0.1:30000", True),
        ("10.1.2.3", True),
        ("fc00::1", True),
        ("fd12:3456::1", True),
        ("2001:4860:4860::8888", False),
        ("::ffff:192.168.0.1", True),
        ("::ffff:8.8.8.8", False),
        ("0.0.0.1", False),
    ],
)
def test_is_private(address, expected):
    assert is_private(address) is expected


@pytest.mark.parametrize("address", ["", None, "not-an-ip", "999.1.1.1", "[]:80"])
def test_malformed_input_counts_as_public(address):
    assert is_private(address) is False


@pytest.mark.parametrize(
    "address, expected",
    [
        ("[::1]:1234", "::1"),
        ("[2001:db8::1]", "2001:db8::1"),
        ("1.2.3.4:5678", "1.2.3.4"),
        ("1.2.3.4", "1.2.3.4"),
        ("fe80::1", "fe80::1"),
        ("::1", "::1"),
        (" 8.8.8.8 ", "8.8.8.8"),
        (None, ""),
    ],
)
def test_strip_port(address, expected):
    assert strip_port(address) == expected
