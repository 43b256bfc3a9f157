"""Classification of session network addresses."""

from __future__ import annotations

import ipaddress
import re
from typing import Optional

_BRACKETED_V6 = re.compile(r"^\[(?P<host>[^\]]*)\]")
_HOST_PORT = re.compile(r"^(?P<host>[^:]*):\d+$")

PRIVATE_NETWORKS = tuple(
    ipaddress.ip_network(cidr)
    for cidr in (
        "127.0.0.0/8",
        "10.0.0.0/8",
        "172.16.0.0/12",
        "192.168.0.0/16",
        "::1/128",
        "fe80::/10",
        "fc00::/7",
    )
)


def strip_port(address: Optional[str]) -> str:
    """Remove a port suffix and IPv6 brackets.

    "[::1]:1234" becomes "::1" and "1.2.3.4:5678" becomes "1.2.3.4".
    A bare IPv6 address is returned unchanged.
    """
    if not address:
        return ""
    address = address.strip()

    match = _BRACKETED_V6.match(address)
    if match:
        return match.group("host")

    match = _HOST_PORT.match(address)
    if match:
        return match.group("host")
    return address


def is_private(address: Optional[str]) -> bool:
    """Check whether an address is loopback, RFC1918 or local IPv6.

    Empty or malformed input is reported as public. Do not use this
    for access control.
    """
    host = strip_port(address)
    if not host:
        return False
    try:
        ip = ipaddress.ip_address(host)
    except ValueError:
        return False

    # ::ffff:a.b.c.d is classified by its IPv4 part
    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return any(
        ip.version == network.version and ip in network
        for network in PRIVATE_NETWORKS
    )
