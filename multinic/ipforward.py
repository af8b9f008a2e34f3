"""Turning on IP forwarding through the kernel's proc interface."""

from __future__ import annotations

import ipaddress
import os
from typing import Iterable

from multinic.ipaddr import IP

IP4_FORWARD_PATH = "/proc/sys/net/ipv4/ip_forward"
IP6_FORWARD_PATH = "/proc/sys/net/ipv6/conf/all/forwarding"


def echo1(path: str | os.PathLike) -> None:
    """Write ``1`` to ``path`` unless it already holds ``1``."""
    try:
        with open(path, "rb") as fh:
            if fh.read().strip() == b"1":
                return
    except OSError:
        pass
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o644)
    with os.fdopen(fd, "wb") as fh:
        fh.write(b"1")


def enable_ip4_forward() -> None:
    """Enable IPv4 forwarding."""
    echo1(IP4_FORWARD_PATH)


def enable_ip6_forward() -> None:
    """Enable IPv6 forwarding."""
    echo1(IP6_FORWARD_PATH)


def _is_v4(item: object) -> bool:
    if isinstance(item, IP):
        address = item.to_ip()
        return address is not None and address.version == 4
    if isinstance(item, (ipaddress.IPv4Interface, ipaddress.IPv6Interface)):
        address = item.ip
    elif isinstance(item, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
        address = item.network_address
    elif isinstance(item, (ipaddress.IPv4Address, ipaddress.IPv6Address)):
        address = item
    else:
        address = ipaddress.ip_interface(str(item)).ip
    mapped = getattr(address, "ipv4_mapped", None)
    return mapped is not None or address.version == 4


def enable_forward(ips: Iterable[object]) -> frozenset[int]:
    """Enable forwarding for every address family present in ``ips``.

    Returns the set of IP versions that were enabled.
    """
    enabled: set[int] = set()
    for item in ips:
        if _is_v4(item):
            if 4 not in enabled:
                enable_ip4_forward()
                enabled.add(4)
        elif 6 not in enabled:
            enable_ip6_forward()
            enabled.add(6)
    return frozenset(enabled)