"""IP addresses with an optional prefix, and integer arithmetic on addresses."""

from __future__ import annotations

import ipaddress
import json
from dataclasses import dataclass
from typing import Iterable, Union

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _normalize(ip: Address) -> Address:
    mapped = getattr(ip, "ipv4_mapped", None)
    return mapped if mapped is not None else ip


def next_ip(ip: Address) -> Address:
    """Return the address one above ``ip``."""
    return _normalize(ip) + 1


def prev_ip(ip: Address) -> Address:
    """Return the address one below ``ip``."""
    return _normalize(ip) - 1


def cmp(a: Address, b: Address) -> int:
    """Compare two addresses by their integer value: -1, 0 or 1."""
    ia = int(_normalize(a))
    ib = int(_normalize(b))
    return (ia > ib) - (ia < ib)


def _parse_address(text: str) -> Address | None:
    if "%" in text:
        return None
    try:
        return ipaddress.ip_address(text)
    except ValueError:
        return None


@dataclass(frozen=True)
class IP:
    """A single IP address, with or without a prefix length."""

    address: Address | None = None
    prefixlen: int | None = None

    def __str__(self) -> str:
        if self.address is None:
            return "<nil>"
        if self.prefixlen is not None:
            return f"{self.address}/{self.prefixlen}"
        return str(self.address)

    def to_ip(self) -> Address | None:
        """Return the bare address in standard form, or None if unset."""
        if self.address is None:
            return None
        return _normalize(self.address)

    def marshal_text(self) -> str:
        """Text form used for serialisation; empty for an unset address."""
        if self.address is None:
            return ""
        return str(self)

    @classmethod
    def from_text(cls, text: str) -> IP:
        """Parse serialised text; empty text gives an unset IP."""
        if text == "":
            return cls()
        ip = parse_ip(text)
        if ip is None:
            raise ValueError(f"invalid IP address {text}")
        return ip


def parse_ip(s: str) -> IP | None:
    """Parse ``<ip>[/<prefix>]``; return None if ``s`` is not valid."""
    if "/" in s:
        addr_text, _, prefix_text = s.partition("/")
        address = _parse_address(addr_text)
        if address is None:
            return None
        if not (prefix_text.isascii() and prefix_text.isdigit()):
            return None
        prefixlen = int(prefix_text)
        if prefixlen > address.max_prefixlen:
            return None
        return IP(address, prefixlen)
    address = _parse_address(s)
    if address is None:
        return None
    return IP(address)


def network(ipn: IP) -> IP:
    """Mask off the host part of ``ipn``, keeping its prefix length."""
    if ipn.address is None or ipn.prefixlen is None:
        raise ValueError(f"{ipn} has no network prefix")
    net = ipaddress.ip_network(f"{ipn.address}/{ipn.prefixlen}", strict=False)
    return IP(net.network_address, ipn.prefixlen)


def encode_ips(ips: Iterable[IP]) -> str:
    """Serialise IPs as a compact JSON array of strings."""
    return json.dumps([ip.marshal_text() for ip in ips], separators=(",", ":"))


def decode_ips(text: str) -> list[IP]:
    """Parse a JSON array of IP strings."""
    data = json.loads(text)
    if not isinstance(data, list):
        raise ValueError("expected a JSON array of IP addresses")
    result = []
    for item in data:
        if not isinstance(item, str):
            raise ValueError(f"invalid IP address {item!r}")
        result.append(IP.from_text(item))
    return result