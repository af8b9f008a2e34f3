"""Naming and address helpers for HNS/HCN endpoints."""

from __future__ import annotations

import ipaddress
from typing import Union

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

PAUSE_CONTAINER_NETNS = "none"


def _normalize(ip: Address) -> Address:
    mapped = getattr(ip, "ipv4_mapped", None)
    return mapped if mapped is not None else ip


def get_sandbox_container_id(container_id: str, netns: str) -> str:
    """Return the sandbox ID of the pod that ``netns`` refers to."""
    if netns and netns != PAUSE_CONTAINER_NETNS:
        parts = netns.split(":", 1)
        if len(parts) == 2:
            return parts[1]
    return container_id


def get_ip_string(ip: Address | None) -> str:
    """Return ``ip`` as text, or an empty string when it is unset."""
    if ip is None:
        return ""
    return str(_normalize(ip))


def get_default_destination_prefix(ip: Address | None) -> str:
    """Return the default route prefix for the family of ``ip``."""
    if ip is not None and _normalize(ip).version == 4:
        return "0.0.0.0/0"
    return "::/0"


def construct_endpoint_name(container_id: str, netns: str, network_name: str) -> str:
    """Build the name that identifies an endpoint in HNS/HCN."""
    return get_sandbox_container_id(container_id, netns) + "_" + network_name