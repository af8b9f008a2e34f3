"""Network configuration and endpoint policies for HNS (v1) and HCN (v2)."""

from __future__ import annotations

import dataclasses
import ipaddress
import json
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from multinic.resolvconf import DNS

Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

ENDPOINT_POLICY = "EndpointPolicy"

# Windows socket protocol numbers accepted by port mapping policies.
PROTOCOL_ENUMS = {
    "icmpv4": 1,
    "igmp": 2,
    "tcp": 6,
    "udp": 17,
    "icmpv6": 58,
}

_PROTOCOL_BITS = 10
_MISSING = object()


def _parse_uint(text: str, bits: int) -> int:
    """Parse an unsigned integer whose base is given by its prefix."""
    if not text or not text[0].isdigit() or not text.isascii():
        raise ValueError(f"invalid unsigned integer {text!r}")
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        value = int(text, 0)
    elif len(text) > 1 and text[0] == "0":
        value = int(text, 8)
    else:
        value = int(text, 10)
    if value >= 1 << bits:
        raise ValueError(f"value {text!r} out of range")
    return value


def _same_name(a: str, b: str) -> bool:
    return a.casefold() == b.casefold()


def _is_endpoint_policy(policy: Policy) -> bool:
    return _same_name(policy.name, ENDPOINT_POLICY)


def _load(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except (ValueError, TypeError):
        return _MISSING


def _lookup(doc: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(doc, dict) or key not in doc:
            return _MISSING
        doc = doc[key]
    return doc


def _policy_type(doc: Any) -> str:
    value = _lookup(doc, "Type")
    return value if isinstance(value, str) else ""


def _ip_text(ip: Address | str) -> str:
    address = ipaddress.ip_address(ip) if isinstance(ip, str) else ip
    mapped = getattr(address, "ipv4_mapped", None)
    return str(mapped if mapped is not None else address)


def _contains_string(values: Any, wanted: str) -> bool:
    if not isinstance(values, list):
        return False
    return any(isinstance(v, str) and v and v == wanted for v in values)


@dataclass
class Policy:
    """A named policy whose value is kept as raw JSON bytes."""

    name: str
    value: bytes


@dataclass
class EndpointPolicy:
    """A HostComputeEndpoint policy: its type and raw JSON settings."""

    type: str
    settings: bytes = b""


@dataclass
class PortMapEntry:
    """A host to container port mapping."""

    host_port: int
    container_port: int
    protocol: str
    host_ip: str = ""

    def protocol_enum(self) -> int:
        """Return the protocol number; raise ValueError if it is unknown."""
        try:
            return _parse_uint(self.protocol, _PROTOCOL_BITS)
        except ValueError:
            pass
        try:
            return PROTOCOL_ENUMS[self.protocol.lower()]
        except KeyError:
            raise ValueError(
                "invalid protocol supplied to port mapping policy"
            ) from None


@dataclass
class RuntimeDNS:
    """DNS settings handed over by the container runtime."""

    nameservers: list[str] = field(default_factory=list)
    search: list[str] = field(default_factory=list)


@dataclass
class RuntimeConfig:
    """Options handed over by the container runtime."""

    dns: RuntimeDNS = field(default_factory=RuntimeDNS)
    port_maps: list[PortMapEntry] = field(default_factory=list)


@dataclass
class NetConf:
    """Network configuration carrying HNS/HCN endpoint policies.

    ``api_version`` 2 selects the HCN policy layout, anything else HNS.
    """

    cni_version: str = ""
    name: str = ""
    type: str = ""
    dns: DNS = field(default_factory=DNS)
    api_version: int = 0
    policies: list[Policy] = field(default_factory=list)
    runtime_config: RuntimeConfig = field(default_factory=RuntimeConfig)
    loopback_dsr: bool = False

    @property
    def _v2(self) -> bool:
        return self.api_version == 2

    def _endpoint_docs(self) -> Iterable[Any]:
        for policy in self.policies:
            if _is_endpoint_policy(policy):
                yield _load(policy.value)

    def _add_policy(self, text: str) -> None:
        self.policies.append(Policy(ENDPOINT_POLICY, text.encode()))

    def hns_endpoint_policies(self) -> list[bytes]:
        """Raw values of all endpoint policies, for an HNSEndpoint."""
        return [p.value for p in self.policies if _is_endpoint_policy(p)]

    def host_compute_endpoint_policies(self) -> list[EndpointPolicy]:
        """Endpoint policies decoded for a HostComputeEndpoint.

        Values that do not decode are skipped.
        """
        result = []
        for doc in self._endpoint_docs():
            if not isinstance(doc, dict):
                continue
            fields = {key.casefold(): value for key, value in doc.items()}
            exact = {key: value for key, value in doc.items()}
            policy_type = exact.get("Type", fields.get("type"))
            if policy_type is None:
                policy_type = ""
            if not isinstance(policy_type, str):
                continue
            settings = exact.get("Settings", fields.get("settings", _MISSING))
            raw = b"" if settings is _MISSING else json.dumps(settings).encode()
            result.append(EndpointPolicy(policy_type, raw))
        return result

    def get_dns(self) -> DNS:
        """The configured DNS, overridden by any runtime-supplied values."""
        runtime = self.runtime_config.dns
        return dataclasses.replace(
            self.dns,
            nameservers=list(runtime.nameservers or self.dns.nameservers),
            search=list(runtime.search or self.dns.search),
            options=list(self.dns.options),
        )

    def apply_loopback_dsr_policy(self, ip: Address | str | None) -> None:
        """Make sure an OutBoundNAT policy lists ``ip`` as a destination."""
        if ip is None:
            return
        address = _ip_text(ip)
        path = ("Settings", "Destinations") if self._v2 else ("Destinations",)
        for doc in self._endpoint_docs():
            if _policy_type(doc) != "OutBoundNAT":
                continue
            if _contains_string(_lookup(doc, *path), address):
                return
        if self._v2:
            self._add_policy(
                '{"Type": "OutBoundNAT", "Settings": {"Destinations": ["%s"]}}'
                % address
            )
        else:
            self._add_policy(
                '{"Type": "OutBoundNAT", "Destinations": ["%s"]}' % address
            )

    def apply_outbound_nat_policy(self, exception_cidr: str) -> None:
        """Apply source NAT with ``exception_cidr`` exempted from it."""
        if exception_cidr == "":
            return
        path = ("Settings", "Exceptions") if self._v2 else ("ExceptionList",)
        for doc in self._endpoint_docs():
            if _policy_type(doc) != "OutBoundNAT":
                continue
            if _contains_string(_lookup(doc, *path), exception_cidr):
                return
        if self._v2:
            self._add_policy(
                '{"Type": "OutBoundNAT", "Settings": {"Exceptions": ["%s"]}}'
                % exception_cidr
            )
        else:
            self._add_policy(
                '{"Type": "OutBoundNAT", "ExceptionList": ["%s"]}' % exception_cidr
            )

    def apply_default_pa_policy(self, address: str) -> None:
        """Apply a provider address policy for ``address``."""
        if address == "":
            return
        path = ("Settings", "ProviderAddress") if self._v2 else ("PA",)
        for doc in self._endpoint_docs():
            if _policy_type(doc) not in ("PA", "ProviderAddress"):
                continue
            value = _lookup(doc, *path)
            if isinstance(value, str) and value == address:
                return
        if self._v2:
            self._add_policy(
                '{"Type": "ProviderAddress", "Settings": {"ProviderAddress": "%s"}}'
                % address
            )
        else:
            self._add_policy('{"Type": "PA", "PA": "%s"}' % address)

    def apply_port_mapping_policy(
        self, port_mappings: Iterable[PortMapEntry] | None
    ) -> None:
        """Add a policy for each mapping; mappings with a bad protocol are skipped."""
        for mapping in port_mappings or ():
            try:
                protocol = mapping.protocol_enum()
            except ValueError:
                continue
            if self._v2:
                self._add_policy(
                    '{"Type": "PortMapping", "Settings": {"InternalPort": %d, '
                    '"ExternalPort": %d, "Protocol": %d, "VIP": "%s"}}'
                    % (
                        mapping.container_port,
                        mapping.host_port,
                        protocol,
                        mapping.host_ip,
                    )
                )
            else:
                self._add_policy(
                    '{"Type": "NAT", "InternalPort": %d, "ExternalPort": %d, '
                    '"Protocol": "%s"}'
                    % (mapping.container_port, mapping.host_port, mapping.protocol)
                )