"""Custom resource types of the multinic.fms.io/v1 API group, with JSON codecs."""

import types
from dataclasses import MISSING, dataclass, field, fields, is_dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, TypeVar, Union, get_args, get_origin

GROUP = "multinic.fms.io"
VERSION = "v1"
API_VERSION = f"{GROUP}/{VERSION}"

T = TypeVar("T")

_TIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


def _field(json_name: str, default: Any = MISSING, *, factory: Any = MISSING,
           omitempty: bool = False) -> Any:
    metadata = {"json": json_name, "omitempty": omitempty}
    if factory is not MISSING:
        return field(default_factory=factory, metadata=metadata)
    return field(default=default, metadata=metadata)


class RouteStatus(str, Enum):
    """State of the L3 routes of a network."""

    ROUTE_NO_APPLIED = "N/A"
    APPLYING_ROUTE = "WaitForRoutes"
    ROUTE_UNKNOWN = "Unknown"
    ALL_ROUTE_APPLIED = "Success"
    SOME_ROUTE_FAILED = "Failed"


class NetConfigStatus(str, Enum):
    """State of the network plugin configuration."""

    WAIT_FOR_CONFIG = "WaitForConfig"
    CONFIG_COMPLETE = "Success"
    CONFIG_FAILED = "Failed"


@dataclass
class ObjectMeta:
    """The subset of object metadata kept by these resources."""

    name: str = _field("name", "", omitempty=True)
    namespace: str = _field("namespace", "", omitempty=True)
    labels: dict[str, str] = _field("labels", factory=dict, omitempty=True)
    annotations: dict[str, str] = _field("annotations", factory=dict, omitempty=True)
    resource_version: str = _field("resourceVersion", "", omitempty=True)
    uid: str = _field("uid", "", omitempty=True)
    generation: int = _field("generation", 0, omitempty=True)


# CIDR


@dataclass
class PluginConfig:
    """Plugin settings a CIDR was computed for."""

    name: str = _field("name", "")
    type: str = _field("type", "")
    subnet: str = _field("subnet", "")
    master_net_addrs: list[str] = _field("masterNets", factory=list)
    host_block: int = _field("hostBlock", 0)
    interface_block: int = _field("interfaceBlock", 0)
    exclude_cidrs: list[str] = _field("excludeCIDRs", factory=list, omitempty=True)
    vlan_mode: str = _field("vlanMode", "", omitempty=True)


@dataclass
class HostInterfaceInfo:
    """The pod CIDR given to one interface of one host."""

    host_index: int = _field("hostIndex", 0)
    host_name: str = _field("hostName", "")
    interface_name: str = _field("interfaceName", "")
    host_ip: str = _field("hostIP", "")
    pod_cidr: str = _field("podCIDR", "")
    ippool: str = _field("ippool", "", omitempty=True)


@dataclass
class CIDREntry:
    """The CIDR of one master network and its hosts."""

    net_address: str = _field("netAddress", "")
    interface_index: int = _field("interfaceIndex", 0)
    vlan_cidr: str = _field("vlanCIDR", "")
    hosts: list[HostInterfaceInfo] = _field("hosts", factory=list)


@dataclass
class CIDRSpec:
    """Desired state of a CIDR."""

    config: PluginConfig = _field("config", factory=PluginConfig)
    cidrs: list[CIDREntry] = _field("cidr", factory=list)


@dataclass
class CIDR:
    """The CIDR resource."""

    api_version: str = _field("apiVersion", API_VERSION, omitempty=True)
    kind: str = _field("kind", "CIDR", omitempty=True)
    metadata: ObjectMeta = _field("metadata", factory=ObjectMeta)
    spec: CIDRSpec = _field("spec", factory=CIDRSpec)
    status: Dict[str, Any] = _field("status", factory=dict)


# Config


@dataclass
class HostPathMount:
    """A host path mounted into the daemon pod."""

    name: str = _field("name", "")
    pod_cni_path: str = _field("podpath", "")
    host_cni_path: str = _field("hostpath", "")


@dataclass
class DaemonSpec:
    """How the daemon is deployed; core object fields are kept as raw JSON."""

    node_selector: dict[str, str] = _field("nodeSelector", factory=dict, omitempty=True)
    image: str = _field("image", "")
    image_pull_credential_name: str = _field(
        "imagePullSecretName", "", omitempty=True
    )
    image_pull_policy: str = _field("imagePullPolicy", "", omitempty=True)
    security_context: Union[Dict[str, Any], None] = _field(
        "securityContext", None, omitempty=True
    )
    env: list[Dict[str, Any]] = _field("env", factory=list, omitempty=True)
    env_from: list[Dict[str, Any]] = _field("envFrom", factory=list, omitempty=True)
    host_path_mounts: list[HostPathMount] = _field(
        "mounts", factory=list, omitempty=True
    )
    daemon_port: int = _field("port", 0)
    resources: Dict[str, Any] = _field("resources", factory=dict)
    tolerations: list[Dict[str, Any]] = _field(
        "tolerations", factory=list, omitempty=True
    )


@dataclass
class ConfigSpec:
    """Desired state of the operator configuration."""

    cni_type: str = _field("cniType", "")
    ipam_type: str = _field("ipamType", "")
    daemon: DaemonSpec = _field("daemon", factory=DaemonSpec)
    join_path: str = _field("joinPath", "")
    interface_path: str = _field("getInterfacePath", "")
    add_route_path: str = _field("addRoutePath", "", omitempty=True)
    delete_route_path: str = _field("deleteRoutePath", "", omitempty=True)
    urgent_reconcile_seconds: int = _field("urgentReconcileSeconds", 0, omitempty=True)
    normal_reconcile_minutes: int = _field("normalReconcileMinutes", 0, omitempty=True)
    long_reconcile_minutes: int = _field("longReconcileMinutes", 0, omitempty=True)
    context_timeout_minutes: int = _field("contextTimeoutMinutes", 0, omitempty=True)
    log_level: int = _field("logLevel", 0, omitempty=True)


@dataclass
class Config:
    """The Config resource."""

    api_version: str = _field("apiVersion", API_VERSION, omitempty=True)
    kind: str = _field("kind", "Config", omitempty=True)
    metadata: ObjectMeta = _field("metadata", factory=ObjectMeta)
    spec: ConfigSpec = _field("spec", factory=ConfigSpec)
    status: Dict[str, Any] = _field("status", factory=dict)


# DeviceClass


@dataclass
class DeviceID:
    """A vendor and its product IDs."""

    vendor: str = _field("vendor", "")
    products: list[str] = _field("products", factory=list)


@dataclass
class DeviceClassSpec:
    """Desired state of a DeviceClass."""

    device_ids: list[DeviceID] = _field("ids", factory=list)


@dataclass
class DeviceClass:
    """The DeviceClass resource."""

    api_version: str = _field("apiVersion", API_VERSION, omitempty=True)
    kind: str = _field("kind", "DeviceClass", omitempty=True)
    metadata: ObjectMeta = _field("metadata", factory=ObjectMeta)
    spec: DeviceClassSpec = _field("spec", factory=DeviceClassSpec)
    status: Dict[str, Any] = _field("status", factory=dict)


# HostInterface


@dataclass
class InterfaceInfoType:
    """One network interface of a host."""

    interface_name: str = _field("interfaceName", "")
    net_address: str = _field("netAddress", "", omitempty=True)
    host_ip: str = _field("hostIP", "", omitempty=True)
    vendor: str = _field("vendor", "", omitempty=True)
    product: str = _field("product", "", omitempty=True)
    pci_address: str = _field("pciAddress", "", omitempty=True)

    def same_interface(self, other: "InterfaceInfoType") -> bool:
        """Whether name, network address and host IP all match."""
        return (
            self.interface_name == other.interface_name
            and self.net_address == other.net_address
            and self.host_ip == other.host_ip
        )


@dataclass
class HostInterfaceSpec:
    """Desired state of a HostInterface."""

    host_name: str = _field("hostName", "")
    interfaces: list[InterfaceInfoType] = _field("interfaces", factory=list)


@dataclass
class LinkStat:
    """Traffic statistics of a link."""

    interface_name: str = _field("interfaceName", "")
    tx_rate: int = _field("txRate", 0)
    rx_rate: int = _field("rxRate", 0)
    tx_drop_rate: int = _field("txDropRate", 0)
    rx_drop_rate: int = _field("rxDropRate", 0)
    last_tx: int = _field("lastTx", 0)
    last_rx: int = _field("lastRx", 0)
    last_tx_drop: int = _field("lastTxDrop", 0)
    last_rx_drop: int = _field("lastRxDrop", 0)
    last_timestamp: int = _field("lastTimestamp", 0)
    used_count: int = _field("count", 0)


@dataclass
class HostInterfaceStatus:
    """Observed state of a HostInterface."""

    stat: LinkStat = _field("stat", factory=LinkStat)


@dataclass
class HostInterface:
    """The HostInterface resource."""

    api_version: str = _field("apiVersion", API_VERSION, omitempty=True)
    kind: str = _field("kind", "HostInterface", omitempty=True)
    metadata: ObjectMeta = _field("metadata", factory=ObjectMeta)
    spec: HostInterfaceSpec = _field("spec", factory=HostInterfaceSpec)
    status: HostInterfaceStatus = _field("status", factory=HostInterfaceStatus)


# IPPool


@dataclass
class Allocation:
    """An address handed to a pod."""

    pod: str = _field("pod", "")
    namespace: str = _field("namespace", "")
    index: int = _field("index", 0)
    address: str = _field("address", "")


@dataclass
class IPPoolSpec:
    """Desired state of an IPPool."""

    pod_cidr: str = _field("podCIDR", "")
    vlan_cidr: str = _field("vlanCIDR", "")
    net_attach_def_name: str = _field("netAttachDef", "")
    host_name: str = _field("hostName", "")
    interface_name: str = _field("interfaceName", "")
    excludes: list[str] = _field("excludes", factory=list)
    allocations: list[Allocation] = _field("allocations", factory=list)


@dataclass
class IPPool:
    """The IPPool resource."""

    api_version: str = _field("apiVersion", API_VERSION, omitempty=True)
    kind: str = _field("kind", "IPPool", omitempty=True)
    metadata: ObjectMeta = _field("metadata", factory=ObjectMeta)
    spec: IPPoolSpec = _field("spec", factory=IPPoolSpec)
    status: Dict[str, Any] = _field("status", factory=dict)


# MultiNicNetwork


@dataclass
class DNS:
    """DNS settings of a plugin."""

    nameservers: list[str] = _field("nameservers", factory=list, omitempty=True)
    domain: str = _field("domain", "", omitempty=True)
    search: list[str] = _field("search", factory=list, omitempty=True)
    options: list[str] = _field("options", factory=list, omitempty=True)


@dataclass
class PluginSpec:
    """The main CNI plugin of a network."""

    cni_version: str = _field("cniVersion", "")
    type: str = _field("type", "")
    capabilities: dict[str, bool] = _field("capabilities", factory=dict, omitempty=True)
    dns: DNS = _field("dns", factory=DNS)
    cni_args: dict[str, str] = _field("args", factory=dict, omitempty=True)


@dataclass
class AttachmentPolicy:
    """How NICs are picked from the pool: a strategy and a target bandwidth."""

    strategy: str = _field("strategy", "")
    target: str = _field("target", "", omitempty=True)


@dataclass
class NicNetworkResult:
    """Number of hosts found on one network address."""

    net_address: str = _field("netAddress", "")
    num_of_host: int = _field("numOfHosts", 0)


@dataclass
class DiscoverStatus:
    """Progress of daemon and interface discovery."""

    exist_daemon: int = _field("existDaemon", 0)
    interface_info_available: int = _field("infoAvailable", 0)
    cidr_processed_host: int = _field("cidrProcessed", 0)


@dataclass
class MultiNicNetworkSpec:
    """Desired state of a MultiNicNetwork."""

    master_net_addrs: list[str] = _field("masterNets", factory=list, omitempty=True)
    subnet: str = _field("subnet", "", omitempty=True)
    ipam: str = _field("ipam", "")
    is_multi_nic_ipam: bool = _field("multiNICIPAM", False, omitempty=True)
    main_plugin: PluginSpec = _field("plugin", factory=PluginSpec)
    policy: AttachmentPolicy = _field("attachPolicy", factory=AttachmentPolicy)
    namespaces: list[str] = _field("namespaces", factory=list, omitempty=True)


@dataclass
class MultiNicNetworkStatus:
    """Observed state of a MultiNicNetwork."""

    compute_results: list[NicNetworkResult] = _field("computeResults", factory=list)
    discover_status: DiscoverStatus = _field("discovery", factory=DiscoverStatus)
    net_config_status: Union[NetConfigStatus, None] = _field("configStatus", None)
    route_status: Union[RouteStatus, None] = _field("routeStatus", None)
    message: str = _field("message", "")
    last_sync_time: Union[datetime, None] = _field("lastSyncTime", None)


@dataclass
class MultiNicNetwork:
    """The MultiNicNetwork resource."""

    api_version: str = _field("apiVersion", API_VERSION, omitempty=True)
    kind: str = _field("kind", "MultiNicNetwork", omitempty=True)
    metadata: ObjectMeta = _field("metadata", factory=ObjectMeta)
    spec: MultiNicNetworkSpec = _field("spec", factory=MultiNicNetworkSpec)
    status: MultiNicNetworkStatus = _field("status", factory=MultiNicNetworkStatus)


# JSON codec


def _is_union(hint: Any) -> bool:
    return get_origin(hint) in (Union, types.UnionType)


def _optional_inner(hint: Any) -> Any:
    args = [a for a in get_args(hint) if a is not type(None)]
    return args[0] if len(args) == 1 else Any


def _is_enum(hint: Any) -> bool:
    return isinstance(hint, type) and issubclass(hint, Enum)


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, Enum) or is_dataclass(value) or isinstance(value, datetime):
        return False
    if isinstance(value, (bool, int, float, str, list, dict)):
        return not value
    return False


def _format_time(value: datetime) -> str:
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime(_TIME_FORMAT)


def _parse_time(text: str) -> datetime:
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _encode(value: Any, hint: Any = Any) -> Any:
    if value is None:
        if _is_union(hint) and _is_enum(_optional_inner(hint)):
            return ""
        return None
    if is_dataclass(value) and not isinstance(value, type):
        return to_dict(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return _format_time(value)
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, dict):
        return {key: _encode(item) for key, item in value.items()}
    return value


def to_dict(obj: Any) -> Dict[str, Any]:
    """Encode a resource object as a JSON-ready dict with the API's field names."""
    if not is_dataclass(obj) or isinstance(obj, type):
        raise TypeError(f"{obj!r} is not a resource object")
    out: Dict[str, Any] = {}
    for f in fields(obj):
        value = getattr(obj, f.name)
        if f.metadata.get("omitempty") and _is_empty(value):
            continue
        out[f.metadata.get("json", f.name)] = _encode(value, f.type)
    return out


def _decode(hint: Any, value: Any, key: str) -> Any:
    if hint is Any:
        return value
    if _is_union(hint):
        if value is None:
            return None
        inner = _optional_inner(hint)
        if _is_enum(inner) and value == "":
            return None
        return _decode(inner, value, key)
    origin = get_origin(hint)
    if origin is list:
        if not isinstance(value, list):
            raise ValueError(f"{key}: expected a list, got {value!r}")
        (item_hint,) = get_args(hint) or (Any,)
        return [_decode(item_hint, item, key) for item in value]
    if origin is dict:
        if not isinstance(value, dict):
            raise ValueError(f"{key}: expected an object, got {value!r}")
        args = get_args(hint)
        item_hint = args[1] if len(args) == 2 else Any
        return {k: _decode(item_hint, v, key) for k, v in value.items()}
    if is_dataclass(hint):
        return from_dict(hint, value)
    if _is_enum(hint):
        try:
            return hint(value)
        except ValueError:
            raise ValueError(f"{key}: invalid {hint.__name__} {value!r}") from None
    if hint is datetime:
        if not isinstance(value, str):
            raise ValueError(f"{key}: expected a timestamp, got {value!r}")
        return _parse_time(value)
    if hint is bool:
        if not isinstance(value, bool):
            raise ValueError(f"{key}: expected a boolean, got {value!r}")
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{key}: expected an integer, got {value!r}")
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(f"{key}: expected a number, got {value!r}")
        return float(value)
    if hint is str:
        if not isinstance(value, str):
            raise ValueError(f"{key}: expected a string, got {value!r}")
        return value
    return value


def from_dict(cls: "type[T]", data: Any) -> T:
    """Decode a dict produced by :func:`to_dict` (or the API) into ``cls``.

    Unknown keys are ignored; missing keys and nulls keep the field's default.
    """
    if not isinstance(data, dict):
        raise ValueError(f"expected an object for {cls.__name__}, got {data!r}")
    kwargs: Dict[str, Any] = {}
    for f in fields(cls):
        key = f.metadata.get("json", f.name)
        if key not in data:
            continue
        value = data[key]
        hint = f.type
        if value is None and not _is_union(hint) and hint is not Any:
            continue
        kwargs[f.name] = _decode(hint, value, key)
    return cls(**kwargs)