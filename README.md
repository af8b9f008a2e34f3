# multinic

Building blocks for multi-NIC container networking, written in pure Python
with no third-party dependencies.

## What is inside

- `multinic.ipaddr`: the `IP` type, which holds an address with an optional
  prefix length.
  - `parse_ip` reads an address and returns `None` for invalid text.
  - `IP.to_ip` and `IP.marshal_text` give the address back.
  - `IP.from_text` parses text and raises `ValueError` when it is invalid.
  - `encode_ips` and `decode_ips` convert JSON arrays of addresses.
  - `next_ip`, `prev_ip`, `cmp` and `network` do address arithmetic.
- `multinic.errors`: `annotate` and `annotatef` wrap an existing error in an
  `AnnotatedError` that carries a context message. When the error is `None`,
  they return `None`.
- `multinic.ipforward`: `enable_ip4_forward`, `enable_ip6_forward` and
  `enable_forward` turn on kernel forwarding through `/proc/sys`. They use
  `echo1`, which writes `1` only when the file does not already hold it.
- `multinic.specversion`: `greater_than_or_equal_to` compares versions. The
  `spec_version_has_*` functions check which features a CNI spec version
  supports.
- `multinic.resolvconf`: `format_resolv_conf` and `tmp_resolv_conf` render a
  `DNS` value as resolv.conf text.
- `multinic.hns_netconf`: `NetConf` adds endpoint policies of these kinds:
  - loopback DSR
  - outbound NAT exceptions
  - provider address
  - port mappings

  An `api_version` of 2 selects the v2 policy layout; any other value selects
  v1. A policy that is already present is not added a second time.
- `multinic.hns_endpoint`: helpers for endpoint names, sandbox IDs and default
  route prefixes.
- `multinic.api_types`: dataclasses for the `multinic.fms.io/v1` resources:
  - `CIDR`
  - `Config`
  - `DeviceClass`
  - `HostInterface`
  - `IPPool`
  - `MultiNicNetwork`

  `to_dict` and `from_dict` convert them to and from dicts that use the API's
  JSON field names.
- `multinic.ping`: `ping` runs the system `ping` command, or `ping6` when the
  source address is IPv6. It raises `PingError` when the command fails.
- `multinic.echo_server` and `multinic.echo_client`: a small TCP/UDP echo
  server and client for connectivity checks.

## Example

```python
from multinic.ipaddr import parse_ip, next_ip

addr = parse_ip("192.168.0.10/24")
print(addr.marshal_text())          # 192.168.0.10/24
print(next_ip(addr.to_ip()))        # 192.168.0.11
```

## Connectivity check

Start the echo server. It prints the address it listens on, for example
`127.0.0.1:40123`, and serves TCP and UDP on that same port. For each TCP
connection it echoes one line; for UDP it echoes every datagram.

```
multinic-echo-server
```

From another shell, send a message. The client prints the reply:

```
multinic-echo-client -target 127.0.0.1:40123 -message hello
multinic-echo-client -target 127.0.0.1:40123 -message hello -protocol udp
```

## What it does not do

This package is not a CNI plugin and not a cluster controller. It does not
create interfaces, network namespaces, addresses or routes. It does not call
HNS or HCN: `NetConf` only builds the policy JSON. The resource types in
`multinic.api_types` are plain data and include no client for a cluster.

## Tests

```
pip install .[test]
pytest
```