"""Writing DNS settings in resolv.conf format."""

from __future__ import annotations

import os
import tempfile
from dataclasses import dataclass, field


@dataclass
class DNS:
    """DNS settings: name servers, domain, search list and options."""

    nameservers: list[str] = field(default_factory=list)
    domain: str = ""
    search: list[str] = field(default_factory=list)
    options: list[str] = field(default_factory=list)


def format_resolv_conf(dns: DNS) -> str:
    """Render ``dns`` as resolv.conf text."""
    lines = [f"nameserver {server}" for server in dns.nameservers]
    lines.append(f"domain {dns.domain}")
    lines.append(f"search {' '.join(dns.search)}")
    lines.append(f"options {' '.join(dns.options)}")
    return "\n".join(lines)


def tmp_resolv_conf(dns: DNS) -> str:
    """Write ``dns`` to a new temporary resolv.conf and return its path.

    The caller is responsible for removing the file.
    """
    fd, path = tempfile.mkstemp(prefix="cni_test_resolv.conf")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(format_resolv_conf(dns))
    except OSError:
        os.remove(path)
        raise
    return path