"""Checking reachability by running the system ``ping`` command."""

from __future__ import annotations

import ipaddress
import subprocess


class PingError(Exception):
    """Raised when ``ping`` runs but reports a failure."""

    def __init__(self, command: list[str], returncode: int, stderr: str) -> None:
        super().__init__(
            f"[{' '.join(command)}] exit status {returncode}: {stderr}"
        )
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


def _is_v4(text: str) -> bool:
    if "%" in text:
        raise ValueError(f'failed to parse IP "{text}"')
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        raise ValueError(f'failed to parse IP "{text}"') from None
    mapped = getattr(address, "ipv4_mapped", None)
    return mapped is not None or address.version == 4


def ping(saddr: str, daddr: str, timeout_sec: int) -> None:
    """Send one echo request from ``saddr`` to ``daddr``.

    Uses ``ping`` for an IPv4 source and ``ping6`` otherwise. Raises
    ValueError if ``saddr`` is not an IP address, PingError if the command
    exits with a failure, and OSError if it cannot be started.
    """
    binary = "ping" if _is_v4(saddr) else "ping6"
    args = ["-c", "1", "-W", str(timeout_sec), "-I", saddr, daddr]
    completed = subprocess.run(
        [binary, *args],
        stdout=subprocess.DEVNULL,
        stderr=subprocess.PIPE,
        text=True,
        check=False,
    )
    if completed.returncode != 0:
        status = completed.returncode if completed.returncode > 0 else -1
        raise PingError(args, status, completed.stderr or "")