"""Feature checks for CNI specification versions."""

from __future__ import annotations

ALL_SPEC_VERSIONS = ("0.1.0", "0.2.0", "0.3.0", "0.3.1", "0.4.0", "1.0.0")

_IP_VERSION_SPECS = frozenset({"0.3.0", "0.3.1", "0.4.0"})


def _parse(version: str) -> tuple[int, int, int]:
    parts = version.split(".")
    if len(parts) > 3:
        raise ValueError(f"invalid version {version!r}: too many parts")
    numbers = []
    for part in parts:
        if not (part.isascii() and part.isdigit()):
            raise ValueError(f"invalid version {version!r}")
        numbers.append(int(part))
    while len(numbers) < 3:
        numbers.append(0)
    return numbers[0], numbers[1], numbers[2]


def greater_than_or_equal_to(version: str, other: str) -> bool:
    """Return whether ``version`` is at least ``other``."""
    return _parse(version) >= _parse(other)


def _at_least(ver: str, minimum: str) -> bool:
    try:
        return greater_than_or_equal_to(ver, minimum)
    except ValueError:
        return False


def spec_version_has_ip_version(ver: str) -> bool:
    """Whether IP entries of this version carry a "version" field."""
    return ver in _IP_VERSION_SPECS


def spec_version_has_check(ver: str) -> bool:
    """Whether this version supports the CHECK command."""
    return _at_least(ver, "0.4.0")


def spec_version_has_chaining(ver: str) -> bool:
    """Whether this version supports plugin chaining."""
    return _at_least(ver, "0.3.0")


def spec_version_has_multiple_ips(ver: str) -> bool:
    """Whether this version allows several IPs of each family."""
    return _at_least(ver, "0.3.0")