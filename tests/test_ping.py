import subprocess
from unittest import mock

import pytest

from multinic.ping import PingError, ping


def _completed(returncode, stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stderr=stderr)


def test_invalid_source_address_is_rejected():
    with pytest.raises(ValueError, match="failed to parse IP"):
        ping("not-an-ip", "10.0.0.2", 1)


@mock.patch("multinic.ping.subprocess.run")
def test_ipv4_source_uses_ping(run):
    run.return_value = _completed(0)
    result = ping("10.0.0.1", "10.0.0.2", 3)
    assert result is None
    command = run.call_args.args[0]
    assert command == ["ping", "-c", "1", "-W", "3", "-I", "10.0.0.1", "10.0.0.2"]


@mock.patch("multinic.ping.subprocess.run")
def test_ipv6_source_uses_ping6(run):
    run.return_value = _completed(0)
    result = ping("2001:db8::1", "2001:db8::2", 5)
    assert result is None
    command = run.call_args.args[0]
    assert command[0] == "ping6"
    assert command[1:] == ["-c", "1", "-W", "5", "-I", "2001:db8::1", "2001:db8::2"]


@mock.patch("multinic.ping.subprocess.run")
def test_failure_raises_ping_error(run):
    run.return_value = _completed(1, "unreachable")
    with pytest.raises(PingError) as info:
        ping("10.0.0.1", "10.0.0.2", 2)
    err = info.value
    assert err.returncode == 1
    assert err.stderr == "unreachable"
    assert err.command == ["-c", "1", "-W", "2", "-I", "10.0.0.1", "10.0.0.2"]
    assert str(err).endswith("exit status 1: unreachable")