import os

import pytest

from multinic.resolvconf import DNS, format_resolv_conf, tmp_resolv_conf


@pytest.fixture
def dns():
    return DNS(
        nameservers=["192.0.2.1", "192.0.2.2"],
        domain="example.com",
        search=["a.example.com", "b.example.com"],
        options=["ndots:5", "rotate"],
    )


def test_format_full(dns):
    assert format_resolv_conf(dns) == (
        "nameserver 192.0.2.1\n"
        "nameserver 192.0.2.2\n"
        "domain example.com\n"
        "search a.example.com b.example.com\n"
        "options ndots:5 rotate"
    )


def test_format_empty():
    assert format_resolv_conf(DNS()) == "domain \nsearch \noptions "


def test_format_line_structure(dns):
    lines = format_resolv_conf(dns).split("\n")
    assert len(lines) == len(dns.nameservers) + 3
    assert [line.split(" ", 1)[1] for line in lines[:2]] == dns.nameservers
    assert lines[-3].split(" ", 1)[1] == dns.domain
    assert lines[-2].split(" ")[1:] == dns.search
    assert lines[-1].split(" ")[1:] == dns.options


def test_tmp_resolv_conf_round_trip(dns):
    path = tmp_resolv_conf(dns)
    try:
        assert os.path.basename(path).startswith("cni_test_resolv.conf")
        with open(path, encoding="utf-8") as fh:
            assert fh.read() == format_resolv_conf(dns)
    finally:
        os.remove(path)


def test_tmp_resolv_conf_creates_distinct_files(dns):
    first = tmp_resolv_conf(dns)
    second = tmp_resolv_conf(DNS())
    try:
        assert first != second
        with open(second, encoding="utf-8") as fh:
            assert fh.read() == format_resolv_conf(DNS())
    finally:
        os.remove(first)
        os.remove(second)