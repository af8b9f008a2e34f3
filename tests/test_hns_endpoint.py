import ipaddress

import pytest

from multinic.hns_endpoint import (
    construct_endpoint_name,
    get_default_destination_prefix,
    get_ip_string,
    get_sandbox_container_id,
)


@pytest.mark.parametrize("netns", ["", "none", "nocolon"])
def test_sandbox_id_keeps_container_id(netns):
    assert get_sandbox_container_id("abc123", netns) == "abc123"


def test_sandbox_id_taken_from_netns():
    assert get_sandbox_container_id("abc123", "container:sandbox9") == "sandbox9"


def test_sandbox_id_splits_once():
    assert get_sandbox_container_id("abc", "container:x:y") == "x:y"


def test_ip_string_unset_is_empty():
    assert get_ip_string(None) == ""


def test_ip_string_round_trips():
    for text in ("10.0.0.1", "2001:db8::1"):
        ip = ipaddress.ip_address(text)
        assert ipaddress.ip_address(get_ip_string(ip)) == ip


def test_ip_string_of_mapped_address_is_dotted():
    assert get_ip_string(ipaddress.ip_address("::ffff:10.0.0.1")) == "10.0.0.1"


def test_default_destination_prefix_v4():
    assert get_default_destination_prefix(ipaddress.ip_address("10.0.0.1")) == "0.0.0.0/0"
    assert (
        get_default_destination_prefix(ipaddress.ip_address("::ffff:10.0.0.1"))
        == "0.0.0.0/0"
    )


def test_default_destination_prefix_v6_and_unset():
    assert get_default_destination_prefix(ipaddress.ip_address("2001:db8::1")) == "::/0"
    assert get_default_destination_prefix(None) == "::/0"


def test_endpoint_name_uses_sandbox_id():
    name = construct_endpoint_name("abc", "container:sandbox9", "net1")
    assert name.startswith("sandbox9_")
    assert name.endswith("_net1")


def test_endpoint_name_for_pause_container():
    assert construct_endpoint_name("abc", "none", "net1") == "abc_net1"