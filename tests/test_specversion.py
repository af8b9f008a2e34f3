import pytest

from multinic.specversion import (
    ALL_SPEC_VERSIONS,
    greater_than_or_equal_to,
    spec_version_has_chaining,
    spec_version_has_check,
    spec_version_has_ip_version,
    spec_version_has_multiple_ips,
)


@pytest.mark.parametrize("ver", ["0.3.0", "0.3.1", "0.4.0"])
def test_has_ip_version_true(ver):
    assert spec_version_has_ip_version(ver) is True


@pytest.mark.parametrize("ver", ["0.1.0", "0.2.0", "1.0.0"])
def test_has_ip_version_false(ver):
    assert spec_version_has_ip_version(ver) is False


def test_has_check():
    assert [spec_version_has_check(v) for v in ALL_SPEC_VERSIONS] == [
        False, False, False, False, True, True,
    ]


def test_has_chaining_and_multiple_ips_agree():
    chaining = [spec_version_has_chaining(v) for v in ALL_SPEC_VERSIONS]
    multiple = [spec_version_has_multiple_ips(v) for v in ALL_SPEC_VERSIONS]
    assert chaining == multiple
    assert chaining == [False, False, True, True, True, True]


def test_invalid_versions_have_no_features():
    assert spec_version_has_check("garbage") is False
    assert spec_version_has_chaining("") is False


def test_greater_than_or_equal_to():
    assert greater_than_or_equal_to("1.0.0", "0.4.0") is True
    assert greater_than_or_equal_to("0.3.1", "0.4.0") is False
    assert greater_than_or_equal_to("0.4.0", "0.4.0") is True


def test_greater_than_or_equal_to_is_reflexive():
    assert all(greater_than_or_equal_to(v, v) for v in ALL_SPEC_VERSIONS)


def test_all_spec_versions_are_ordered():
    pairs = zip(ALL_SPEC_VERSIONS[1:], ALL_SPEC_VERSIONS)
    assert all(greater_than_or_equal_to(b, a) for b, a in pairs)


@pytest.mark.parametrize("bad", ["", "x.y.z", "1.2.3.4"])
def test_greater_than_or_equal_to_invalid(bad):
    with pytest.raises(ValueError):
        greater_than_or_equal_to(bad, "0.4.0")