import os

import pytest

from multinic.ipforward import echo1, enable_forward


def test_echo1_does_not_rewrite_when_content_is_one(tmp_path):
    target = tmp_path / "forward"
    target.write_bytes(b"")
    echo1(target)
    assert target.read_bytes() == b"1"

    fixed = 1_000_000_000
    os.utime(target, ns=(fixed, fixed))
    echo1(target)
    assert target.stat().st_mtime_ns == fixed
    assert target.read_bytes() == b"1"


def test_echo1_accepts_surrounding_whitespace(tmp_path):
    target = tmp_path / "forward"
    target.write_bytes(b"1\n")
    echo1(target)
    assert target.read_bytes() == b"1\n"


def test_echo1_overwrites_other_value(tmp_path):
    target = tmp_path / "forward"
    target.write_bytes(b"0\n")
    echo1(target)
    assert target.read_bytes() == b"1"


def test_echo1_creates_missing_file(tmp_path):
    target = tmp_path / "forward"
    echo1(target)
    assert target.read_bytes() == b"1"


def test_echo1_raises_when_unwritable(tmp_path):
    with pytest.raises(OSError):
        echo1(tmp_path)


def test_enable_forward_with_no_addresses():
    assert enable_forward([]) == frozenset()