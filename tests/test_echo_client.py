import pytest

from multinic.echo_client import connect_tcp, connect_udp, main
from multinic.echo_server import EchoServer


@pytest.fixture
def server():
    srv = EchoServer()
    srv.start()
    yield srv
    srv.stop()


def test_connect_tcp_gets_echo(server):
    assert connect_tcp(server.address, "hello") == "hello"


def test_connect_udp_gets_echo(server):
    assert connect_udp(server.address, "hello", local_port=0) == "hello"


def test_main_connects_with_echo_client(server, capsys):
    code = main(["-target", server.address, "-message", "hello"])
    assert code == 0
    assert capsys.readouterr().out == "hello"


def test_main_requires_target_and_message():
    with pytest.raises(SystemExit) as info:
        main(["-target", "127.0.0.1:1"])
    assert info.value.code == 2


def test_main_rejects_unknown_protocol():
    with pytest.raises(SystemExit) as info:
        main(["-target", "127.0.0.1:1", "-message", "hi", "-protocol", "sctp"])
    assert info.value.code == 2


def test_target_without_port_is_rejected():
    with pytest.raises(ValueError, match="missing port"):
        connect_tcp("localhost", "hello")


def test_target_with_too_many_colons_is_rejected():
    with pytest.raises(ValueError, match="too many colons"):
        connect_tcp("::1:80", "hello")