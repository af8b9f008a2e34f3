import socket

import pytest

from multinic.echo_server import EchoServer, handle_connection


def _read_all(sock):
    chunks = []
    while True:
        chunk = sock.recv(1024)
        if not chunk:
            return b"".join(chunks)
        chunks.append(chunk)


@pytest.fixture
def server():
    srv = EchoServer()
    srv.start()
    yield srv
    srv.stop()


def test_address_is_loopback_with_port(server):
    assert server.port > 0
    assert server.address == f"127.0.0.1:{server.port}"


def test_will_echo_data_back(server):
    with socket.create_connection(("127.0.0.1", server.port), timeout=5) as conn:
        conn.sendall(b"hello\n")
        assert _read_all(conn) == b"hello"


def test_udp_echo(server):
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
        sock.settimeout(5)
        sock.sendto(b"ping", ("127.0.0.1", server.port))
        data, _ = sock.recvfrom(1024)
    assert data == b"ping"


def test_port_requires_start():
    with pytest.raises(RuntimeError):
        EchoServer().port


def test_start_twice_fails(server):
    with pytest.raises(RuntimeError):
        server.start()


def test_handle_connection_stops_at_newline():
    client, peer = socket.socketpair()
    with client:
        client.sendall(b"abc\ndef")
        peer.settimeout(5)
        echoed = handle_connection(peer)
        assert echoed == b"abc"
        assert _read_all(client) == b"abc"


def test_handle_connection_echoes_until_eof():
    client, peer = socket.socketpair()
    with client:
        client.sendall(b"xyz")
        client.shutdown(socket.SHUT_WR)
        peer.settimeout(5)
        echoed = handle_connection(peer)
        assert echoed == b"xyz"
        assert _read_all(client) == b"xyz"


def test_handle_connection_returns_none_on_read_timeout():
    client, peer = socket.socketpair()
    with client:
        peer.settimeout(0.1)
        assert handle_connection(peer) is None


def test_context_manager_serves():
    with EchoServer() as srv:
        with socket.create_connection(("127.0.0.1", srv.port), timeout=5) as conn:
            conn.sendall(b"hello\n")
            assert _read_all(conn) == b"hello"