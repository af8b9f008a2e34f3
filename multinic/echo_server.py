"""A small TCP and UDP echo server used for connectivity checks.

It prints its listen address (``127.0.0.1:<port>``) on stdout, then echoes
one line per TCP connection and every UDP datagram on the same port.
"""

from __future__ import annotations

import argparse
import socket
import sys
import threading

_POLL_INTERVAL = 0.2
_BUFFER_SIZE = 1024
DEFAULT_TIMEOUT = 60.0


def _read_line(conn: socket.socket) -> bytes:
    buf = bytearray()
    while True:
        chunk = conn.recv(_BUFFER_SIZE)
        if not chunk:
            return bytes(buf)
        idx = chunk.find(b"\n")
        if idx >= 0:
            buf += chunk[: idx + 1]
            return bytes(buf)
        buf += chunk


def handle_connection(conn: socket.socket) -> bytes | None:
    """Read one line from ``conn``, send it back without its newline, close.

    Returns the bytes echoed, or None when reading or writing failed.
    A socket without a timeout gets the default one.
    """
    with conn:
        if conn.gettimeout() is None:
            conn.settimeout(DEFAULT_TIMEOUT)
        try:
            content = _read_line(conn)
        except OSError as exc:
            print(exc, file=sys.stderr)
            return None
        reply = content.removesuffix(b"\n")
        try:
            conn.sendall(reply)
        except OSError as exc:
            print(exc, file=sys.stderr)
            return None
        return reply


class EchoServer:
    """Echo server listening on one port for both TCP and UDP."""

    def __init__(
        self, host: str = "", port: int = 0, timeout: float = DEFAULT_TIMEOUT
    ) -> None:
        self.host = host
        self.timeout = timeout
        self._requested_port = port
        self._tcp: socket.socket | None = None
        self._udp: socket.socket | None = None
        self._threads: list[threading.Thread] = []
        self._stopped = threading.Event()

    @property
    def port(self) -> int:
        """The port the server listens on."""
        if self._tcp is None:
            raise RuntimeError("server is not started")
        return self._tcp.getsockname()[1]

    @property
    def address(self) -> str:
        """The loopback address clients can connect to."""
        return f"127.0.0.1:{self.port}"

    def start(self) -> int:
        """Bind both sockets, start serving in the background, return the port."""
        if self._tcp is not None:
            raise RuntimeError("server already started")
        tcp = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        try:
            tcp.bind((self.host, self._requested_port))
            tcp.listen()
            tcp.settimeout(_POLL_INTERVAL)
            port = tcp.getsockname()[1]
            udp = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
            try:
                udp.bind((self.host, port))
                udp.settimeout(_POLL_INTERVAL)
            except OSError:
                udp.close()
                raise
        except OSError:
            tcp.close()
            raise
        self._tcp, self._udp = tcp, udp
        self._stopped.clear()
        self._threads = [
            threading.Thread(target=self._accept_loop, daemon=True),
            threading.Thread(target=self._udp_loop, daemon=True),
        ]
        for thread in self._threads:
            thread.start()
        return port

    def _accept_loop(self) -> None:
        assert self._tcp is not None
        while not self._stopped.is_set():
            try:
                conn, _ = self._tcp.accept()
            except socket.timeout:
                continue
            except OSError:
                break
            conn.settimeout(self.timeout)
            threading.Thread(
                target=handle_connection, args=(conn,), daemon=True
            ).start()

    def _udp_loop(self) -> None:
        assert self._udp is not None
        while not self._stopped.is_set():
            try:
                data, peer = self._udp.recvfrom(_BUFFER_SIZE)
            except socket.timeout:
                continue
            except OSError:
                break
            try:
                self._udp.sendto(data, peer)
            except OSError:
                break

    def stop(self) -> None:
        """Stop serving and close both sockets."""
        self._stopped.set()
        for thread in self._threads:
            thread.join()
        self._threads = []
        for sock in (self._tcp, self._udp):
            if sock is not None:
                sock.close()
        self._tcp = self._udp = None

    def serve_forever(self) -> None:
        """Serve until :meth:`stop` is called from another thread."""
        if self._tcp is None:
            self.start()
        try:
            while not self._stopped.wait(_POLL_INTERVAL):
                pass
        finally:
            self.stop()

    def __enter__(self) -> EchoServer:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


def main(argv: list[str] | None = None) -> int:
    """Start the server, print its address and serve until interrupted."""
    parser = argparse.ArgumentParser(
        description="Echo one line per TCP connection and every UDP datagram."
    )
    parser.parse_args(argv)
    server = EchoServer()
    server.start()
    print(server.address, flush=True)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())