"""Client for the echo server: sends a message and prints the reply."""

from __future__ import annotations

import argparse
import socket
import sys

DEFAULT_UDP_LOCAL_PORT = 54321
_BUFFER_SIZE = 1024


def _split_host_port(target: str) -> tuple[str, int]:
    if target.startswith("["):
        end = target.find("]:")
        if end < 0:
            raise ValueError(f"missing port in address {target}")
        host, port_text = target[1:end], target[end + 2 :]
    else:
        host, sep, port_text = target.rpartition(":")
        if not sep:
            raise ValueError(f"missing port in address {target}")
        if ":" in host:
            raise ValueError(f"too many colons in address {target}")
    if port_text.isascii() and port_text.isdigit():
        port = int(port_text)
    else:
        try:
            port = socket.getservbyname(port_text)
        except OSError:
            raise ValueError(f"unknown port in address {target}") from None
    return host or "localhost", port


def connect_tcp(target: str, payload: str) -> str:
    """Send ``payload`` and a newline over TCP; return everything read back."""
    address = _split_host_port(target)
    try:
        conn = socket.create_connection(address)
    except OSError as exc:
        raise ConnectionError(
            f"Failed to open connection to [{target}] {exc}"
        ) from exc
    with conn:
        try:
            conn.sendall(payload.encode())
            conn.sendall(b"\n")
        except OSError as exc:
            raise ConnectionError("Failed to send payload") from exc
        chunks = []
        while True:
            try:
                chunk = conn.recv(_BUFFER_SIZE)
            except OSError as exc:
                raise ConnectionError("Failed to read from socket") from exc
            if not chunk:
                break
            chunks.append(chunk)
    return b"".join(chunks).decode("utf-8", errors="replace")


def connect_udp(
    target: str, payload: str, local_port: int = DEFAULT_UDP_LOCAL_PORT
) -> str:
    """Send ``payload`` and a newline over UDP; return the first reply.

    A fixed local port is used by default so that repeated runs reuse the
    same connection tracking entry.
    """
    host, port = _split_host_port(target)
    try:
        family, _, _, _, remote = socket.getaddrinfo(
            host, port, type=socket.SOCK_DGRAM
        )[0]
    except OSError as exc:
        raise ConnectionError(
            f"Failed to resolve UDP remote address [{target}] {exc}"
        ) from exc
    sock = socket.socket(family, socket.SOCK_DGRAM)
    with sock:
        try:
            sock.bind(("", local_port))
            sock.connect(remote)
        except OSError as exc:
            raise ConnectionError(
                f"Failed to open connection to [{target}] {exc}"
            ) from exc
        try:
            sock.send(payload.encode())
            sock.send(b"\n")
        except OSError as exc:
            raise ConnectionError("Failed to send payload") from exc
        try:
            data = sock.recv(_BUFFER_SIZE)
        except OSError as exc:
            raise ConnectionError("Failed to read from socket") from exc
    return data.decode("utf-8", errors="replace")


def main(argv: list[str] | None = None) -> int:
    """Send a message to an echo server and print what comes back."""
    parser = argparse.ArgumentParser(description="Send a message to an echo server.")
    parser.add_argument("-target", "--target", default="", help="the server address")
    parser.add_argument(
        "-message", "--message", default="", help="the message to send to the server"
    )
    parser.add_argument(
        "-protocol",
        "--protocol",
        default="tcp",
        help="the protocol to use with the server [udp,tcp], default tcp",
    )
    args = parser.parse_args(argv)
    if not args.target or not args.message:
        parser.error("invalid arguments")
    if args.protocol == "tcp":
        reply = connect_tcp(args.target, args.message)
    elif args.protocol == "udp":
        reply = connect_udp(args.target, args.message)
    else:
        parser.error("invalid protocol")
    sys.stdout.write(reply)
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    sys.exit(main())