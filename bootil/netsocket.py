"""Non-blocking TCP sockets with send and receive queues, and IPv4 helpers."""

from __future__ import annotations

import errno
import os
import select
import socket
import threading
from typing import Optional

from bootil.base import Timer

CONNECT_TIMEOUT = 2.0
_RECV_CHUNK = 65536
_LISTEN_BACKLOG = 64

_WOULD_BLOCK = {errno.EAGAIN, errno.EWOULDBLOCK, errno.EINPROGRESS}
if hasattr(errno, "WSAEWOULDBLOCK"):
    _WOULD_BLOCK.add(errno.WSAEWOULDBLOCK)

_network_started = threading.Event()


def start() -> None:
    """Prepare the network layer; sockets need no set-up here, so this records the state."""
    _network_started.set()


def end() -> None:
    """Release the network layer; the counterpart of start()."""
    _network_started.clear()


def ip_to_string(ip: int, big_endian: bool = False) -> str:
    """Dotted form of a 32-bit address held as an integer.

    By default the most significant byte comes first; with big_endian the
    least significant byte does.
    """
    octets = (ip & 0xFFFFFFFF).to_bytes(4, "little" if big_endian else "big")
    return ".".join(str(octet) for octet in octets)


def string_to_ip(text: str) -> int:
    """The address in text as an integer with the first octet most significant."""
    try:
        packed = socket.inet_aton(text)
    except OSError as exc:
        raise ValueError(f"invalid IPv4 address: {text!r}") from exc
    return int.from_bytes(packed, "big")


def _prevented_block(exc: OSError) -> bool:
    return isinstance(exc, BlockingIOError) or (exc.errno or 0) in _WOULD_BLOCK


class Socket:
    """A non-blocking TCP socket, either a listener or a connection.

    Writes are queued and sent by cycle(), which also appends received
    bytes to ``buffer``; call cycle() regularly and delete what you have
    consumed from the front of ``buffer``.
    """

    def __init__(self) -> None:
        self._sock: Optional[socket.socket] = None
        self._send_queue = bytearray()
        self._recv_queue = bytearray()
        self._listener = False
        self._attempting_connect = False
        self._connection_timer = Timer()
        self.last_error = 0
        self.close_reason = ""

    def __enter__(self) -> Socket:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close("socket deleted")

    @property
    def buffer(self) -> bytearray:
        """Received bytes not yet consumed."""
        return self._recv_queue

    def _open(self) -> socket.socket:
        if self._sock is not None:
            raise RuntimeError("socket is already open")
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM, socket.IPPROTO_TCP)
        self._initialize()
        return self._sock

    def _initialize(self) -> None:
        assert self._sock is not None
        self._sock.setblocking(False)
        try:
            self._sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
        except OSError:
            pass
        self._sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

    def init_as_listener(self, port: int) -> None:
        """Listen for connections on port; raises OSError on failure."""
        sock = self._open()
        try:
            sock.bind(("", port))
        except OSError as exc:
            self.last_error = exc.errno or 0
            self.close("couldn't bind address")
            raise
        try:
            sock.listen(_LISTEN_BACKLOG)
        except OSError as exc:
            self.last_error = exc.errno or 0
            self.close("couldn't start listening")
            raise
        self._listener = True

    def accept(self) -> Optional[Socket]:
        """A socket for a waiting incoming connection, or None if there is none."""
        if self._sock is None:
            return None
        try:
            conn, _ = self._sock.accept()
        except OSError:
            return None
        peer = Socket()
        peer._sock = conn
        peer._initialize()
        return peer

    def connect(self, ip: str, port: int) -> None:
        """Start connecting to a host name or address.

        The connection may still be in progress on return; see
        is_connecting() and wait_for_connection(). Raises OSError if the
        host cannot be resolved or the connection fails at once.
        """
        sock = self._open()
        try:
            address = socket.gethostbyname(ip)
        except OSError as exc:
            self.last_error = exc.errno or 0
            self.close("couldn't connect")
            raise
        status = sock.connect_ex((address, port))
        self.last_error = status
        if status == 0:
            return
        if status in _WOULD_BLOCK:
            self._connection_timer.reset()
            self._attempting_connect = True
            return
        self.close("connect error")
        raise OSError(status, os.strerror(status))

    def wait_for_connection(self) -> bool:
        """Block until connecting has finished; return whether it succeeded."""
        while self.is_connecting():
            self.cycle()
            select.select([], [], [], 0.01)
        return self.is_connected()

    def is_connected(self) -> bool:
        return self._sock is not None

    def is_connecting(self) -> bool:
        if not self._attempting_connect:
            return False
        self.cycle()
        return self._attempting_connect

    def close(self, reason: str = "") -> None:
        """Close the socket and discard both queues."""
        if self._sock is not None:
            self._sock.close()
        self._sock = None
        self._attempting_connect = False
        self._listener = False
        self._send_queue.clear()
        self._recv_queue.clear()
        self.close_reason = reason

    def cycle(self) -> None:
        """Send queued data, receive waiting data and advance connecting."""
        if self._listener:
            return
        if self.is_connected() and not self._attempting_connect:
            self.send_queued()
            if self._sock is not None:
                self._receive()
        if self._attempting_connect:
            self._finish_connecting()

    def _finish_connecting(self) -> None:
        assert self._sock is not None
        try:
            _, writable, failed = select.select([], [self._sock], [self._sock], 0.000001)
        except OSError as exc:
            self.last_error = exc.errno or 0
            if _prevented_block(exc):
                return
            self.close("finish connect error")
            return
        if writable or failed:
            error = self._sock.getsockopt(socket.SOL_SOCKET, socket.SO_ERROR)
            if error:
                self.last_error = error
                self.close("connect error")
                return
            self._attempting_connect = False
            return
        if self._connection_timer.seconds() >= CONNECT_TIMEOUT:
            self.close("timed out")

    def _receive(self) -> None:
        assert self._sock is not None
        try:
            data = self._sock.recv(_RECV_CHUNK)
        except OSError as exc:
            self.last_error = exc.errno or 0
            if _prevented_block(exc):
                return
            self.close("recv error")
            return
        if not data:
            self.close("recv 0")
            return
        self._recv_queue += data

    def write_data(self, data: bytes) -> None:
        """Queue bytes to be sent by the next cycle()."""
        self._send_queue += data

    def send_queued(self) -> None:
        """Send as much of the queue as the network takes now."""
        if self._sock is None or not self._send_queue:
            return
        written = 0
        total = len(self._send_queue)
        while written < total:
            try:
                sent = self._sock.send(bytes(self._send_queue[written:]))
            except OSError as exc:
                self.last_error = exc.errno or 0
                if _prevented_block(exc):
                    break
                self.close("send error")
                return
            written += sent
        del self._send_queue[:written]

    def _local_address(self) -> Optional[tuple]:
        if self._sock is None:
            return None
        try:
            return self._sock.getsockname()
        except OSError:
            return None

    def get_ip(self) -> str:
        """The local address of the socket, or 0.0.0.0 if it has none."""
        address = self._local_address()
        return address[0] if address else "0.0.0.0"

    def __str__(self) -> str:
        address = self._local_address()
        if not address:
            return "0.0.0.0:0"
        return f"{address[0]}:{address[1]}"