"""Framing of typed, numbered messages over a socket's byte stream.

Each message on the wire is laid out as:

1. packet size    (size_format, the length of the data)
2. message id     (unsigned 16-bit, unique per sender, wrapping)
3. reply id       (unsigned 16-bit, the id this message answers, or 0)
4. message type   (type_format)
5. data           (packet size bytes)

All header fields are little-endian by default.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

MESSAGE_ID_FORMAT = "<H"
_MESSAGE_ID_MASK = 0xFFFF


class RouterSocket(Protocol):
    """What a router needs from the socket it reads and writes."""

    @property
    def buffer(self) -> bytearray: ...

    def is_connected(self) -> bool: ...

    def write_data(self, data: bytes) -> None: ...


@dataclass
class Message:
    """A message received by a router and passed to its handlers."""

    data: bytes
    type: int = 0
    message_id: int = 0
    replying_to: int = 0


Handler = Callable[[Message], None]


class Router:
    """Writes messages to a socket and dispatches the ones it receives.

    Handlers registered with set_handler() are called for every received
    message of their type. A handler registered with reply_handler() is
    called once, for the first message replying to a given message id.
    """

    def __init__(
        self,
        socket: Optional[RouterSocket] = None,
        size_format: str = "<I",
        type_format: str = "<I",
    ) -> None:
        self.socket = socket
        self._size = struct.Struct(size_format)
        self._id = struct.Struct(MESSAGE_ID_FORMAT)
        self._type = struct.Struct(type_format)
        self._header_size = self._size.size + self._id.size * 2 + self._type.size
        self._message_id = 0
        self._processors: dict[int, Handler] = {}
        self._responders: dict[int, Handler] = {}

    @property
    def header_size(self) -> int:
        """Number of header bytes that precede each message's data."""
        return self._header_size

    def _require_socket(self) -> RouterSocket:
        if self.socket is None:
            raise RuntimeError("router has no socket")
        return self.socket

    def parse_messages(self) -> None:
        """Dispatch every complete message waiting in the socket's buffer.

        Processed messages are removed from the front of the buffer; a
        partial message is left for a later call.
        """
        sock = self._require_socket()
        if not sock.is_connected():
            return
        data = sock.buffer
        while self._process_message(data):
            pass

    def set_handler(self, msg_type: int, handler: Handler) -> None:
        """Call handler for every received message of msg_type."""
        self._processors[msg_type] = handler

    def reply_handler(self, reply_to: int, handler: Handler) -> None:
        """Call handler once, when a message replying to reply_to arrives."""
        self._responders[reply_to] = handler

    def write_message(self, msg_type: int, data: bytes, responding_to: int = 0) -> int:
        """Queue a message on the socket and return the id given to it."""
        sock = self._require_socket()
        self._message_id = (self._message_id + 1) & _MESSAGE_ID_MASK
        # The id may have wrapped round, so forget any old reply handler for it.
        self.clear_reply_handler(self._message_id)
        payload = bytes(data)
        sock.write_data(
            self._size.pack(len(payload))
            + self._id.pack(self._message_id)
            + self._id.pack(responding_to)
            + self._type.pack(msg_type)
            + payload
        )
        return self._message_id

    def clear_reply_handler(self, message_id: int) -> None:
        self._responders.pop(message_id, None)

    def _process_message(self, data: bytearray) -> bool:
        if len(data) < self._size.size:
            return False
        (packet_size,) = self._size.unpack_from(data, 0)
        if packet_size + self._header_size > len(data):
            return False
        offset = self._size.size
        (message_id,) = self._id.unpack_from(data, offset)
        offset += self._id.size
        (reply_id,) = self._id.unpack_from(data, offset)
        offset += self._id.size
        (msg_type,) = self._type.unpack_from(data, offset)
        offset += self._type.size
        message = Message(
            data=bytes(data[offset : offset + packet_size]),
            type=msg_type,
            message_id=message_id,
            replying_to=reply_id,
        )
        self._call_handler(message)
        self._call_reply_handler(message)
        del data[: self._header_size + packet_size]
        return True

    def _call_handler(self, message: Message) -> None:
        handler = self._processors.get(message.type)
        if handler is not None:
            handler(message)

    def _call_reply_handler(self, message: Message) -> None:
        if message.replying_to == 0:
            return
        handler = self._responders.get(message.replying_to)
        if handler is None:
            return
        handler(message)
        self.clear_reply_handler(message.replying_to)