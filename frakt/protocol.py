"""Length-prefixed framing of JSON messages and binary payloads over a socket.

A frame is a big-endian u32 total size (JSON plus payload), a big-endian u32
JSON size, the UTF-8 JSON text and then the binary payload.
"""

from __future__ import annotations

import logging
import socket
import struct

from .errors import FractalIOError

logger = logging.getLogger(__name__)

_HEADER = struct.Struct(">II")


def _read_exact(sock: socket.socket, size: int) -> bytes:
    buffer = bytearray()
    while len(buffer) < size:
        chunk = sock.recv(size - len(buffer))
        if not chunk:
            raise FractalIOError("failed to fill whole buffer")
        buffer += chunk
    return bytes(buffer)


def prepare_message(message: str) -> bytes:
    """Encode a message as UTF-8 bytes ready for sending."""
    return message.encode("utf-8")


def read_message(sock: socket.socket) -> tuple[str, bytes]:
    """Read one frame and return its JSON text and binary payload.

    Raises FractalIOError when the stream ends early, when the total size is
    smaller than the JSON size, or when the JSON is not valid UTF-8.
    """
    total_size, json_size = _HEADER.unpack(_read_exact(sock, _HEADER.size))
    if total_size < json_size:
        logger.error("Total size is less than JSON size.")
        raise FractalIOError("Total size is less than JSON size.")

    json_bytes = _read_exact(sock, json_size)
    try:
        json_str = json_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise FractalIOError(exc) from exc
    logger.debug("JSON response from server: %s", json_str)

    data = _read_exact(sock, total_size - json_size)
    return json_str, data


def get_response(sock: socket.socket) -> tuple[str, bytes]:
    """Read the next frame from ``sock``."""
    return read_message(sock)


def write(sock: socket.socket, message: str) -> None:
    """Send ``message`` as a frame with no binary payload."""
    message_bytes = prepare_message(message)
    size = len(message_bytes)
    sock.sendall(_HEADER.pack(size, size) + message_bytes)


def write_img(sock: socket.socket, message: str, img_data: bytes) -> None:
    """Send ``message`` followed by the binary payload ``img_data``."""
    json_bytes = prepare_message(message)
    payload = bytes(img_data)
    header = _HEADER.pack(len(json_bytes) + len(payload), len(json_bytes))
    sock.sendall(header + json_bytes + payload)
    logger.debug("Data sent")