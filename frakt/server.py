"""Fractal server: hands out tasks to workers and stores the images they return."""

from __future__ import annotations

import logging
import os
import socket
import sys
from typing import Sequence

from .errors import FractalError, FractalIOError, SerializationError
from .filesystem import FileExtension, get_dir_path, get_extension_str, get_file_path
from .fragment_maker import create_tasks
from .imaging import image_from_pixel_intensity, save_fractal_image
from .logsetup import init_logger
from .messages import FragmentRequest, FragmentTask, deserialize_message
from .models import PixelIntensity, pixel_intensities_from_bytes
from .options import parse_server_args
from .protocol import get_response, read_message, write

logger = logging.getLogger(__name__)


def _answer_request(sock: socket.socket) -> None:
    try:
        task = create_tasks()[0]
        serialized_task = task.serialize()
    except FractalError as exc:
        logger.error("Error creating task: %r", exc)
        raise FractalIOError("Could not create a task") from exc
    logger.debug("Task created: %r", task)
    try:
        peer = sock.getpeername()
    except OSError:
        peer = "unknown peer"
    logger.info("Sending serialized task to client at %s", peer)
    write(sock, serialized_task)
    response = get_response(sock)
    logger.debug("Received response: %r", response)


def _store_result(pixel_intensity: list[PixelIntensity]) -> None:
    try:
        img = image_from_pixel_intensity(pixel_intensity)
    except FractalError as exc:
        logger.error("Error creating image from pixel intensity: %r", exc)
        raise FractalIOError("Could not build the image") from exc
    img_path = get_file_path(
        "test-23_02_23", get_dir_path(), get_extension_str(FileExtension.PNG)
    )
    try:
        save_fractal_image(img, img_path)
    except FractalError as exc:
        logger.error("Error saving image: %r", exc)
        raise FractalIOError("Could not save the image") from exc


def handle_client(sock: socket.socket) -> None:
    """Serve one connection and close it.

    A request is answered with a task; a result is turned into an image and
    saved. Unreadable messages are logged and ignored.
    """
    with sock:
        logger.info("Handling client")
        try:
            logger.info("Connection established %s", sock.getsockname())
        except OSError as exc:
            logger.error("Failed to get local address: %s", exc)

        message, data = read_message(sock)
        logger.debug("Received JSON: %s", message)
        pixel_intensity = pixel_intensities_from_bytes(data) if data else []

        try:
            received = deserialize_message(message)
        except SerializationError as exc:
            logger.error("Error deserializing request: %r", exc)
            return
        logger.debug("Deserialized data %r", received)

        if isinstance(received, FragmentRequest):
            _answer_request(sock)
        elif isinstance(received, FragmentTask):
            raise FractalIOError("Server can't handle FragmentTask")
        else:
            _store_result(pixel_intensity)


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not port.isdigit() or int(port) > 0xFFFF:
        raise ValueError(f"invalid socket address: {address!r}")
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host, int(port)


def run_server(address: str) -> None:
    """Listen on ``host:port`` and serve connections one after another, forever."""
    logger.info("Server is running on %s", address)
    try:
        listener = socket.create_server(_split_address(address))
    except OSError as exc:
        logger.error("Failed to bind to address: %s", exc)
        raise
    with listener:
        while True:
            conn, _ = listener.accept()
            try:
                handle_client(conn)
            except (FractalError, OSError) as exc:
                logger.debug("Client handling failed: %r", exc)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the server; returns the process exit status."""
    args = parse_server_args(argv)
    init_logger(args.verbose, args.debug, args.trace)
    os.environ["RESOLUTION_WIDTH"] = str(args.width)
    os.environ["RESOLUTION_HEIGHT"] = str(args.height)
    try:
        run_server(args.address())
        logger.info("Server stopped successfully!")
    except (OSError, ValueError):
        logger.error("Could not start the server")
    return 0


if __name__ == "__main__":
    sys.exit(main())