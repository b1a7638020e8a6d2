"""Worker client: asks the server for fragments, renders them and sends results back."""

from __future__ import annotations

import logging
import socket
import sys
from typing import Sequence

from .errors import (
    FractalConnectionError,
    FractalError,
    FractalIOError,
    SerializationError,
    TaskNotSetError,
)
from .filesystem import FileExtension, get_dir_path, get_extension_str, get_file_path
from .imaging import generate_fractal_set, open_image, save_fractal_image
from .logsetup import TRACE, init_logger
from .messages import FragmentRequest, FragmentResult, FragmentTask
from .models import PixelData
from .options import ClientArgs, parse_client_args
from .protocol import get_response, write, write_img

logger = logging.getLogger(__name__)

_CONNECT_TIMEOUT = 1.0
_BYTES_PER_PIXEL = 3


def connect_to_server(cli_args: ClientArgs) -> socket.socket:
    """Open a TCP connection to the server named in ``cli_args`` (one-second timeout)."""
    logger.info("Connecting to server at %s...", cli_args.address())
    try:
        infos = socket.getaddrinfo(cli_args.hostname, cli_args.port, type=socket.SOCK_STREAM)
    except (OSError, UnicodeError) as exc:
        raise FractalIOError(exc) from exc
    if not infos:
        raise FractalConnectionError("Unable to resolve address")

    family, sock_type, proto, _, sockaddr = infos[0]
    sock = socket.socket(family, sock_type, proto)
    sock.settimeout(_CONNECT_TIMEOUT)
    try:
        sock.connect(sockaddr)
    except OSError as exc:
        sock.close()
        raise FractalIOError(exc) from exc
    sock.settimeout(None)
    return sock


def send_request(sock: socket.socket, serialized_request: str) -> None:
    """Send a serialized request to the server."""
    logger.info("Sending request to server...")
    write(sock, serialized_request)


def receive_fragment_task(sock: socket.socket) -> tuple[FragmentTask, bytes]:
    """Read the next task and its accompanying data from the server."""
    message, data = get_response(sock)
    logger.debug("Received response: %s", message)
    logger.debug("Received data in receive fragment task: %r", data)
    try:
        task = FragmentTask.deserialize(message)
    except SerializationError as exc:
        logger.error("Deserialization error: %s", exc.message)
        raise TaskNotSetError(f"Deserialization error: {exc.message}") from exc
    return task, data


def process_fragment_task(task: FragmentTask, data: bytes, cli_args: ClientArgs) -> socket.socket:
    """Render ``task``, optionally save and open it, and send the result.

    Returns the new connection on which the result was sent.
    """
    img_path = get_file_path("julia", get_dir_path(), get_extension_str(FileExtension.PNG))
    img, pixel_bytes, intensities = generate_fractal_set(task)
    logger.log(TRACE, "Pixel data bytes: %r", pixel_bytes)

    pixel_data = convert_to_pixel_data(pixel_bytes, task)
    payload = bytes(data) + b"".join(intensity.to_bytes() for intensity in intensities)
    logger.log(TRACE, "Vec data: %r", payload)

    if cli_args.save:
        save_fractal_image(img, img_path)

    sock = send_fragment_result(task, cli_args, pixel_data, payload)

    if cli_args.open:
        try:
            open_image(img_path)
        except OSError as exc:
            sock.close()
            raise FractalIOError(exc) from exc
    return sock


def send_fragment_result(
    fragment_task: FragmentTask,
    cli_args: ClientArgs,
    pixel_data: PixelData,
    data: bytes,
) -> socket.socket:
    """Send the result of ``fragment_task`` with ``data`` on a fresh connection."""
    result = FragmentResult(
        fragment_task.id, fragment_task.resolution, fragment_task.range, pixel_data
    )
    serialized = result.serialize()
    sock = connect_to_server(cli_args)
    logger.debug("Sending fragment result: %s", serialized)
    try:
        write_img(sock, serialized, data)
    except OSError as exc:
        sock.close()
        raise FractalIOError(exc) from exc
    return sock


def convert_to_pixel_data(data: bytes, task: FragmentTask) -> PixelData:
    """Describe RGB pixel bytes as a pixel run located at the task's id count."""
    return PixelData(offset=task.id.count, count=len(data) // _BYTES_PER_PIXEL)


def _run(args: ClientArgs) -> None:
    serialized_request = FragmentRequest(args.worker_name, 1000).serialize()
    sock = connect_to_server(args)
    try:
        send_request(sock, serialized_request)
        logger.log(TRACE, "Sent request to server")
        while True:
            try:
                task, data = receive_fragment_task(sock)
            except (FractalError, OSError) as exc:
                logger.error("Error receiving fragment task: %r", exc)
                break
            logger.log(TRACE, "Received fragment task: %r", task)
            new_sock = process_fragment_task(task, data, args)
            sock.close()
            sock = new_sock
    finally:
        sock.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the worker; returns the process exit status."""
    args = parse_client_args(argv)
    init_logger(args.verbose, args.debug, args.trace)
    try:
        _run(args)
    except (FractalError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())