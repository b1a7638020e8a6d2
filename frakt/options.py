"""Command-line options of the worker client and the server."""

from __future__ import annotations

import argparse
import re
from dataclasses import dataclass
from typing import Sequence

_U16_MAX = 0xFFFF
_U8_MAX = 0xFF
_UNSIGNED = re.compile(r"\+?[0-9]+", re.ASCII)


def _u16(text: str) -> int:
    if not _UNSIGNED.fullmatch(text):
        raise argparse.ArgumentTypeError(f"invalid digit found in string: {text!r}")
    value = int(text)
    if value > _U16_MAX:
        raise argparse.ArgumentTypeError(f"{value} is not in 0..={_U16_MAX}")
    return value


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--hostname", default="localhost", help="host name (default: localhost)")
    parser.add_argument("-P", "--port", type=_u16, default=8787, help="port (default: 8787)")


def _add_counters(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="count", default=0, help="enable logging")
    parser.add_argument("-d", "--debug", action="count", default=0, help="enable debug mode")
    parser.add_argument("-t", "--trace", action="count", default=0, help="enable trace mode")


def _saturate(count: int) -> int:
    return min(count, _U8_MAX)


@dataclass(frozen=True)
class ClientArgs:
    """Options of a worker client."""

    hostname: str = "localhost"
    port: int = 8787
    worker_name: str = "worker"
    verbose: int = 0
    debug: int = 0
    trace: int = 0
    open: bool = False
    save: bool = False

    def address(self) -> str:
        return f"{self.hostname}:{self.port}"


@dataclass(frozen=True)
class ServerArgs:
    """Options of the server."""

    hostname: str = "localhost"
    port: int = 8787
    verbose: int = 0
    debug: int = 0
    trace: int = 0
    width: int = 1200
    height: int = 1200

    def address(self) -> str:
        return f"{self.hostname}:{self.port}"


def parse_client_args(argv: Sequence[str] | None = None) -> ClientArgs:
    """Parse worker options; exits with usage text on invalid input."""
    parser = argparse.ArgumentParser(prog="worker", description="Fractal worker client.")
    _add_common(parser)
    parser.add_argument("-N", "--name", dest="worker_name", default="worker",
                        help="worker name (default: worker)")
    _add_counters(parser)
    parser.add_argument("-o", "--open", action="store_true", help="open the image after saving")
    parser.add_argument("-s", "--save", action="store_true", help="save the image to a file")
    ns = parser.parse_args(argv)
    return ClientArgs(
        hostname=ns.hostname,
        port=ns.port,
        worker_name=ns.worker_name,
        verbose=_saturate(ns.verbose),
        debug=_saturate(ns.debug),
        trace=_saturate(ns.trace),
        open=ns.open,
        save=ns.save,
    )


def parse_server_args(argv: Sequence[str] | None = None) -> ServerArgs:
    """Parse server options; exits with usage text on invalid input."""
    parser = argparse.ArgumentParser(prog="server", description="Fractal server.")
    _add_common(parser)
    _add_counters(parser)
    parser.add_argument("--width", type=_u16, default=1200, help="window width (default: 1200)")
    parser.add_argument("--height", type=_u16, default=1200, help="window height (default: 1200)")
    ns = parser.parse_args(argv)
    return ServerArgs(
        hostname=ns.hostname,
        port=ns.port,
        verbose=_saturate(ns.verbose),
        debug=_saturate(ns.debug),
        trace=_saturate(ns.trace),
        width=ns.width,
        height=ns.height,
    )