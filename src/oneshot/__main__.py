# Copyright 2021-2025, Francis Clairicia-Rose-Claire-Josephine
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
"""Command-line client: send one message, print the reply."""

from __future__ import annotations

__all__ = ["main", "run_client"]

import argparse
import logging
import socket
import sys
from collections.abc import Sequence
from typing import BinaryIO, TextIO

from .buffers import OverflowPolicy
from .exceptions import SessionError
from .lowlevel import constants
from .lowlevel.socket import IPv4SocketAddress, new_socket_address
from .prompt import ask_message, print_reply
from .session import ConnectionSession

logger = logging.getLogger("oneshot")


def run_client(
    address: IPv4SocketAddress,
    *,
    stdin: BinaryIO,
    stdout: TextIO,
    overflow: OverflowPolicy = OverflowPolicy.TRUNCATE,
) -> bytes:
    """
    Connects to `address`, asks for the message, sends it, prints the reply and closes the connection.

    Raises:
        SessionError: a step failed. The connection is already closed.

    Returns:
        the received reply.
    """
    with ConnectionSession(address) as session:
        session.connect()
        message = ask_message(stdin, stdout, policy=overflow)
        session.send(message)
        reply = session.receive()
        print_reply(reply, stdout)
    return reply


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="oneshot",
        description="Send one message to a TCP peer and print its reply.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        dest="log_level",
        action="store_const",
        const="DEBUG",
        default="WARNING",
        help="Increase verbose level",
    )
    parser.add_argument(
        "--host",
        dest="host",
        default=constants.LOOPBACK_HOST,
        help="IPv4 address of the peer",
    )
    parser.add_argument(
        "-p",
        "--port",
        dest="port",
        type=int,
        default=constants.DEFAULT_PORT,
    )
    parser.add_argument(
        "--overflow",
        dest="overflow",
        type=OverflowPolicy,
        choices=list(OverflowPolicy),
        default=OverflowPolicy.TRUNCATE,
        help="What to do with a message longer than %d bytes" % (constants.MESSAGE_BUFSIZE - 1),
    )

    args = parser.parse_args(argv)
    try:
        args.address = new_socket_address((args.host, args.port), socket.AF_INET)
    except ValueError as exc:
        parser.error(str(exc))
    return args


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="[ %(levelname)s ] [ %(name)s ] %(message)s")

    try:
        run_client(args.address, stdin=sys.stdin.buffer, stdout=sys.stdout, overflow=args.overflow)
    except SessionError as exc:
        logger.debug("Session aborted (%s)", exc.kind.name, exc_info=exc)
        print(exc, file=sys.stderr, flush=True)
        return constants.EXIT_FAILURE
    except KeyboardInterrupt:
        return constants.EXIT_FAILURE
    return constants.EXIT_SUCCESS


if __name__ == "__main__":
    sys.exit(main())
