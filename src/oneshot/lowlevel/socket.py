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
"""Socket utilities module."""

from __future__ import annotations

__all__ = [
    "IPv4SocketAddress",
    "loopback_endpoint",
    "new_socket_address",
]

import socket as _socket
from typing import Any, NamedTuple

from . import _utils, constants


class IPv4SocketAddress(NamedTuple):
    """An internet (IPv4) socket address."""

    host: str
    port: int

    def __str__(self) -> str:
        return f"({self.host!r}, {self.port:d})"

    def for_connection(self) -> tuple[str, int]:
        """
        Returns:
            A pair of (host, port)
        """
        return self.host, self.port


def loopback_endpoint(port: int = constants.DEFAULT_PORT) -> IPv4SocketAddress:
    """
    Builds the address of the peer on the loopback interface.

    Example:
        >>> loopback_endpoint()
        IPv4SocketAddress(host='127.0.0.1', port=1234)
        >>> loopback_endpoint() == loopback_endpoint()
        True

    Parameters:
        port: The peer port. Defaults to :data:`.constants.DEFAULT_PORT`.

    Raises:
        ValueError: `port` is out of range.

    Returns:
        an :class:`IPv4SocketAddress` named tuple.
    """
    return new_socket_address((constants.LOOPBACK_HOST, port), _socket.AF_INET)


def new_socket_address(addr: tuple[Any, ...], family: int) -> IPv4SocketAddress:
    """
    Factory to create an :class:`IPv4SocketAddress` from `addr`.

    Example:
        >>> import socket
        >>> new_socket_address(("127.0.0.1", 12345), socket.AF_INET)
        IPv4SocketAddress(host='127.0.0.1', port=12345)
        >>> new_socket_address(("::1", 12345), socket.AF_INET6)
        Traceback (most recent call last):
        ...
        ValueError: Only this family is supported: AF_INET

    Parameters:
        addr: The address in the form ``(host, port)``.
        family: The socket family.

    Raises:
        ValueError: Invalid `family`, or `port` is out of range.
        TypeError: Invalid `addr`.

    Returns:
        an :class:`IPv4SocketAddress` named tuple.
    """
    _utils.check_inet4_socket_family(family)
    match addr:
        case (str(host), int(port)):
            pass
        case _:
            raise TypeError(f"Invalid address: {addr!r}")
    if not (0 <= port <= 0xFFFF):
        raise ValueError(f"Port out of range: {port}")
    _utils.check_ipv4_host(host)
    return IPv4SocketAddress(host, port)
