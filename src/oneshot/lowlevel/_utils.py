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
from __future__ import annotations

__all__ = [
    "WarnCallback",
    "check_inet4_socket_family",
    "check_ipv4_host",
    "error_from_errno",
    "exception_with_notes",
    "oserror_details",
]

import errno as _errno
import ipaddress
import os
import socket as _socket
from collections.abc import Iterable
from typing import Protocol, TypeVar

_T_Exception = TypeVar("_T_Exception", bound=BaseException)


class WarnCallback(Protocol):
    def __call__(
        self,
        message: str,
        category: type[Warning] | None = ...,
        stacklevel: int = ...,
        source: object | None = ...,
    ) -> None: ...


def error_from_errno(errno: int, msg: str = "{strerror}") -> OSError:
    return OSError(errno, msg.format(strerror=os.strerror(errno)))


def oserror_details(exc: OSError) -> tuple[int, str]:
    """Returns the ``(errno, strerror)`` pair of `exc`

    Some OSError subclasses (socket.timeout, errors raised without arguments) do not carry
    an errno. EIO is used in that case so that the reported code is never empty.

    A name resolution failure (socket.gaierror) carries a resolver code, not an errno. It is reported
    as EHOSTUNREACH along with the resolver message.
    """
    errno: int | None = exc.errno
    strerror: str | None = exc.strerror
    if isinstance(exc, _socket.gaierror):
        errno = _errno.EHOSTUNREACH
    elif errno is None:
        errno = _errno.EIO
    if not strerror:
        strerror = str(exc) or os.strerror(errno)
    return errno, strerror


def check_inet4_socket_family(family: int) -> None:
    if family != _socket.AF_INET:
        raise ValueError("Only this family is supported: AF_INET")


def check_ipv4_host(host: str) -> None:
    try:
        address = ipaddress.ip_address(host)
    except ValueError:
        # Not an IP literal: a host name, resolved in the AF_INET family by connect(2).
        return
    if address.version != 4:
        raise ValueError(f"Only IPv4 addresses are supported, got {host!r}")


def exception_with_notes(exc: _T_Exception, notes: str | Iterable[str]) -> _T_Exception:
    if isinstance(notes, str):
        notes = (notes,)
    for note in notes:
        exc.add_note(note)
    return exc
