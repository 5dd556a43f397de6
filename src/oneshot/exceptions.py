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
"""Exceptions definition module.

Here are all the exception classes defined and used by the library.

Every fatal failure of a session is a :exc:`SessionError`. Its string form is the line
reported to the user: the numeric system error code in brackets followed by a short description.
"""

from __future__ import annotations

__all__ = [
    "ConnectError",
    "FailureKind",
    "InputOverflowError",
    "ReceiveError",
    "ResourceAcquisitionError",
    "SendError",
    "SessionClosedError",
    "SessionError",
]

import enum
import errno as _errno
import os
from typing import ClassVar, Self

from .lowlevel import _utils


@enum.unique
class FailureKind(enum.Enum):
    """The step of the session that failed."""

    RESOURCE_ACQUISITION = "socket"
    CONNECT = "connect"
    SEND = "send"
    RECEIVE = "read"
    INPUT_OVERFLOW = "input"


class SessionError(Exception):
    """Base class of the fatal errors raised by a session."""

    kind: ClassVar[FailureKind]
    """The failed step."""

    def __init__(self, errno: int, description: str) -> None:
        """
        Parameters:
            errno: The system error code.
            description: A short description of the failure.
        """

        super().__init__(f"[{errno}] {description}")

        self.errno: int = errno
        """The system error code."""

        self.description: str = description
        """A short description of the failure."""

    @classmethod
    def from_oserror(cls, exc: OSError) -> Self:
        """
        Builds the error from the :exc:`OSError` raised by the failed system call.

        The caller is expected to chain `exc` (``raise ... from exc``).
        """
        errno, strerror = _utils.oserror_details(exc)
        return cls(errno, f"{cls.kind.value}(): {strerror}")


class ResourceAcquisitionError(SessionError):
    """The operating system could not allocate the socket."""

    kind = FailureKind.RESOURCE_ACQUISITION


class ConnectError(SessionError):
    """The connection to the peer could not be established (refused, unreachable...)."""

    kind = FailureKind.CONNECT


class SendError(SessionError):
    """The message could not be written to the connection."""

    kind = FailureKind.SEND


class ReceiveError(SessionError):
    """The read reported a transport failure.

    A peer closing the connection without sending anything is *not* a receive error.
    """

    kind = FailureKind.RECEIVE


class InputOverflowError(SessionError, ValueError):
    """The outbound message does not fit in its buffer."""

    kind = FailureKind.INPUT_OVERFLOW

    def __init__(self, size: int, capacity: int) -> None:
        """
        Parameters:
            size: The size of the rejected message, in bytes.
            capacity: The buffer capacity, in bytes.
        """

        super().__init__(
            _errno.EMSGSIZE,
            f"{self.kind.value}: {os.strerror(_errno.EMSGSIZE)} ({size} bytes, at most {capacity} allowed)",
        )

        self.size: int = size
        """The size of the rejected message, in bytes."""

        self.capacity: int = capacity
        """The buffer capacity, in bytes."""


class SessionClosedError(ConnectionError):
    """Error raised when trying to do an operation on a closed session."""
