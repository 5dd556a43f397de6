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
"""Fixed-size buffers module."""

from __future__ import annotations

__all__ = [
    "BoundedBuffer",
    "OverflowPolicy",
]

import enum
import logging
from typing import TYPE_CHECKING, final

from .exceptions import InputOverflowError

if TYPE_CHECKING:
    from _typeshed import ReadableBuffer


@enum.unique
class OverflowPolicy(enum.StrEnum):
    """What to do with data that does not fit in a :class:`BoundedBuffer`."""

    TRUNCATE = "truncate"
    """Keep the leading bytes which fit, drop the rest."""

    REJECT = "reject"
    """Raise :exc:`.InputOverflowError`, the buffer is left untouched."""


@final
class BoundedBuffer:
    """
    A pre-zeroed byte buffer of fixed size.

    The last byte is reserved as a terminator and is never written, so at most ``size - 1`` bytes
    can be stored. Every write is checked against that capacity.
    """

    __slots__ = ("__data", "__length", "__weakref__")

    def __init__(self, size: int) -> None:
        """
        Parameters:
            size: Total buffer size, terminator included.
        """
        if not isinstance(size, int) or size <= 1:
            raise ValueError("'size' must be an integer greater than 1")
        self.__data: bytearray = bytearray(size)
        self.__length: int = 0

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} length={self.__length} capacity={self.capacity}>"

    def __len__(self) -> int:
        return self.__length

    def __bytes__(self) -> bytes:
        return self.getvalue()

    @property
    def capacity(self) -> int:
        """The maximum number of bytes which can be stored. Read-only attribute."""
        return len(self.__data) - 1

    @property
    def free(self) -> int:
        """The number of bytes which can still be written. Read-only attribute."""
        return self.capacity - self.__length

    def write(self, data: ReadableBuffer, policy: OverflowPolicy = OverflowPolicy.REJECT) -> int:
        """
        Appends `data` after the already stored bytes.

        Parameters:
            data: The bytes to store.
            policy: Overflow handling if `data` does not fit.

        Raises:
            InputOverflowError: `data` does not fit and `policy` is :attr:`OverflowPolicy.REJECT`.

        Returns:
            the number of bytes actually written.
        """
        with memoryview(data).cast("B") as view:
            nbytes = view.nbytes
            free = self.free
            if nbytes > free:
                match OverflowPolicy(policy):
                    case OverflowPolicy.REJECT:
                        raise InputOverflowError(self.__length + nbytes, self.capacity)
                    case OverflowPolicy.TRUNCATE:
                        _get_logger().warning(
                            "Message truncated to %d bytes (%d bytes given)",
                            self.capacity,
                            self.__length + nbytes,
                        )
                        nbytes = free
            start = self.__length
            self.__data[start : start + nbytes] = view[:nbytes]
            self.__length = start + nbytes
            return nbytes

    def getbuffer(self) -> memoryview:
        """
        Returns a writable view on the free region, for :meth:`socket.socket.recv_into`.

        The terminator byte is not part of the view. Call :meth:`commit` with the number of bytes
        actually written.
        """
        return memoryview(self.__data)[self.__length : self.capacity]

    def commit(self, nbytes: int) -> None:
        """
        Marks `nbytes` bytes written through :meth:`getbuffer` as stored.

        Raises:
            ValueError: Negative `nbytes`, or more bytes than the free space.
        """
        if nbytes < 0:
            raise ValueError("Negative byte count")
        if nbytes > self.free:
            raise ValueError(f"{nbytes} bytes committed, only {self.free} available")
        self.__length += nbytes

    def getvalue(self) -> bytes:
        """
        Returns:
            a copy of the stored bytes, without the terminator.
        """
        return bytes(self.__data[: self.__length])

    def clear(self) -> None:
        """
        Zeroes the whole buffer.
        """
        self.__data[:] = bytes(len(self.__data))
        self.__length = 0


def _get_logger() -> logging.Logger:
    return logging.getLogger(__name__)
