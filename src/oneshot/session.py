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
"""One-shot TCP session implementation module."""

from __future__ import annotations

__all__ = ["ConnectionSession", "SessionState"]

import contextlib
import enum
import errno as _errno
import logging
import socket as _socket
import warnings
from collections.abc import Iterator
from typing import TYPE_CHECKING, Self, final

from .buffers import BoundedBuffer
from .exceptions import ConnectError, ReceiveError, ResourceAcquisitionError, SendError, SessionClosedError, SessionError
from .lowlevel import _utils, constants
from .lowlevel.socket import IPv4SocketAddress, loopback_endpoint, new_socket_address

if TYPE_CHECKING:
    from types import TracebackType

    from _typeshed import ReadableBuffer


@enum.unique
class SessionState(enum.Enum):
    """The states of a :class:`ConnectionSession`.

    ``UNOPENED -> CONNECTING -> CONNECTED -> SENT -> RECEIVED -> CLOSED``, and any non-terminal state
    can go to ``ABORTED`` on a fatal error.
    """

    UNOPENED = enum.auto()
    CONNECTING = enum.auto()
    CONNECTED = enum.auto()
    SENT = enum.auto()
    RECEIVED = enum.auto()
    CLOSED = enum.auto()
    ABORTED = enum.auto()

    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES: frozenset[SessionState] = frozenset({SessionState.CLOSED, SessionState.ABORTED})


@final
class ConnectionSession:
    """
    A single request/response exchange over one TCP connection.

    The session opens one IPv4 stream socket, sends one message, performs exactly one bounded read,
    and releases the socket. Each step is a method, and the whole cycle is :meth:`exchange`::

        with ConnectionSession() as session:
            session.connect()
            session.send(b"hello")
            reply = session.receive()

    Fatal failures are raised as :exc:`.SessionError` subclasses. The socket, once opened, is closed
    exactly once: either by :meth:`close` (also called on context exit) or before a fatal error
    leaves the session.
    """

    __slots__ = (
        "__address",
        "__socket",
        "__state",
        "__reply_bufsize",
        "__weakref__",
    )

    def __init__(
        self,
        address: tuple[str, int] | None = None,
        /,
        *,
        reply_bufsize: int = constants.REPLY_BUFSIZE,
    ) -> None:
        """
        Parameters:
            address: A pair of ``(host, port)`` for connection. The host must be an IPv4 address
                     or a host name. Defaults to the loopback endpoint (``127.0.0.1:1234``).

        Keyword Arguments:
            reply_bufsize: Size of the reply buffer, terminator included. At most ``reply_bufsize - 1``
                           bytes are read.

        Raises:
            ValueError: Invalid `address` or `reply_bufsize`.
            TypeError: Invalid `address`.
        """
        if address is None:
            endpoint = loopback_endpoint()
        else:
            endpoint = new_socket_address(tuple(address), _socket.AF_INET)
        if not isinstance(reply_bufsize, int) or reply_bufsize <= 1:
            raise ValueError("'reply_bufsize' must be an integer greater than 1")

        self.__address: IPv4SocketAddress = endpoint
        self.__socket: _socket.socket | None = None
        self.__state: SessionState = SessionState.UNOPENED
        self.__reply_bufsize: int = reply_bufsize

    def __del__(self, *, _warn: _utils.WarnCallback = warnings.warn) -> None:
        try:
            socket = self.__socket
        except AttributeError:
            return
        if socket is not None:
            _warn(f"unclosed session {self!r}", ResourceWarning, source=self)
            self.__socket = None
            socket.close()

    def __repr__(self) -> str:
        try:
            return f"<{self.__class__.__name__} address={self.__address} state={self.__state.name}>"
        except AttributeError:
            return f"<{self.__class__.__name__} (partially initialized)>"

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def address(self) -> IPv4SocketAddress:
        """The peer address. Read-only attribute."""
        return self.__address

    @property
    def state(self) -> SessionState:
        """The current session state. Read-only attribute."""
        return self.__state

    def is_closed(self) -> bool:
        """
        Checks if the session is in a terminal state (:attr:`SessionState.CLOSED` or :attr:`SessionState.ABORTED`).

        If :data:`True`, all future operations on the session object will raise a :exc:`.SessionClosedError`.
        """
        return self.__state.is_terminal()

    def close(self) -> None:
        """
        Close the session and release the socket.

        Can be safely called multiple times. An aborted session stays in the :attr:`SessionState.ABORTED` state.
        """
        if self.__state.is_terminal():
            return
        try:
            self.__release_socket()
        finally:
            self.__set_state(SessionState.CLOSED)

    def connect(self) -> None:
        """
        Allocates the IPv4 stream socket and connects it to :attr:`address`. Blocks until done.

        Raises:
            SessionClosedError: the session is closed.
            RuntimeError: :meth:`connect` has been called earlier.
            ResourceAcquisitionError: the socket could not be allocated.
            ConnectError: the connection could not be established.
        """
        self.__check_state(SessionState.UNOPENED, "connect() has been called earlier")

        with self.__abort_on_error(ResourceAcquisitionError):
            socket = _socket.socket(_socket.AF_INET, _socket.SOCK_STREAM)
        self.__socket = socket
        self.__set_state(SessionState.CONNECTING)

        with self.__abort_on_error(ConnectError, note=f"Is there a peer listening at {self.__address}?"):
            socket.connect(self.__address.for_connection())
        self.__set_state(SessionState.CONNECTED)
        _get_logger().debug("Connected to %s", self.__address)

    def send(self, message: ReadableBuffer | BoundedBuffer) -> None:
        """
        Writes the whole `message` to the connection.

        Exactly the bytes of `message` are sent, without terminator. A short write is retried
        until every byte is sent.

        Parameters:
            message: the bytes to send.

        Raises:
            SessionClosedError: the session is closed.
            RuntimeError: the session is not connected, or :meth:`send` has been called earlier.
            SendError: the write failed.
        """
        self.__check_state(SessionState.CONNECTED, "send() requires a connected session which has sent nothing yet")
        if isinstance(message, BoundedBuffer):
            message = message.getvalue()

        socket = self.__get_socket()
        with self.__abort_on_error(SendError):
            socket.sendall(message)
        self.__set_state(SessionState.SENT)

    def receive(self) -> bytes:
        """
        Performs exactly one blocking read on the connection.

        At most ``reply_bufsize - 1`` bytes are read. An empty reply means that the peer closed the
        connection without sending anything; this is not an error.

        Raises:
            SessionClosedError: the session is closed.
            RuntimeError: :meth:`send` has not been called, or :meth:`receive` has been called earlier.
            ReceiveError: the read failed.

        Returns:
            the received bytes.
        """
        self.__check_state(SessionState.SENT, "receive() must be called once, after send()")

        socket = self.__get_socket()
        buffer = BoundedBuffer(self.__reply_bufsize)
        with self.__abort_on_error(ReceiveError):
            view = buffer.getbuffer()
            try:
                nbytes: int = socket.recv_into(view, buffer.capacity)
            finally:
                view.release()
        buffer.commit(nbytes)
        self.__set_state(SessionState.RECEIVED)
        _get_logger().debug("Received %d bytes from %s", nbytes, self.__address)
        return buffer.getvalue()

    def exchange(self, message: ReadableBuffer | BoundedBuffer) -> bytes:
        """
        Runs the whole cycle: connect (if not already done), send `message`, receive the reply, close.

        The session is closed when this method returns, whatever the outcome.

        Parameters:
            message: the bytes to send.

        Raises:
            SessionError: a step failed.

        Returns:
            the received bytes.
        """
        try:
            if self.__state is SessionState.UNOPENED:
                self.connect()
            self.send(message)
            return self.receive()
        finally:
            self.close()

    def get_remote_address(self) -> IPv4SocketAddress:
        """
        Returns the remote socket IP address.

        Raises:
            SessionClosedError: the session is closed.
            RuntimeError: the session is not connected.
            OSError: unrelated OS error occurred. You should check :attr:`OSError.errno`.
        """
        socket = self.__get_socket()
        if self.__state is SessionState.CONNECTING:
            raise _utils.error_from_errno(_errno.ENOTCONN)
        return new_socket_address(socket.getpeername(), socket.family)

    def __check_state(self, expected: SessionState, message: str) -> None:
        state = self.__state
        if state.is_terminal():
            raise SessionClosedError("Closed session")
        if state is not expected:
            raise RuntimeError(f"{message} (state: {state.name})")

    def __get_socket(self) -> _socket.socket:
        if self.__state.is_terminal():
            raise SessionClosedError("Closed session")
        socket = self.__socket
        if socket is None:
            raise RuntimeError("The session is not connected")
        return socket

    def __set_state(self, state: SessionState) -> None:
        _get_logger().debug("%s: %s -> %s", self.__address, self.__state.name, state.name)
        self.__state = state

    def __release_socket(self) -> None:
        socket, self.__socket = self.__socket, None
        if socket is not None:
            socket.close()

    @contextlib.contextmanager
    def __abort_on_error(self, error_cls: type[SessionError], *, note: str | None = None) -> Iterator[None]:
        try:
            yield
        except OSError as exc:
            if exc.errno in constants.CLOSED_SOCKET_ERRNOS:
                exc.add_note("The socket file descriptor was closed unexpectedly.")
            error = error_cls.from_oserror(exc)
            if note:
                _utils.exception_with_notes(error, note)
            try:
                self.__release_socket()
            finally:
                self.__set_state(SessionState.ABORTED)
            raise error from exc


def _get_logger() -> logging.Logger:
    return logging.getLogger(__name__)