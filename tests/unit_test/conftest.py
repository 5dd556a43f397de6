from __future__ import annotations

import itertools
from collections.abc import Callable
from socket import AF_INET, IPPROTO_TCP, SOCK_STREAM, socket as Socket
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


@pytest.fixture
def mock_socket_factory(mocker: MockerFixture) -> Callable[[], MagicMock]:
    fileno_counter = itertools.count()

    def factory(family: int = -1, type: int = -1, proto: int = -1, fileno: int | None = None) -> MagicMock:
        if family == -1:
            family = AF_INET
        if type == -1:
            type = SOCK_STREAM
        if proto == -1:
            proto = 0
        if fileno is None:
            fileno = 123 + next(fileno_counter)
        mock_socket = mocker.NonCallableMagicMock(spec=Socket)
        mock_socket.family = family
        mock_socket.type = type
        mock_socket.proto = proto
        mock_socket.fileno.return_value = fileno

        def close_side_effect() -> None:
            mock_socket.fileno.return_value = -1

        mock_socket.close.side_effect = close_side_effect
        mock_socket.connect.return_value = None
        mock_socket.sendall.return_value = None
        return mock_socket

    return factory


@pytest.fixture
def mock_tcp_socket(mock_socket_factory: Callable[[int, int, int], MagicMock]) -> MagicMock:
    return mock_socket_factory(AF_INET, SOCK_STREAM, IPPROTO_TCP)


@pytest.fixture
def mock_socket_cls(mocker: MockerFixture, mock_tcp_socket: MagicMock) -> MagicMock:
    return mocker.patch("socket.socket", return_value=mock_tcp_socket)
