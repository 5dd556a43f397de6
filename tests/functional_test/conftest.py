from __future__ import annotations

import contextlib
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor
from socket import AF_INET, SOCK_STREAM, socket as Socket

import pytest

from .peers import PeerServer


@pytest.fixture
def peer_server() -> Iterator[PeerServer]:
    with contextlib.ExitStack() as stack:
        listener = stack.enter_context(Socket(AF_INET, SOCK_STREAM))
        listener.bind(("127.0.0.1", 0))
        listener.listen(1)
        listener.settimeout(5)
        executor = stack.enter_context(ThreadPoolExecutor(max_workers=1))
        server = PeerServer(listener, executor)
        yield server
        server.wait()


@pytest.fixture
def unused_address() -> tuple[str, int]:
    # Bound but not listening: connect() is refused.
    with Socket(AF_INET, SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        host, port = s.getsockname()[:2]
    return host, port
