from __future__ import annotations

import struct
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from socket import SO_LINGER, SOL_SOCKET, socket as Socket

PeerHandler = Callable[[Socket], None]


class PeerServer:
    """Accepts connections on a listening socket and runs a handler on each of them in a worker thread."""

    __slots__ = ("__listener", "__executor", "__futures")

    def __init__(self, listener: Socket, executor: ThreadPoolExecutor) -> None:
        self.__listener: Socket = listener
        self.__executor: ThreadPoolExecutor = executor
        self.__futures: list[Future[None]] = []

    @property
    def address(self) -> tuple[str, int]:
        host, port = self.__listener.getsockname()[:2]
        return host, port

    def serve_once(self, handler: PeerHandler) -> Future[None]:
        future = self.__executor.submit(self.__accept_and_handle, handler)
        self.__futures.append(future)
        return future

    def wait(self, timeout: float = 5) -> None:
        for future in self.__futures:
            future.result(timeout=timeout)

    def __accept_and_handle(self, handler: PeerHandler) -> None:
        conn, _ = self.__listener.accept()
        with conn:
            conn.settimeout(5)
            handler(conn)


def echo_handler(conn: Socket) -> None:
    conn.sendall(conn.recv(1024))


def silent_handler(conn: Socket) -> None:
    conn.recv(1024)


def reset_handler(conn: Socket) -> None:
    conn.recv(1024)
    # Zero linger: close() sends RST instead of FIN
    conn.setsockopt(SOL_SOCKET, SO_LINGER, struct.pack("ii", 1, 0))


def reply_handler(reply: bytes) -> PeerHandler:
    def handler(conn: Socket) -> None:
        conn.recv(1024)
        conn.sendall(reply)

    return handler


def recording_handler(received: list[bytes]) -> PeerHandler:
    def handler(conn: Socket) -> None:
        while chunk := conn.recv(1024):
            received.append(chunk)

    return handler


def recording_echo_handler(received: list[bytes]) -> PeerHandler:
    def handler(conn: Socket) -> None:
        data = conn.recv(1024)
        received.append(data)
        conn.sendall(data)

    return handler
