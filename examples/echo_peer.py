# Copyright (c) 2023, Francis Clairicia-Rose-Claire-Josephine
#
#
from __future__ import annotations

import logging
import socketserver

from oneshot.lowlevel.constants import DEFAULT_PORT, LOOPBACK_HOST

logger = logging.getLogger("echo_peer")


class EchoRequestHandler(socketserver.BaseRequestHandler):
    def handle(self) -> None:
        request: bytes = self.request.recv(1024)  # One read, like the client

        logger.info("%s sent %r", self.client_address, request)

        # As a good echo handler, the request is sent back to the client
        self.request.sendall(request)


class EchoServer(socketserver.ThreadingTCPServer):
    allow_reuse_address = True
    daemon_threads = True


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="[ %(levelname)s ] [ %(name)s ] %(message)s")
    with EchoServer((LOOPBACK_HOST, DEFAULT_PORT), EchoRequestHandler) as server:
        logger.info("Listening on %s:%d", LOOPBACK_HOST, DEFAULT_PORT)
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            pass


if __name__ == "__main__":
    main()
