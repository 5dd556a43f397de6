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
"""oneshot's constants module."""

from __future__ import annotations

__all__ = [
    "CLOSED_SOCKET_ERRNOS",
    "DEFAULT_PORT",
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "LOOPBACK_HOST",
    "MESSAGE_BUFSIZE",
    "PROMPT",
    "REPLY_BUFSIZE",
    "REPLY_LABEL",
]

import errno as _errno
from typing import Final

# INADDR_LOOPBACK
LOOPBACK_HOST: Final[str] = "127.0.0.1"

DEFAULT_PORT: Final[int] = 1234

# Outbound message buffer, one byte is reserved for the terminator
MESSAGE_BUFSIZE: Final[int] = 64

# Buffer size for the single recv(2) operation, one byte is reserved for the terminator
REPLY_BUFSIZE: Final[int] = 64

PROMPT: Final[str] = "Enter the message: "

REPLY_LABEL: Final[str] = "server says:"

EXIT_SUCCESS: Final[int] = 0

EXIT_FAILURE: Final[int] = 1

# Errors that socket operations can return if the socket is closed
CLOSED_SOCKET_ERRNOS: Final[frozenset[int]] = frozenset(
    {
        # Unix
        _errno.EBADF,
        # Windows
        _errno.ENOTSOCK,
    }
)
