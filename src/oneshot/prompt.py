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
"""Interactive input/output module."""

from __future__ import annotations

__all__ = [
    "ask_message",
    "print_reply",
    "read_token",
]

import logging
import re
from typing import BinaryIO, TextIO

from .buffers import BoundedBuffer, OverflowPolicy
from .exceptions import InputOverflowError
from .lowlevel import constants

_TOKEN_PATTERN = re.compile(rb"\S+")


def read_token(stream: BinaryIO, limit: int = constants.MESSAGE_BUFSIZE - 1) -> tuple[bytes, int]:
    """
    Reads one whitespace-delimited token from `stream`.

    The token is taken as raw bytes, without any decoding. Blank lines are skipped and the rest of the line
    after the token is discarded. `stream` is read by chunks of at most `limit` bytes, and only the first
    `limit` bytes of the token are kept.

    Parameters:
        stream: Binary input stream.
        limit: Maximum number of bytes kept and read at once.

    Raises:
        ValueError: Invalid `limit`.

    Returns:
        a pair ``(token, size)`` where `size` is the length of the whole token as typed.
        The token is empty if end-of-file is reached before any.
    """
    if limit < 1:
        raise ValueError("'limit' must be a positive integer")

    token = bytearray()
    size: int = 0
    while chunk := stream.readline(limit):
        found = _TOKEN_PATTERN.match(chunk) if size else _TOKEN_PATTERN.search(chunk)
        if found is None:
            if size:
                break
            continue
        word = found.group()
        token += word[: limit - len(token)]
        size += len(word)
        if found.end() < len(chunk):
            break
    else:
        return bytes(token), size

    # Drop the end of the line
    while not chunk.endswith(b"\n"):
        chunk = stream.readline(limit)
        if not chunk:
            break
    return bytes(token), size


def ask_message(
    stdin: BinaryIO,
    stdout: TextIO,
    *,
    policy: OverflowPolicy = OverflowPolicy.TRUNCATE,
    bufsize: int = constants.MESSAGE_BUFSIZE,
) -> BoundedBuffer:
    """
    Prompts for the outbound message and places it in a bounded buffer.

    The typed bytes are stored unchanged. They are never decoded.

    Parameters:
        stdin: Binary input stream.
        stdout: Output stream where the prompt is written.

    Keyword Arguments:
        policy: Overflow handling for a token longer than the buffer capacity.
        bufsize: Buffer size, terminator included.

    Raises:
        InputOverflowError: the token is too long and `policy` is :attr:`.OverflowPolicy.REJECT`.

    Returns:
        the filled buffer.
    """
    stdout.write(constants.PROMPT)
    stdout.flush()
    buffer = BoundedBuffer(bufsize)
    token, size = read_token(stdin, buffer.capacity)
    if size > buffer.capacity:
        match OverflowPolicy(policy):
            case OverflowPolicy.REJECT:
                raise InputOverflowError(size, buffer.capacity)
            case OverflowPolicy.TRUNCATE:
                _get_logger().warning("Message truncated to %d bytes (%d bytes given)", buffer.capacity, size)
    buffer.write(token)
    return buffer


def print_reply(reply: bytes, stdout: TextIO, *, encoding: str = "utf-8") -> None:
    """
    Prints `reply` after the reply label.

    Bytes which cannot be decoded are shown as backslash escapes.
    """
    print(f"{constants.REPLY_LABEL}{reply.decode(encoding, 'backslashreplace')}", file=stdout, flush=True)


def _get_logger() -> logging.Logger:
    return logging.getLogger(__name__)
