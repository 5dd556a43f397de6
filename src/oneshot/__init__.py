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
"""Send one message over TCP, get one reply

oneshot opens a single connection to a peer, writes one message, performs one bounded read and closes.
"""

from __future__ import annotations

__all__ = [
    "BoundedBuffer",
    "ConnectError",
    "ConnectionSession",
    "FailureKind",
    "IPv4SocketAddress",
    "InputOverflowError",
    "OverflowPolicy",
    "ReceiveError",
    "ResourceAcquisitionError",
    "SendError",
    "SessionClosedError",
    "SessionError",
    "SessionState",
    "loopback_endpoint",
]

__version__ = "1.0.0"

from .buffers import BoundedBuffer, OverflowPolicy
from .exceptions import (
    ConnectError,
    FailureKind,
    InputOverflowError,
    ReceiveError,
    ResourceAcquisitionError,
    SendError,
    SessionClosedError,
    SessionError,
)
from .lowlevel.socket import IPv4SocketAddress, loopback_endpoint
from .session import ConnectionSession, SessionState
