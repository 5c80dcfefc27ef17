# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport layer for Discord IPC connections."""

from __future__ import annotations

from presencebridge.transport.base import FrameTransport
from presencebridge.transport.codec import Opcode, decode_frame, encode_frame
from presencebridge.transport.locator import SocketLocator
from presencebridge.transport.unix import UnixSocketTransport

__all__ = [
    "FrameTransport",
    "Opcode",
    "SocketLocator",
    "UnixSocketTransport",
    "decode_frame",
    "encode_frame",
]
