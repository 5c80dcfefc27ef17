# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Discord IPC framing: 8-byte little-endian header followed by the body.

Header layout::

    int32  opcode   (little-endian, signed)
    uint32 length   (little-endian; written as signed, read as unsigned)
"""

from __future__ import annotations

import struct
from enum import IntEnum
from typing import TYPE_CHECKING

from presencebridge.exceptions import FrameError

if TYPE_CHECKING:
    from asyncio import StreamReader

HEADER_SIZE = 8

_ENCODE_HEADER = struct.Struct("<ii")
_DECODE_HEADER = struct.Struct("<iI")


class Opcode(IntEnum):
    HANDSHAKE = 0
    FRAME = 1
    CLOSE = 2
    PING = 3
    PONG = 4


def encode_frame(opcode: int, body: bytes) -> bytes:
    """Prefix *body* with its opcode and length.

    Raises:
        FrameError: If opcode or length do not fit a signed 32-bit field
    """
    try:
        header = _ENCODE_HEADER.pack(opcode, len(body))
    except struct.error as e:
        raise FrameError(f"Cannot encode frame header (opcode={opcode}, length={len(body)})") from e
    return header + body


def decode_header(header: bytes) -> tuple[int, int]:
    """Split an 8-byte header into (opcode, body length)."""
    if len(header) != HEADER_SIZE:
        raise FrameError(f"Frame header must be {HEADER_SIZE} bytes, got {len(header)}")
    opcode, length = _DECODE_HEADER.unpack(header)
    return opcode, length


def decode_frame(data: bytes) -> tuple[int, bytes]:
    """Decode one complete frame.

    Raises:
        FrameError: If *data* is truncated or has bytes past the body
    """
    opcode, length = decode_header(data[:HEADER_SIZE])
    body = data[HEADER_SIZE:]
    if len(body) != length:
        raise FrameError(f"Frame declares {length} body bytes, got {len(body)}")
    return opcode, body


async def read_frame(reader: StreamReader) -> tuple[int, bytes]:
    """Read exactly one frame from a stream.

    Raises:
        FrameError: If the stream ends mid-frame
    """
    try:
        header = await reader.readexactly(HEADER_SIZE)
        opcode, length = decode_header(header)
        body = await reader.readexactly(length)
    except EOFError as e:
        # asyncio.IncompleteReadError subclasses EOFError
        raise FrameError("Connection closed mid-frame") from e
    return opcode, body
