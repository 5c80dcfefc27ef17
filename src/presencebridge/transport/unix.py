# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Unix domain socket transport for Discord IPC frames."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import structlog

from presencebridge.constants import DEFAULT_IO_TIMEOUT_S
from presencebridge.exceptions import FrameError, IpcConnectError, IpcError, IpcSendError
from presencebridge.transport.base import FrameTransport
from presencebridge.transport.codec import encode_frame, read_frame

if TYPE_CHECKING:
    from asyncio import StreamReader, StreamWriter
    from pathlib import Path

log = structlog.get_logger()


class UnixSocketTransport(FrameTransport):
    """Framed transport over an AF_UNIX stream socket."""

    def __init__(self, write_timeout: float = DEFAULT_IO_TIMEOUT_S) -> None:
        self._reader: StreamReader | None = None
        self._writer: StreamWriter | None = None
        self._write_timeout = write_timeout
        self.path: Path | None = None

    async def connect(self, path: Path, timeout: float = DEFAULT_IO_TIMEOUT_S) -> None:
        if self._writer:
            await self.disconnect()

        try:
            self._reader, self._writer = await asyncio.wait_for(
                asyncio.open_unix_connection(str(path)), timeout=timeout
            )
        except (OSError, TimeoutError) as e:
            raise IpcConnectError(f"Failed to open IPC socket {path}") from e

        self.path = path
        log.debug("ipc_socket_opened", path=str(path))

    async def disconnect(self) -> None:
        if not self._writer:
            return

        try:
            self._writer.close()
            await self._writer.wait_closed()
        except (ConnectionResetError, BrokenPipeError, RuntimeError):
            pass
        finally:
            self._writer = None
            self._reader = None

        log.debug("ipc_socket_closed", path=str(self.path))

    async def send_frame(self, opcode: int, body: bytes) -> None:
        if not self._writer:
            raise IpcSendError("Not connected")

        frame = encode_frame(opcode, body)
        try:
            self._writer.write(frame)
            await asyncio.wait_for(self._writer.drain(), timeout=self._write_timeout)
        except (OSError, TimeoutError) as e:
            await self.disconnect()
            raise IpcSendError("Send failed") from e

    async def receive_frame(self, timeout: float = DEFAULT_IO_TIMEOUT_S) -> tuple[int, bytes]:
        if not self._reader:
            raise IpcError("Not connected")

        try:
            return await asyncio.wait_for(read_frame(self._reader), timeout=timeout)
        except TimeoutError as e:
            raise IpcError(f"No frame received within {timeout}s") from e
        except FrameError:
            await self.disconnect()
            raise
        except OSError as e:
            await self.disconnect()
            raise IpcError("Connection lost") from e

    def is_connected(self) -> bool:
        return self._writer is not None and not self._writer.is_closing()
