# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Single IPC connection to the Discord client and its handshake."""

from __future__ import annotations

from collections.abc import Callable
from enum import Enum
from typing import TYPE_CHECKING

from presencebridge.constants import DEFAULT_IO_TIMEOUT_S
from presencebridge.exceptions import (
    HandshakeRejectedError,
    IpcConnectError,
    IpcError,
    IpcSendError,
    SocketNotFoundError,
)
from presencebridge.logging import get_logger
from presencebridge.transport.codec import Opcode
from presencebridge.transport.payloads import ActivityArgs, Handshake, SetActivityCommand, to_body
from presencebridge.transport.unix import UnixSocketTransport

if TYPE_CHECKING:
    from pathlib import Path

    from presencebridge.transport.base import FrameTransport
    from presencebridge.transport.locator import SocketLocator
    from presencebridge.transport.payloads import Activity

logger = get_logger(__name__)


class SessionState(Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"


class ConnectionSession:
    """Owns at most one live IPC connection.

    ``active_client_id`` is set exactly while a transport is held; every
    path that drops the transport clears it.
    """

    def __init__(
        self,
        locator: SocketLocator,
        transport_factory: Callable[[], FrameTransport] | None = None,
        io_timeout: float = DEFAULT_IO_TIMEOUT_S,
    ) -> None:
        """Initialize session.

        Args:
            locator: Finds the peer's socket path
            transport_factory: Builds a fresh transport per connection attempt
            io_timeout: Bound for connect, handshake read and writes, in seconds
        """
        self.locator = locator
        self.io_timeout = io_timeout
        self._transport_factory = transport_factory or (lambda: UnixSocketTransport(write_timeout=io_timeout))
        self.socket_path: Path | None = None
        self.transport: FrameTransport | None = None
        self.active_client_id: str | None = None

    @property
    def state(self) -> SessionState:
        return SessionState.CONNECTED if self.transport is not None else SessionState.DISCONNECTED

    def is_connected(self) -> bool:
        return self.transport is not None

    async def connect(self, client_id: str) -> None:
        """Open the socket and perform the handshake as *client_id*.

        The response frame is logged, not interpreted, except that a CLOSE
        opcode means the peer refused the session.

        Raises:
            SocketNotFoundError: If no candidate socket exists
            HandshakeRejectedError: If the peer answers with a close frame
            IpcConnectError: If opening, writing or reading fails
        """
        if self.transport is not None:
            await self.close()

        if self.socket_path is None:
            self.socket_path = self.locator.locate()
        if self.socket_path is None:
            raise SocketNotFoundError("Discord IPC socket not found")

        path = self.socket_path
        transport = self._transport_factory()
        try:
            await transport.connect(path, timeout=self.io_timeout)
            await transport.send_frame(Opcode.HANDSHAKE, to_body(Handshake(client_id=client_id)))
            opcode, body = await transport.receive_frame(timeout=self.io_timeout)
        except IpcError as e:
            await transport.disconnect()
            # The peer may have restarted elsewhere; probe again next time.
            self.socket_path = None
            if isinstance(e, IpcConnectError):
                raise
            raise IpcConnectError(f"Handshake over {path} failed: {e}") from e

        response = body.decode("utf-8", errors="replace")
        logger.debug("ipc_handshake_response", opcode=opcode, body=response)

        if opcode == Opcode.CLOSE:
            await transport.disconnect()
            raise HandshakeRejectedError(f"Peer refused client id {client_id}: {response}")

        self.transport = transport
        self.active_client_id = client_id
        logger.info("ipc_connected", path=str(path), client_id=client_id)

    async def update_activity(self, pid: int, activity: Activity | None) -> None:
        """Send a SET_ACTIVITY command; ``activity=None`` clears the status.

        A failed write drops the connection.

        Raises:
            IpcSendError: If not connected or the write fails
        """
        if self.transport is None:
            raise IpcSendError("Not connected")

        command = SetActivityCommand(args=ActivityArgs(pid=pid, activity=activity))
        try:
            await self.transport.send_frame(Opcode.FRAME, to_body(command))
        except IpcError as e:
            await self.close()
            if isinstance(e, IpcSendError):
                raise
            raise IpcSendError(str(e)) from e

    async def clear_activity(self, pid: int) -> None:
        await self.update_activity(pid, None)

    async def close(self) -> None:
        """Close the connection and drop state. Idempotent."""
        transport, self.transport = self.transport, None
        client_id, self.active_client_id = self.active_client_id, None
        if transport is None:
            return
        await transport.disconnect()
        logger.info("ipc_disconnected", client_id=client_id)
