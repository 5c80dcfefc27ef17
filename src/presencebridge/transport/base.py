# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Abstract base class for framed IPC transports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class FrameTransport(ABC):
    """Abstract base for transports that exchange opcode/body frames."""

    @abstractmethod
    async def connect(self, path: Path, timeout: float) -> None:
        """Open the connection.

        Args:
            path: Socket path
            timeout: Connect timeout in seconds

        Raises:
            IpcConnectError: If the socket cannot be opened
        """

    @abstractmethod
    async def disconnect(self) -> None:
        """Close connection and cleanup resources.

        Should be idempotent - safe to call multiple times.
        """

    @abstractmethod
    async def send_frame(self, opcode: int, body: bytes) -> None:
        """Send one frame.

        Raises:
            IpcSendError: If not connected or the write fails
        """

    @abstractmethod
    async def receive_frame(self, timeout: float) -> tuple[int, bytes]:
        """Read exactly one frame.

        Raises:
            IpcError: If not connected, the read times out, or the peer closes
        """

    @abstractmethod
    def is_connected(self) -> bool:
        """Check if connection is active."""
