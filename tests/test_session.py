# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the IPC connection session against a mock peer."""

from __future__ import annotations

from pathlib import Path

import pytest

from presencebridge.constants import UNKNOWN_CLIENT_ID
from presencebridge.core.session import ConnectionSession, SessionState
from presencebridge.exceptions import (
    HandshakeRejectedError,
    IpcConnectError,
    IpcSendError,
    SocketNotFoundError,
)
from presencebridge.transport.codec import Opcode
from presencebridge.transport.locator import SocketLocator
from presencebridge.transport.payloads import Activity

from .mock_ipc_server import BALATRO_ID, MockIpcServer


def _session(socket_path: Path, io_timeout: float = 1.0) -> ConnectionSession:
    return ConnectionSession(SocketLocator(override=socket_path), io_timeout=io_timeout)


@pytest.mark.asyncio
async def test_connect_sends_handshake(socket_path: Path) -> None:
    async with MockIpcServer(socket_path) as server:
        session = _session(socket_path)
        await session.connect(BALATRO_ID)

        assert session.state is SessionState.CONNECTED
        assert session.active_client_id == BALATRO_ID
        assert session.socket_path == socket_path
        assert server.frames == [(Opcode.HANDSHAKE, {"v": 1, "client_id": BALATRO_ID})]

        await session.close()


@pytest.mark.asyncio
async def test_connect_without_socket(socket_path: Path) -> None:
    session = _session(socket_path)

    with pytest.raises(SocketNotFoundError):
        await session.connect(BALATRO_ID)

    assert session.state is SessionState.DISCONNECTED
    assert session.active_client_id is None
    assert session.socket_path is None


@pytest.mark.asyncio
async def test_connect_reprobes_after_peer_starts(socket_path: Path) -> None:
    session = _session(socket_path)
    with pytest.raises(IpcConnectError):
        await session.connect(BALATRO_ID)

    async with MockIpcServer(socket_path):
        await session.connect(BALATRO_ID)
        assert session.is_connected()
        await session.close()


@pytest.mark.asyncio
async def test_connect_to_dead_socket_file(socket_path: Path) -> None:
    """A leftover socket file with nobody listening is a connect failure."""
    socket_path.touch()
    session = _session(socket_path)

    with pytest.raises(IpcConnectError):
        await session.connect(BALATRO_ID)

    assert session.state is SessionState.DISCONNECTED
    assert session.socket_path is None


@pytest.mark.asyncio
async def test_handshake_rejected(socket_path: Path) -> None:
    async with MockIpcServer(socket_path, reject_client_ids={UNKNOWN_CLIENT_ID}) as server:
        session = _session(socket_path)

        with pytest.raises(HandshakeRejectedError, match="Invalid Client ID"):
            await session.connect(UNKNOWN_CLIENT_ID)

        assert session.state is SessionState.DISCONNECTED
        assert session.active_client_id is None
        # The socket itself is fine; no need to probe again.
        assert session.socket_path == socket_path
        assert server.connections == 1


@pytest.mark.asyncio
async def test_handshake_without_reply_times_out(socket_path: Path) -> None:
    async with MockIpcServer(socket_path, reply_to_handshake=False):
        session = _session(socket_path, io_timeout=0.2)

        with pytest.raises(IpcConnectError, match="Handshake"):
            await session.connect(BALATRO_ID)

        assert session.state is SessionState.DISCONNECTED


@pytest.mark.asyncio
async def test_update_activity_frame(socket_path: Path) -> None:
    async with MockIpcServer(socket_path) as server:
        session = _session(socket_path)
        await session.connect(BALATRO_ID)

        await session.update_activity(4321, Activity.playing("Balatro", "Fedora Linux 41"))
        await server.wait_for_frames(2)

        opcode, body = server.frames[1]
        assert opcode == Opcode.FRAME
        assert body["cmd"] == "SET_ACTIVITY"
        assert body["nonce"].isdigit()
        assert body["args"] == {
            "pid": 4321,
            "activity": {
                "details": "Playing Balatro",
                "state": "On Fedora Linux 41",
                "assets": {"large_image": "default", "large_text": "Balatro"},
            },
        }

        await session.close()


@pytest.mark.asyncio
async def test_clear_activity_sends_empty_activity(socket_path: Path) -> None:
    async with MockIpcServer(socket_path) as server:
        session = _session(socket_path)
        await session.connect(BALATRO_ID)

        await session.clear_activity(4321)
        await server.wait_for_frames(2)

        assert server.commands()[0]["args"] == {"pid": 4321, "activity": {}}
        await session.close()


@pytest.mark.asyncio
async def test_update_activity_when_disconnected(socket_path: Path) -> None:
    session = _session(socket_path)

    with pytest.raises(IpcSendError):
        await session.update_activity(1, None)


@pytest.mark.asyncio
async def test_close_is_idempotent(socket_path: Path) -> None:
    async with MockIpcServer(socket_path) as server:
        session = _session(socket_path)
        await session.connect(BALATRO_ID)

        await session.close()
        await session.close()

        assert session.state is SessionState.DISCONNECTED
        assert session.active_client_id is None
        await server.wait_for_closed(1)


@pytest.mark.asyncio
async def test_connect_while_connected_replaces_connection(socket_path: Path) -> None:
    async with MockIpcServer(socket_path) as server:
        session = _session(socket_path)
        await session.connect(BALATRO_ID)
        await session.connect("222")

        assert session.active_client_id == "222"
        assert server.connections == 2
        await server.wait_for_closed(1)

        await session.close()
