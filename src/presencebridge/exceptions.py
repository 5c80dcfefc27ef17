# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Exception hierarchy for presencebridge."""


class PresenceBridgeError(Exception):
    """Base exception for presencebridge."""

    pass


class CatalogError(PresenceBridgeError):
    """Game catalog could not be fetched, read, or parsed."""

    pass


class CatalogUnavailableError(CatalogError):
    """No usable catalog data exists, neither cached nor fetched."""

    pass


class IpcError(PresenceBridgeError):
    """Base exception for IPC socket operations."""

    pass


class FrameError(IpcError):
    """Malformed or truncated IPC frame."""

    pass


class IpcConnectError(IpcError):
    """Failed to open the IPC socket or complete the handshake."""

    pass


class SocketNotFoundError(IpcConnectError):
    """None of the candidate IPC socket paths exist."""

    pass


class HandshakeRejectedError(IpcConnectError):
    """Peer answered the handshake with a close frame."""

    pass


class IpcSendError(IpcError):
    """Writing a command frame to the IPC socket failed."""

    pass
