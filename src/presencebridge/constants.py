# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Shared constants for presencebridge."""

from __future__ import annotations

APP_NAME = "presencebridge"

# Scan loop
DEFAULT_SCAN_INTERVAL_S = 5.0
DEFAULT_IO_TIMEOUT_S = 5.0

# Catalog
DEFAULT_API_VERSION = 10
DEFAULT_CACHE_TTL_HOURS = 24.0
DEFAULT_FETCH_TIMEOUT_S = 30.0
DETECTABLE_URL_TEMPLATE = "https://discord.com/api/v{version}/applications/detectable"

# Placeholder application id for games missing from the catalog; the peer
# rejects it during the handshake.
UNKNOWN_CLIENT_ID = "000000000000000000"

# IPC
IPC_PROTOCOL_VERSION = 1
IPC_SOCKET_NAME = "discord-ipc-0"

# Activity
DEFAULT_LARGE_IMAGE = "default"

# Path segment that marks a Steam library install
STEAM_COMMON_SEGMENT = "steamapps/common"

# steamapps/common folders that are tooling, not games
DEFAULT_IGNORED_GAMES = frozenset(
    {
        "SteamLinuxRuntime",
        "SteamLinuxRuntime_soldier",
        "SteamLinuxRuntime_sniper",
        "SteamControllerConfigs",
        "Steamworks Shared",
        "Steamworks Common Redistributables",
        "Proton Experimental",
        "Proton Hotfix",
        "Proton EasyAntiCheat Runtime",
        "Proton BattlEye Runtime",
        "Proton 7.0",
        "Proton 8.0",
        "Proton 9.0",
        "Proton 10.0",
        "fossilize_replay",
    }
)
