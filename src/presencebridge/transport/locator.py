# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Discover the Discord IPC socket across native and sandboxed installs."""

from __future__ import annotations

from pathlib import Path

from presencebridge.constants import IPC_SOCKET_NAME
from presencebridge.paths import default_runtime_dir

# Relative to the runtime dir, in probe order: native, Flatpak, Snap
CANDIDATE_SUBPATHS = (
    Path(IPC_SOCKET_NAME),
    Path("app/com.discordapp.Discord") / IPC_SOCKET_NAME,
    Path("snap.discord") / IPC_SOCKET_NAME,
)


class SocketLocator:
    """Probe the fixed candidate socket paths."""

    def __init__(self, runtime_dir: Path | None = None, override: Path | None = None) -> None:
        self.runtime_dir = runtime_dir
        self.override = override

    def candidates(self) -> list[Path]:
        if self.override is not None:
            return [self.override]
        runtime_dir = self.runtime_dir or default_runtime_dir()
        return [runtime_dir / sub for sub in CANDIDATE_SUBPATHS]

    def locate(self) -> Path | None:
        """Return the first candidate that exists, or None."""
        for path in self.candidates():
            if path.exists():
                return path
        return None
