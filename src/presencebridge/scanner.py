# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Find a running Steam game by walking the process table."""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from presencebridge.constants import STEAM_COMMON_SEGMENT
from presencebridge.logging import get_logger

logger = get_logger(__name__)

PROC_ROOT = Path("/proc")


@dataclass(frozen=True)
class DetectedGame:
    """A game folder under steamapps/common and the pid running it."""

    name: str
    pid: int


@dataclass(frozen=True)
class ScanResult:
    """Outcome of one pass over the process table.

    ``skipped`` counts process entries that could not be read (permission
    denied, process exited mid-scan). A scan with skipped entries still
    reports whatever it found in the readable ones. ``failed`` means the
    process table itself could not be listed, so nothing is known about
    which games are running.
    """

    game: DetectedGame | None = None
    skipped: int = 0
    failed: bool = False

    @property
    def partial(self) -> bool:
        return self.skipped > 0


def extract_game_folder(path: str) -> str:
    """Return the path component right after ``steamapps/common``.

    Wine-style ``Z:\\...`` arguments are accepted as well.

    >>> extract_game_folder("/a/steamapps/common/Balatro/balatro.exe")
    'Balatro'
    >>> extract_game_folder("/no/such/path")
    ''
    """
    path = path.replace("\\", "/")
    idx = path.find(STEAM_COMMON_SEGMENT)
    if idx == -1:
        return ""
    rest = path[idx + len(STEAM_COMMON_SEGMENT) :].lstrip("/")
    return rest.split("/", 1)[0]


class ProcessScanner:
    """Walks ``/proc`` and reports the first non-ignored Steam game."""

    def __init__(self, ignored: Iterable[str] = (), proc_root: Path = PROC_ROOT) -> None:
        """Initialize scanner.

        Args:
            ignored: steamapps/common folder names that are never games
            proc_root: Process table mount (overridable for tests)
        """
        self.ignored = frozenset(ignored)
        self.proc_root = proc_root

    def _pids(self) -> list[int]:
        with os.scandir(self.proc_root) as entries:
            return sorted(int(entry.name) for entry in entries if entry.name.isdigit())

    def _accept(self, path: str) -> str:
        name = extract_game_folder(path)
        return name if name not in self.ignored else ""

    def _candidate(self, pid: int) -> str:
        """Resolve the game folder for *pid* from its exe, then its argv.

        Raises:
            OSError: If the process entry cannot be read
        """
        proc_dir = self.proc_root / str(pid)
        try:
            name = self._accept(os.readlink(proc_dir / "exe"))
        except OSError:
            # Kernel threads have no exe link; other users' links are unreadable.
            name = ""
        if name:
            return name

        # Proton games run under a generic launcher; the game path is in argv.
        raw = (proc_dir / "cmdline").read_bytes()
        for arg in raw.decode("utf-8", errors="replace").split("\0"):
            if name := self._accept(arg):
                return name
        return ""

    def scan(self) -> ScanResult:
        """Return the first running game in process-table order."""
        try:
            pids = self._pids()
        except OSError as e:
            logger.warning("process_table_unreadable", proc_root=str(self.proc_root), error=str(e))
            return ScanResult(failed=True)

        skipped = 0
        for pid in pids:
            try:
                name = self._candidate(pid)
            except OSError:
                skipped += 1
                continue
            if name:
                return ScanResult(game=DetectedGame(name=name, pid=pid), skipped=skipped)

        return ScanResult(skipped=skipped)
