# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Pytest configuration and fixtures."""

from __future__ import annotations

import os
import shutil
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from presencebridge.catalog.store import GameCatalog

from .mock_ipc_server import BALATRO_ID


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the user's real config file and environment out of tests."""
    for key in list(os.environ):
        if key.startswith("PRESENCEBRIDGE_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("PRESENCEBRIDGE_CONFIG", str(tmp_path / "no-config.json"))


@pytest.fixture
def socket_dir() -> Iterator[Path]:
    """Short-lived directory with a path short enough for AF_UNIX."""
    path = Path(tempfile.mkdtemp(prefix="pb-", dir="/tmp"))
    yield path
    shutil.rmtree(path, ignore_errors=True)


@pytest.fixture
def socket_path(socket_dir: Path) -> Path:
    return socket_dir / "discord-ipc-0"


@pytest.fixture
def catalog() -> GameCatalog:
    return GameCatalog({"balatro": BALATRO_ID, "hades": "1111111111111111111"})


@pytest.fixture
def fake_proc(tmp_path: Path) -> Callable[..., Path]:
    """Build a fake process table entry.

    ``exe`` becomes a symlink target (need not exist), ``cmdline`` a list of
    arguments written NUL-separated. Omitted files mimic an unreadable entry.
    """
    root = tmp_path / "proc"
    root.mkdir()

    def _add(pid: int | str, exe: str | None = None, cmdline: list[str] | None = None) -> Path:
        proc_dir = root / str(pid)
        proc_dir.mkdir()
        if exe is not None:
            (proc_dir / "exe").symlink_to(exe)
        if cmdline is not None:
            (proc_dir / "cmdline").write_bytes("\0".join(cmdline).encode() + b"\0")
        return root

    return _add
