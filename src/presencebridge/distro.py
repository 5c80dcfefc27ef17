# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Human-readable distro label from os-release."""

from __future__ import annotations

import platform
from pathlib import Path

from presencebridge.logging import get_logger

logger = get_logger(__name__)

OS_RELEASE_PATH = Path("/etc/os-release")


def parse_os_release(text: str) -> dict[str, str]:
    """Parse ``KEY=value`` lines, dropping surrounding quotes."""
    info: dict[str, str] = {}
    for line in text.splitlines():
        if "=" not in line or line.lstrip().startswith("#"):
            continue
        key, value = line.split("=", 1)
        info[key.strip()] = value.strip().strip('"').strip("'")
    return info


def current_distro_label(path: Path = OS_RELEASE_PATH) -> str:
    """Return PRETTY_NAME, then NAME, then the platform name."""
    try:
        info = parse_os_release(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning("os_release_unreadable", path=str(path), error=str(e))
        return platform.system().lower()

    return info.get("PRETTY_NAME") or info.get("NAME") or platform.system().lower()
