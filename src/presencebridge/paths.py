# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Filesystem paths for configuration and cache files."""

from __future__ import annotations

import os
from pathlib import Path

from platformdirs import user_cache_dir, user_config_dir

from presencebridge.constants import APP_NAME

ENV_CONFIG_FILE = "PRESENCEBRIDGE_CONFIG"


def default_config_file() -> Path:
    """Get the JSON config file path, honoring the environment override."""
    env_path = os.getenv(ENV_CONFIG_FILE)
    if env_path:
        return Path(env_path)
    return Path(user_config_dir(APP_NAME)) / "config.json"


def default_cache_file() -> Path:
    """Get the default location of the cached game catalog."""
    return Path(user_cache_dir(APP_NAME)) / "games.json"


def default_runtime_dir() -> Path:
    """Get the per-user runtime directory that holds IPC sockets.

    Uses XDG_RUNTIME_DIR when set, otherwise /run/user/<uid>.
    """
    env_dir = os.getenv("XDG_RUNTIME_DIR")
    if env_dir:
        return Path(env_dir)
    return Path("/run/user") / str(os.getuid())
