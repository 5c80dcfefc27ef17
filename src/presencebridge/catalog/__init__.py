# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Game name to application id catalog."""

from __future__ import annotations

from presencebridge.catalog.fetch import load_catalog
from presencebridge.catalog.store import GameCatalog, Resolution

__all__ = ["GameCatalog", "Resolution", "load_catalog"]
