# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Canonical lookup keys for game names."""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def normalize(raw: str) -> str:
    """Lower-case *raw* and drop everything outside ``[a-z0-9]``.

    Catalog keys and detected folder names both go through this, so
    ``"Baldur's Gate 3"`` and ``"Baldurs Gate 3"`` meet at ``"baldursgate3"``.
    """
    return _NON_ALNUM.sub("", raw.lower())
