# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Core session and loop logic."""

from __future__ import annotations

from presencebridge.core.bridge import BridgeLoop, TickOutcome
from presencebridge.core.session import ConnectionSession, SessionState

__all__ = ["BridgeLoop", "ConnectionSession", "SessionState", "TickOutcome"]
