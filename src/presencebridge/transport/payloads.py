# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""JSON bodies carried in IPC frames."""

from __future__ import annotations

import time
from typing import Any

from pydantic import BaseModel, Field, field_serializer

from presencebridge.constants import DEFAULT_LARGE_IMAGE, IPC_PROTOCOL_VERSION


class Handshake(BaseModel):
    v: int = IPC_PROTOCOL_VERSION
    client_id: str


class ActivityAssets(BaseModel):
    large_image: str = DEFAULT_LARGE_IMAGE
    large_text: str = ""


class Activity(BaseModel):
    details: str
    state: str
    assets: ActivityAssets = Field(default_factory=ActivityAssets)

    @classmethod
    def playing(cls, game_name: str, distro: str) -> Activity:
        return cls(
            details=f"Playing {game_name}",
            state=f"On {distro}",
            assets=ActivityAssets(large_text=game_name),
        )


class ActivityArgs(BaseModel):
    pid: int
    activity: Activity | None = None

    @field_serializer("activity")
    def _serialize_activity(self, activity: Activity | None) -> dict[str, Any]:
        # The peer clears the status when it receives an empty object.
        return activity.model_dump() if activity is not None else {}


def make_nonce() -> str:
    return str(time.time_ns())


class SetActivityCommand(BaseModel):
    cmd: str = "SET_ACTIVITY"
    nonce: str = Field(default_factory=make_nonce)
    args: ActivityArgs


def to_body(payload: BaseModel) -> bytes:
    """Serialize a payload model to a UTF-8 JSON frame body."""
    return payload.model_dump_json().encode("utf-8")
