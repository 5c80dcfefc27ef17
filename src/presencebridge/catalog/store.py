# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Read-only mapping from normalized game name to Discord application id."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from presencebridge.constants import UNKNOWN_CLIENT_ID
from presencebridge.naming import normalize


@dataclass(frozen=True)
class Resolution:
    """Result of resolving a detected game name.

    ``known`` is False when the name is not in the catalog; ``client_id`` is
    then the placeholder id the peer will refuse.
    """

    client_id: str
    known: bool


class GameCatalog(Mapping[str, str]):
    """Immutable catalog built once at startup."""

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: Mapping[str, str] = MappingProxyType(dict(entries or {}))

    @classmethod
    def from_apps(cls, apps: Iterable[dict[str, Any]]) -> GameCatalog:
        """Index detectable-application records by normalized name.

        Later names overwrite earlier ones. Aliases only fill keys that no
        name has claimed.
        """
        entries: dict[str, str] = {}
        aliases: dict[str, str] = {}
        for app in apps:
            app_id = app.get("id")
            name = app.get("name")
            if not app_id or not isinstance(name, str):
                continue
            key = normalize(name)
            if key:
                entries[key] = str(app_id)
            for alias in app.get("aliases") or ():
                if isinstance(alias, str) and (alias_key := normalize(alias)):
                    aliases.setdefault(alias_key, str(app_id))

        for key, app_id in aliases.items():
            entries.setdefault(key, app_id)
        return cls(entries)

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def lookup(self, normalized_name: str) -> str | None:
        """Return the application id for an already-normalized name."""
        return self._entries.get(normalized_name)

    def resolution(self, name: str) -> Resolution:
        client_id = self.lookup(normalize(name))
        if client_id is None:
            return Resolution(client_id=UNKNOWN_CLIENT_ID, known=False)
        return Resolution(client_id=client_id, known=True)

    def resolve(self, name: str) -> str:
        """Return the application id for *name*, or the placeholder id."""
        return self.resolution(name).client_id
