# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Tests for the in-memory game catalog."""

from __future__ import annotations

import pytest

from presencebridge.catalog.store import GameCatalog, Resolution
from presencebridge.constants import UNKNOWN_CLIENT_ID
from presencebridge.naming import normalize

APPS = [
    {"id": "1209665818464358430", "name": "Balatro", "executables": [{"name": "balatro.exe", "os": "win32"}]},
    {"id": "111", "name": "Baldur's Gate 3", "aliases": ["BG3", "Baldurs Gate III"]},
    {"id": "222", "name": "Hades"},
]


def test_from_apps_indexes_normalized_names() -> None:
    catalog = GameCatalog.from_apps(APPS)

    assert catalog.lookup("balatro") == "1209665818464358430"
    assert catalog.lookup("baldursgate3") == "111"
    assert catalog.lookup("hades") == "222"


@pytest.mark.parametrize("name", ["Balatro", "BALATRO", "balatro", "Bala-tro"])
def test_resolve_known_names(name: str) -> None:
    catalog = GameCatalog.from_apps(APPS)

    assert catalog.resolve(name) == "1209665818464358430"
    assert catalog.resolution(name) == Resolution(client_id="1209665818464358430", known=True)


def test_resolve_every_inserted_entry() -> None:
    names = ["Hollow Knight", "Stardew Valley", "DOOM (1993)", "Portal 2"]
    catalog = GameCatalog({normalize(name): str(i) for i, name in enumerate(names)})

    for i, name in enumerate(names):
        assert catalog.resolve(name) == str(i)


@pytest.mark.parametrize("name", ["Unknown Game", "", "Balatro 2"])
def test_resolve_unknown_returns_sentinel(name: str) -> None:
    catalog = GameCatalog.from_apps(APPS)

    assert catalog.resolve(name) == UNKNOWN_CLIENT_ID
    assert catalog.resolution(name) == Resolution(client_id=UNKNOWN_CLIENT_ID, known=False)


def test_sentinel_is_not_a_registered_id() -> None:
    catalog = GameCatalog.from_apps(APPS)

    assert UNKNOWN_CLIENT_ID not in catalog.values()


def test_aliases_do_not_override_names() -> None:
    apps = [
        {"id": "1", "name": "Portal"},
        {"id": "2", "name": "Portal Reloaded", "aliases": ["Portal"]},
    ]
    catalog = GameCatalog.from_apps(apps)

    assert catalog.lookup("portal") == "1"
    assert catalog.lookup("portalreloaded") == "2"


def test_aliases_fill_missing_keys() -> None:
    catalog = GameCatalog.from_apps(APPS)

    assert catalog.resolve("BG3") == "111"
    assert catalog.resolve("Baldurs Gate III") == "111"


def test_later_names_overwrite_earlier() -> None:
    catalog = GameCatalog.from_apps([{"id": "1", "name": "Doom"}, {"id": "2", "name": "DOOM"}])

    assert catalog.lookup("doom") == "2"


def test_malformed_records_are_skipped() -> None:
    catalog = GameCatalog.from_apps([{"name": "No Id"}, {"id": "5"}, {"id": "6", "name": "!!!"}, {"id": 7, "name": "Ok"}])

    assert dict(catalog) == {"ok": "7"}


def test_catalog_is_read_only() -> None:
    catalog = GameCatalog({"balatro": "1"})

    with pytest.raises(TypeError):
        catalog["hades"] = "2"  # type: ignore[index]
    with pytest.raises(TypeError):
        catalog._entries["hades"] = "2"  # type: ignore[index]


def test_catalog_copies_its_input() -> None:
    source = {"balatro": "1"}
    catalog = GameCatalog(source)
    source["hades"] = "2"

    assert len(catalog) == 1
    assert "hades" not in catalog
