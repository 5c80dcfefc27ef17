# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Fetch the detectable-applications list and keep a JSON cache on disk."""

from __future__ import annotations

import json
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

import httpx

from presencebridge.catalog.store import GameCatalog
from presencebridge.constants import DEFAULT_FETCH_TIMEOUT_S
from presencebridge.exceptions import CatalogError, CatalogUnavailableError
from presencebridge.logging import get_logger

if TYPE_CHECKING:
    from presencebridge.settings import Settings

logger = get_logger(__name__)


def cache_age_seconds(cache_file: Path) -> float | None:
    """Seconds since the cache file was written, or None if missing."""
    try:
        return time.time() - cache_file.stat().st_mtime
    except FileNotFoundError:
        return None


def read_cache(cache_file: Path) -> list[dict[str, Any]]:
    """Load cached application records.

    Raises:
        CatalogError: If the file is unreadable or not a JSON array
    """
    try:
        data = json.loads(cache_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Unreadable catalog cache {cache_file}") from e
    if not isinstance(data, list):
        raise CatalogError(f"Catalog cache {cache_file} is not a JSON array")
    return data


def write_cache(cache_file: Path, apps: list[dict[str, Any]]) -> None:
    """Write *apps* atomically so a crash never leaves half a cache."""
    cache_file.parent.mkdir(parents=True, exist_ok=True)
    tmp = cache_file.with_suffix(cache_file.suffix + ".tmp")
    tmp.write_text(json.dumps(apps), encoding="utf-8")
    tmp.replace(cache_file)


async def fetch_detectable(
    url: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = DEFAULT_FETCH_TIMEOUT_S,
) -> list[dict[str, Any]]:
    """Download the detectable-applications list.

    Args:
        url: Endpoint returning a JSON array of applications
        client: Optional client to reuse (tests inject a mock transport)
        timeout: Request timeout in seconds

    Returns:
        Application records

    Raises:
        CatalogError: On network, HTTP, or decoding failure
    """
    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    try:
        response = await client.get(url)
        response.raise_for_status()
        data = response.json()
    except httpx.HTTPStatusError as e:
        raise CatalogError(f"Catalog request failed with HTTP {e.response.status_code}") from e
    except httpx.HTTPError as e:
        raise CatalogError(f"Failed to fetch catalog from {url}") from e
    except ValueError as e:
        raise CatalogError("Catalog response is not valid JSON") from e
    finally:
        if owns_client:
            await client.aclose()

    if not isinstance(data, list):
        raise CatalogError("Catalog response is not a JSON array")
    return data


async def load_catalog(
    settings: Settings,
    force_refresh: bool = False,
    client: httpx.AsyncClient | None = None,
) -> GameCatalog:
    """Build the game catalog from cache, refreshing it when stale.

    A fresh cache is used as-is. Otherwise the list is downloaded and the
    cache rewritten; if that fails, a stale cache is still better than none.

    Raises:
        CatalogUnavailableError: If neither cache nor download yields data
    """
    cache_file = settings.cache_file
    ttl_s = settings.cache_ttl_hours * 3600
    age = cache_age_seconds(cache_file)

    if not force_refresh and age is not None and age < ttl_s:
        try:
            apps = read_cache(cache_file)
        except CatalogError as e:
            logger.warning("catalog_cache_invalid", path=str(cache_file), error=str(e))
        else:
            catalog = GameCatalog.from_apps(apps)
            logger.info("catalog_loaded", source="cache", games=len(catalog), age_s=round(age))
            return catalog

    logger.info("catalog_fetching", url=settings.detectable_url)
    try:
        apps = await fetch_detectable(settings.detectable_url, client=client)
    except CatalogError as fetch_error:
        if age is None:
            raise CatalogUnavailableError("No cached catalog and download failed") from fetch_error
        logger.warning("catalog_fetch_failed", error=str(fetch_error), fallback="stale_cache")
        try:
            apps = read_cache(cache_file)
        except CatalogError as e:
            raise CatalogUnavailableError("Download failed and cached catalog is unusable") from e
        catalog = GameCatalog.from_apps(apps)
        logger.info("catalog_loaded", source="stale_cache", games=len(catalog), age_s=round(age))
        return catalog

    try:
        write_cache(cache_file, apps)
    except OSError as e:
        logger.warning("catalog_cache_write_failed", path=str(cache_file), error=str(e))

    catalog = GameCatalog.from_apps(apps)
    logger.info("catalog_loaded", source="network", games=len(catalog))
    return catalog
