# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Scan, resolve, connect, update: the daemon's main loop."""

from __future__ import annotations

import asyncio
import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING

from presencebridge.constants import DEFAULT_SCAN_INTERVAL_S
from presencebridge.core.session import ConnectionSession
from presencebridge.exceptions import IpcConnectError, IpcError
from presencebridge.logging import get_logger
from presencebridge.scanner import ProcessScanner
from presencebridge.transport.locator import SocketLocator
from presencebridge.transport.payloads import Activity

if TYPE_CHECKING:
    from presencebridge.catalog.store import GameCatalog
    from presencebridge.scanner import DetectedGame
    from presencebridge.settings import Settings

logger = get_logger(__name__)


@dataclass
class TickOutcome:
    """What a single tick observed and did."""

    game: DetectedGame | None = None
    client_id: str | None = None
    connect_attempted: bool = False
    disconnected: bool = False
    activity_sent: bool = False
    scan_failed: bool = False
    error: str | None = None


class BridgeLoop:
    """Drives the connection session from periodic process scans."""

    def __init__(
        self,
        catalog: GameCatalog,
        scanner: ProcessScanner,
        session: ConnectionSession,
        distro: str,
        scan_interval: float = DEFAULT_SCAN_INTERVAL_S,
        clear_activity_on_stop: bool = True,
    ) -> None:
        self.catalog = catalog
        self.scanner = scanner
        self.session = session
        self.distro = distro
        self.scan_interval = scan_interval
        self.clear_activity_on_stop = clear_activity_on_stop
        self._current: DetectedGame | None = None

    @classmethod
    def from_settings(cls, settings: Settings, catalog: GameCatalog, distro: str) -> BridgeLoop:
        scanner = ProcessScanner(ignored=settings.ignored_set())
        locator = SocketLocator(override=settings.socket_path)
        session = ConnectionSession(locator, io_timeout=settings.io_timeout)
        return cls(
            catalog=catalog,
            scanner=scanner,
            session=session,
            distro=distro,
            scan_interval=settings.scan_interval,
            clear_activity_on_stop=settings.clear_activity_on_stop,
        )

    def _note_detection(self, game: DetectedGame | None, known: bool = True) -> None:
        if game == self._current:
            return
        if game is None:
            logger.info("game_stopped", game=self._current.name if self._current else None)
        elif known:
            logger.info("game_detected", game=game.name, pid=game.pid)
        else:
            logger.warning("unknown_game", game=game.name, pid=game.pid)
        self._current = game

    async def _stop_session(self) -> None:
        previous = self._current
        if self.clear_activity_on_stop and previous is not None:
            try:
                await self.session.clear_activity(previous.pid)
            except IpcError as e:
                logger.debug("activity_clear_failed", error=str(e))
        await self.session.close()

    async def tick(self) -> TickOutcome:
        """Run one scan-resolve-connect-update cycle."""
        outcome = TickOutcome()
        result = self.scanner.scan()
        if result.failed:
            # Nothing is known about running games; leave the session as it is.
            outcome.scan_failed = True
            return outcome
        if result.partial:
            logger.debug("scan_partial", skipped=result.skipped)

        game = result.game
        outcome.game = game

        if game is None:
            if self.session.is_connected():
                await self._stop_session()
                outcome.disconnected = True
            self._note_detection(None)
            return outcome

        resolution = self.catalog.resolution(game.name)
        outcome.client_id = resolution.client_id
        self._note_detection(game, known=resolution.known)

        if self.session.is_connected() and self.session.active_client_id != resolution.client_id:
            logger.info(
                "game_switched",
                from_client_id=self.session.active_client_id,
                to_client_id=resolution.client_id,
            )
            await self.session.close()
            outcome.disconnected = True

        if not self.session.is_connected():
            outcome.connect_attempted = True
            try:
                await self.session.connect(resolution.client_id)
            except IpcConnectError as e:
                # The sentinel id is rejected on every tick; unknown_game was already logged.
                log = logger.warning if resolution.known else logger.debug
                log(
                    "ipc_connect_failed",
                    game=game.name,
                    client_id=resolution.client_id,
                    known=resolution.known,
                    error=str(e),
                )
                outcome.error = str(e)
                return outcome

        try:
            await self.session.update_activity(game.pid, Activity.playing(game.name, self.distro))
        except IpcError as e:
            logger.warning("activity_update_failed", game=game.name, error=str(e))
            outcome.error = str(e)
            return outcome

        outcome.activity_sent = True
        return outcome

    async def run(self, stop: asyncio.Event | None = None, max_ticks: int | None = None) -> None:
        """Tick every ``scan_interval`` seconds until *stop* is set.

        The session is closed on the way out, including on cancellation.
        """
        stop = stop or asyncio.Event()
        ticks = 0
        logger.info("bridge_started", interval_s=self.scan_interval, games=len(self.catalog))
        try:
            while not stop.is_set():
                await self.tick()
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break
                with contextlib.suppress(TimeoutError):
                    await asyncio.wait_for(stop.wait(), timeout=self.scan_interval)
        finally:
            await self.session.close()
            logger.info("bridge_stopped", ticks=ticks)
