"""
History retention.

Entries carry their own `expire_at`; readers already ignore expired rows,
so physical deletion here only reclaims space and may lag behind.
"""

import asyncio
from typing import Dict, Optional

from smart_sac.config.settings import settings
from smart_sac.core.logging import get_logger
from smart_sac.db.session import Database
from smart_sac.repositories import EquipmentHistoryRepository
from smart_sac.services.base import BaseService
from smart_sac.utils.datetime_utils import Clock, DateTimeHelper

logger = get_logger(__name__)


class HistoryRetentionService(BaseService):
    """Deletes history entries whose `expire_at` has passed."""

    def __init__(self, db_session, clock: Optional[Clock] = None, batch_size: Optional[int] = None):
        super().__init__(db_session)
        self.history_repo = EquipmentHistoryRepository(db_session)
        self.clock: Clock = clock or DateTimeHelper.utcnow
        self.batch_size = batch_size or settings.HISTORY_PURGE_BATCH_SIZE

    def purge_expired(self) -> int:
        """
        Remove expired entries.

        Returns:
            Number of rows deleted
        """
        with self.transaction():
            removed = self.history_repo.purge_expired(now=self.clock(), batch_size=self.batch_size)

        if removed:
            self._logger.info(f"Purged {removed} expired equipment history entries")
        return removed


class HistoryRetentionSweeper:
    """
    Periodic purge running on the application's event loop.

    The purge itself is blocking database work and runs in a worker thread.
    """

    def __init__(
        self,
        database: Database,
        interval_seconds: Optional[float] = None,
        clock: Optional[Clock] = None,
    ):
        self.database = database
        self.interval_seconds = interval_seconds or settings.HISTORY_PURGE_INTERVAL_SECONDS
        self.clock = clock

        self.running = False
        self._task: Optional[asyncio.Task] = None
        self._purge: Optional[asyncio.Future] = None
        self.stats: Dict[str, Optional[object]] = {
            "total_purged": 0,
            "last_run": None,
        }

    async def start(self):
        """Start the background sweep"""
        if self.running:
            logger.warning("History retention sweeper already running")
            return

        self.running = True
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(f"History retention sweeper started, interval: {self.interval_seconds}s")

    async def stop(self):
        """Stop the background sweep and wait for a purge already in progress"""
        self.running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None

        # Worker threads cannot be interrupted, so the purge runs to completion
        if self._purge is not None and not self._purge.done():
            try:
                await self._purge
            except Exception as e:
                logger.error(f"History purge failed during shutdown: {e}", exc_info=True)
        self._purge = None
        logger.info("History retention sweeper stopped")

    def run_once(self) -> int:
        with self.database.session() as db:
            removed = HistoryRetentionService(db, clock=self.clock).purge_expired()
        self.stats["total_purged"] += removed
        self.stats["last_run"] = DateTimeHelper.utcnow()
        return removed

    async def _sweep_loop(self):
        while self.running:
            self._purge = asyncio.ensure_future(asyncio.to_thread(self.run_once))
            try:
                await asyncio.shield(self._purge)
            except Exception as e:
                logger.error(f"History purge failed: {e}", exc_info=True)

            await asyncio.sleep(self.interval_seconds)
