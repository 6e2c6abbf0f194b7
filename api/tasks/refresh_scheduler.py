"""
Periodic leaderboard refresh running inside the API process.
"""
from typing import Optional
import asyncio
import logging

from config import settings
from exceptions import AggregationError
from schemas import LeaderboardSnapshot
from services.leaderboard_service import LeaderboardContext

logger = logging.getLogger(__name__)


class RefreshScheduler:
    """Refreshes once at start, then every interval."""

    def __init__(self, context: LeaderboardContext, interval_seconds: float = None):
        self.context = context
        self.interval_seconds = interval_seconds or settings.UPDATE_INTERVAL_SECONDS
        self._task: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self):
        if self.is_running:
            logger.warning("Refresh scheduler already running")
            return
        self._task = asyncio.create_task(self._run())
        logger.info(f"Refresh scheduler started (interval={self.interval_seconds}s)")

    async def stop(self):
        if self._task is None:
            return

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Refresh scheduler stopped")

    async def trigger(self) -> Optional[LeaderboardSnapshot]:
        """
        Run a manual refresh.

        Returns:
            The new snapshot, or None if a refresh was already running

        Raises:
            AggregationError: If the pass failed
        """
        return await self.context.refresh()

    async def _run(self):
        while True:
            try:
                await self.context.refresh()
            except AggregationError as e:
                # Previous snapshot stays in place; next tick tries again
                logger.error(f"Scheduled refresh failed: {e}")
            except Exception:
                logger.exception("Unexpected error during scheduled refresh")
            await asyncio.sleep(self.interval_seconds)
