"""
Service for building leaderboard snapshots from per-handle profile lookups.
"""
from typing import List, Optional, Sequence
from datetime import datetime, timezone
import asyncio
import logging

from config import settings
from exceptions import AggregationError, DirectorySourceError, ProfileLookupError
from schemas import LeaderboardSnapshot, ProfileRecord

logger = logging.getLogger(__name__)


class LeaderboardAggregator:
    """
    Fans out one profile lookup per handle and ranks whatever succeeds.

    Only one pass runs at a time. A pass requested while another is running
    is dropped, not queued. The current snapshot is replaced in a single
    assignment once every lookup has settled, so readers only ever see a
    complete snapshot.
    """

    def __init__(
        self,
        lookup_client,
        concurrency: Optional[int] = None,
        timeout: Optional[float] = None,
    ):
        self.lookup_client = lookup_client
        self.concurrency = concurrency
        self.timeout = timeout
        self.snapshot = LeaderboardSnapshot()
        self.last_error: Optional[str] = None
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def aggregate(self, identifiers: Sequence[str]) -> Optional[LeaderboardSnapshot]:
        """
        Run one aggregation pass.

        Args:
            identifiers: Handles to look up

        Returns:
            The new snapshot, or None if a pass was already running

        Raises:
            AggregationError: If the pass could not complete; the previous
                snapshot is kept
        """
        if self._is_running:
            logger.info("Leaderboard refresh already in progress, skipping")
            return None

        # No await between the check and the set
        self._is_running = True
        try:
            if identifiers is None:
                raise AggregationError("No user list available")

            records = await self._collect(list(identifiers))
            snapshot = self.build_snapshot(records)
        except AggregationError as e:
            self.last_error = f"Failed to update leaderboard: {e}"
            logger.error(self.last_error)
            raise
        except Exception as e:
            self.last_error = f"Failed to update leaderboard: {e}"
            logger.exception("Error updating leaderboard")
            raise AggregationError(str(e)) from e
        finally:
            self._is_running = False

        self.snapshot = snapshot
        self.last_error = None
        logger.info(
            f"Leaderboard updated: {snapshot.count}/{len(identifiers)} users, "
            f"average={snapshot.average_rating}, max={snapshot.max_rating}"
        )
        return snapshot

    async def _collect(self, identifiers: List[str]) -> List[ProfileRecord]:
        """Look up every handle and keep the successes, in input order."""
        semaphore = asyncio.Semaphore(self.concurrency) if self.concurrency else None

        results = await asyncio.gather(
            *(self._lookup(identifier, semaphore) for identifier in identifiers),
            return_exceptions=True,
        )

        records = []
        for identifier, result in zip(identifiers, results):
            if isinstance(result, ProfileLookupError):
                logger.warning(f"Error fetching data for {identifier}: {result}")
            elif isinstance(result, asyncio.TimeoutError):
                logger.warning(f"Lookup for {identifier} timed out after {self.timeout}s")
            elif isinstance(result, BaseException):
                logger.warning(f"Unexpected error fetching data for {identifier}: {result!r}")
            else:
                records.append(result)
        return records

    async def _lookup(self, identifier: str, semaphore: Optional[asyncio.Semaphore]) -> ProfileRecord:
        if semaphore is None:
            return await self._fetch(identifier)
        async with semaphore:
            return await self._fetch(identifier)

    async def _fetch(self, identifier: str) -> ProfileRecord:
        if self.timeout:
            return await asyncio.wait_for(self.lookup_client.fetch_profile(identifier), self.timeout)
        return await self.lookup_client.fetch_profile(identifier)

    @staticmethod
    def build_snapshot(records: Sequence[ProfileRecord]) -> LeaderboardSnapshot:
        """
        Rank records and derive summary numbers.

        Sorting is stable, so equal ratings keep their collection order.
        The average is rounded half up.
        """
        ordered = sorted(records, key=lambda record: record.current_rating, reverse=True)
        ratings = [record.current_rating for record in ordered]
        count = len(ratings)

        if count == 0:
            average, maximum = 0, 0
        else:
            total = sum(ratings)
            average = (2 * total + count) // (2 * count)
            maximum = max(ratings)

        return LeaderboardSnapshot(
            ordered_records=ordered,
            count=count,
            average_rating=average,
            max_rating=maximum,
            generated_at=datetime.now(timezone.utc),
        )


class LeaderboardContext:
    """
    Everything one leaderboard view needs: the handle directory, the
    aggregator holding the current snapshot, and directory warnings.
    """

    def __init__(self, directory, aggregator: LeaderboardAggregator, fallback_identifiers: List[str] = None):
        self.directory = directory
        self.aggregator = aggregator
        self.fallback_identifiers = list(
            fallback_identifiers if fallback_identifiers is not None else settings.FALLBACK_HANDLES
        )
        self.identifiers: Optional[List[str]] = None
        self.using_fallback = False
        self.directory_warning: Optional[str] = None

    @property
    def snapshot(self) -> LeaderboardSnapshot:
        return self.aggregator.snapshot

    @property
    def is_refreshing(self) -> bool:
        return self.aggregator.is_running

    @property
    def last_error(self) -> Optional[str]:
        return self.aggregator.last_error

    async def load_directory(self) -> List[str]:
        """
        Load handles from the directory, falling back to the fixed sample list.
        """
        try:
            identifiers = await self.directory.load()
            self.using_fallback = False
            self.directory_warning = None
        except DirectorySourceError as e:
            logger.error(f"Error loading Google Sheets data: {e}")
            identifiers = list(self.fallback_identifiers)
            self.using_fallback = True
            self.directory_warning = f"Failed to load data from Google Sheets: {e}"
            logger.info("Using fallback sample data")

        self.identifiers = identifiers
        return identifiers

    async def refresh(self) -> Optional[LeaderboardSnapshot]:
        """Run one aggregation pass over the current directory."""
        if self.aggregator.is_running:
            logger.info("Leaderboard refresh already in progress, skipping")
            return None
        if self.identifiers is None:
            await self.load_directory()
        return await self.aggregator.aggregate(self.identifiers)

    async def close(self):
        for resource in (self.directory, self.aggregator.lookup_client):
            close = getattr(resource, "close", None)
            if close is not None:
                await close()
