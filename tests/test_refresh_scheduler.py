"""
Tests for RefreshScheduler.
"""
import asyncio

import pytest

from exceptions import AggregationError
from services.leaderboard_service import LeaderboardAggregator, LeaderboardContext
from tasks.refresh_scheduler import RefreshScheduler
from tests.fakes import FakeDirectory, FakeLookupClient


def make_context():
    client = FakeLookupClient({"a": 1500, "b": 1900})
    return LeaderboardContext(FakeDirectory(["a", "b"]), LeaderboardAggregator(client)), client


@pytest.mark.asyncio
class TestRefreshScheduler:

    async def test_refreshes_immediately_then_on_interval(self):
        context, client = make_context()
        scheduler = RefreshScheduler(context, interval_seconds=0.05)

        scheduler.start()
        await asyncio.sleep(0.01)
        assert context.snapshot.count == 2
        first = context.snapshot

        await asyncio.sleep(0.08)
        assert context.snapshot is not first
        assert len(client.calls) >= 4

        await scheduler.stop()
        assert not scheduler.is_running

    async def test_start_twice_keeps_one_loop(self):
        context, _ = make_context()
        scheduler = RefreshScheduler(context, interval_seconds=10)

        scheduler.start()
        task = scheduler._task
        scheduler.start()
        assert scheduler._task is task

        await scheduler.stop()

    async def test_stop_without_start(self):
        context, _ = make_context()
        await RefreshScheduler(context).stop()

    async def test_manual_trigger(self):
        context, _ = make_context()
        scheduler = RefreshScheduler(context, interval_seconds=10)

        snapshot = await scheduler.trigger()

        assert [r.identifier for r in snapshot.ordered_records] == ["b", "a"]

    async def test_manual_trigger_ignored_while_running(self):
        context, client = make_context()
        client.gate = asyncio.Event()
        scheduler = RefreshScheduler(context, interval_seconds=10)

        scheduler.start()
        for _ in range(3):
            await asyncio.sleep(0)
        assert context.is_refreshing

        assert await scheduler.trigger() is None

        client.gate.set()
        await asyncio.sleep(0.01)
        assert client.calls == ["a", "b"]
        await scheduler.stop()

    async def test_unexpected_error_keeps_loop_alive(self, monkeypatch, caplog):
        context, _ = make_context()
        calls = []

        async def broken_refresh():
            calls.append(1)
            raise TypeError("unhashable type: 'slice'")

        monkeypatch.setattr(context, "refresh", broken_refresh)
        scheduler = RefreshScheduler(context, interval_seconds=0.02)

        scheduler.start()
        await asyncio.sleep(0.07)
        assert scheduler.is_running
        assert len(calls) >= 2
        assert "Unexpected error during scheduled refresh" in caplog.text

        await scheduler.stop()

    async def test_failed_pass_keeps_loop_alive(self, monkeypatch):
        context, _ = make_context()
        calls = []

        async def failing_refresh():
            calls.append(1)
            raise AggregationError("directory vanished")

        monkeypatch.setattr(context, "refresh", failing_refresh)
        scheduler = RefreshScheduler(context, interval_seconds=0.02)

        scheduler.start()
        await asyncio.sleep(0.07)
        assert scheduler.is_running
        assert len(calls) >= 2

        await scheduler.stop()
