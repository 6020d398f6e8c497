"""Tests for the Refresh Scheduler."""

import asyncio

import pytest

from regional_pulse.models.config import DashboardConfig, SchedulerConfig
from regional_pulse.scheduler.loop import RefreshScheduler
from regional_pulse.session.store import DashboardSession

FAST = SchedulerConfig(refresh_interval_seconds=0.01)


def _make_session() -> DashboardSession:
    return DashboardSession(
        DashboardConfig(continents={"Europe": ["France", "Germany"]}, seed=2)
    )


class TestTickOnce:
    def test_tick_once_refreshes_session(self):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)
        updates = []

        store = scheduler.tick_once(session, on_update=updates.append)

        assert session.get_store() is store
        assert updates == [store]
        assert scheduler.tick_count == 1
        assert store.refresh_count == 1

    def test_tick_reads_current_store(self):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)
        scheduler.tick_once(session)
        scheduler.tick_once(session)
        assert session.get_store().refresh_count == 2

    def test_failing_on_update_is_logged(self, caplog):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)

        def broken(store):
            raise RuntimeError("render failed")

        store = scheduler.tick_once(session, on_update=broken)

        assert session.get_store() is store
        assert scheduler.tick_count == 1
        assert "on_update callback" in caplog.text

    def test_initial_status(self):
        assert RefreshScheduler().status == "stopped"
        assert RefreshScheduler().config.refresh_interval_seconds == 1.0


class TestRunLoop:
    def test_ticks_periodically_until_stopped(self):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)
        updates = []

        async def scenario():
            handle = scheduler.start(session, on_update=updates.append)
            await asyncio.sleep(0.15)
            assert scheduler.status == "running"
            scheduler.stop(handle)
            stopped_at = scheduler.tick_count
            await handle.task
            await asyncio.sleep(0.05)
            return handle, stopped_at

        handle, stopped_at = asyncio.run(scenario())

        assert stopped_at >= 2
        assert scheduler.tick_count == stopped_at
        assert len(updates) == stopped_at
        assert session.get_store().refresh_count == stopped_at
        assert handle.cancelled
        assert handle.done
        assert scheduler.status == "stopped"

    def test_failing_on_update_keeps_loop_running(self):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)
        calls = []

        def broken(store):
            calls.append(store)
            raise RuntimeError("render failed")

        async def scenario():
            handle = scheduler.start(session, on_update=broken)
            await asyncio.sleep(0.2)
            status = scheduler.status
            done_early = handle.done
            scheduler.stop(handle)
            await handle.task
            return status, done_early

        status, done_early = asyncio.run(scenario())

        assert status == "running"
        assert done_early is False
        assert scheduler.tick_count > 3
        assert len(calls) == scheduler.tick_count

    def test_stop_before_first_tick(self):
        session = _make_session()
        scheduler = RefreshScheduler(SchedulerConfig(refresh_interval_seconds=5))

        async def scenario():
            handle = scheduler.start(session)
            await asyncio.sleep(0)
            scheduler.stop(handle)
            await asyncio.wait_for(handle.task, timeout=1)

        asyncio.run(scenario())
        assert scheduler.tick_count == 0
        assert session.get_store().refresh_count == 0

    def test_stop_is_idempotent(self):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)

        async def scenario():
            handle = scheduler.start(session)
            scheduler.stop(handle)
            scheduler.stop(handle)
            await handle.task

        asyncio.run(scenario())
        assert scheduler.tick_count == 0

    def test_run_async_with_external_stop_event(self):
        session = _make_session()
        scheduler = RefreshScheduler(FAST)

        async def scenario():
            stop_event = asyncio.Event()
            task = asyncio.ensure_future(scheduler.run_async(session, stop_event))
            await asyncio.sleep(0.08)
            stop_event.set()
            await task

        asyncio.run(scenario())
        assert scheduler.tick_count >= 1

    def test_start_requires_running_loop(self):
        with pytest.raises(RuntimeError):
            RefreshScheduler(FAST).start(_make_session())
