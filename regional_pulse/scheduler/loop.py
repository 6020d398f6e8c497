"""
Refresh Scheduler — the dashboard's heartbeat.

Every period, re-samples the volatile real_time block of each locale and
publishes the replacement store through the session.

Behavioral Contract:
- Each tick reads the session it is handed at tick time, never a snapshot
  captured at start.
- Ticks run to completion on the event loop; they never overlap.
- No tick is skipped or coalesced. No retry, no backoff.
- Once stop() returns, no further tick is observed.
"""

import asyncio
import logging
from typing import Callable, Optional

from regional_pulse.models.config import SchedulerConfig
from regional_pulse.models.locale import MetricsStore
from regional_pulse.session.store import DashboardSession

_logger = logging.getLogger(__name__)

UpdateCallback = Callable[[MetricsStore], None]


class RefreshHandle:
    """Cancellation handle for a started refresh loop."""

    def __init__(self, stop_event: asyncio.Event):
        self.stop_event = stop_event
        self.task: Optional[asyncio.Task] = None

    @property
    def cancelled(self) -> bool:
        return self.stop_event.is_set()

    @property
    def done(self) -> bool:
        return self.task is not None and self.task.done()


class RefreshScheduler:
    """
    Drives periodic refresh of a dashboard session.

    States:
      STOPPED → RUNNING (start / run_async) → STOPPED (stop)
    """

    def __init__(self, config: Optional[SchedulerConfig] = None):
        self.config = config or SchedulerConfig()
        self._running = False
        self._tick_count = 0

    @property
    def status(self) -> str:
        """Current scheduler status."""
        return "running" if self._running else "stopped"

    @property
    def tick_count(self) -> int:
        """Ticks completed since this scheduler was created."""
        return self._tick_count

    def tick_once(
        self,
        session: DashboardSession,
        on_update: Optional[UpdateCallback] = None,
    ) -> MetricsStore:
        """Run a single refresh cycle against the session's current store."""
        store = session.apply_tick()
        self._tick_count += 1
        _logger.debug(
            "Refresh tick %d: %d locales", store.refresh_count, len(store)
        )
        if on_update is not None:
            try:
                on_update(store)
            except Exception:
                _logger.warning("on_update callback %r failed", on_update, exc_info=True)
        return store

    async def run_async(
        self,
        session: DashboardSession,
        stop_event: Optional[asyncio.Event] = None,
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        """Run the refresh loop until stop_event is set."""
        self._running = True
        if stop_event is None:
            stop_event = asyncio.Event()

        try:
            while not stop_event.is_set():
                try:
                    await asyncio.wait_for(
                        stop_event.wait(),
                        timeout=self.config.refresh_interval_seconds,
                    )
                except asyncio.TimeoutError:
                    # A stop may land between the timeout and this resume.
                    if stop_event.is_set():
                        break
                    self.tick_once(session, on_update)
        finally:
            self._running = False

    def start(
        self,
        session: DashboardSession,
        on_update: Optional[UpdateCallback] = None,
    ) -> RefreshHandle:
        """
        Schedule the refresh loop on the running event loop.
        Raises RuntimeError when called outside of one.
        """
        loop = asyncio.get_running_loop()
        handle = RefreshHandle(asyncio.Event())
        handle.task = loop.create_task(
            self.run_async(session, handle.stop_event, on_update)
        )
        _logger.info(
            "Refresh scheduler started (interval=%ss)",
            self.config.refresh_interval_seconds,
        )
        return handle

    def stop(self, handle: RefreshHandle) -> None:
        """Cancel a started loop. Idempotent."""
        if handle.cancelled:
            return
        handle.stop_event.set()
        _logger.info("Refresh scheduler stopped after %d ticks", self._tick_count)
