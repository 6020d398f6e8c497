"""
Dashboard Session — the owned state of one dashboard.

Holds the current metrics snapshot, the active continent filter, the
selection, the processing counter and tick subscribers.

Updated by: Refresh Scheduler (store) + user commands (filter, selection)
Queried by: Rendering layer + HTTP API
"""

import logging
import random
from typing import Callable, Dict, List, Optional

from regional_pulse.generator.synthetic import DataGenerator
from regional_pulse.models.config import DashboardConfig
from regional_pulse.models.locale import Locale, MetricsStore, TimePoint
from regional_pulse.models.selection import FilterState, SelectionState
from regional_pulse.models.views import DashboardOverview
from regional_pulse.views.aggregation import average_accuracy, build_overview
from regional_pulse.views.detail import detail_series
from regional_pulse.views.filtering import continent_counts, filter_by_continent

_logger = logging.getLogger(__name__)

TickCallback = Callable[[MetricsStore], None]


class UnknownContinentError(ValueError):
    """Raised when a filter names a continent outside the configured set."""
    pass


class DashboardSession:
    """
    In-memory session state. Created once per dashboard, never persisted.

    The store is replaced wholesale on every tick; filter and selection
    change only through explicit commands and survive ticks.
    """

    def __init__(
        self,
        config: Optional[DashboardConfig] = None,
        generator: Optional[DataGenerator] = None,
        store: Optional[MetricsStore] = None,
    ):
        self.config = config or DashboardConfig()
        self.generator = generator or DataGenerator(random.Random(self.config.seed))
        if store is None:
            store = self.generator.generate(self.config.continents)
        self._store = store
        self._filter = FilterState(continent=self.config.default_continent)
        self._selection = SelectionState()
        self._processing_state = 0
        self._subscribers: List[TickCallback] = []

    # --- Reads ---

    @property
    def continents(self) -> List[str]:
        """Configured continents, in configuration order."""
        return list(self.config.continents)

    @property
    def filter_state(self) -> FilterState:
        return self._filter

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def processing_state(self) -> int:
        return self._processing_state

    def get_store(self) -> MetricsStore:
        """Current snapshot, as of the last tick."""
        return self._store

    def get_filtered_locales(self, continent: Optional[str] = None) -> List[Locale]:
        """Locales of a continent; defaults to the active filter."""
        if continent is None:
            continent = self._filter.continent
        return filter_by_continent(self._store, continent)

    def get_average_accuracy(self) -> int:
        """Raises EmptyStoreError when the store holds no locales."""
        return average_accuracy(self._store)

    def get_detail_series(self) -> List[TimePoint]:
        return detail_series(self._store, self._filter.continent, self._selection)

    def get_overview(self) -> DashboardOverview:
        return build_overview(
            self._store, self._filter.continent, self._processing_state
        )

    def continent_counts(self) -> Dict[str, int]:
        """Locale count per configured continent, zero for empty ones."""
        return continent_counts(self._store, self.continents)

    # --- Commands ---

    def set_filter(self, continent: str) -> None:
        """Switch the active continent. Selection is left untouched."""
        if continent not in self.config.continents:
            raise UnknownContinentError(f"Unknown continent: {continent}")
        self._filter = FilterState(continent=continent)
        _logger.debug("Filter set to %s", continent)

    def set_selection(self, locale_name: str) -> None:
        """Select a locale by name. The name is not checked against the store."""
        self._selection = self._selection.pick(locale_name)
        _logger.debug("Selection set to %s", locale_name)

    def clear_selection(self) -> None:
        self._selection = self._selection.clear()

    def replace_store(self, store: MetricsStore) -> None:
        """Swap in a new snapshot and notify subscribers."""
        self._store = store
        self._publish(store)

    def apply_tick(self) -> MetricsStore:
        """Re-sample the volatile fields of the current store and publish it."""
        refreshed = self.generator.refresh_volatile(self._store)
        self._processing_state = (self._processing_state + 1) % 100
        self.replace_store(refreshed)
        return refreshed

    # --- Subscriptions ---

    def on_tick(self, callback: TickCallback) -> Callable[[], None]:
        """Subscribe to store replacements. Returns an unsubscribe callable."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, store: MetricsStore) -> None:
        for callback in list(self._subscribers):
            try:
                callback(store)
            except Exception:
                _logger.warning("Tick subscriber %r failed", callback, exc_info=True)
