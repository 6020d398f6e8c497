"""
Aggregation Engine — fleet-wide summary statistics.

Averages are taken over the whole store, not the filtered view.
"""

from typing import Sequence

from regional_pulse.models.locale import Locale, MetricsStore
from regional_pulse.models.views import DashboardOverview
from regional_pulse.views.filtering import filter_by_continent


class EmptyStoreError(Exception):
    """Raised when an aggregate is requested over a store with no locales."""
    pass


def _round_half_up(numerator: int, denominator: int) -> int:
    return (2 * numerator + denominator) // (2 * denominator)


def average_accuracy(store: MetricsStore) -> int:
    """Mean real_time accuracy across all locales, rounded half-up."""
    if store.is_empty():
        raise EmptyStoreError("Cannot average accuracy over an empty store")
    total = sum(loc.real_time.accuracy for loc in store.locales)
    return _round_half_up(total, len(store.locales))


def headline_data_points(locales: Sequence[Locale]) -> int:
    """Data points of the first visible locale, or 0 when none are visible."""
    if not locales:
        return 0
    return locales[0].real_time.data_points


def build_overview(
    store: MetricsStore,
    continent: str,
    processing_state: int,
) -> DashboardOverview:
    """Headline figures for the active continent."""
    visible = filter_by_continent(store, continent)
    accuracy = None if store.is_empty() else average_accuracy(store)
    return DashboardOverview(
        active_continent=continent,
        processing_state=processing_state,
        data_points=headline_data_points(visible),
        average_accuracy=accuracy,
        locale_count=len(visible),
        refreshed_at=store.refreshed_at.isoformat(),
    )
