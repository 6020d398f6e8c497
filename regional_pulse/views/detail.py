"""Detail resolution — which locale's trend the detail panel shows."""

from typing import List, Optional

from regional_pulse.models.locale import Locale, MetricsStore, TimePoint
from regional_pulse.models.selection import SelectionState
from regional_pulse.views.filtering import filter_by_continent


def resolve_detail_locale(
    store: MetricsStore,
    continent: str,
    selection: SelectionState,
) -> Optional[Locale]:
    """
    Resolve the locale to show in detail.

    A selected name found anywhere in the store wins, even outside the
    active continent. Otherwise fall back to the first locale of the
    filtered set, or None if that set is empty.
    """
    if selection.is_selected:
        selected = store.find(selection.locale_name)
        if selected is not None:
            return selected

    visible = filter_by_continent(store, continent)
    return visible[0] if visible else None


def detail_series(
    store: MetricsStore,
    continent: str,
    selection: SelectionState,
) -> List[TimePoint]:
    locale = resolve_detail_locale(store, continent, selection)
    if locale is None:
        return []
    return list(locale.time_series)
