"""Filter Index — per-continent projections of the current store."""

from typing import Dict, List, Optional, Sequence

from regional_pulse.models.locale import Locale, MetricsStore


def filter_by_continent(store: MetricsStore, continent: str) -> List[Locale]:
    """
    Locales of one continent, in store order.

    An unknown continent, or one with no locales, yields an empty list.
    Always computed from the snapshot passed in; nothing is cached.
    """
    return [loc for loc in store.locales if loc.continent == continent]


def continent_counts(
    store: MetricsStore,
    continents: Optional[Sequence[str]] = None,
) -> Dict[str, int]:
    """
    Number of locales per continent.

    Listed continents come first and count zero when empty; continents
    present only in the store follow in first-seen order.
    """
    counts = dict.fromkeys(continents or (), 0)
    for continent in store.continents():
        counts[continent] = len(filter_by_continent(store, continent))
    return counts
