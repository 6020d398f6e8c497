"""
Data Generator — synthetic locale metrics.

Produces the initial store and re-samples the volatile real_time block on
every refresh. Each value is drawn independently and uniformly from its
half-open range using the injected randomness source, so a seeded
``random.Random`` makes every snapshot reproducible.

Ranges:
  overall           [75, 100)
  metrics[*]        [60, 100)
  time_series value [70, 100)   years 2020-2024
  processing_power  [80, 100)
  data_points       [10000, 15000)
  accuracy          [90, 100)
"""

import logging
import random
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from regional_pulse.models.locale import (
    SERIES_YEARS,
    Locale,
    MetricsStore,
    QualityMetrics,
    RealTimeMetrics,
    TimePoint,
)

_logger = logging.getLogger(__name__)

OVERALL_RANGE = (75, 100)
METRIC_RANGE = (60, 100)
SERIES_VALUE_RANGE = (70, 100)
PROCESSING_POWER_RANGE = (80, 100)
DATA_POINTS_RANGE = (10000, 15000)
ACCURACY_RANGE = (90, 100)

ContinentGroups = Union[
    Mapping[str, Sequence[str]],
    Iterable[Tuple[str, Sequence[str]]],
]


def _iter_groups(continents: ContinentGroups) -> List[Tuple[str, Sequence[str]]]:
    if isinstance(continents, Mapping):
        return list(continents.items())
    return list(continents)


class DataGenerator:
    """Draws locale records from a supplied randomness source."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _draw(self, bounds: Tuple[int, int]) -> int:
        low, high = bounds
        return self.rng.randrange(low, high)

    def generate(self, continents: ContinentGroups) -> MetricsStore:
        """
        Build one locale per (continent, name) pair, in input order.
        An empty input yields an empty store.
        """
        locales = []
        for continent, names in _iter_groups(continents):
            for name in names:
                locales.append(self.generate_locale(continent, name))

        _logger.debug("Generated store with %d locales", len(locales))
        return MetricsStore(
            locales=tuple(locales),
            refreshed_at=datetime.now(timezone.utc),
        )

    def generate_locale(self, continent: str, name: str) -> Locale:
        """Draw every static and volatile field for a single locale."""
        return Locale(
            continent=continent,
            name=name,
            overall=self._draw(OVERALL_RANGE),
            metrics=QualityMetrics(
                soil_quality=self._draw(METRIC_RANGE),
                water_efficiency=self._draw(METRIC_RANGE),
                innovation_index=self._draw(METRIC_RANGE),
                sustainability_score=self._draw(METRIC_RANGE),
            ),
            time_series=tuple(
                TimePoint(year=year, value=self._draw(SERIES_VALUE_RANGE))
                for year in SERIES_YEARS
            ),
            real_time=self.generate_real_time(),
        )

    def generate_real_time(self) -> RealTimeMetrics:
        return RealTimeMetrics(
            processing_power=self._draw(PROCESSING_POWER_RANGE),
            data_points=self._draw(DATA_POINTS_RANGE),
            accuracy=self._draw(ACCURACY_RANGE),
        )

    def refresh_volatile(self, store: MetricsStore) -> MetricsStore:
        """
        Return a new store with every real_time block re-sampled.

        Static fields and locale order are carried over unchanged; the input
        store is never mutated.
        """
        locales = tuple(
            loc.model_copy(update={"real_time": self.generate_real_time()})
            for loc in store.locales
        )
        return MetricsStore(
            locales=locales,
            refreshed_at=datetime.now(timezone.utc),
            refresh_count=store.refresh_count + 1,
        )
