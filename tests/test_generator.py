"""Tests for the Data Generator."""

import random

import pytest

from regional_pulse.generator.synthetic import DataGenerator
from regional_pulse.models.locale import SERIES_YEARS


class BoundaryRandom:
    """Randomness source that always returns the lowest or highest value."""

    def __init__(self, highest: bool = False):
        self.highest = highest
        self.calls = 0

    def randrange(self, low: int, high: int) -> int:
        self.calls += 1
        return high - 1 if self.highest else low


CONTINENTS = {
    "Europe": ["France", "Germany", "Italy"],
    "Asia": ["Japan", "India"],
}


def _static_fields(locale) -> dict:
    return locale.model_dump(include={"continent", "name", "overall", "metrics", "time_series"})


class TestGenerate:
    def test_one_locale_per_pair_in_order(self):
        store = DataGenerator(random.Random(1)).generate(CONTINENTS)
        assert [(loc.continent, loc.name) for loc in store.locales] == [
            ("Europe", "France"),
            ("Europe", "Germany"),
            ("Europe", "Italy"),
            ("Asia", "Japan"),
            ("Asia", "India"),
        ]

    def test_accepts_pairs(self):
        store = DataGenerator(random.Random(1)).generate([("Oceania", ["Fiji", "Samoa"])])
        assert [loc.name for loc in store.locales] == ["Fiji", "Samoa"]

    def test_empty_input_gives_empty_store(self):
        assert DataGenerator(random.Random(1)).generate({}).is_empty()

    def test_values_within_ranges(self):
        store = DataGenerator(random.Random(123)).generate(CONTINENTS)
        for loc in store.locales:
            assert 75 <= loc.overall < 100
            for _, value in loc.metrics.items():
                assert 60 <= value < 100
            assert [p.year for p in loc.time_series] == list(SERIES_YEARS)
            for point in loc.time_series:
                assert 70 <= point.value < 100
            assert 80 <= loc.real_time.processing_power < 100
            assert 10000 <= loc.real_time.data_points < 15000
            assert 90 <= loc.real_time.accuracy < 100

    @pytest.mark.parametrize("highest", [False, True])
    def test_range_edges(self, highest):
        store = DataGenerator(BoundaryRandom(highest)).generate({"Europe": ["France"]})
        loc = store.locales[0]
        if highest:
            assert loc.overall == 99
            assert loc.real_time.data_points == 14999
            assert loc.real_time.accuracy == 99
        else:
            assert loc.overall == 75
            assert loc.metrics.soil_quality == 60
            assert loc.time_series[0].value == 70
            assert loc.real_time.processing_power == 80
            assert loc.real_time.data_points == 10000
            assert loc.real_time.accuracy == 90

    def test_every_field_drawn_independently(self):
        rng = BoundaryRandom()
        DataGenerator(rng).generate({"Europe": ["France"]})
        # overall + 4 metrics + 5 series points + 3 real-time fields
        assert rng.calls == 13

    def test_seeded_source_is_deterministic(self):
        a = DataGenerator(random.Random(42)).generate(CONTINENTS)
        b = DataGenerator(random.Random(42)).generate(CONTINENTS)
        assert [loc.model_dump() for loc in a.locales] == [
            loc.model_dump() for loc in b.locales
        ]


class TestRefreshVolatile:
    def test_static_fields_preserved(self):
        generator = DataGenerator(random.Random(5))
        store = generator.generate(CONTINENTS)
        refreshed = generator.refresh_volatile(store)

        assert [_static_fields(loc) for loc in refreshed.locales] == [
            _static_fields(loc) for loc in store.locales
        ]
        assert refreshed.refresh_count == store.refresh_count + 1

    def test_real_time_resampled(self):
        store = DataGenerator(BoundaryRandom(highest=False)).generate({"Europe": ["France"]})
        refreshed = DataGenerator(BoundaryRandom(highest=True)).refresh_volatile(store)

        assert store.locales[0].real_time.accuracy == 90
        assert refreshed.locales[0].real_time.accuracy == 99
        assert refreshed.locales[0].real_time.processing_power == 99
        assert refreshed.locales[0].overall == 75

    def test_input_store_not_mutated(self):
        generator = DataGenerator(random.Random(9))
        store = generator.generate(CONTINENTS)
        before = store.model_dump()
        generator.refresh_volatile(store)
        assert store.model_dump() == before

    def test_only_real_time_is_drawn(self):
        store = DataGenerator(random.Random(1)).generate(CONTINENTS)
        rng = BoundaryRandom()
        DataGenerator(rng).refresh_volatile(store)
        assert rng.calls == 3 * len(store)
