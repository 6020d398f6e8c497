"""Locale records and the metrics store snapshot."""

from datetime import datetime
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


SERIES_YEARS: Tuple[int, ...] = (2020, 2021, 2022, 2023, 2024)


class QualityMetrics(BaseModel):
    """Static quality dimensions, drawn once when the locale is created."""

    model_config = ConfigDict(frozen=True)

    soil_quality: int = Field(ge=60, lt=100)
    water_efficiency: int = Field(ge=60, lt=100)
    innovation_index: int = Field(ge=60, lt=100)
    sustainability_score: int = Field(ge=60, lt=100)

    def items(self) -> List[Tuple[str, int]]:
        """Dimension name/value pairs in declaration order."""
        return list(self.model_dump().items())


class TimePoint(BaseModel):
    """One yearly point of a locale's performance trend."""

    model_config = ConfigDict(frozen=True)

    year: int
    value: int = Field(ge=70, lt=100)


class RealTimeMetrics(BaseModel):
    """Volatile block, replaced wholesale on every refresh tick."""

    model_config = ConfigDict(frozen=True)

    processing_power: int = Field(ge=80, lt=100)
    data_points: int = Field(ge=10000, lt=15000)
    accuracy: int = Field(ge=90, lt=100)


class Locale(BaseModel):
    """A single named country tracked by the dashboard."""

    model_config = ConfigDict(frozen=True)

    continent: str                          # e.g., "Europe"
    name: str                               # Unique within its continent
    overall: int = Field(ge=75, lt=100)
    metrics: QualityMetrics
    time_series: Tuple[TimePoint, ...] = Field(
        min_length=len(SERIES_YEARS), max_length=len(SERIES_YEARS)
    )
    real_time: RealTimeMetrics


class MetricsStore(BaseModel):
    """
    Immutable snapshot of every locale, in configuration order.

    The set of (continent, name) pairs is fixed once generated; refreshes
    produce a new snapshot that differs only in the real_time blocks.
    """

    model_config = ConfigDict(frozen=True)

    locales: Tuple[Locale, ...] = ()
    refreshed_at: datetime
    refresh_count: int = Field(ge=0, default=0)

    def __len__(self) -> int:
        return len(self.locales)

    def is_empty(self) -> bool:
        return not self.locales

    def find(self, name: str) -> Optional[Locale]:
        """First locale with this name, in any continent."""
        return next((loc for loc in self.locales if loc.name == name), None)

    def continents(self) -> List[str]:
        """Continents present in the store, in first-seen order."""
        return list(dict.fromkeys(loc.continent for loc in self.locales))
