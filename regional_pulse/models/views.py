"""Read-only view models handed to the rendering layer."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel


class SeverityTier(str, Enum):
    EXCELLENT = "excellent"   # >= 90
    GOOD = "good"             # >= 80
    FAIR = "fair"             # >= 70
    POOR = "poor"             # below 70


class MetricReading(BaseModel):
    """One quality dimension as shown on a locale card."""

    key: str                                # e.g., "soil_quality"
    label: str                              # e.g., "SOIL QUALITY"
    value: int
    tier: SeverityTier


class LocaleCard(BaseModel):
    """A locale annotated with severity tiers for presentation."""

    continent: str
    name: str
    overall: int
    overall_tier: SeverityTier
    metrics: List[MetricReading]
    selected: bool = False


class DashboardOverview(BaseModel):
    """Headline figures shown above the locale grid."""

    active_continent: str
    processing_state: int                   # Tick counter, wraps at 100
    data_points: int                        # First visible locale, 0 if none
    average_accuracy: Optional[int] = None  # None when the store is empty
    locale_count: int                       # Locales in the active continent
    refreshed_at: str
