"""Regional Pulse data models."""

from regional_pulse.models.config import (
    DEFAULT_CONTINENTS,
    DashboardConfig,
    SchedulerConfig,
)
from regional_pulse.models.locale import (
    SERIES_YEARS,
    Locale,
    MetricsStore,
    QualityMetrics,
    RealTimeMetrics,
    TimePoint,
)
from regional_pulse.models.selection import (
    FilterState,
    SelectionState,
    SelectionStatus,
)
from regional_pulse.models.views import (
    DashboardOverview,
    LocaleCard,
    MetricReading,
    SeverityTier,
)

__all__ = [
    "DEFAULT_CONTINENTS",
    "DashboardConfig",
    "DashboardOverview",
    "FilterState",
    "Locale",
    "LocaleCard",
    "MetricReading",
    "MetricsStore",
    "QualityMetrics",
    "RealTimeMetrics",
    "SERIES_YEARS",
    "SchedulerConfig",
    "SelectionState",
    "SelectionStatus",
    "SeverityTier",
    "TimePoint",
]
