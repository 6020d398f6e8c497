"""Color Classifier — maps scores to presentation tiers."""

from regional_pulse.models.locale import Locale
from regional_pulse.models.views import LocaleCard, MetricReading, SeverityTier


def classify(score: int) -> SeverityTier:
    """Boundary values belong to the higher tier."""
    if score >= 90:
        return SeverityTier.EXCELLENT
    if score >= 80:
        return SeverityTier.GOOD
    if score >= 70:
        return SeverityTier.FAIR
    return SeverityTier.POOR


def metric_label(key: str) -> str:
    # Only the first separator is replaced: "soil_quality" -> "SOIL QUALITY"
    return key.replace("_", " ", 1).upper()


def annotate_locale(locale: Locale, selected: bool = False) -> LocaleCard:
    """Build the card view of a locale with a tier for every score."""
    return LocaleCard(
        continent=locale.continent,
        name=locale.name,
        overall=locale.overall,
        overall_tier=classify(locale.overall),
        metrics=[
            MetricReading(
                key=key,
                label=metric_label(key),
                value=value,
                tier=classify(value),
            )
            for key, value in locale.metrics.items()
        ],
        selected=selected,
    )
