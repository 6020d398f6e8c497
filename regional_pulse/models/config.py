"""Dashboard and refresh scheduler configuration."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_CONTINENTS: Dict[str, List[str]] = {
    "Europe": ["France", "Germany", "Italy", "Spain", "UK"],
    "Asia": ["China", "Japan", "India", "Korea", "Singapore"],
    "Africa": ["Egypt", "South Africa", "Kenya", "Nigeria", "Morocco"],
    "Americas": ["USA", "Canada", "Brazil", "Mexico", "Argentina"],
    "Oceania": ["Australia", "New Zealand", "Fiji", "Papua New Guinea", "Samoa"],
}


class SchedulerConfig(BaseModel):
    """Configuration for the refresh scheduler."""

    refresh_interval_seconds: float = Field(gt=0, default=1.0)


class DashboardConfig(BaseModel):
    """Static input for a dashboard session."""

    continents: Dict[str, List[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CONTINENTS.items()},
        min_length=1,
    )
    seed: Optional[int] = None              # None = nondeterministic
    autostart_refresh: bool = False         # Start the scheduler with the API app
    scheduler: SchedulerConfig = SchedulerConfig()

    @field_validator("continents")
    @classmethod
    def _unique_names_per_continent(
        cls, value: Dict[str, List[str]]
    ) -> Dict[str, List[str]]:
        for continent, names in value.items():
            duplicates = sorted({n for n in names if names.count(n) > 1})
            if duplicates:
                raise ValueError(
                    f"Duplicate locales in {continent}: {', '.join(duplicates)}"
                )
        return value

    @property
    def default_continent(self) -> str:
        """The first configured continent."""
        return next(iter(self.continents))
