"""
Regional Pulse API — FastAPI endpoints.

Exposes the dashboard session to a rendering layer:
- Store and locale inspection
- Continent filter and locale selection commands
- Aggregates and detail series
- Refresh scheduler control

Endpoints are async so every session access runs on the event loop that
drives the refresh scheduler.
"""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from regional_pulse.models.config import DashboardConfig, SchedulerConfig
from regional_pulse.scheduler.loop import RefreshScheduler
from regional_pulse.session.store import DashboardSession, UnknownContinentError
from regional_pulse.views.aggregation import EmptyStoreError
from regional_pulse.views.classifier import annotate_locale, classify


# --- Request/Response Models ---

class FilterRequest(BaseModel):
    continent: str


class SelectionRequest(BaseModel):
    locale_name: str


class TickResponse(BaseModel):
    refresh_count: int
    processing_state: int
    tick_count: int


# --- Application Factory ---

def create_app(
    session: Optional[DashboardSession] = None,
    scheduler: Optional[RefreshScheduler] = None,
    config: Optional[DashboardConfig] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    if session is not None:
        config = session.config
    config = config or DashboardConfig()
    ds = session or DashboardSession(config)
    rs = scheduler or RefreshScheduler(config.scheduler)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        handle = None
        if config.autostart_refresh:
            handle = rs.start(ds)
        try:
            yield
        finally:
            if handle is not None:
                rs.stop(handle)
                await handle.task

    app = FastAPI(
        title="Regional Pulse API",
        description="Live regional performance metrics",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.state.session = ds
    app.state.scheduler = rs

    # === STORE ===

    @app.get("/store")
    async def get_store():
        """Current metrics snapshot."""
        return ds.get_store().model_dump(mode="json")

    @app.get("/continents")
    async def list_continents():
        """Configured continents with their locale counts."""
        counts = ds.continent_counts()
        return [
            {
                "continent": c,
                "locale_count": counts[c],
                "active": c == ds.filter_state.continent,
            }
            for c in ds.continents
        ]

    @app.get("/locales")
    async def list_locales(continent: Optional[str] = None):
        """Annotated locale cards for a continent (default: active filter)."""
        selected = ds.selection.locale_name
        return [
            annotate_locale(loc, selected=loc.name == selected).model_dump(mode="json")
            for loc in ds.get_filtered_locales(continent)
        ]

    @app.get("/locales/{name}")
    async def get_locale(name: str):
        """A single locale by name."""
        locale = ds.get_store().find(name)
        if locale is None:
            raise HTTPException(404, "Locale not found")
        return locale.model_dump(mode="json")

    # === AGGREGATES ===

    @app.get("/metrics/average-accuracy")
    async def get_average_accuracy():
        """Fleet-wide mean accuracy."""
        try:
            value = ds.get_average_accuracy()
        except EmptyStoreError as e:
            raise HTTPException(409, str(e))
        return {"average_accuracy": value}

    @app.get("/overview")
    async def get_overview():
        """Headline figures for the active continent."""
        return ds.get_overview().model_dump(mode="json")

    @app.get("/classify/{score}")
    async def classify_score(score: int):
        """Severity tier for a score."""
        return {"score": score, "tier": classify(score).value}

    # === FILTER & SELECTION ===

    @app.get("/filter")
    async def get_filter():
        return ds.filter_state.model_dump(mode="json")

    @app.put("/filter")
    async def set_filter(req: FilterRequest):
        """Switch the active continent."""
        try:
            ds.set_filter(req.continent)
        except UnknownContinentError as e:
            raise HTTPException(404, str(e))
        return ds.filter_state.model_dump(mode="json")

    @app.get("/selection")
    async def get_selection():
        return {
            "status": ds.selection.status.value,
            "locale_name": ds.selection.locale_name,
        }

    @app.put("/selection")
    async def set_selection(req: SelectionRequest):
        """Select a locale for detail view. The name is not validated."""
        ds.set_selection(req.locale_name)
        return await get_selection()

    @app.delete("/selection")
    async def clear_selection():
        ds.clear_selection()
        return await get_selection()

    @app.get("/detail")
    async def get_detail():
        """Time series of the resolved detail locale."""
        return [p.model_dump(mode="json") for p in ds.get_detail_series()]

    # === SCHEDULER ===

    @app.get("/scheduler/status")
    async def scheduler_status():
        """Current refresh scheduler status."""
        return {
            "status": rs.status,
            "config": rs.config.model_dump(),
            "tick_count": rs.tick_count,
            "refresh_count": ds.get_store().refresh_count,
            "processing_state": ds.processing_state,
        }

    @app.post("/scheduler/tick")
    async def trigger_tick():
        """Force a refresh tick."""
        store = rs.tick_once(ds)
        return TickResponse(
            refresh_count=store.refresh_count,
            processing_state=ds.processing_state,
            tick_count=rs.tick_count,
        )

    @app.get("/scheduler/config")
    async def get_scheduler_config():
        return rs.config.model_dump()

    @app.put("/scheduler/config")
    async def update_scheduler_config(new_config: SchedulerConfig):
        """Takes effect from the next wait of a running loop."""
        rs.config = new_config
        return new_config.model_dump()

    return app


# Default application instance
app = create_app()
