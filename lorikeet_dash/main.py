import asyncio
import contextlib
import functools
import logging
from typing import Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from lorikeet_dash import VERSION
from lorikeet_dash.config import Settings
from lorikeet_dash.domain.entities.step import Step
from lorikeet_dash.domain.services.chart_store import ChartStore
from lorikeet_dash.domain.services.scheduler import Scheduler, StepRunner
from lorikeet_dash.infrastructure.rendering import ChartRenderer
from lorikeet_dash.infrastructure.static import StaticBundle
from lorikeet_dash.infrastructure.steps import run_steps
from lorikeet_dash.middleware import ErrorHandlingMiddleware, LoggingMiddleware
from lorikeet_dash.routes import charts_router, front_router, health_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    steps: Optional[Sequence[Step]] = None,
    runner: Optional[StepRunner] = None,
    store: Optional[ChartStore] = None,
) -> FastAPI:
    """
    Build the dashboard application.

    One chart is created per step unless a ready made ``store`` is passed in.
    When there are steps, the scheduler runs as a background task for the
    lifetime of the application.
    """
    settings = settings or Settings()
    steps = list(steps or [])

    if store is None:
        store = ChartStore.from_steps(steps, smooth=settings.SMOOTH, max_points=settings.MAX_POINTS)
    if runner is None:
        runner = functools.partial(run_steps, timeout_s=settings.STEP_TIMEOUT_S)

    scheduler = None
    if steps:
        scheduler = Scheduler(store, steps, runner, interval_s=settings.refresh_interval_s)

    @contextlib.asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if scheduler is not None:
            task = asyncio.create_task(scheduler.run(), name="scheduler")
        try:
            yield
        finally:
            if task is not None:
                scheduler.stop()
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

    app = FastAPI(
        title="Lorikeet Dashboard",
        description="Charts of test plan results collected on a schedule",
        version=VERSION,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.chart_store = store
    app.state.chart_renderer = ChartRenderer()
    app.state.static_bundle = StaticBundle(settings.STATIC_DIR)
    app.state.scheduler = scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # last added runs first
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(ErrorHandlingMiddleware, enable_error_logging=True)

    app.include_router(health_router)
    app.include_router(charts_router)
    # catch-all, must stay last
    app.include_router(front_router)

    return app
