"""
Health endpoint.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from lorikeet_dash import VERSION
from lorikeet_dash.config import Settings
from lorikeet_dash.dependencies import get_chart_store, get_scheduler, get_settings
from lorikeet_dash.domain.services.chart_store import ChartStore
from lorikeet_dash.domain.services.scheduler import Scheduler
from lorikeet_dash.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: Settings = Depends(get_settings),
    store: ChartStore = Depends(get_chart_store),
    scheduler: Optional[Scheduler] = Depends(get_scheduler),
):
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        service=settings.APP_NAME,
        version=VERSION,
        charts=len(store),
        cycles=scheduler.cycles if scheduler is not None else None,
    )
