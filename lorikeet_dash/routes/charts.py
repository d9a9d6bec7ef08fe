"""
Chart endpoints.

Handles:
- GET /charts - names of all charts, in creation order
- GET /charts/{name} - one chart rendered as SVG
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from lorikeet_dash.dependencies import get_chart_renderer, get_chart_store
from lorikeet_dash.domain.errors import ChartRenderError
from lorikeet_dash.domain.services.chart_store import ChartStore
from lorikeet_dash.infrastructure.rendering import ChartRenderer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/charts", tags=["charts"])

DEFAULT_WIDTH = 800
DEFAULT_HEIGHT = 500
SVG_MEDIA_TYPE = "image/svg+xml"


def parse_dimension(raw: Optional[str], default: int) -> int:
    """Positive integer from a query parameter, or ``default`` if it is not one."""
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@router.get("", response_model=List[str])
async def list_charts(store: ChartStore = Depends(get_chart_store)):
    """Names of every chart."""
    return await store.list_names()


@router.get("/{name}", response_class=Response)
async def get_chart(
    name: str,
    width: Optional[str] = None,
    height: Optional[str] = None,
    store: ChartStore = Depends(get_chart_store),
    renderer: ChartRenderer = Depends(get_chart_renderer),
):
    """Render a chart as SVG. ``.svg`` on the name is optional."""
    name = name.removesuffix(".svg")

    chart = await store.get(name)
    if chart is None:
        raise HTTPException(status_code=404, detail=f"No chart named '{name}'")

    try:
        svg = await run_in_threadpool(
            chart.draw_svg,
            parse_dimension(width, DEFAULT_WIDTH),
            parse_dimension(height, DEFAULT_HEIGHT),
            renderer,
        )
    except ChartRenderError as e:
        logger.error(f"❌ Error rendering chart '{name}': {e}")
        return PlainTextResponse(str(e), status_code=500)

    return Response(content=svg, media_type=SVG_MEDIA_TYPE)
