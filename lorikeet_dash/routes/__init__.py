"""
Routes package for the dashboard server.

- charts: chart listing and SVG rendering (/charts, /charts/{name})
- health: health check endpoint
- front: the bundled single page front end, with index.html fallback
"""

from .charts import router as charts_router
from .front import router as front_router
from .health import router as health_router

__all__ = ["charts_router", "front_router", "health_router"]
