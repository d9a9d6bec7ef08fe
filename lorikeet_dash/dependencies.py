"""Accessors for the objects ``create_app`` attaches to the application state."""
from typing import Optional

from fastapi import Request

from lorikeet_dash.config import Settings
from lorikeet_dash.domain.services.chart_store import ChartStore
from lorikeet_dash.domain.services.scheduler import Scheduler
from lorikeet_dash.infrastructure.rendering import ChartRenderer
from lorikeet_dash.infrastructure.static import StaticBundle


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_chart_store(request: Request) -> ChartStore:
    return request.app.state.chart_store


def get_chart_renderer(request: Request) -> ChartRenderer:
    return request.app.state.chart_renderer


def get_static_bundle(request: Request) -> StaticBundle:
    return request.app.state.static_bundle


def get_scheduler(request: Request) -> Optional[Scheduler]:
    return request.app.state.scheduler
