"""Tests for the HTTP surface."""

import time

import pytest
from fastapi.testclient import TestClient

from lorikeet_dash import VERSION
from lorikeet_dash.config import Settings
from lorikeet_dash.domain.entities.step import Outcome, RunType, Step
from lorikeet_dash.main import create_app
from lorikeet_dash.routes.charts import parse_dimension


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store=store)
    with TestClient(app) as client:
        yield client


def test_list_charts(client) -> None:
    response = client.get("/charts")

    assert response.status_code == 200
    assert response.json() == ["cpu", "mem"]


def test_get_chart_svg(client) -> None:
    response = client.get("/charts/cpu.svg")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("image/svg+xml")
    assert "cpu" in response.text
    assert "#99c1f1" in response.text
    assert 'width="800.0"' in response.text
    assert 'height="500.0"' in response.text


def test_get_chart_without_suffix_and_custom_size(client) -> None:
    response = client.get("/charts/cpu", params={"width": "400", "height": "300"})

    assert response.status_code == 200
    assert 'width="400.0"' in response.text
    assert 'height="300.0"' in response.text


def test_bad_dimensions_fall_back_to_defaults(client) -> None:
    response = client.get("/charts/cpu.svg", params={"width": "wide", "height": "-3"})

    assert response.status_code == 200
    assert 'width="800.0"' in response.text
    assert 'height="500.0"' in response.text


def test_chart_without_points_is_loading(client) -> None:
    response = client.get("/charts/mem.svg")

    assert response.status_code == 200
    assert response.text == client.app.state.chart_renderer.loading()


def test_unknown_chart_is_404(client) -> None:
    assert client.get("/charts/nope.svg").status_code == 404


def test_render_failure_is_500_with_message(client, broken_renderer) -> None:
    client.app.state.chart_renderer = broken_renderer

    response = client.get("/charts/cpu.svg")

    assert response.status_code == 500
    assert "Could not convert as number" in response.text


def test_health(client) -> None:
    body = client.get("/health").json()

    assert body["status"] == "healthy"
    assert body["service"] == "lorikeet-dash"
    assert body["version"] == VERSION
    assert body["charts"] == 2
    assert body["cycles"] is None


def test_static_files_are_served(client) -> None:
    response = client.get("/app.js")

    assert response.status_code == 200
    assert "javascript" in response.headers["content-type"]
    assert "dashboard" in response.text


@pytest.mark.parametrize("path", ["/", "/index.html", "/grid/some/page"])
def test_front_end_routes_get_index(client, path) -> None:
    response = client.get(path)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "dashboard" in response.text


def test_api_paths_do_not_fall_back(client) -> None:
    assert client.get("/api/missing").status_code == 404


def test_parse_dimension() -> None:
    assert parse_dimension("640", 800) == 640
    assert parse_dimension(None, 800) == 800
    assert parse_dimension("", 800) == 800
    assert parse_dimension("1.5", 800) == 800
    assert parse_dimension("0", 800) == 800


def test_scheduler_runs_for_the_app_lifetime(static_dir) -> None:
    async def runner(steps):
        for step in steps:
            step.outcome = Outcome(output="7", duration_s=0.01)

    settings = Settings(_env_file=None, STATIC_DIR=static_dir, REFRESH_MS=20)
    steps = [Step(name="constant", run=RunType.VALUE, value="7")]
    app = create_app(settings, steps, runner=runner)

    with TestClient(app) as client:
        deadline = time.monotonic() + 5
        while time.monotonic() < deadline:
            if client.get("/health").json()["cycles"] >= 2:
                break
            time.sleep(0.02)

        assert client.get("/charts").json() == ["constant"]
        response = client.get("/charts/constant.svg")
        assert response.status_code == 200
        assert response.text != app.state.chart_renderer.loading()

    assert app.state.scheduler.stopped
