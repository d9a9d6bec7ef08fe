"""Shared fixtures for the dashboard tests."""

from pathlib import Path

import pytest
from jinja2 import DictLoader, Environment

from lorikeet_dash.config import Settings
from lorikeet_dash.domain.entities.chart import Chart
from lorikeet_dash.domain.entities.units import ChartUnits
from lorikeet_dash.domain.services.chart_store import ChartStore
from lorikeet_dash.infrastructure.rendering import ChartRenderer


@pytest.fixture
def renderer() -> ChartRenderer:
    return ChartRenderer()


@pytest.fixture
def broken_renderer() -> ChartRenderer:
    """Renderer whose chart template applies ``pretty`` to a string."""
    env = Environment(
        loader=DictLoader(
            {
                "chart.svg": "<svg>{{ name | pretty }}</svg>",
                "loading.svg": "<svg>loading</svg>",
            }
        )
    )
    return ChartRenderer(env)


@pytest.fixture
def cpu_chart() -> Chart:
    chart = Chart(name="cpu", units=ChartUnits.VALUE, colour="#8ff0a4")
    chart.add_point(0, 10)
    chart.add_point(1, 20)
    chart.add_point(2, 15)
    return chart


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    root = tmp_path / "static"
    root.mkdir()
    (root / "index.html").write_text("<html><body>dashboard</body></html>")
    (root / "app.js").write_text("console.log('dashboard');")
    (tmp_path / "secret.txt").write_text("do not serve")
    return root


@pytest.fixture
def settings(static_dir: Path) -> Settings:
    return Settings(_env_file=None, STATIC_DIR=static_dir)


@pytest.fixture
def store() -> ChartStore:
    store = ChartStore()
    cpu = store.create("cpu", ChartUnits.VALUE, colour="#99c1f1")
    for x, y in [(0, 10), (1, 20), (2, 15)]:
        cpu.add_point(x, y)
    store.create("mem", ChartUnits.KILOBYTES, colour="#8ff0a4")
    return store
