"""Jinja2 backed rendering of chart templates."""
import logging
import math
from datetime import datetime, timezone
from numbers import Real
from typing import Any, Mapping

from jinja2 import Environment, PackageLoader, TemplateError, TemplateRuntimeError, select_autoescape

from lorikeet_dash.domain.entities.units import ChartUnits
from lorikeet_dash.domain.errors import ChartRenderError
from lorikeet_dash.utils.units import pretty

logger = logging.getLogger(__name__)

LOADING_TEMPLATE = "loading.svg"


def pretty_filter(value: Any, format: Any = ChartUnits.VALUE) -> str:
    """Template filter: ``{{ value | pretty(format=units) }}``."""
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TemplateRuntimeError("Could not convert as number")
    return pretty(float(value), ChartUnits.parse(format))


def timestamp_filter(value: Any, fmt: str = "%H:%M:%S") -> str:
    """
    Template filter formatting an epoch value that already includes the local offset.

    Non-finite values render as an empty string.
    """
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        return ""
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc).strftime(fmt)
    except (OverflowError, OSError, ValueError):
        return ""


class ChartRenderer:
    """Turns a chart context into SVG markup."""

    def __init__(self, env: Environment = None):
        self.env = env or Environment(
            loader=PackageLoader("lorikeet_dash.infrastructure.rendering", "templates"),
            autoescape=select_autoescape(["svg", "html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["pretty"] = pretty_filter
        self.env.filters["timestamp"] = timestamp_filter
        self._loading = None

    def render(self, template_id: str, context: Mapping[str, Any]) -> str:
        try:
            return self.env.get_template(template_id).render(**context)
        except TemplateError as e:
            logger.error(f"❌ Failed to render {template_id}: {e}")
            raise ChartRenderError(str(e)) from e

    def loading(self) -> str:
        """Placeholder shown until a chart has enough points to draw."""
        if self._loading is None:
            source, _, _ = self.env.loader.get_source(self.env, LOADING_TEMPLATE)
            self._loading = source
        return self._loading
