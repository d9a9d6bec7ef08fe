"""Human readable labels for chart values."""
import math
from decimal import Decimal

from lorikeet_dash.domain.entities.units import ChartUnits

BYTE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB"]
BYTE_DELIMITER = 1000.0


def pretty(value: float, units: ChartUnits) -> str:
    """Format a raw value for display according to the chart's units."""
    if units == ChartUnits.KILOBYTES:
        return pretty_bytes(value * 1024.0)
    if units == ChartUnits.SECONDS:
        return f"{value * 1000.0:.0f}ms"
    return f"{value:.2f}"


def pretty_bytes(num: float) -> str:
    """
    Format a byte count using decimal magnitudes (1000 based).

    Magnitudes below one byte are returned in plain decimal notation with a ``B`` suffix.
    NaN and infinities pass through the formatting instead of raising.
    """
    negative = "-" if math.copysign(1.0, num) < 0 else ""
    num = abs(num)

    if num < 1.0:
        return f"{negative}{_plain(num)} B"

    if math.isnan(num):
        exponent = 0
    elif math.isinf(num):
        exponent = len(BYTE_UNITS) - 1
    else:
        exponent = min(
            int(math.floor(math.log(num) / math.log(BYTE_DELIMITER))),
            len(BYTE_UNITS) - 1,
        )

    unit = BYTE_UNITS[exponent]
    return f"{negative}{num / BYTE_DELIMITER ** exponent:.2f}{unit}"


def _plain(num: float) -> str:
    """Shortest decimal form of ``num`` without exponent or trailing zeros."""
    text = format(Decimal(repr(num)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
