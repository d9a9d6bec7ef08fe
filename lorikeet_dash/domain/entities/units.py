from enum import Enum
from typing import Optional


class ChartUnits(str, Enum):
    """How a chart's values are displayed. Never changes the stored number."""

    VALUE = "value"
    KILOBYTES = "kilobytes"
    SECONDS = "seconds"

    @classmethod
    def parse(cls, raw, default: Optional["ChartUnits"] = None) -> "ChartUnits":
        """Lenient lookup used by the template filter; unknown values fall back to VALUE."""
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).lower())
        except ValueError:
            return default or cls.VALUE
