from .loader import get_steps, parse_step
from .runner import run_steps

__all__ = ["get_steps", "parse_step", "run_steps"]
