from .svg_renderer import ChartRenderer

__all__ = ["ChartRenderer"]
