"""Exceptions raised by the dashboard core."""


class DashError(Exception):
    """Base class for dashboard errors."""


class StepLoadError(DashError):
    """The test plan or its config file could not be loaded."""


class StepExecutionError(DashError):
    """Running the steps failed as a whole; the cycle produces no samples."""


class ChartRenderError(DashError):
    """The SVG template could not be rendered."""
