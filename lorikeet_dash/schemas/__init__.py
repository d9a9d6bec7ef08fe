from .responses import ErrorResponse, HealthResponse

__all__ = ["ErrorResponse", "HealthResponse"]
