"""
Response models for the dashboard API.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class DashResponse(BaseModel):
    """Base response model."""
    success: bool = Field(..., description="Whether the operation was successful")
    message: Optional[str] = Field(None, description="Optional message about the operation")
    timestamp: datetime = Field(default_factory=datetime.now, description="Response timestamp")


class ErrorResponse(DashResponse):
    """Response model for errors."""
    success: bool = Field(False, description="Always false for error responses")
    error: str = Field(..., description="Error message")
    error_code: Optional[str] = Field(None, description="Optional error code")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class HealthResponse(DashResponse):
    """Response model for health checks."""
    success: bool = Field(True, description="Always true for health checks")
    status: str = Field(..., description="Health status")
    service: str = Field(..., description="Service name")
    version: str = Field(..., description="Service version")
    charts: int = Field(..., description="Number of charts being collected")
    cycles: Optional[int] = Field(None, description="Completed collection cycles")
