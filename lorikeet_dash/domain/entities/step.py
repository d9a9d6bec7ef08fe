"""Step Entity - one probe from the test plan and the outcome of its last run."""
from enum import Enum
from typing import Dict, Optional

from pydantic import BaseModel, Field


class RunType(str, Enum):
    HTTP = "http"
    SYSTEM = "system"
    BASH = "bash"
    VALUE = "value"


class SystemVariant(str, Enum):
    LOAD_AVG_1M = "load_avg_1m"
    LOAD_AVG_5M = "load_avg_5m"
    LOAD_AVG_15M = "load_avg_15m"
    MEM_TOTAL = "mem_total"
    MEM_FREE = "mem_free"
    MEM_AVAILABLE = "mem_available"
    SWAP_TOTAL = "swap_total"
    SWAP_FREE = "swap_free"
    DISK_TOTAL = "disk_total"
    DISK_FREE = "disk_free"

    @property
    def is_load_average(self) -> bool:
        return self in (
            SystemVariant.LOAD_AVG_1M,
            SystemVariant.LOAD_AVG_5M,
            SystemVariant.LOAD_AVG_15M,
        )


class HttpRequest(BaseModel):
    url: str = Field(..., min_length=1)
    method: str = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None


class Outcome(BaseModel):
    """Result of running a step once."""
    output: Optional[str] = Field(None, description="Text produced by the step, if any")
    duration_s: float = Field(0.0, description="Wall time taken by the step in seconds")
    error: Optional[str] = Field(None, description="Why the step failed, if it did")


class Step(BaseModel):
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    run: RunType
    http: Optional[HttpRequest] = None
    system: Optional[SystemVariant] = None
    bash: Optional[str] = None
    value: Optional[str] = None
    outcome: Optional[Outcome] = None
