"""
Value Objects for Domain Layer.

Per-call options and the results exchanged with a metrics client.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# Wire payload handed to MetricsClient.submit
Payload = Dict[str, Any]

# One counter or gauge record inside the payload
PayloadEntry = Dict[str, Any]


class MetricOptions(BaseModel):
    """Optional per-call settings for increment/measure/timing."""

    source: Optional[str] = Field(
        default=None, description="Overrides the qualified source"
    )
    amount: Optional[float] = Field(
        default=None, description="Overrides the default increment of 1"
    )

    model_config = {"frozen": True}


class SubmitResult(BaseModel):
    """Outcome of MetricsClient.submit."""

    ok: bool
    reason: Optional[str] = None
    status_code: Optional[int] = None

    model_config = {"frozen": True}

    @classmethod
    def success(cls, status_code: Optional[int] = None) -> "SubmitResult":
        return cls(ok=True, status_code=status_code)

    @classmethod
    def failure(
        cls, reason: str, status_code: Optional[int] = None
    ) -> "SubmitResult":
        return cls(ok=False, reason=reason, status_code=status_code)


class MetricDescriptor(BaseModel):
    """A metric as known to the remote service."""

    name: str
    type: Optional[str] = Field(default=None, description="counter or gauge")
    attributes: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class MetricListing(BaseModel):
    """One page of GET /v1/metrics."""

    metrics: List[MetricDescriptor] = Field(default_factory=list)
    total: int = 0
    found: int = 0
