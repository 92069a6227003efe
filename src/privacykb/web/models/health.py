"""Health check API response models."""

from typing import Any

from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response for basic health check endpoint."""

    status: str = Field(..., description="Health status (healthy/unhealthy)")
    timestamp: str = Field(..., description="ISO timestamp of health check")
    version: str = Field(..., description="Application version")
    service: str = Field(..., description="Service name")


class LivenessProbeResponse(BaseModel):
    status: str = Field(..., description="Liveness status (alive)")


class ReadinessProbeResponse(BaseModel):
    """Response for readiness probe; ready only when the knowledge base opens."""

    status: str = Field(..., description="Readiness status (ready/not_ready)")
    checks: dict[str, Any] = Field(..., description="Component readiness checks")
    timestamp: str = Field(..., description="ISO timestamp of readiness check")
