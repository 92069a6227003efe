"""Web API contract models using Pydantic for validation."""

from privacykb.web.models.health import (
    HealthCheckResponse,
    LivenessProbeResponse,
    ReadinessProbeResponse,
)

__all__ = [
    "HealthCheckResponse",
    "LivenessProbeResponse",
    "ReadinessProbeResponse",
]
