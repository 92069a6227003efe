"""Health check endpoints for monitoring service status."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Response
from sqlalchemy.exc import SQLAlchemyError

from privacykb.database.core import KnowledgeBaseDatabaseService
from privacykb.system.structlog_configurator import get_package_version
from privacykb.web.core.container import Container
from privacykb.web.models.health import (
    HealthCheckResponse,
    LivenessProbeResponse,
    ReadinessProbeResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health")

SERVICE_NAME = "privacykb"


def _timestamp() -> str:
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


@router.get("/", response_model=HealthCheckResponse)
async def health_check() -> HealthCheckResponse:
    """Check basic health status of the service.

    Returns:
        Health status with timestamp and version.
    """
    return HealthCheckResponse(
        status="healthy",
        timestamp=_timestamp(),
        version=get_package_version(),
        service=SERVICE_NAME,
    )


@router.get("/live", response_model=LivenessProbeResponse)
async def liveness_probe() -> LivenessProbeResponse:
    """Kubernetes-style liveness probe."""
    return LivenessProbeResponse(status="alive")


@router.get("/ready", status_code=200, response_model=ReadinessProbeResponse)
@inject
async def readiness_probe(
    db_service: Annotated[KnowledgeBaseDatabaseService, Depends(Provide[Container.kb_database])],
    response: Response,
) -> ReadinessProbeResponse:
    """Check if the knowledge base database can be opened and queried.

    Returns:
        Readiness status with component checks; 503 when not ready.
    """
    checks = {
        "database": False,
        "version": get_package_version(),
    }

    try:
        await db_service.ping()
        checks["database"] = True
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)

    is_ready = checks["database"]
    if not is_ready:
        response.status_code = 503

    return ReadinessProbeResponse(
        status="ready" if is_ready else "not_ready",
        checks=checks,
        timestamp=_timestamp(),
    )
