"""Application factory for creating FastAPI application with dependency injection."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from privacykb.web.core.container import Container
from privacykb.web.core.lifespan import lifespan
from privacykb.web.middleware.i18n import LanguagePreferenceMiddleware
from privacykb.web.middleware.request_logging import StructuredRequestLoggingMiddleware
from privacykb.web.routers import health_api_routes, kb_api_routes


def create_app() -> FastAPI:
    """Create FastAPI application with dependency injection.

    This factory function creates a fully configured FastAPI application with:
    - Dependency injection container setup
    - Language negotiation and request logging middleware
    - The knowledge base and health check routers

    Returns:
        FastAPI: The configured application instance.
    """
    container = Container()

    app = FastAPI(
        lifespan=lifespan,
        title="Privacy Knowledge Base API",
        description="Read-only lookups of privacy terms, GDPR text, DPAs and threats",
        version="1.0.0",
    )
    app.container = container  # type: ignore[attr-defined]

    # Middleware reads these directly, outside of dependency injection
    app.state.translation_manager = container.translation_manager()
    app.state.config = container.config()

    # The service is read-only and public
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # nosemgrep
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.add_middleware(LanguagePreferenceMiddleware)

    # Add structured request logging middleware
    app.add_middleware(StructuredRequestLoggingMiddleware)

    container.wire(
        modules=[
            "privacykb.web.routers.health_api_routes",
            "privacykb.web.routers.kb_api_routes",
        ]
    )

    # Knowledge base action endpoint
    app.include_router(kb_api_routes.router, tags=["Knowledge Base"])

    # Health check routes (no authentication required)
    app.include_router(health_api_routes.router, prefix="/api", tags=["Health Check API"])

    return app
