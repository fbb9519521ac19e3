"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from trailer_desk.api.dependencies import build_pricing_policy
from trailer_desk.api.middleware import RequestIDMiddleware, MetricsMiddleware
from trailer_desk.api.v1 import cash, finance, leads, pricing
from trailer_desk.infrastructure.observability.logging import setup_logging
from trailer_desk.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Trailer Desk",
        description="Finance calculators, pricing policy and lead scoring for trailer sales",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Resolve configured pricing policy up front; raises InvalidInputError on bad config
    app.state.pricing_policy = build_pricing_policy()

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(finance.router, prefix="/v1", tags=["finance"])
    app.include_router(cash.router, prefix="/v1", tags=["cash"])
    app.include_router(pricing.router, prefix="/v1", tags=["pricing"])
    app.include_router(leads.router, prefix="/v1", tags=["leads"])

    return app


app = create_app()
