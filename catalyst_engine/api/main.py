"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from catalyst_engine.api.middleware import RequestIDMiddleware, MetricsMiddleware
from catalyst_engine.api.v1 import strategy, fire, simulation
from catalyst_engine.infrastructure.observability.logging import setup_logging
from catalyst_engine.config import settings

# Setup structured logging
setup_logging(settings.log_level, settings.service_name)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Catalyst Strategy Engine",
        description="Pay-cycle funding plans, FIRE projections and debt payoff simulations",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

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
    app.include_router(strategy.router, prefix="/v1", tags=["strategy"])
    app.include_router(fire.router, prefix="/v1", tags=["fire"])
    app.include_router(simulation.router, prefix="/v1", tags=["simulation"])

    return app


app = create_app()
