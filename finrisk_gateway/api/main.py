"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from finrisk_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from finrisk_gateway.api.v1 import analysis, companies, demo, rules
from finrisk_gateway.infrastructure.database.session import init_db
from finrisk_gateway.infrastructure.observability.logging import setup_logging
from finrisk_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="FinRisk Gateway",
        description="Financial statement red-flag screening, ratios and trend analysis",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(rules.router, prefix="/v1", tags=["risk"])
    app.include_router(analysis.router, prefix="/v1", tags=["analysis"])
    app.include_router(companies.router, prefix="/v1", tags=["companies"])
    app.include_router(demo.router, prefix="/v1", tags=["demo"])

    return app


app = create_app()
