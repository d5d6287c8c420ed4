"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from barefoot_budget.api.middleware import RequestIDMiddleware, MetricsMiddleware
from barefoot_budget.api.v1 import buckets, debts, mortgage, payoff
from barefoot_budget.infrastructure.database.session import init_db
from barefoot_budget.infrastructure.observability.logging import setup_logging
from barefoot_budget.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Barefoot Budget",
        description="Barefoot bucket budgeting, debt snowball and mortgage overpayment planning",
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
    app.include_router(payoff.router, prefix="/v1", tags=["plans"])
    app.include_router(mortgage.router, prefix="/v1", tags=["mortgage"])
    app.include_router(debts.router, prefix="/v1", tags=["debts"])
    app.include_router(buckets.router, prefix="/v1", tags=["buckets"])

    return app


app = create_app()
