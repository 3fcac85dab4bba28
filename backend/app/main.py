"""FurniLedger API: main entry point."""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text

from app.config import settings
from app.core.database import async_session_factory, engine
from app.core.middleware import RequestLoggingMiddleware

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown events."""
    # Startup
    logger.info(
        "Starting FurniLedger API",
        env=settings.app_env,
        budget_period_strategy=settings.budget_period_strategy,
    )
    yield
    # Shutdown
    logger.info("Shutting down FurniLedger API")
    await engine.dispose()


app = FastAPI(
    title="FurniLedger API",
    description="Furniture business accounting with automatic cost center assignment",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    redirect_slashes=False,
)

# ── Middleware ─────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)


# ── Health Check ──────────────────────────────────
@app.get("/health", tags=["system"])
async def health_check():
    """Liveness probe: always returns healthy if the process is running."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/ready", tags=["system"])
async def readiness_check():
    """Readiness probe: checks DB connectivity."""
    checks = {"database": "unknown", "api": "ok"}
    try:
        async with async_session_factory() as session:
            await session.execute(text("SELECT 1"))
            checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {e}"
        return {"status": "degraded", "checks": checks}

    return {"status": "ready", "checks": checks}


# ── API Routes ────────────────────────────────────
from app.api.v1 import auto_analytical_models, budgets, documents  # noqa: E402

app.include_router(
    auto_analytical_models.router,
    prefix="/api/v1/auto-analytical-models",
    tags=["auto-analytical-models"],
)
app.include_router(budgets.router, prefix="/api/v1/budgets", tags=["budgets"])
app.include_router(documents.purchase_orders_router, prefix="/api/v1/purchase-orders", tags=["purchase-orders"])
app.include_router(documents.vendor_bills_router, prefix="/api/v1/vendor-bills", tags=["vendor-bills"])
app.include_router(documents.sales_orders_router, prefix="/api/v1/sales-orders", tags=["sales-orders"])
app.include_router(documents.customer_invoices_router, prefix="/api/v1/customer-invoices", tags=["customer-invoices"])
