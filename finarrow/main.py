"""FastAPI application entry point with structured logging and error mapping."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from finarrow import __version__
from finarrow.api import dashboard, reports, upload
from finarrow.config import get_settings
from finarrow.domain.errors import (
    EmptyInputError,
    InsightsRateLimitedError,
    InsightsUnavailableError,
    RowError,
    SpreadsheetError,
)
from finarrow.health import router as health_router
from finarrow.logging_config import get_logger, setup_logging

settings = get_settings()

# Setup structured logging
setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup / shutdown lifecycle for the FastAPI application."""
    logger.info("application_startup", version=__version__)
    yield
    logger.info("application_shutdown")


app = FastAPI(
    title="FinArrow",
    description=(
        "Turns a monthly financial spreadsheet into SaaS KPIs, trend charts, "
        "AI commentary and an investor PDF."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "DELETE"],
    allow_headers=["Content-Type", "Authorization", "X-Request-ID"],
)


# ── Error mapping ───────────────────────────────────────────────────────

@app.exception_handler(SpreadsheetError)
async def spreadsheet_error_handler(request: Request, exc: SpreadsheetError) -> JSONResponse:
    body = {"detail": exc.message, "error": type(exc).__name__}
    if isinstance(exc, RowError):
        body.update(row_number=exc.row_number, field=exc.field)
    logger.warning("upload_rejected", error=type(exc).__name__, detail=exc.message)
    return JSONResponse(status_code=400, content=body)


@app.exception_handler(EmptyInputError)
async def empty_input_handler(request: Request, exc: EmptyInputError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": exc.message, "error": "EmptyInputError"})


@app.exception_handler(InsightsRateLimitedError)
async def rate_limited_handler(request: Request, exc: InsightsRateLimitedError) -> JSONResponse:
    return JSONResponse(status_code=429, content={"detail": exc.message, "error": "InsightsRateLimitedError"})


@app.exception_handler(InsightsUnavailableError)
async def insights_unavailable_handler(request: Request, exc: InsightsUnavailableError) -> JSONResponse:
    return JSONResponse(status_code=503, content={"detail": exc.message, "error": "InsightsUnavailableError"})


# Health checks (no versioning)
app.include_router(health_router, tags=["health"])

API_V1_PREFIX = "/api/v1"

app.include_router(upload.router, prefix=f"{API_V1_PREFIX}/upload", tags=["upload"])
app.include_router(dashboard.router, prefix=f"{API_V1_PREFIX}/dashboard", tags=["dashboard"])
app.include_router(reports.router, prefix=f"{API_V1_PREFIX}/reports", tags=["reports"])


@app.get("/")
def root():
    """Root endpoint - API information and available endpoints."""
    return {
        "service": "FinArrow API",
        "version": __version__,
        "status": "running",
        "docs": "/docs",
        "health": "/health",
        "api_version": "v1",
        "endpoints": {
            "upload": f"{API_V1_PREFIX}/upload",
            "template": f"{API_V1_PREFIX}/upload/template",
            "dashboard": f"{API_V1_PREFIX}/dashboard",
            "insights": f"{API_V1_PREFIX}/reports/insights",
            "pdf": f"{API_V1_PREFIX}/reports/pdf",
        },
    }
