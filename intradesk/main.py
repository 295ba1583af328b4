"""Intradesk FastAPI application."""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from intradesk.api.analytics import router as analytics_router
from intradesk.api.applications import router as applications_router
from intradesk.api.evaluations import router as evaluations_router
from intradesk.api.health import router as health_router
from intradesk.api.notifications import router as notifications_router
from intradesk.api.proposals import router as proposals_router
from intradesk.api.settings import router as settings_router
from intradesk.api.users import router as users_router
from intradesk.config import settings
from intradesk.errors import AppError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Intradesk - internal forms and approvals",
    description="Evaluations, proposals, customer and facility applications, and their admin workflow",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    """Domain errors: validation, not found, conflict, delivery."""
    logger.warning("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    """Fallback for store outages and bugs."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


app.include_router(health_router, tags=["Health"])
app.include_router(users_router, prefix="/v1", tags=["Users"])
app.include_router(evaluations_router, prefix="/v1", tags=["Evaluations"])
app.include_router(proposals_router, prefix="/v1", tags=["Proposals"])
app.include_router(applications_router, prefix="/v1", tags=["Applications"])
app.include_router(settings_router, prefix="/v1", tags=["Settings"])
app.include_router(analytics_router, prefix="/v1", tags=["Analytics"])
app.include_router(notifications_router, prefix="/v1", tags=["Notifications"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {"service": "Intradesk", "version": "0.1.0", "docs": "/docs"}
