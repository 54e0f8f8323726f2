"""FastAPI Application - Main entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.config.settings import get_settings
from src.handlers.appointments import router as appointments_router
from src.handlers.webhook import router as webhook_router
from src.services.observability import (
    instrument_fastapi,
    setup_tracing,
    shutdown_tracing,
)
from src.utils.logger import get_logger, setup_logging

# Initialize settings early
settings = get_settings()

# Setup logging
setup_logging(settings.log_level, json_logs=not settings.is_development)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler.

    Handles startup and shutdown events.
    """
    logger.info(
        "application_starting",
        environment=settings.app_env,
        port=settings.api_port,
        private_key_configured=settings.has_private_key,
        signature_validation=bool(settings.app_secret),
    )

    if not settings.has_private_key:
        logger.error("private_key_missing", message="Flow requests will fail with 500")

    provider = setup_tracing(settings)

    yield

    logger.info("application_shutting_down")
    shutdown_tracing(provider)


app = FastAPI(
    title="WhatsApp Flow Appointment Booking",
    description="Encrypted WhatsApp Flow data endpoint for appointment booking",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Instrument with OpenTelemetry
instrument_fastapi(app, settings)

app.include_router(webhook_router)
app.include_router(appointments_router)


@app.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Root endpoint.

    Returns:
        Service banner.
    """
    return "WhatsApp Flow Appointment Booking Service - Running"


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.is_development,
    )
