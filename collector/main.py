"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from collector.api import sim
from collector.core.logging_config import setup_logging
from collector.core.settings import get_settings
from collector.middleware.logging_middleware import RequestLoggingMiddleware

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(log_level=get_settings().log_level)
    yield


app = FastAPI(
    title="Card Collection Calculator API",
    description="Monte Carlo estimates of draws needed to collect weighted items",
    version=VERSION,
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)

# Include routers
app.include_router(sim.router, prefix="/sim", tags=["simulation"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Card Collection Calculator API",
        "version": VERSION,
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
