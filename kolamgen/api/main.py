"""Kolamgen API - FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import get_config
from ..services.compatibility_service import get_rules
from .routers import patterns, tiles


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup: fail fast on a broken tile catalog
    get_rules()

    yield


app = FastAPI(
    title="Kolamgen API",
    description="API for the procedural kolam pattern generator",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS middleware - allow all origins in development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(patterns.router, prefix="/api/patterns", tags=["patterns"])
app.include_router(tiles.router, prefix="/api/tiles", tags=["tiles"])


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.get("/api/config")
async def get_api_config():
    """Get API configuration."""
    config = get_config()
    return {
        "default_size": config.default_size,
        "cell_spacing": config.cell_spacing,
        "max_size": config.max_size,
        "stroke_color": config.stroke_color,
        "background_color": config.background_color,
    }
