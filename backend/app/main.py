"""
FastAPI entrypoint for Tripboard backend application.
"""
import logging
from datetime import datetime
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.api.router import api_router

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(
    title="Tripboard API",
    description="Backend API for collaborative group trip planning",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
async def root():
    """Service banner with the available resource roots."""
    return {
        "message": "Welcome to Tripboard API",
        "version": app.version,
        "endpoints": {
            "health": f"{settings.API_PREFIX}/health",
            "auth": f"{settings.API_PREFIX}/auth",
            "trips": f"{settings.API_PREFIX}/trips",
            "activities": f"{settings.API_PREFIX}/activities",
            "expenses": f"{settings.API_PREFIX}/expenses",
            "polls": f"{settings.API_PREFIX}/polls",
        },
    }


@app.get(f"{settings.API_PREFIX}/health")
async def health():
    """Health check endpoint."""
    return {
        "status": "ok",
        "message": "Tripboard API is running",
        "timestamp": datetime.utcnow().isoformat(),
    }
