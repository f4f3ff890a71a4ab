"""
Main FastAPI application for the Doubles Court Scheduling System.
"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from doubles_scheduler import __version__
from doubles_scheduler.api import routes
from doubles_scheduler.core.logging_config import setup_logging

setup_logging()

app = FastAPI(
    title="Doubles Court Scheduling API",
    description="API for generating and adjusting doubles session schedules",
    version=__version__
)

# Enable CORS for the schedule editor front end
app.add_middleware(
    CORSMiddleware,
    allow_origins=os.getenv("CORS_ORIGINS", "http://localhost:5173").split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(routes.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Doubles Court Scheduling API",
        "version": __version__,
        "endpoints": {
            "generate": "/api/schedule",
            "swap": "/api/schedule/swap",
            "export": "/api/schedule/export",
            "health": "/api/health"
        }
    }
