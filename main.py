# main.py
"""
Application entrypoint. Includes routers and mounts.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from teamgen.api.routers import groupings
from teamgen.config.settings import settings

logging.basicConfig(level=settings.LOG_LEVEL)

app = FastAPI(title="Team Generator")

# Basic CORS (adjust origins in production)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(groupings.router, prefix="/api/v1/groupings", tags=["groupings"])


@app.get("/")
async def index():
    """Health / basic info endpoint."""
    return {"status": "ok", "service": "teamgen", "env": settings.ENV}
