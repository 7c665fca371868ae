"""
FastAPI application entry point.

Run with: uvicorn api.main:app --reload
"""
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from backend/.env (optional) before other imports that read env
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(env_path)

from api.routes import auto_parts_shops, garages, services
from db import init_db
from settings import settings

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

# Create app
app = FastAPI(
    title="CarBuddy API",
    description="Directory of garages, auto-parts shops and their services",
    version="0.1.0",
)

# CORS middleware for the web client
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(garages.router, prefix="/api/garages", tags=["garages"])
app.include_router(services.router, prefix="/api/services", tags=["services"])
app.include_router(auto_parts_shops.router, prefix="/api/auto-parts-shops", tags=["auto-parts-shops"])


@app.on_event("startup")
def startup_event():
    """Initialize database tables on startup."""
    init_db()


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "CarBuddy API"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}
